from dataclasses import dataclass
from loguru import logger
from os import urandom

from modules.utils import get_current_date
from modules.retry import AuthExhaustedError
from modules.browser import Browser
from modules.wallet import Wallet


SIWE_DOMAIN = "klokapp.ai"
SIWE_URI = "https://klokapp.ai/"


@dataclass
class SignIn:
    message: str
    signature: str
    referral_code: str | None = None

    def body(self, **captcha):
        return {
            "signedMessage": self.signature,
            "message": self.message,
            "referral_code": self.referral_code,
            **captcha,
        }


class VerificationStrategy:
    name: str = "verification"

    async def attempt(self, browser: Browser, sign_in: SignIn) -> str | None:
        raise NotImplementedError

    @staticmethod
    def extract_token(response: dict):
        if isinstance(response, dict) and response.get("session_token"):
            return response["session_token"]
        return None


class PlainVerification(VerificationStrategy):
    name = "direct verification"

    async def attempt(self, browser: Browser, sign_in: SignIn):
        return self.extract_token(await browser.verify(sign_in.body()))


class ChallengeVerification(VerificationStrategy):
    """Fetches a challenge token from the service's own `/<kind>` endpoint and verifies with it."""

    def __init__(self, kind: str, token_field: str):
        self.kind = kind
        self.token_field = token_field
        self.name = f"{kind} verification"

    async def attempt(self, browser: Browser, sign_in: SignIn):
        challenge_token = await browser.get_challenge_token(self.kind)
        if not challenge_token:
            raise Exception(f'empty {self.kind} token')

        return self.extract_token(await browser.verify(sign_in.body(**{self.token_field: challenge_token})))


def default_strategies():
    return [
        PlainVerification(),
        ChallengeVerification("hcaptcha", "hcaptcha_token"),
        ChallengeVerification("turnstile", "cf_turnstile_token"),
    ]


class Authenticator:
    def __init__(
            self,
            strategies: list[VerificationStrategy] | None = None,
            referral_code: str | None = None,
    ):
        self.strategies = strategies if strategies is not None else default_strategies()
        self.referral_code = referral_code or None


    @staticmethod
    def build_message(address: str):
        return "\n".join([
            f"{SIWE_DOMAIN} wants you to sign in with your Ethereum account:",
            address,
            "",
            "",
            f"URI: {SIWE_URI}",
            "Version: 1",
            "Chain ID: 1",
            f"Nonce: {urandom(48).hex()}",
            f"Issued At: {get_current_date()}",
        ])


    async def authenticate(self, wallet: Wallet, browser: Browser):
        message = self.build_message(wallet.address)
        sign_in = SignIn(
            message=message,
            signature=wallet.sign_message(message),
            referral_code=self.referral_code,
        )

        for strategy in self.strategies:
            try:
                session_token = await strategy.attempt(browser, sign_in)
            except Exception as err:
                logger.warning(f'[-] {wallet.address} | {strategy.name.capitalize()} error: {err}')
                continue

            if session_token:
                logger.opt(colors=True).success(f'[+] <white>{wallet.address}</white> | {strategy.name.capitalize()} successful')
                return session_token

            logger.warning(f'[-] {wallet.address} | {strategy.name.capitalize()} returned no session token')

        raise AuthExhaustedError("All verification methods failed. The API may have changed.")
