from eth_account.messages import encode_defunct
from loguru import logger
from web3.auto import w3


class Wallet:

    def __init__(self, privatekey: str, proxy: str | None = None):
        if not privatekey or not isinstance(privatekey, str):
            raise ValueError("Invalid private key format")
        privatekey = "0x" + privatekey.strip().removeprefix("0x")
        if len(privatekey) != 66:
            raise ValueError("Invalid private key format")

        self.account = w3.eth.account.from_key(privatekey)
        self.address = self.account.address

        self.proxy = self._parse_proxy(proxy) if proxy else None

        logger_opt = logger.opt(colors=True)
        if self.proxy:
            logger_opt.debug(f'[•] <white>{self.address}</white> | <white>{self.proxy}</white> | Loaded')
        else:
            logger_opt.debug(f'[•] <white>{self.address}</white> | <red>No proxy</red> | Loaded')

    def _parse_proxy(self, proxy: str) -> str | None:
        invalid_proxies = ['https://log:pass@ip:port', 'http://log:pass@ip:port', 'log:pass@ip:port', '', None]
        if proxy in invalid_proxies:
            return None
        return "http://" + proxy.removeprefix("https://").removeprefix("http://")

    def sign_message(self, text: str) -> str:
        """Sign `text` as an EIP-191 personal message, returns 0x-prefixed hex."""
        signed = self.account.sign_message(encode_defunct(text=text))
        return w3.to_hex(signed.signature)
