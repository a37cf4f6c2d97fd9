from dataclasses import dataclass, field
from random import Random
from loguru import logger
from uuid import uuid4
import asyncio
import math
import time

from modules.utils import make_border, format_time, format_address, format_response, TgReport
from modules.retry import is_thread_error, is_session_error
from modules.chat import QuotaSnapshot, get_quota, send_chat
from modules.questions import get_random_question
from modules.auth import Authenticator
from modules.database import DataBase
from modules.browser import Browser
from modules.wallet import Wallet
import settings


SCHEDULE_MODES = ("aggressive", "conservative", "adaptive")


@dataclass
class Account:
    wallet: Wallet
    browser: Browser

    @property
    def address(self):
        return self.wallet.address


@dataclass
class Session:
    wallet_address: str
    credential: str
    established_at: float


@dataclass
class ChatThread:
    wallet_address: str
    thread_id: str
    created_at: float


@dataclass
class RunStats:
    total_chats: int = 0
    total_responses: int = 0
    errors: int = 0
    chats_by_wallet: dict = field(default_factory=dict)
    started_at: float = field(default_factory=time.time)


def compute_chat_count(mode: str, quota: QuotaSnapshot):
    remaining = quota.remaining
    if remaining <= 0:
        return 0

    if mode == "aggressive":
        return remaining
    if mode == "conservative":
        return min(3, remaining)

    if quota.is_premium or remaining > 20:
        return math.ceil(remaining / 2)
    return min(5, remaining)


class Scheduler:
    """
    Round-robins wallets: signs each one in, reads its quota and spends
    part of it on chat messages.

    Everything runs in a single task. Wallets and messages are processed
    one after another, so sessions, threads and stats need no locking.
    `sleep`, `rng` and `clock` can be replaced to make runs deterministic.
    """

    def __init__(
            self,
            accounts: list[Account],
            authenticator: Authenticator | None = None,
            schedule_mode: str = settings.SCHEDULE_MODE,
            persistent_threads: bool = settings.PERSISTENT_THREADS,
            thread_max_age: float = settings.THREAD_MAX_AGE * 3600,
            chat_delay: list | tuple = settings.CHAT_DELAY,
            wallets_delay: float = settings.SLEEP_BETWEEN_WALLETS,
            pass_delay: float = settings.SLEEP_AFTER_PASS,
            premium_threshold: int = settings.PREMIUM_THRESHOLD,
            db: DataBase | None = None,
            sleep=None,
            rng: Random | None = None,
            clock=None,
    ):
        if not accounts:
            raise ValueError("No wallets available")
        if schedule_mode not in SCHEDULE_MODES:
            logger.warning(f'[-] Scheduler | Unknown schedule mode "{schedule_mode}", using adaptive')
            schedule_mode = "adaptive"

        self.accounts = accounts
        self.authenticator = authenticator or Authenticator()
        self.schedule_mode = schedule_mode
        self.persistent_threads = persistent_threads
        self.thread_max_age = thread_max_age
        self.chat_delay = chat_delay
        self.wallets_delay = wallets_delay
        self.pass_delay = pass_delay
        self.premium_threshold = premium_threshold
        self.db = db
        self.sleep = sleep or asyncio.sleep
        self.rng = rng or Random()
        self.clock = clock or time.time

        self.running = True
        self.sessions: dict[str, Session] = {}
        self.threads: dict[str, ChatThread] = {}
        self.stats = RunStats(
            chats_by_wallet={account.address: 0 for account in accounts},
            started_at=self.clock(),
        )

        if self.persistent_threads and self.db is not None:
            addresses = {account.address for account in accounts}
            for address, thread_data in self.db.load_threads().items():
                if address in addresses:
                    self.threads[address] = ChatThread(
                        wallet_address=address,
                        thread_id=thread_data["thread_id"],
                        created_at=thread_data["created_at"],
                    )


    def stop(self):
        self.running = False


    async def run(self):
        while self.running:
            await self.run_pass()
            self.log_stats()

            if not self.running: break
            logger.info(f'[•] Scheduler | All wallets processed. Sleeping for {format_time(self.pass_delay)}...')
            await self.sleep(self.pass_delay)


    async def run_pass(self):
        for account in self.accounts:
            try:
                await self.process_wallet(account)
            except Exception as err:
                self.log_message(account, f"Error processing wallet: {err}", "-", "ERROR", colors=False)
                self.stats.errors += 1
                self.drop_session(account.address)

            await self.sleep(self.wallets_delay)


    async def process_wallet(self, account: Account):
        address = account.address

        if address not in self.sessions:
            self.log_message(account, "Connecting wallet...")
            try:
                credential = await self.authenticator.authenticate(account.wallet, account.browser)
            except Exception as err:
                self.log_message(account, f"Failed to connect wallet: {err}", "-", "ERROR", colors=False)
                self.stats.errors += 1
                return
            self.sessions[address] = Session(wallet_address=address, credential=credential, established_at=self.clock())

        try:
            quota = await get_quota(
                account.browser,
                self.sessions[address].credential,
                premium_threshold=self.premium_threshold,
            )
        except Exception as err:
            self.log_message(account, f"Failed to get limits: {err}", "-", "ERROR", colors=False)
            self.stats.errors += 1
            self.drop_session(address)
            return

        account_type = "Premium" if quota.is_premium else "Free"
        self.log_message(account, f"{account_type} account: {quota.remaining}/{quota.total} messages")

        if quota.remaining <= 0:
            self.log_message(account, "No messages remaining. Will try again later", "-", "WARNING")
            if quota.reset_at:
                self.log_message(account, f"Next reset: {quota.reset_at}")
            return

        chat_count = compute_chat_count(self.schedule_mode, quota)
        self.log_message(account, f"Starting <white>{chat_count}</white> chats")

        for index in range(chat_count):
            thread = await self.resolve_thread(address)
            category, question = get_random_question(self.rng)
            self.log_message(account, f"[{index + 1}/{chat_count}] {category} | {question}", colors=False)

            try:
                reply = await send_chat(account.browser, self.sessions[address].credential, thread.thread_id, question)
            except Exception as err:
                self.log_message(account, f"Failed to send message: {err}", "-", "ERROR", colors=False)
                self.stats.errors += 1

                if is_thread_error(err):
                    await self.drop_thread(address)
                if is_session_error(err):
                    self.drop_session(address)
                    break
            else:
                self.stats.total_chats += 1
                self.stats.total_responses += 1
                self.stats.chats_by_wallet[address] = self.stats.chats_by_wallet.get(address, 0) + 1
                self.log_message(account, f"Response: {format_response(reply)}", "+", "SUCCESS", colors=False)

            if index < chat_count - 1:
                await self.sleep(self.rng.uniform(*self.chat_delay))


    async def resolve_thread(self, address: str):
        thread = self.threads.get(address)
        if (
                self.persistent_threads and
                thread is not None and
                self.clock() - thread.created_at < self.thread_max_age
        ):
            logger.debug(f'[•] {address} | Reusing thread: {thread.thread_id[:8]}...')
            return thread

        thread = ChatThread(wallet_address=address, thread_id=str(uuid4()), created_at=self.clock())
        self.threads[address] = thread
        logger.debug(f'[•] {address} | Created new thread: {thread.thread_id[:8]}...')

        if self.persistent_threads and self.db is not None:
            await self.db.save_thread(address, thread.thread_id, thread.created_at)
        return thread


    async def drop_thread(self, address: str):
        if self.threads.pop(address, None) is not None and self.persistent_threads and self.db is not None:
            await self.db.remove_thread(address)


    def drop_session(self, address: str):
        self.sessions.pop(address, None)


    def get_stats(self):
        success_rate = round(self.stats.total_responses / (self.stats.total_chats or 1) * 100)
        return {
            "Runtime": format_time(self.clock() - self.stats.started_at),
            "Total chats": self.stats.total_chats,
            "Success rate": f"{success_rate}%",
            "Errors": self.stats.errors,
        }


    def get_wallet_stats(self):
        return {
            format_address(account.address): (
                f'{self.stats.chats_by_wallet.get(account.address, 0)} chats | '
                f'{"connected" if account.address in self.sessions else "disconnected"}'
            )
            for account in self.accounts
        }


    def log_stats(self):
        text = "Bot stats:\n" + make_border(self.get_stats(), values_color="white")
        if len(self.accounts) > 1:
            text += "\nWallet stats:\n" + make_border(self.get_wallet_stats(), values_color="white")
        logger.opt(colors=True).info(f'[•] Scheduler | {text}')


    def build_report(self):
        report = TgReport().add_table(self.get_stats())
        if len(self.accounts) > 1:
            report.add_table(self.get_wallet_stats(), header="Wallets")
        return report


    @staticmethod
    def log_message(
            account: Account,
            text: str,
            smile: str = "•",
            level: str = "DEBUG",
            colors: bool = True
    ):
        label = f"<white>{account.address}</white>" if colors else account.address
        logger.opt(colors=colors).log(level.upper(), f'[{smile}] {label} | {text}')
