from os import path, makedirs
from loguru import logger
import asyncio
import json

from .retry import DataBaseError


INVALID_PROXIES = ['https://log:pass@ip:port', 'http://log:pass@ip:port', 'log:pass@ip:port', 'http://login:password@ip:port', '', None]


class DataBase:
    def __init__(self, root: str = "."):

        self.privatekeys_name = path.join(root, 'input_data', 'privatekeys.txt')
        self.proxies_name = path.join(root, 'input_data', 'proxies.txt')
        self.threads_db_name = path.join(root, 'databases', 'threads.json')

        self.changes_lock = asyncio.Lock()

        # create db's if not exists
        for folder in [path.dirname(self.threads_db_name), path.dirname(self.privatekeys_name)]:
            if not path.isdir(folder):
                makedirs(folder)

        for db_params in [
            {"name": self.threads_db_name, "value": "{}"},
            {"name": self.privatekeys_name, "value": ""},
            {"name": self.proxies_name, "value": ""},
        ]:
            if not path.isfile(db_params["name"]):
                with open(db_params["name"], 'w') as f: f.write(db_params["value"])


    def load_accounts(self):
        with open(self.privatekeys_name) as f:
            privatekeys = [pk.strip() for pk in f.read().splitlines() if pk.strip()]
        if not privatekeys:
            raise DataBaseError(f'No private keys found in `{self.privatekeys_name}`')

        with open(self.proxies_name) as f:
            proxies = [proxy.strip() for proxy in f.read().splitlines() if proxy.strip() not in INVALID_PROXIES]
        if not proxies:
            logger.warning('You will not use proxy')
            proxies = [None for _ in range(len(privatekeys))]
        else:
            proxies = list(proxies * (len(privatekeys) // len(proxies) + 1))[:len(privatekeys)]

        return [
            {"privatekey": pk, "proxy": proxy}
            for pk, proxy in zip(privatekeys, proxies)
        ]


    def load_threads(self):
        try:
            with open(self.threads_db_name, encoding="utf-8") as f: threads_db = json.load(f)
        except json.JSONDecodeError as err:
            raise DataBaseError(f'Broken threads database `{self.threads_db_name}`: {err}')
        if not isinstance(threads_db, dict):
            raise DataBaseError(f'Threads database `{self.threads_db_name}` must be a json object')

        threads = {}
        for address, thread_data in threads_db.items():
            if (
                    not isinstance(thread_data, dict) or
                    not isinstance(thread_data.get("thread_id"), str) or
                    not thread_data["thread_id"] or
                    type(thread_data.get("created_at")) not in (int, float)
            ):
                logger.warning(f'[-] Database | Skipping broken saved thread for {address}: {thread_data}')
                continue
            threads[address] = thread_data
        return threads


    async def save_thread(self, address: str, thread_id: str, created_at: float):
        async with self.changes_lock:
            with open(self.threads_db_name, encoding="utf-8") as f: threads_db = json.load(f)
            threads_db[address] = {"thread_id": thread_id, "created_at": created_at}

            with open(self.threads_db_name, 'w', encoding="utf-8") as f:
                json.dump(threads_db, f)


    async def remove_thread(self, address: str):
        async with self.changes_lock:
            with open(self.threads_db_name, encoding="utf-8") as f: threads_db = json.load(f)
            if threads_db.pop(address, None) is None: return

            with open(self.threads_db_name, 'w', encoding="utf-8") as f:
                json.dump(threads_db, f)


    def clear_threads(self):
        with open(self.threads_db_name, 'w', encoding="utf-8") as f: f.write('{}')
        logger.info(f'Cleared saved threads\n')
