from loguru import logger
from time import sleep
import asyncio
import signal
import os

from modules import *
from modules.retry import DataBaseError
from modules.utils import sleeping
from settings import REFERRAL_CODE


def load_accounts(db: DataBase):
    accounts = []
    for index, account_data in enumerate(db.load_accounts(), start=1):
        try:
            wallet = Wallet(privatekey=account_data["privatekey"], proxy=account_data["proxy"])
        except Exception as err:
            logger.error(f'[-] Soft | Invalid private key #{index}: {err}')
            continue

        accounts.append(Account(
            wallet=wallet,
            browser=Browser(address=wallet.address, proxy=wallet.proxy),
        ))

    if not accounts:
        raise DataBaseError('No valid wallets found. Please check your `input_data/privatekeys.txt`')
    logger.success(f'[+] Soft | Initialized {len(accounts)} wallet(s)\n')
    return accounts


async def runner(db: DataBase):
    accounts = load_accounts(db)
    scheduler = Scheduler(
        accounts=accounts,
        authenticator=Authenticator(referral_code=REFERRAL_CODE),
        db=db,
        sleep=sleeping,
    )

    if os.name != "nt":
        asyncio.get_running_loop().add_signal_handler(signal.SIGTERM, scheduler.stop)

    try:
        await scheduler.run()

    finally:
        scheduler.stop()
        logger.info('[•] Soft | Bot is shutting down...')
        scheduler.log_stats()
        await scheduler.build_report().send()
        for account in accounts:
            await account.browser.close()


if __name__ == '__main__':
    if os.name == "nt":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    try:
        db = DataBase()

        while True:
            mode = choose_mode()

            match mode.type:
                case "threads":
                    db.clear_threads()

                case "chat":
                    asyncio.run(runner(db=db))
                    break

        sleep(0.1)
        input('\n > Exit\n')

    except DataBaseError as e:
        logger.error(f'[-] Database | {e}')

    except KeyboardInterrupt:
        pass

    finally:
        logger.info('[•] Soft | Closed')
