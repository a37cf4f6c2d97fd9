from datetime import datetime, timezone, timedelta
from random import uniform
from loguru import logger
from tqdm import tqdm
import asyncio
import sys
sys.__stdout__ = sys.stdout # error with `import inquirer` without this string in some system


logger.remove()
logger.add(sys.stderr, format="<white>{time:HH:mm:ss}</white> | <level>{message}</level>")


async def sleeping(*timing):
    if type(timing[0]) in (list, tuple): timing = timing[0]
    if len(timing) == 2: x = uniform(timing[0], timing[1])
    else: x = timing[0]
    desc = datetime.now().strftime('%H:%M:%S')
    if x <= 0: return
    whole = int(x)
    for _ in tqdm(range(whole), desc=desc, bar_format='{desc} | [•] Sleeping {n_fmt}/{total_fmt}'):
        await asyncio.sleep(1)
    await asyncio.sleep(x - whole)


def make_border(
        table_elements: dict,
        keys_color: str | None = None,
        values_color: str | None = None,
        table_color: str | None = None,
):
    def tag_color(value: str, color: str | None):
        if color:
            return f"<{color}>{value}</{color}>"
        return value

    left_margin = 25
    space = 2
    horiz = '━'
    vert = '║'
    conn = 'o'

    if not table_elements: return "No text"

    key_len = max([len(key) for key in table_elements.keys()])
    val_len = max([len(str(value)) for value in table_elements.values()])
    text = f'{" " * left_margin}{conn}{horiz * space}'

    text += horiz * (key_len + space) + conn
    text += horiz * space
    text += horiz * (val_len + space) + conn

    text += '\n'

    for element in table_elements:
        text += f'{" " * left_margin}{vert}{" " * space}'

        text += f'{tag_color(element, keys_color)}{" " * (key_len - len(element) + space)}{vert}{" " * space}'
        text += f'{tag_color(table_elements[element], values_color)}{" " * (val_len - len(str(table_elements[element])) + space)}{vert}'
        text += "\n" + " " * left_margin + conn + horiz * space
        text += horiz * (key_len + space) + conn
        text += horiz * (space * 2 + val_len) + conn + '\n'
    return tag_color(text, table_color)


def format_address(address: str):
    if not address or len(address) < 42: return address
    return f"{address[:6]}...{address[38:]}"


def format_time(seconds: float):
    seconds = int(seconds)
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return f"{days}d {hours}h {minutes}m {seconds}s"


def format_response(response: str, max_length: int = 100):
    if not response: return ""
    response = " ".join(response.split())
    if len(response) > max_length:
        return response[:max_length] + "..."
    return response


def get_current_date(plus_time: dict = {}):
    return (datetime.now(tz=timezone.utc) + timedelta(**plus_time)).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
