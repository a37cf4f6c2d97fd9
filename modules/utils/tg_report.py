from loguru import logger
from aiohttp import ClientSession

from settings import TG_BOT_TOKEN, TG_USER_ID


class TgReport:
    """Collects run statistics into one html message and posts it to every `TG_USER_ID`."""

    MAX_LENGTH = 1900

    def __init__(self, title: str = "📊 Klok bot stats"):
        self.lines = [title, ""]


    def add_table(self, table: dict, header: str = None):
        if header:
            self.lines.append(f"\n<b>{header}</b>")
        self.lines += [f"<b>{key}</b> {value}" for key, value in table.items()]
        return self


    @property
    def text(self):
        return "\n".join(self.lines)


    def split_text(self):
        chunks = [""]
        for line in self.lines:
            if chunks[-1] and len(chunks[-1]) + len(line) + 1 > self.MAX_LENGTH:
                chunks.append("")
            chunks[-1] += (("\n" if chunks[-1] else "") + line)[:self.MAX_LENGTH]
        return chunks


    async def send(self):
        if not TG_BOT_TOKEN: return

        async with ClientSession() as session:
            for tg_id in TG_USER_ID:
                for text in self.split_text():
                    try:
                        r = await session.post(
                            url=f'https://api.telegram.org/bot{TG_BOT_TOKEN}/sendMessage',
                            json={
                                'parse_mode': 'html',
                                'disable_web_page_preview': True,
                                'chat_id': tg_id,
                                'text': text,
                            }
                        )
                        response = await r.json()
                        if response.get("ok") != True: raise Exception(str(response))
                    except Exception as err:
                        logger.error(f'[-] TG | Send stats to {tg_id} error: {err}')
