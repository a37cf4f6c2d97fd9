from curl_cffi.requests import AsyncSession

from modules.retry import have_json
from settings import BASE_URL


class Browser:

    def __init__(
            self,
            address: str,
            proxy: str | None = None,
            base_url: str = BASE_URL,
    ):
        self.address = address
        self.base_url = base_url.rstrip("/")

        if proxy in [None, "", " ", "\n"]:
            self.proxy = None
        else:
            self.proxy = "http://" + proxy.removeprefix("https://").removeprefix("http://")

        self.session = self.get_new_session()


    def get_new_session(self):
        session = AsyncSession(
            impersonate="chrome131",
            headers={
                "Accept": "*/*",
                "Accept-Language": "en-US,en;q=0.5",
                "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/133.0.0.0 Safari/537.36",
                "Origin": "https://klokapp.ai",
                "Referer": "https://klokapp.ai/",
                "Sec-Fetch-Dest": "empty",
                "Sec-Fetch-Mode": "cors",
                "Sec-Fetch-Site": "same-site",
            }
        )
        if self.proxy not in ['http://log:pass@ip:port', '', None]:
            session.proxies.update({'http': self.proxy, 'https': self.proxy})

        return session


    async def send_request(self, **kwargs):
        if kwargs.get("method"): kwargs["method"] = kwargs["method"].upper()
        if kwargs.get("path"): kwargs["url"] = self.base_url + kwargs.pop("path")
        return await self.session.request(**kwargs)


    @have_json
    async def send_json_request(self, **kwargs):
        return await self.send_request(**kwargs)


    async def verify(self, body: dict):
        r = await self.send_json_request(method="POST", path="/verify", json=body)
        if r.status_code // 100 != 2:
            raise Exception(f'verify status {r.status_code}: {r.text[:350]}')
        return r.json()


    async def get_challenge_token(self, kind: str):
        r = await self.send_json_request(method="GET", path=f"/{kind}")
        if r.status_code // 100 != 2:
            raise Exception(f'{kind} token status {r.status_code}: {r.text[:350]}')
        return r.json().get("token")


    async def get_rate_limit(self, session_token: str):
        return await self.send_request(
            method="GET",
            path="/rate-limit",
            headers={"x-session-token": session_token},
        )


    async def chat(self, session_token: str, payload: dict):
        return await self.send_request(
            method="POST",
            path="/chat",
            json=payload,
            headers={"x-session-token": session_token},
        )


    async def close(self):
        await self.session.close()
