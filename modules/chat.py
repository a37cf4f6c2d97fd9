from dataclasses import dataclass
from json import loads, JSONDecodeError

from modules.utils import get_current_date
from modules.retry import (
    QuotaQueryError,
    DispatchError,
    ThreadInvalidError,
    SessionInvalidError,
    THREAD_ERROR_MARKERS,
    SESSION_ERROR_MARKERS,
)
from modules.browser import Browser
from settings import PREMIUM_THRESHOLD


CHAT_MODEL = "llama-3.3-70b-instruct"
CHAT_LANGUAGE = "english"


@dataclass
class QuotaSnapshot:
    remaining: int
    total: int
    is_premium: bool
    reset_at: str | int | None = None


async def get_quota(browser: Browser, session_token: str, premium_threshold: int = PREMIUM_THRESHOLD):
    """
    Read the message allowance of the session.

    `is_premium` is a guess: the service does not report a plan, so any
    limit above `premium_threshold` is treated as premium.
    """
    r = await browser.get_rate_limit(session_token)
    if r.status_code // 100 != 2:
        raise QuotaQueryError(r.status_code, r.text)

    try:
        rate_limit = r.json()
    except JSONDecodeError:
        raise QuotaQueryError(r.status_code, f'bad json response: {r.text}')

    total = max(int(rate_limit.get("limit") or 0), 0)
    return QuotaSnapshot(
        remaining=max(int(rate_limit.get("remaining") or 0), 0),
        total=total,
        is_premium=total > premium_threshold,
        reset_at=rate_limit.get("reset_time") or None,
    )


def build_chat_payload(thread_id: str, prompt: str):
    return {
        "id": thread_id,
        "title": "",
        "messages": [{"role": "user", "content": prompt}],
        "sources": [],
        "model": CHAT_MODEL,
        "created_at": get_current_date(),
        "language": CHAT_LANGUAGE,
    }


def dispatch_error(status: int, body: str):
    lowered = body.lower()
    if status in (401, 403) or any(marker in lowered for marker in SESSION_ERROR_MARKERS):
        return SessionInvalidError(status, body)
    if status == 404 or any(marker in lowered for marker in THREAD_ERROR_MARKERS):
        return ThreadInvalidError(status, body)
    return DispatchError(status, body)


def extract_reply(response_text: str):
    try:
        data = loads(response_text)
    except (JSONDecodeError, ValueError):
        return response_text

    if not isinstance(data, dict):
        return response_text

    choices = data.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict) and choices[0].get("message"):
        message = choices[0]["message"]
        if isinstance(message, dict):
            if message.get("content"):
                return str(message["content"])
        else:
            return str(message)

    if data.get("message"):
        return str(data["message"])

    return response_text


async def send_chat(browser: Browser, session_token: str, thread_id: str, prompt: str):
    r = await browser.chat(session_token, build_chat_payload(thread_id, prompt))
    if r.status_code // 100 != 2:
        raise dispatch_error(r.status_code, r.text)

    return extract_reply(r.text)
