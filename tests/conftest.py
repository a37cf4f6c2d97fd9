"""
Shared pytest configuration.

Puts the project root on sys.path so `import modules` and `import settings`
work from any test module, and provides small fakes for the HTTP layer.
"""

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None):
        self.status_code = status_code
        if body is None:
            body = ""
        self.text = body if isinstance(body, str) else json.dumps(body)

    def json(self):
        return json.loads(self.text)


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def fake_wallet():
    def _make(address: str = "0x" + "a" * 40):
        wallet = SimpleNamespace(address=address)
        wallet.sign_message = MagicMock(return_value="0xsigned")
        return wallet
    return _make


@pytest.fixture
def fake_browser():
    def _make():
        browser = MagicMock()
        browser.verify = AsyncMock()
        browser.get_challenge_token = AsyncMock()
        browser.get_rate_limit = AsyncMock()
        browser.chat = AsyncMock()
        return browser
    return _make
