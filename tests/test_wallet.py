import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from modules.wallet import Wallet


PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
ADDRESS = Account.from_key(PRIVATE_KEY).address


def test_address_from_key_with_or_without_prefix():
    assert Wallet(PRIVATE_KEY).address == ADDRESS
    assert Wallet(PRIVATE_KEY.removeprefix("0x")).address == ADDRESS


@pytest.mark.parametrize("privatekey", ["", "0x1234", None])
def test_invalid_key(privatekey):
    with pytest.raises(ValueError):
        Wallet(privatekey)


def test_sign_message_recovers_to_address():
    wallet = Wallet(PRIVATE_KEY)
    message = "klokapp.ai wants you to sign in with your Ethereum account:\n" + wallet.address

    signature = wallet.sign_message(message)

    assert signature.startswith("0x") and len(signature) == 132
    assert Account.recover_message(encode_defunct(text=message), signature=signature) == wallet.address


@pytest.mark.parametrize(
    "proxy, expected",
    [
        ("user:pw@1.1.1.1:80", "http://user:pw@1.1.1.1:80"),
        ("https://user:pw@1.1.1.1:80", "http://user:pw@1.1.1.1:80"),
        ("log:pass@ip:port", None),
        (None, None),
    ],
)
def test_proxy_parsing(proxy, expected):
    assert Wallet(PRIVATE_KEY, proxy=proxy).proxy == expected
