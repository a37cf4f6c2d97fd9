import pytest

from modules.database import DataBase
from modules.retry import DataBaseError


PK_1 = "0x" + "1" * 64
PK_2 = "0x" + "2" * 64
PK_3 = "0x" + "3" * 64


def test_creates_missing_files(tmp_path):
    DataBase(root=str(tmp_path))

    assert (tmp_path / "databases" / "threads.json").read_text() == "{}"
    assert (tmp_path / "input_data" / "privatekeys.txt").exists()
    assert (tmp_path / "input_data" / "proxies.txt").exists()


def test_no_private_keys_is_fatal(tmp_path):
    db = DataBase(root=str(tmp_path))

    with pytest.raises(DataBaseError):
        db.load_accounts()


def test_load_accounts_without_proxies(tmp_path):
    db = DataBase(root=str(tmp_path))
    (tmp_path / "input_data" / "privatekeys.txt").write_text(f"{PK_1}\n\n{PK_2}\n")
    (tmp_path / "input_data" / "proxies.txt").write_text("log:pass@ip:port\n")

    assert db.load_accounts() == [
        {"privatekey": PK_1, "proxy": None},
        {"privatekey": PK_2, "proxy": None},
    ]


def test_proxies_are_cycled_over_wallets(tmp_path):
    db = DataBase(root=str(tmp_path))
    (tmp_path / "input_data" / "privatekeys.txt").write_text("\n".join([PK_1, PK_2, PK_3]))
    (tmp_path / "input_data" / "proxies.txt").write_text("user:pw@1.1.1.1:80\nuser:pw@2.2.2.2:80\n")

    proxies = [account["proxy"] for account in db.load_accounts()]

    assert proxies == ["user:pw@1.1.1.1:80", "user:pw@2.2.2.2:80", "user:pw@1.1.1.1:80"]


@pytest.mark.asyncio
async def test_thread_save_and_remove(tmp_path):
    db = DataBase(root=str(tmp_path))

    await db.save_thread("0xA", "thread-a", 10.5)
    await db.save_thread("0xB", "thread-b", 20.0)
    await db.save_thread("0xA", "thread-a2", 30.0)

    assert db.load_threads() == {
        "0xA": {"thread_id": "thread-a2", "created_at": 30.0},
        "0xB": {"thread_id": "thread-b", "created_at": 20.0},
    }

    await db.remove_thread("0xB")
    await db.remove_thread("0xMissing")
    assert list(db.load_threads()) == ["0xA"]

    db.clear_threads()
    assert db.load_threads() == {}


def test_broken_threads_database(tmp_path):
    db = DataBase(root=str(tmp_path))
    (tmp_path / "databases" / "threads.json").write_text("{not json")

    with pytest.raises(DataBaseError):
        db.load_threads()


@pytest.mark.parametrize(
    "entry",
    [
        '"thread-id"',
        '{"thread_id": "x", "created_at": "2026-10-19"}',
        '{"thread_id": 42, "created_at": 10}',
        '{"thread_id": "", "created_at": 10}',
        '{"thread_id": "x", "created_at": true}',
        '{"thread_id": "x"}',
    ],
)
def test_broken_saved_threads_are_skipped(tmp_path, entry):
    db = DataBase(root=str(tmp_path))
    (tmp_path / "databases" / "threads.json").write_text(
        '{"0xA": %s, "0xB": {"thread_id": "ok", "created_at": 5}}' % entry
    )

    assert db.load_threads() == {"0xB": {"thread_id": "ok", "created_at": 5}}


def test_threads_database_must_be_object(tmp_path):
    db = DataBase(root=str(tmp_path))
    (tmp_path / "databases" / "threads.json").write_text('["0xA"]')

    with pytest.raises(DataBaseError):
        db.load_threads()
