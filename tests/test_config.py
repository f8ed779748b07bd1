from __future__ import annotations

from pathlib import Path

import pytest

from todolist.config import load_settings


@pytest.fixture
def env(monkeypatch):
    for name in ("BOT_TOKEN", "OWNER_TELEGRAM_ID", "TZ", "DB_PATH", "STORAGE_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("OWNER_TELEGRAM_ID", "42")
    return monkeypatch


def test_defaults(env):
    s = load_settings()
    assert s.bot_token == "123:abc"
    assert s.owner_telegram_id == 42
    assert s.timezone == "Europe/Helsinki"
    assert s.db_path == Path("data/todolist.db")
    assert s.storage_key == "tasks"
    assert s.log_level == "INFO"


def test_overrides(env):
    env.setenv("STORAGE_KEY", "my-tasks")
    env.setenv("LOG_LEVEL", "debug")
    env.setenv("DB_PATH", "/tmp/x.db")
    s = load_settings()
    assert s.storage_key == "my-tasks"
    assert s.log_level == "DEBUG"
    assert s.db_path == Path("/tmp/x.db")


def test_missing_token(env):
    env.delenv("BOT_TOKEN")
    with pytest.raises(RuntimeError, match="BOT_TOKEN"):
        load_settings()


@pytest.mark.parametrize("owner", ["0", "-5", "abc"])
def test_invalid_owner(env, owner):
    env.setenv("OWNER_TELEGRAM_ID", owner)
    with pytest.raises(RuntimeError, match="OWNER_TELEGRAM_ID"):
        load_settings()
