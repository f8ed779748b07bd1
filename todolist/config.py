from dataclasses import dataclass
import os
from pathlib import Path

try:
    from dotenv import load_dotenv
    load_dotenv()
except Exception:
    pass


@dataclass(frozen=True)
class Settings:
    bot_token: str
    owner_telegram_id: int
    timezone: str
    db_path: Path
    storage_key: str
    log_level: str


def load_settings() -> Settings:
    bot_token = os.getenv("BOT_TOKEN", "").strip()
    owner_raw = os.getenv("OWNER_TELEGRAM_ID", "0").strip()
    tz = os.getenv("TZ", "Europe/Helsinki").strip() or "Europe/Helsinki"
    db_raw = os.getenv("DB_PATH", "data/todolist.db").strip() or "data/todolist.db"
    storage_key = os.getenv("STORAGE_KEY", "tasks").strip() or "tasks"
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    if not bot_token:
        raise RuntimeError("BOT_TOKEN missing in .env")
    try:
        owner_id = int(owner_raw)
    except ValueError:
        owner_id = 0
    if owner_id <= 0:
        raise RuntimeError("OWNER_TELEGRAM_ID missing/invalid in .env")

    # db_path may still be relative, the entry point anchors it to the repo root
    return Settings(
        bot_token=bot_token,
        owner_telegram_id=owner_id,
        timezone=tz,
        db_path=Path(db_raw),
        storage_key=storage_key,
        log_level=log_level,
    )
