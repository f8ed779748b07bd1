from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.fsm.storage.memory import MemoryStorage

from todolist.config import load_settings
from todolist.domain.common.time import to_iso
from todolist.domain.tasks.persistence import TaskPersistence
from todolist.domain.tasks.store import TaskStore
from todolist.infra.clock.system_clock import SystemClock
from todolist.infra.db.connection import Database
from todolist.infra.db.repo.kv_sqlite import KeyValueSqliteRepo
from todolist.infra.db.schema_version import apply_migrations
from todolist.infra.ids.uuid_gen import UuidGenerator

from todolist.ui.telegram.handlers.cancel import router as cancel_router
from todolist.ui.telegram.handlers.start import router as start_router
from todolist.ui.telegram.handlers.tasks import router as tasks_router
from todolist.ui.telegram.middlewares.auth import OwnerOnlyMiddleware
from todolist.ui.telegram.middlewares.di import DIMiddleware

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]  # .../todolist/ui/telegram/main.py -> repo root


def resolve_db_path(db_path: Path, root: Path = REPO_ROOT) -> Path:
    if not db_path.is_absolute():
        db_path = root / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


async def main() -> None:
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s",
    )
    logger.info("Bot starting - PID: %s", os.getpid())

    # --- storage ---
    db_path = resolve_db_path(settings.db_path)
    logger.info("DB_PATH: %s", db_path)

    db = Database(str(db_path))
    clock = SystemClock(settings.timezone)
    await apply_migrations(db=db, now_iso=to_iso(clock.now()))

    # --- task store: restore before anything can mutate ---
    persistence = TaskPersistence(KeyValueSqliteRepo(db, clock), key=settings.storage_key)
    store = TaskStore(persistence=persistence, ids=UuidGenerator())
    await store.start()

    # --- bot/dispatcher ---
    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = Dispatcher(storage=MemoryStorage())

    # --- middlewares ---
    dp.message.middleware(OwnerOnlyMiddleware(settings.owner_telegram_id))
    dp.callback_query.middleware(OwnerOnlyMiddleware(settings.owner_telegram_id))

    dp.message.middleware(DIMiddleware(store, clock))
    dp.callback_query.middleware(DIMiddleware(store, clock))

    # --- routers ---
    dp.include_router(start_router)
    dp.include_router(cancel_router)
    dp.include_router(tasks_router)

    logger.info("Starting polling")
    try:
        await dp.start_polling(bot)
    finally:
        await store.close()
        await bot.session.close()
        logger.info("Bot shutdown complete - PID: %s", os.getpid())


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
