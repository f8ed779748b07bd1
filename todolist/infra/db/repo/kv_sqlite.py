from __future__ import annotations

from typing import Optional

from todolist.domain.common.time import to_iso
from todolist.domain.tasks.ports import Clock, KeyValueStore
from todolist.infra.db.connection import Database


class KeyValueSqliteRepo(KeyValueStore):
    def __init__(self, db: Database, clock: Clock) -> None:
        self._db = db
        self._clock = clock

    async def get(self, key: str) -> Optional[str]:
        row = await self._db.fetchone("SELECT value FROM kv_store WHERE key = ?;", (key,))
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        await self._db.execute(
            """
            INSERT INTO kv_store(key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
              value = excluded.value,
              updated_at = excluded.updated_at;
            """,
            (key, value, to_iso(self._clock.now())),
        )
