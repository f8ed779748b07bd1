from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from todolist.domain.tasks.codec import dumps_tasks, loads_tasks
from todolist.domain.tasks.models import Task, TaskCollection
from todolist.domain.tasks.ports import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


class TaskPersistence:
    """
    Full-snapshot persistence of the task collection in one key-value slot.

    Never raises: a bad read yields an empty collection, a failed write
    is logged and dropped.
    """

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key
        # FIFO lock, so overlapping saves land in issue order
        self._write_lock = asyncio.Lock()

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> TaskCollection:
        try:
            blob = await self._kv.get(self._key)
        except Exception:
            logger.exception("Reading key %r failed, starting with an empty list", self._key)
            return ()

        if not blob:
            logger.info("No saved tasks under key %r", self._key)
            return ()

        try:
            tasks = loads_tasks(blob)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning("Saved tasks under key %r are corrupt (%s), starting empty", self._key, e)
            return ()
        except Exception:
            # e.g. RecursionError on absurdly nested JSON
            logger.exception("Decoding key %r failed, starting with an empty list", self._key)
            return ()

        logger.info("Restored %d task(s) from key %r", len(tasks), self._key)
        return tasks

    async def save(self, tasks: Iterable[Task]) -> None:
        blob = dumps_tasks(tasks)
        async with self._write_lock:
            try:
                await self._kv.set(self._key, blob)
            except Exception:
                logger.exception("Writing key %r failed, in-memory tasks stay authoritative", self._key)
