from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Optional, Set

from todolist.domain.common.errors import StoreNotReadyError, ValidationError
from todolist.domain.tasks.models import StoreState, Task, TaskCollection
from todolist.domain.tasks.persistence import TaskPersistence
from todolist.domain.tasks.ports import IdGenerator
from todolist.domain.tasks.rules import normalize_category, validate_text

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Owner of the canonical task list. No aiogram. No sqlite.

    Lifecycle is initializing -> ready -> closed. Mutations are only legal
    while ready, so nothing is written before the saved list is restored.
    Every mutation swaps in a new tuple, bumps `version` and schedules a
    full save without waiting for it.
    """

    def __init__(self, persistence: TaskPersistence, ids: IdGenerator) -> None:
        self._persistence = persistence
        self._ids = ids
        self._tasks: TaskCollection = ()
        self._version = 0
        self._state = StoreState.INITIALIZING
        self._pending: Set[asyncio.Task] = set()

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is StoreState.READY

    @property
    def version(self) -> int:
        return self._version

    async def start(self) -> None:
        if self._state is not StoreState.INITIALIZING:
            return
        self._tasks = await self._persistence.load()
        self._state = StoreState.READY
        logger.info("Task store ready with %d task(s)", len(self._tasks))

    def snapshot(self) -> TaskCollection:
        return self._tasks

    def get(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def add(
        self,
        text: str,
        due_date: Optional[date] = None,
        category: Optional[str] = None,
    ) -> Optional[Task]:
        self._ensure_ready()
        try:
            text = validate_text(text)
        except ValidationError:
            logger.debug("Ignoring add with empty text")
            return None

        task = Task(
            id=self._new_unique_id(),
            text=text,
            completed=False,
            due_date=due_date,
            category=normalize_category(category),
        )
        self._commit(self._tasks + (task,))
        return task

    def toggle(self, task_id: str) -> None:
        self._ensure_ready()
        if self.get(task_id) is None:
            logger.debug("Ignoring toggle of unknown task %s", task_id)
            return
        self._commit(tuple(t.toggled() if t.id == task_id else t for t in self._tasks))

    def delete(self, task_id: str) -> None:
        self._ensure_ready()
        if self.get(task_id) is None:
            logger.debug("Ignoring delete of unknown task %s", task_id)
            return
        self._commit(tuple(t for t in self._tasks if t.id != task_id))

    async def flush(self) -> None:
        """Wait until every save issued so far has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        if self._state is StoreState.READY:
            self._schedule_save(self._tasks)
        await self.flush()
        self._state = StoreState.CLOSED

    # ---- internals ----

    def _ensure_ready(self) -> None:
        if self._state is StoreState.INITIALIZING:
            raise StoreNotReadyError("Tasks are still loading.")
        if self._state is StoreState.CLOSED:
            raise StoreNotReadyError("Task store is closed.")

    def _new_unique_id(self) -> str:
        existing = {t.id for t in self._tasks}
        new_id = self._ids.new_id()
        while new_id in existing:
            new_id = self._ids.new_id()
        return new_id

    def _commit(self, tasks: TaskCollection) -> None:
        self._tasks = tasks
        self._version += 1
        self._schedule_save(tasks)

    def _schedule_save(self, tasks: TaskCollection) -> None:
        task = asyncio.get_running_loop().create_task(self._persistence.save(tasks))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
