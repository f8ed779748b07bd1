from __future__ import annotations

from typing import Callable, Dict, Any, Awaitable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from todolist.domain.tasks.store import TaskStore
from todolist.infra.clock.system_clock import SystemClock


class DIMiddleware(BaseMiddleware):
    """
    Inject dependencies to handlers via `data` dict.

    Handlers can request args by name, e.g.
      async def handler(message: Message, task_store: TaskStore, clock: SystemClock): ...
    """

    def __init__(self, task_store: TaskStore, clock: SystemClock) -> None:
        self._store = task_store
        self._clock = clock

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        data["task_store"] = self._store
        data["clock"] = self._clock

        return await handler(event, data)
