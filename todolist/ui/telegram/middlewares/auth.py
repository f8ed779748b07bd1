from __future__ import annotations

import logging

from aiogram import BaseMiddleware
from aiogram.types import Message, CallbackQuery
from typing import Callable, Dict, Any

from todolist.ui.telegram.texts import tasks as texts

logger = logging.getLogger(__name__)


class OwnerOnlyMiddleware(BaseMiddleware):
    def __init__(self, owner_id: int):
        self._owner_id = owner_id

    async def __call__(self, handler: Callable, event, data: Dict[str, Any]):
        user_id = None

        if isinstance(event, (Message, CallbackQuery)) and event.from_user:
            user_id = event.from_user.id

        if user_id != self._owner_id:
            logger.warning("Blocked user_id=%s (owner_id=%s)", user_id, self._owner_id)
            if isinstance(event, Message):
                await event.answer(texts.NOT_AUTHORIZED)
            elif isinstance(event, CallbackQuery):
                await event.answer(texts.NOT_AUTHORIZED, show_alert=True)
            return

        return await handler(event, data)
