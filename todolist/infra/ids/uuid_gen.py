from __future__ import annotations

import uuid

from todolist.domain.tasks.ports import IdGenerator


class UuidGenerator(IdGenerator):
    def new_id(self) -> str:
        # hex keeps callback_data short (Telegram caps it at 64 bytes)
        return uuid.uuid4().hex
