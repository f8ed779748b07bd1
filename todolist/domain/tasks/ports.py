from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class IdGenerator(ABC):
    @abstractmethod
    def new_id(self) -> str: ...


class KeyValueStore(ABC):
    """A durable slot keyed by string, holding a text blob."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None: ...
