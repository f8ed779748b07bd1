# -*- coding: utf-8 -*-
"""Task model and the store lifecycle states."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Optional, Tuple

DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class Task:
    id: str
    text: str
    completed: bool = False
    due_date: Optional[date] = None
    category: str = DEFAULT_CATEGORY

    def toggled(self) -> "Task":
        return replace(self, completed=not self.completed)


TaskCollection = Tuple[Task, ...]


class StoreState(str, Enum):
    INITIALIZING = "initializing"
    READY = "ready"
    CLOSED = "closed"
