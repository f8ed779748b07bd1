from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Union

from todolist.domain.tasks.models import Task, TaskCollection


class FilterMode(str, Enum):
    ALL = "All"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, value: Union["FilterMode", str]) -> "FilterMode":
        if isinstance(value, cls):
            return value
        raw = (value or "").strip().casefold()
        for mode in cls:
            if raw in (mode.value.casefold(), mode.name.casefold()):
                return mode
        raise ValueError(f"Unknown filter mode: {value!r}")


def _matches(task: Task, mode: FilterMode) -> bool:
    if mode is FilterMode.ACTIVE:
        return not task.completed
    if mode is FilterMode.COMPLETED:
        return task.completed
    return True


def apply_filter(tasks: Iterable[Task], mode: Union[FilterMode, str]) -> TaskCollection:
    """Ordered subsequence of `tasks` visible under `mode`. Does not touch the input."""
    mode = FilterMode.parse(mode)
    return tuple(t for t in tasks if _matches(t, mode))


def count_by_mode(tasks: Iterable[Task]) -> Dict[FilterMode, int]:
    items = tuple(tasks)
    done = sum(1 for t in items if t.completed)
    return {
        FilterMode.ALL: len(items),
        FilterMode.ACTIVE: len(items) - done,
        FilterMode.COMPLETED: done,
    }
