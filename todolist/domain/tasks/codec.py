# -*- coding: utf-8 -*-
"""
JSON codec for the task collection.

Field names match the blobs written by the mobile app
(id, text, completed, dueDate, category) so old data still loads.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from todolist.domain.common.time import format_date, parse_optional_date
from todolist.domain.tasks.models import DEFAULT_CATEGORY, Task, TaskCollection

logger = logging.getLogger(__name__)


def task_to_dict(task: Task) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "category": task.category,
    }
    if task.due_date is not None:
        data["dueDate"] = format_date(task.due_date)
    return data


def task_from_dict(raw: Mapping[str, Any]) -> Optional[Task]:
    """Build a Task from one stored entry, or None if the entry is unusable."""
    raw_id = raw.get("id")
    text = raw.get("text")
    if raw_id is None or str(raw_id).strip() == "":
        return None
    if not isinstance(text, str) or not text.strip():
        return None

    try:
        due_date = parse_optional_date(raw.get("dueDate"))
    except ValueError:
        logger.warning("Dropping unparseable dueDate %r on task %s", raw.get("dueDate"), raw_id)
        due_date = None

    completed = raw.get("completed", False)
    if not isinstance(completed, bool):
        logger.warning("Non-boolean completed %r on task %s, reading as not completed", completed, raw_id)
        completed = False

    category = raw.get("category")
    if not isinstance(category, str) or not category.strip():
        category = DEFAULT_CATEGORY

    return Task(
        id=str(raw_id),
        text=text,
        completed=completed,
        due_date=due_date,
        category=category,
    )


def dumps_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False)


def loads_tasks(blob: str) -> TaskCollection:
    """
    Decode a stored blob.

    Raises ValueError when the blob is not a JSON array. Individual bad
    entries and repeated ids are skipped (first occurrence wins).
    """
    data = json.loads(blob)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of tasks, got {type(data).__name__}")

    tasks: List[Task] = []
    seen: set[str] = set()
    for idx, raw in enumerate(data):
        task = task_from_dict(raw) if isinstance(raw, dict) else None
        if task is None:
            logger.warning("Skipping malformed task entry at index %d", idx)
            continue
        if task.id in seen:
            logger.warning("Skipping duplicate task id %s at index %d", task.id, idx)
            continue
        seen.add(task.id)
        tasks.append(task)
    return tuple(tasks)
