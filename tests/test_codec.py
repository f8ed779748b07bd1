"""
Tests for the task JSON codec and date helpers, including blobs written
by the old mobile app (JS Date.toDateString() dates, numeric ids).
"""
from __future__ import annotations

import json
from datetime import date

import pytest

from todolist.domain.common.time import format_date, parse_date, parse_optional_date
from todolist.domain.tasks.codec import dumps_tasks, loads_tasks, task_to_dict
from todolist.domain.tasks.models import Task


def test_task_to_dict_uses_stored_field_names():
    task = Task(id="1", text="Pay rent", completed=True, due_date=date(2024, 5, 1), category="Home")
    assert task_to_dict(task) == {
        "id": "1",
        "text": "Pay rent",
        "completed": True,
        "dueDate": "2024-05-01",
        "category": "Home",
    }


def test_missing_due_date_is_omitted():
    assert "dueDate" not in task_to_dict(Task(id="1", text="x"))


def test_dumps_is_human_readable_json():
    blob = dumps_tasks([Task(id="1", text="Ünïcode")])
    assert "Ünïcode" in blob
    assert json.loads(blob)[0]["text"] == "Ünïcode"


def test_loads_legacy_mobile_blob():
    blob = json.dumps([
        {"id": 1714550400000, "text": "Buy milk", "completed": False, "category": "Home"},
        {"id": "1714550400001", "text": "Pay rent", "completed": True, "dueDate": "Wed May 01 2024"},
    ])
    tasks = loads_tasks(blob)
    assert tasks == (
        Task(id="1714550400000", text="Buy milk", category="Home"),
        Task(id="1714550400001", text="Pay rent", completed=True, due_date=date(2024, 5, 1), category="General"),
    )


def test_loads_skips_malformed_entries_and_duplicate_ids():
    blob = json.dumps([
        {"id": "1", "text": "first"},
        {"id": "1", "text": "dupe"},
        {"id": "2", "text": "   "},
        {"text": "no id"},
        "not an object",
        {"id": "3", "text": "bad date", "dueDate": "someday"},
    ])
    tasks = loads_tasks(blob)
    assert [t.text for t in tasks] == ["first", "bad date"]
    assert tasks[1].due_date is None


def test_loads_non_boolean_completed_reads_as_open():
    blob = json.dumps([
        {"id": "1", "text": "string false", "completed": "false"},
        {"id": "2", "text": "string true", "completed": "true"},
        {"id": "3", "text": "number", "completed": 1},
        {"id": "4", "text": "real bool", "completed": True},
        {"id": "5", "text": "missing"},
    ])
    assert [t.completed for t in loads_tasks(blob)] == [False, False, False, True, False]


def test_loads_rejects_non_array_root():
    with pytest.raises(ValueError):
        loads_tasks('{"tasks": []}')
    with pytest.raises(ValueError):
        loads_tasks("not json")


def test_format_date_is_iso():
    assert format_date(date(2024, 5, 1)) == "2024-05-01"


def test_parse_date_formats():
    assert parse_date("2024-05-01") == date(2024, 5, 1)
    assert parse_date(" Wed May 01 2024 ") == date(2024, 5, 1)
    with pytest.raises(ValueError):
        parse_date("01/05/2024")


def test_parse_optional_date_blank_is_none():
    assert parse_optional_date(None) is None
    assert parse_optional_date("  ") is None
