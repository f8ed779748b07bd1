"""
Tests for the bot's pure helpers: list rendering, keyboards and due date input.
No Telegram connection needed.
"""
from __future__ import annotations

from datetime import date

import pytest

from todolist.domain.tasks.filters import FilterMode
from todolist.domain.tasks.models import Task
from todolist.ui.telegram.handlers.tasks import PAGE_SIZE, parse_due_input, render_task_line, render_task_list
from todolist.ui.telegram.keyboards.tasks import DELETE_PREFIX, FILTER_PREFIX, PAGE_PREFIX, TOGGLE_PREFIX

TASKS = (
    Task(id="a1", text="Buy milk", category="Home"),
    Task(id="b2", text="Pay <rent>", completed=True, due_date=date(2024, 5, 1)),
)


def _buttons(markup):
    return [btn for row in markup.inline_keyboard for btn in row]


def test_render_line_shows_category_and_iso_due_date():
    assert render_task_line(TASKS[0]) == "☐ Buy milk · Home"
    assert render_task_line(TASKS[1]) == "☑ <s>Pay &lt;rent&gt;</s> · General · due 2024-05-01"


def test_render_list_all_mode():
    text, markup = render_task_list(TASKS, FilterMode.ALL)
    assert "Filter: All (2 of 2)" in text
    assert "Buy milk" in text and "Pay &lt;rent&gt;" in text

    data = [b.callback_data for b in _buttons(markup)]
    assert data[:4] == [
        f"{TOGGLE_PREFIX}a1",
        f"{DELETE_PREFIX}a1",
        f"{TOGGLE_PREFIX}b2",
        f"{DELETE_PREFIX}b2",
    ]
    assert data[4:] == [f"{FILTER_PREFIX}All", f"{FILTER_PREFIX}Active", f"{FILTER_PREFIX}Completed"]


def test_render_list_marks_current_filter_with_counts():
    text, markup = render_task_list(TASKS, FilterMode.ACTIVE)
    assert "Filter: Active (1 of 2)" in text
    assert "Pay" not in text

    filter_row = markup.inline_keyboard[-1]
    assert [b.text for b in filter_row] == ["All (2)", "• Active (1)", "Completed (1)"]


def test_render_empty_view():
    text, markup = render_task_list((), FilterMode.COMPLETED)
    assert "No tasks here." in text
    assert len(markup.inline_keyboard) == 1


def test_long_task_text_is_shortened_on_button():
    task = Task(id="x", text="word " * 30)
    _, markup = render_task_list((task,), FilterMode.ALL)
    assert len(markup.inline_keyboard[0][0].text) <= 42


def test_parse_due_input():
    today = date(2024, 5, 1)
    assert parse_due_input("-", today) is None
    assert parse_due_input("skip", today) is None
    assert parse_due_input("today", today) == today
    assert parse_due_input("Tomorrow", today) == date(2024, 5, 2)
    assert parse_due_input("2024-12-24", today) == date(2024, 12, 24)
    with pytest.raises(ValueError):
        parse_due_input("next week", today)
    with pytest.raises(ValueError):
        parse_due_input(None, today)


def _many(n: int, text: str = "task"):
    return tuple(Task(id=f"id{i}", text=f"{text} {i}", completed=i % 3 == 0) for i in range(n))


def test_large_list_stays_within_telegram_limits():
    tasks = _many(60, text="&" * 300)
    for mode in FilterMode:
        text, markup = render_task_list(tasks, mode)
        assert len(_buttons(markup)) <= 100
        assert len(text) <= 4096


def test_large_list_is_paginated():
    tasks = _many(60)
    text, markup = render_task_list(tasks, FilterMode.ALL, page=1)
    assert "page 2/6" in text
    assert "task 10" in text and "task 19" in text
    assert "task 9 " not in text and "task 20" not in text

    toggles = [b.callback_data for b in _buttons(markup) if b.callback_data.startswith(TOGGLE_PREFIX)]
    assert toggles == [f"{TOGGLE_PREFIX}id{i}" for i in range(10, 20)]

    nav_row = markup.inline_keyboard[-2]
    assert [b.callback_data for b in nav_row] == [f"{PAGE_PREFIX}0", f"{PAGE_PREFIX}1", f"{PAGE_PREFIX}2"]
    assert nav_row[1].text == "2/6"


def test_page_out_of_range_is_clamped():
    tasks = _many(25)
    text, markup = render_task_list(tasks, FilterMode.ALL, page=99)
    assert "page 3/3" in text
    toggles = [b for b in _buttons(markup) if b.callback_data.startswith(TOGGLE_PREFIX)]
    assert len(toggles) == 25 - 2 * PAGE_SIZE

    text, _ = render_task_list(tasks, FilterMode.ALL, page=-4)
    assert "page 1/3" in text
