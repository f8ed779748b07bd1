from __future__ import annotations

from typing import Mapping, Sequence

from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from todolist.domain.tasks.filters import FilterMode
from todolist.domain.tasks.models import Task

TOGGLE_PREFIX = "t:tg:"
DELETE_PREFIX = "t:del:"
FILTER_PREFIX = "t:f:"
PAGE_PREFIX = "t:p:"
CANCEL_CB = "cancel"

MAX_BUTTON_TEXT = 40


def _short(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= MAX_BUTTON_TEXT:
        return text
    return text[: MAX_BUTTON_TEXT - 1] + "…"


def task_list_kb(
    tasks: Sequence[Task],
    mode: FilterMode,
    counts: Mapping[FilterMode, int],
    page: int = 0,
    pages: int = 1,
) -> InlineKeyboardMarkup:
    """
    One row per task on the page: [checkbox + text] [🗑️],
    a « page » row when there is more than one page,
    then a filter row with counts; the active mode is marked with •.
    """
    kb = InlineKeyboardBuilder()
    for t in tasks:
        box = "☑" if t.completed else "☐"
        kb.button(text=f"{box} {_short(t.text)}", callback_data=f"{TOGGLE_PREFIX}{t.id}")
        kb.button(text="🗑️", callback_data=f"{DELETE_PREFIX}{t.id}")
    sizes = [2] * len(tasks)

    if pages > 1:
        kb.button(text="«", callback_data=f"{PAGE_PREFIX}{max(page - 1, 0)}")
        kb.button(text=f"{page + 1}/{pages}", callback_data=f"{PAGE_PREFIX}{page}")
        kb.button(text="»", callback_data=f"{PAGE_PREFIX}{min(page + 1, pages - 1)}")
        sizes.append(3)

    for m in FilterMode:
        label = f"{m.value} ({counts.get(m, 0)})"
        if m is mode:
            label = f"• {label}"
        kb.button(text=label, callback_data=f"{FILTER_PREFIX}{m.value}")
    sizes.append(3)

    kb.adjust(*sizes)
    return kb.as_markup()


def cancel_kb() -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="Cancel", callback_data=CANCEL_CB)
    kb.adjust(1)
    return kb.as_markup()
