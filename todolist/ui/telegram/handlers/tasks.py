from __future__ import annotations

import html
import logging
from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

from aiogram import Router, F
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, InlineKeyboardMarkup, Message

from todolist.domain.common.errors import StoreNotReadyError
from todolist.domain.common.time import format_date, parse_date
from todolist.domain.tasks.filters import FilterMode, apply_filter, count_by_mode
from todolist.domain.tasks.models import Task
from todolist.domain.tasks.store import TaskStore
from todolist.infra.clock.system_clock import SystemClock
from todolist.ui.telegram.keyboards.tasks import (
    DELETE_PREFIX,
    FILTER_PREFIX,
    PAGE_PREFIX,
    TOGGLE_PREFIX,
    cancel_kb,
    task_list_kb,
)
from todolist.ui.telegram.states.tasks import AddTaskFlow
from todolist.ui.telegram.texts import tasks as texts

logger = logging.getLogger(__name__)

router = Router()

FILTER_KEY = "filter"
PAGE_KEY = "page"
SKIP_WORDS = {"-", "skip"}

# Telegram caps a message at 4096 chars and 100 inline buttons
PAGE_SIZE = 10
MAX_LINE_TEXT = 200
MAX_CATEGORY_TEXT = 40


# ----- pure helpers -----


def _escape_clipped(text: str, limit: int) -> str:
    """html-escape `text`, cut so the escaped result stays within `limit` chars."""
    escaped = html.escape(text)
    if len(escaped) <= limit:
        return escaped
    out = []
    used = 0
    for ch in text:
        piece = html.escape(ch)
        if used + len(piece) > limit - 1:
            break
        out.append(piece)
        used += len(piece)
    return "".join(out) + "…"


def render_task_line(task: Task) -> str:
    box = "☑" if task.completed else "☐"
    text = _escape_clipped(task.text, MAX_LINE_TEXT)
    if task.completed:
        text = f"<s>{text}</s>"
    parts = [f"{box} {text}", _escape_clipped(task.category, MAX_CATEGORY_TEXT)]
    if task.due_date is not None:
        parts.append(f"due {format_date(task.due_date)}")
    return " · ".join(parts)


def page_count(n_items: int) -> int:
    return max(1, -(-n_items // PAGE_SIZE))


def clamp_page(page: int, n_items: int) -> int:
    return min(max(page, 0), page_count(n_items) - 1)


def render_task_list(
    tasks: Sequence[Task],
    mode: FilterMode,
    page: int = 0,
) -> Tuple[str, InlineKeyboardMarkup]:
    """Message text + keyboard for one page of the collection seen through `mode`."""
    visible = apply_filter(tasks, mode)
    counts = count_by_mode(tasks)
    pages = page_count(len(visible))
    page = clamp_page(page, len(visible))
    shown = visible[page * PAGE_SIZE:(page + 1) * PAGE_SIZE]

    header = f"Filter: {mode.value} ({len(visible)} of {len(tasks)})"
    if pages > 1:
        header += f" · page {page + 1}/{pages}"
    lines = [f"<b>{texts.TITLE}</b>", header, ""]
    if shown:
        lines.extend(render_task_line(t) for t in shown)
    else:
        lines.append(texts.EMPTY_LIST)

    return "\n".join(lines), task_list_kb(shown, mode, counts, page=page, pages=pages)


def parse_due_input(raw: Optional[str], today: date) -> Optional[date]:
    """
    Accepts:
      - '-' / 'skip'  -> no due date
      - today / tomorrow
      - YYYY-MM-DD
    Raises ValueError otherwise.
    """
    value = (raw or "").strip().casefold()
    if value in SKIP_WORDS:
        return None
    if value == "today":
        return today
    if value == "tomorrow":
        return today + timedelta(days=1)
    return parse_date(value)


def _command_args(message: Message) -> str:
    text = (message.text or "").strip()
    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


# ----- presentation state -----


async def current_mode(state: FSMContext) -> FilterMode:
    data = await state.get_data()
    try:
        return FilterMode.parse(data.get(FILTER_KEY) or FilterMode.ALL)
    except ValueError:
        return FilterMode.ALL


async def current_page(state: FSMContext) -> int:
    data = await state.get_data()
    try:
        return int(data.get(PAGE_KEY) or 0)
    except (TypeError, ValueError):
        return 0


async def end_form(state: FSMContext) -> None:
    """Drop the in-progress form but keep the chosen filter and page."""
    mode = await current_mode(state)
    page = await current_page(state)
    await state.clear()
    await state.update_data({FILTER_KEY: mode.value, PAGE_KEY: page})


async def _render_for(state: FSMContext, task_store: TaskStore) -> Tuple[str, InlineKeyboardMarkup]:
    return render_task_list(task_store.snapshot(), await current_mode(state), await current_page(state))


async def send_task_list(message: Message, state: FSMContext, task_store: TaskStore) -> None:
    text, markup = await _render_for(state, task_store)
    await message.answer(text, reply_markup=markup)


async def _refresh_list(cb: CallbackQuery, state: FSMContext, task_store: TaskStore) -> None:
    text, markup = await _render_for(state, task_store)
    try:
        await cb.message.edit_text(text, reply_markup=markup)
    except TelegramBadRequest as e:
        if "message is not modified" in str(e):
            return
        # message too old to edit
        logger.debug("Edit failed (%s), sending a new list message", e)
        await cb.message.answer(text, reply_markup=markup)


def _callback_arg(cb: CallbackQuery, prefix: str) -> str:
    return (cb.data or "")[len(prefix):]


# ----- commands -----


@router.message(Command("list"))
async def list_cmd(message: Message, state: FSMContext, task_store: TaskStore):
    await send_task_list(message, state, task_store)


@router.message(Command("add"))
async def add_cmd(message: Message, state: FSMContext, task_store: TaskStore):
    args = _command_args(message)

    # /add <text> -> add straight away with defaults
    if args:
        try:
            task_store.add(args)
        except StoreNotReadyError:
            await message.answer(texts.NOT_READY)
            return
        await message.answer(texts.ADDED)
        await send_task_list(message, state, task_store)
        return

    # /add -> form
    await state.set_state(AddTaskFlow.text)
    await message.answer(texts.ASK_TEXT, reply_markup=cancel_kb())


# ----- add form -----


@router.message(AddTaskFlow.text)
async def add_text(message: Message, state: FSMContext):
    text = message.text or ""
    if not text.strip():
        await message.answer(texts.EMPTY_TEXT + "\n" + texts.ASK_TEXT, reply_markup=cancel_kb())
        return

    await state.update_data(new_text=text)
    await state.set_state(AddTaskFlow.category)
    await message.answer(texts.ASK_CATEGORY, reply_markup=cancel_kb())


@router.message(AddTaskFlow.category)
async def add_category(message: Message, state: FSMContext):
    raw = (message.text or "").strip()
    await state.update_data(new_category=None if raw.casefold() in SKIP_WORDS else raw)
    await state.set_state(AddTaskFlow.due_date)
    await message.answer(texts.ASK_DUE_DATE, reply_markup=cancel_kb())


@router.message(AddTaskFlow.due_date)
async def add_due_date(message: Message, state: FSMContext, task_store: TaskStore, clock: SystemClock):
    try:
        due_date = parse_due_input(message.text, clock.today())
    except ValueError:
        await message.answer(texts.INVALID_DUE_DATE + "\n" + texts.ASK_DUE_DATE, reply_markup=cancel_kb())
        return

    data = await state.get_data()
    try:
        task = task_store.add(data.get("new_text", ""), due_date=due_date, category=data.get("new_category"))
    except StoreNotReadyError:
        await message.answer(texts.NOT_READY)
        return

    await end_form(state)
    await message.answer(texts.ADDED if task is not None else texts.EMPTY_TEXT)
    await send_task_list(message, state, task_store)


# ----- inline buttons -----


@router.callback_query(F.data.startswith(TOGGLE_PREFIX))
async def toggle_cb(cb: CallbackQuery, state: FSMContext, task_store: TaskStore):
    task_id = _callback_arg(cb, TOGGLE_PREFIX)
    try:
        known = task_store.get(task_id) is not None
        task_store.toggle(task_id)
    except StoreNotReadyError:
        await cb.answer(texts.NOT_READY)
        return

    await cb.answer(texts.TOGGLED if known else texts.NOT_FOUND)
    await _refresh_list(cb, state, task_store)


@router.callback_query(F.data.startswith(DELETE_PREFIX))
async def delete_cb(cb: CallbackQuery, state: FSMContext, task_store: TaskStore):
    task_id = _callback_arg(cb, DELETE_PREFIX)
    try:
        known = task_store.get(task_id) is not None
        task_store.delete(task_id)
    except StoreNotReadyError:
        await cb.answer(texts.NOT_READY)
        return

    await cb.answer(texts.DELETED if known else texts.NOT_FOUND)
    await _refresh_list(cb, state, task_store)


@router.callback_query(F.data.startswith(FILTER_PREFIX))
async def filter_cb(cb: CallbackQuery, state: FSMContext, task_store: TaskStore):
    try:
        mode = FilterMode.parse(_callback_arg(cb, FILTER_PREFIX))
    except ValueError:
        await cb.answer()
        return

    await state.update_data({FILTER_KEY: mode.value, PAGE_KEY: 0})
    await cb.answer()
    await _refresh_list(cb, state, task_store)


@router.callback_query(F.data.startswith(PAGE_PREFIX))
async def page_cb(cb: CallbackQuery, state: FSMContext, task_store: TaskStore):
    try:
        page = int(_callback_arg(cb, PAGE_PREFIX))
    except ValueError:
        await cb.answer()
        return

    visible = apply_filter(task_store.snapshot(), await current_mode(state))
    await state.update_data({PAGE_KEY: clamp_page(page, len(visible))})
    await cb.answer()
    await _refresh_list(cb, state, task_store)
