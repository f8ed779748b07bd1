from __future__ import annotations

from aiogram import Router, F
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery

from todolist.domain.tasks.store import TaskStore
from todolist.ui.telegram.handlers.tasks import end_form, send_task_list
from todolist.ui.telegram.keyboards.tasks import CANCEL_CB
from todolist.ui.telegram.states.tasks import AddTaskFlow
from todolist.ui.telegram.texts import tasks as texts

router = Router()

CANCEL_WORDS = {"cancel", "stop"}

# while typing the task text, "stop" is a valid task
CANCEL_WORD_STATES = StateFilter(None, AddTaskFlow.category, AddTaskFlow.due_date)


async def _cancel(message: Message, state: FSMContext, task_store: TaskStore) -> None:
    await end_form(state)
    await message.answer(texts.CANCELLED)
    await send_task_list(message, state, task_store)


@router.message(Command("cancel"))
async def cancel_cmd(message: Message, state: FSMContext, task_store: TaskStore):
    await _cancel(message, state, task_store)


@router.message(CANCEL_WORD_STATES, F.text.casefold().in_(CANCEL_WORDS))
async def cancel_text(message: Message, state: FSMContext, task_store: TaskStore):
    await _cancel(message, state, task_store)


@router.callback_query(F.data == CANCEL_CB)
async def cancel_cb(cb: CallbackQuery, state: FSMContext, task_store: TaskStore):
    await cb.answer()
    await _cancel(cb.message, state, task_store)
