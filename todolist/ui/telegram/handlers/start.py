from __future__ import annotations

from aiogram import Router
from aiogram.filters import CommandStart, Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from todolist.domain.tasks.store import TaskStore
from todolist.ui.telegram.handlers.tasks import end_form, send_task_list

router = Router()


@router.message(CommandStart())
async def start_cmd(message: Message, state: FSMContext, task_store: TaskStore):
    await end_form(state)
    await send_task_list(message, state, task_store)


@router.message(Command("menu"))
async def menu_cmd(message: Message, state: FSMContext, task_store: TaskStore):
    await end_form(state)
    await send_task_list(message, state, task_store)
