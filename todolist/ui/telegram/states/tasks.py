from aiogram.fsm.state import StatesGroup, State


class AddTaskFlow(StatesGroup):
    text = State()
    category = State()
    due_date = State()
