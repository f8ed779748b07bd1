"""
Cancel words ("cancel", "stop") abort the add form, except while the task
text itself is being typed, where they are ordinary task text.
"""
from __future__ import annotations

import asyncio

from todolist.ui.telegram.handlers.cancel import CANCEL_WORD_STATES
from todolist.ui.telegram.states.tasks import AddTaskFlow


def _matches(raw_state):
    return bool(asyncio.run(CANCEL_WORD_STATES(None, raw_state=raw_state)))


def test_cancel_words_ignored_while_typing_task_text():
    assert _matches(AddTaskFlow.text.state) is False


def test_cancel_words_apply_in_other_form_steps():
    assert _matches(AddTaskFlow.category.state) is True
    assert _matches(AddTaskFlow.due_date.state) is True


def test_cancel_words_apply_outside_the_form():
    assert _matches(None) is True
