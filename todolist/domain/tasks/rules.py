from __future__ import annotations

from typing import Optional

from todolist.domain.common.errors import ValidationError
from todolist.domain.tasks.models import DEFAULT_CATEGORY


def validate_text(text: Optional[str]) -> str:
    if not text or not text.strip():
        raise ValidationError("Task text is required.")
    # stored as entered, only the emptiness check trims
    return text


def normalize_category(category: Optional[str]) -> str:
    if category is None:
        return DEFAULT_CATEGORY
    cleaned = category.strip()
    return cleaned or DEFAULT_CATEGORY
