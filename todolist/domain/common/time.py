from __future__ import annotations

from datetime import date, datetime
from typing import Optional

# Date.toDateString() output of the mobile app, e.g. "Wed May 01 2024"
LEGACY_DATE_FORMAT = "%a %b %d %Y"


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def to_iso(dt: datetime) -> str:
    ensure_aware(dt)
    return dt.isoformat()


def format_date(d: date) -> str:
    """Locale-independent calendar date, always YYYY-MM-DD."""
    return d.isoformat()


def parse_date(s: str) -> date:
    """
    Accepts:
      - YYYY-MM-DD       (what we write)
      - Wed May 01 2024  (legacy blobs)
    Raises ValueError otherwise.
    """
    raw = (s or "").strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    # strptime %a/%b are locale dependent; legacy data is always English
    try:
        return datetime.strptime(raw, LEGACY_DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date: {s!r}") from None


def parse_optional_date(s: Optional[str]) -> Optional[date]:
    if s is None or not str(s).strip():
        return None
    return parse_date(str(s))
