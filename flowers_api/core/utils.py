"""
Utility helpers shared across repositories/services.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable
import time
import uuid


def new_uid() -> str:
    """Random identifier for draft rows (items/bunches)."""
    return str(uuid.uuid4())


def timestamp_id(existing: Iterable[str] = ()) -> str:
    """
    Millisecond timestamp identifier, bumped until it does not collide with
    any of the ``existing`` identifiers.
    """
    taken = {str(value) for value in existing}
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def parse_calendar_date(value: Any) -> date | None:
    """
    Parse a stored date value (ISO date/datetime string, date or datetime).
    Empty values return None; malformed strings raise ValueError.
    """
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    if len(text) == 10:
        return date.fromisoformat(text)
    if text[-1] in "Zz":
        # UTC designator written by JavaScript Date.toISOString()
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date()


def to_iso_date(value: Any) -> str:
    """Render a date-like value as ``YYYY-MM-DD``; empty values become ''."""
    parsed = parse_calendar_date(value)
    return parsed.isoformat() if parsed else ""


def as_number(value: Any) -> float:
    """Numeric view of a form value; anything non-numeric counts as 0."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    # NaN
    if number != number:
        return 0.0
    return number
