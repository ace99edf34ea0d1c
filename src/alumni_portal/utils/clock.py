"""Timestamp helpers. Every stored timestamp is timezone-aware UTC."""

from datetime import datetime
from typing import Optional

import pytz


def now_utc() -> datetime:
    return datetime.now(pytz.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to UTC, treating naive values as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)
