"""Shared payload coercion utilities"""

import math
from datetime import datetime, timedelta
from typing import Any, Optional


def is_blank(value: Any) -> bool:
    """True for values a form would treat as "not filled in" (None, "", 0 is not blank)"""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def parse_number(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """
    Coerce a number or numeric string into a float.

    Strings are accepted with surrounding whitespace ("5000000", " 12.5 ").
    Anything unparsable (including NaN/inf) yields ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def parse_int(value: Any) -> Optional[int]:
    """Coerce an int or integer-like string; returns None when it is not one"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def parse_local_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp as naive local wall-clock time.

    An offset suffix ("Z", "+07:00") is dropped, not applied: the stored value
    is exactly the date and time the caller wrote.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1]
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def local_day_range(date_string: str) -> Optional[tuple[datetime, datetime]]:
    """
    Build the inclusive [00:00:00.000, 23:59:59.999] range of a YYYY-MM-DD day.

    The day is assembled from its year/month/day components, so the range is
    the same regardless of the server process timezone.
    """
    parts = date_string.strip().split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(part) for part in parts)
        start = datetime(year, month, day, 0, 0, 0, 0)
    except ValueError:
        return None
    end = start + timedelta(days=1) - timedelta(milliseconds=1)
    return start, end


def start_of_today(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)
