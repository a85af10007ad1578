"""Safe date parsing and calendar-day arithmetic.

Every date-bearing field in hrcore passes through safe_parse_datetime; a
value that cannot be parsed becomes None and the owning record is skipped
by whichever computation needs it. Nothing in here raises on bad input.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Iterator, Optional

SATURDAY = 5


def safe_parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetimes, dates, ISO-8601 strings and epoch milliseconds."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def safe_parse_date(value: Any) -> Optional[date]:
    parsed = safe_parse_datetime(value)
    return parsed.date() if parsed is not None else None


def iter_days(start: date, end: date) -> Iterator[date]:
    """Inclusive calendar days from start to end; nothing when end < start."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= SATURDAY


def business_days(start: date, end: date) -> int:
    """Mon-Fri count over [start, end]. Holidays are not excluded."""
    return sum(1 for day in iter_days(start, end) if not is_weekend(day))


def calendar_days(start: date, end: date) -> int:
    if end < start:
        return 0
    return (end - start).days + 1


def month_key(day: date) -> str:
    """Payment-record month key, e.g. "Jan 2025"."""
    return day.strftime("%b %Y")
