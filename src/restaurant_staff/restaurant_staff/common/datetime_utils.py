from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator

from ..core.enums import Weekday
from ..core.exceptions import ValidationError


def parse_iso_date(value: str, *, field: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD", field=field)


def parse_iso_datetime(value: str, *, field: str = "timestamp") -> datetime:
    """Parse an ISO 8601 timestamp into naive local time.

    Offsets (`+05:30`, `Z`) are converted to the server's local zone, shift windows are naive local times.
    """
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp {value!r}, expected ISO 8601", field=field)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_hhmm(value: str, *, field: str = "time") -> time:
    """Parse HH:MM string into time."""
    try:
        return datetime.strptime(str(value).strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM", field=field)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_month(month: int, year: int) -> Iterator[date]:
    for day in range(1, days_in_month(month, year) + 1):
        yield date(year, month, day)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def count_weekly_off_days(weekly_offs: Iterable[str], month: int, year: int) -> int:
    offs = {str(w).lower() for w in weekly_offs}
    return sum(1 for d in iter_month(month, year) if Weekday.of(d).value in offs)
