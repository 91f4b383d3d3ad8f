from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Tuple, Union

from ..core.exceptions import ValidationError

DateLike = Union[date, datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def normalize_date(value: DateLike, field_name: str = "date") -> date:
    """Reduce a date, datetime or ISO string to a plain day.

    Strings are either ``YYYY-MM-DD`` or a full ISO timestamp
    (``2024-05-01T09:30:00Z``), whose time part is dropped. Anything else,
    trailing text included, is rejected.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        v = value.strip()
        try:
            return parse_iso_date(v)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ValidationError(f"Invalid {field_name} provided")


def today() -> date:
    """Current local date.

    Services take an explicit ``today`` where the result depends on it;
    this is only the fallback.
    """
    return date.today()


def week_bounds(day: date) -> Tuple[date, date]:
    """Monday and Sunday of the ISO week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every day from start to end, both included."""
    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Inclusive range overlap."""
    return a_start <= b_end and a_end >= b_start
