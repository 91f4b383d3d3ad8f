from datetime import date, datetime

import pytest

from src.staff_calendar.staff_calendar.common.datetime_utils import (
    iter_days,
    month_bounds,
    normalize_date,
    ranges_overlap,
    today,
    week_bounds,
)
from src.staff_calendar.staff_calendar.core.exceptions import ValidationError


def test_week_bounds_monday_to_sunday():
    assert week_bounds(date(2024, 5, 8)) == (date(2024, 5, 6), date(2024, 5, 12))
    assert week_bounds(date(2024, 5, 6)) == (date(2024, 5, 6), date(2024, 5, 12))
    assert week_bounds(date(2024, 5, 12)) == (date(2024, 5, 6), date(2024, 5, 12))
    # Week spanning a year boundary
    assert week_bounds(date(2025, 1, 1)) == (date(2024, 12, 30), date(2025, 1, 5))


def test_month_bounds():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))


def test_iter_days_inclusive():
    assert list(iter_days(date(2024, 5, 30), date(2024, 6, 1))) == [
        date(2024, 5, 30),
        date(2024, 5, 31),
        date(2024, 6, 1),
    ]
    assert list(iter_days(date(2024, 6, 2), date(2024, 6, 1))) == []


def test_normalize_date_accepts_common_shapes():
    assert normalize_date("2024-05-06") == date(2024, 5, 6)
    assert normalize_date("2024-05-06T23:10:00Z") == date(2024, 5, 6)
    assert normalize_date(datetime(2024, 5, 6, 8, 0)) == date(2024, 5, 6)
    assert normalize_date(date(2024, 5, 6)) == date(2024, 5, 6)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "06/05/2024",
        "2024-13-01",
        None,
        20240506,
        "2024-05-01garbage",
        "2024-05-01 not a date",
        "2024-05-01xx:yy",
    ],
)
def test_normalize_date_rejects_garbage(value):
    with pytest.raises(ValidationError):
        normalize_date(value)


def test_ranges_overlap_is_inclusive():
    assert ranges_overlap(date(2024, 5, 1), date(2024, 5, 10), date(2024, 5, 10), date(2024, 5, 12))
    assert not ranges_overlap(date(2024, 5, 1), date(2024, 5, 10), date(2024, 5, 11), date(2024, 5, 12))


def test_today_is_the_local_date():
    assert today() == date.today()
    assert not isinstance(today(), datetime)
