from datetime import date

from src.staff_calendar.staff_calendar.core.enums import EventStatus, EventType
from src.staff_calendar.staff_calendar.events.model import Event
from src.staff_calendar.staff_calendar.payroll.calculator.standard_calculator import StandardWorkedDayCalculator


def _event(event_id, day, event_type, status):
    return Event(event_id=event_id, user_id=4, event_date=day, event_type=event_type, status=status)


def test_standard_calculator_counts_weekdays_minus_off_site_days():
    events = [
        _event(1, date(2024, 4, 2), EventType.REMOTE_WORK, EventStatus.ACCEPTED),
        _event(2, date(2024, 4, 3), EventType.PAID_LEAVE, EventStatus.PENDING),
        _event(3, date(2024, 4, 10), EventType.PAID_LEAVE, EventStatus.DECLINED),
        _event(4, date(2024, 4, 6), EventType.PAID_LEAVE, EventStatus.ACCEPTED),  # Saturday
    ]

    calc = StandardWorkedDayCalculator()
    days = calc.worked_days(start=date(2024, 4, 1), end=date(2024, 4, 30), events=events)

    assert len(days) == 22 - 2
    assert date(2024, 4, 10) in days
    assert date(2024, 4, 2) not in days
    assert date(2024, 4, 6) not in days
