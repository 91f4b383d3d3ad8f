from __future__ import annotations

from datetime import date
from typing import Iterable, List, Set

from .base import WorkedDayCalculator
from ...common.datetime_utils import is_weekend, iter_days
from ...core.enums import EventStatus, EventType
from ...events.model import Event

_OFF_SITE_TYPES = (EventType.REMOTE_WORK, EventType.PAID_LEAVE)


class StandardWorkedDayCalculator(WorkedDayCalculator):
    """Standard rule: weekdays, minus days taken as remote work or paid leave.

    Declined events never reduce the count; pending ones do.
    """

    def excluded_dates(self, events: Iterable[Event]) -> Set[date]:
        return {
            e.event_date
            for e in events
            if e.event_type in _OFF_SITE_TYPES and e.status != EventStatus.DECLINED
        }

    def worked_days(self, *, start: date, end: date, events: Iterable[Event]) -> List[date]:
        excluded = self.excluded_dates(events)
        return [d for d in iter_days(start, end) if not is_weekend(d) and d not in excluded]
