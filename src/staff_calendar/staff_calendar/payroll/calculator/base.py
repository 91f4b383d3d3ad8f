from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List

from ...events.model import Event


class WorkedDayCalculator(ABC):
    """Calculator interface (Strategy Pattern for meal vouchers)."""

    @abstractmethod
    def worked_days(self, *, start: date, end: date, events: Iterable[Event]) -> List[date]:
        raise NotImplementedError
