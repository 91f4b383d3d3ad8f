from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EventStatus, EventType
from .model import Event


class EventRepository(Protocol):
    def find_by_user_and_date(self, *, user_id: int, day: date) -> Optional[Event]:
        raise NotImplementedError

    def count_by_user_type_and_range(self, *, user_id: int, event_type: EventType, start: date, end: date) -> int:
        """Count events of one type for the user dated within [start, end]."""

        raise NotImplementedError

    def get_by_id(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Event]:
        """Every event, ordered by date ascending."""

        raise NotImplementedError

    def list_for_user_in_range(self, *, user_id: int, start: date, end: date) -> Sequence[Event]:
        raise NotImplementedError

    def list_by_type_status_in_range(
        self,
        *,
        event_type: EventType,
        status: EventStatus,
        start: date,
        end: date,
    ) -> Sequence[Event]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        day: date,
        event_type: EventType,
        status: EventStatus,
        description: Optional[str],
    ) -> int:
        """Insert; raises ConflictError if the user already has an event that day."""

        raise NotImplementedError

    def update_status(self, *, event_id: int, status: EventStatus, expected: EventStatus) -> bool:
        """Set the status only if it still equals ``expected``."""

        raise NotImplementedError

    def delete(self, *, event_id: int) -> bool:
        raise NotImplementedError
