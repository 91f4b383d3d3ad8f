from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import EventStatus, EventType


@dataclass(frozen=True)
class Event:
    event_id: int
    user_id: int
    event_date: date
    event_type: EventType
    status: EventStatus
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def with_status(self, status: EventStatus) -> "Event":
        return replace(self, status=status)

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "user_id": self.user_id,
            "date": self.event_date.strftime("%Y-%m-%d"),
            "event_type": self.event_type.value,
            "status": self.status.value,
            "description": self.description,
        }
