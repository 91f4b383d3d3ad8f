from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles supplied by the identity context."""

    EMPLOYEE = "Employee"
    PROJECT_MANAGER = "ProjectManager"
    ADMIN = "Admin"


class EventType(str, Enum):
    REMOTE_WORK = "RemoteWork"
    PAID_LEAVE = "PaidLeave"


class EventStatus(str, Enum):
    """Approval state of a calendar event."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
