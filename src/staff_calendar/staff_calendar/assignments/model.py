from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import ranges_overlap


@dataclass(frozen=True)
class Assignment:
    """Date-ranged link between an employee and a project (both ends inclusive).

    ``project_name`` and ``project_manager_id`` are join data filled in by the
    repository when it has them.
    """

    assignment_id: int
    user_id: int
    project_id: int
    start_date: date
    end_date: date
    project_name: Optional[str] = None
    project_manager_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        return ranges_overlap(self.start_date, self.end_date, start, end)

    def is_managed_by(self, user_id: int) -> bool:
        return self.project_manager_id is not None and int(self.project_manager_id) == int(user_id)

    def to_dict(self) -> dict:
        return {
            "assignment_id": self.assignment_id,
            "user_id": self.user_id,
            "project_id": self.project_id,
            "project_name": self.project_name,
            "project_manager_id": self.project_manager_id,
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
        }
