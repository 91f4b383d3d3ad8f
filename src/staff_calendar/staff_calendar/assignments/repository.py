from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Assignment


class AssignmentRepository(Protocol):
    def find_overlapping(self, *, user_id: int, start: date, end: date) -> Optional[Assignment]:
        """Any assignment of the user with ``start_date <= end AND end_date >= start``."""

        raise NotImplementedError

    def find_covering_date(self, *, user_id: int, day: date) -> Optional[Assignment]:
        """Assignment active on ``day``, joined with its project's manager."""

        raise NotImplementedError

    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Assignment]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Assignment]:
        raise NotImplementedError

    def create(self, *, user_id: int, project_id: int, start: date, end: date) -> int:
        raise NotImplementedError

    def delete(self, *, assignment_id: int) -> bool:
        raise NotImplementedError
