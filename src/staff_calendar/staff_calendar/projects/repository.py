from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Project]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Project]:
        """Non-archived projects, newest first."""

        raise NotImplementedError

    def create(self, *, name: str, description: Optional[str], referring_employee_id: int) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        project_id: int,
        name: str,
        description: Optional[str],
        referring_employee_id: int,
    ) -> bool:
        raise NotImplementedError

    def set_archived(self, *, project_id: int, archived: bool) -> bool:
        raise NotImplementedError
