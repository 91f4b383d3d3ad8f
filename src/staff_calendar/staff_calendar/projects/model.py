from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Project:
    project_id: int
    name: str
    referring_employee_id: int
    description: Optional[str] = None
    archived: bool = False
    created_at: Optional[datetime] = None

    def is_managed_by(self, user_id: int) -> bool:
        return int(self.referring_employee_id) == int(user_id)

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "name": self.name,
            "description": self.description,
            "referring_employee_id": self.referring_employee_id,
            "archived": self.archived,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M") if self.created_at else None,
        }
