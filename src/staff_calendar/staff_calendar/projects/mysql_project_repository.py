from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_integrity_errors
from .model import Project
from .repository import ProjectRepository

_COLUMNS = "project_id, name, description, referring_employee_id, archived, created_at"


def _to_project(r: dict) -> Project:
    return Project(
        project_id=int(r["project_id"]),
        name=r["name"],
        description=r.get("description"),
        referring_employee_id=int(r["referring_employee_id"]),
        archived=bool(r.get("archived", False)),
        created_at=r.get("created_at"),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE project_id=%s", (int(project_id),))
            r = fetchone(cur)
            return _to_project(r) if r else None

    def get_by_name(self, name: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE name=%s", (name,))
            r = fetchone(cur)
            return _to_project(r) if r else None

    def list_active(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE archived=0 ORDER BY created_at DESC, project_id DESC")
            return [_to_project(r) for r in fetchall(cur)]

    def create(self, *, name: str, description: Optional[str], referring_employee_id: int) -> int:
        with translate_integrity_errors("A project with this name already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO projects(name, description, referring_employee_id)
                    VALUES(%s,%s,%s)
                    """,
                    (name, description, int(referring_employee_id)),
                )
                return int(cur.lastrowid)

    def update(
        self,
        *,
        project_id: int,
        name: str,
        description: Optional[str],
        referring_employee_id: int,
    ) -> bool:
        with translate_integrity_errors("A project with this name already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE projects
                    SET name=%s, description=%s, referring_employee_id=%s
                    WHERE project_id=%s
                    """,
                    (name, description, int(referring_employee_id), int(project_id)),
                )
                # rowcount is 0 when nothing changed; fall back to existence.
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM projects WHERE project_id=%s", (int(project_id),))
                return fetchone(cur) is not None

    def set_archived(self, *, project_id: int, archived: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE projects SET archived=%s WHERE project_id=%s",
                (1 if archived else 0, int(project_id)),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM projects WHERE project_id=%s", (int(project_id),))
            return fetchone(cur) is not None
