from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Assignment
from .repository import AssignmentRepository

_SELECT = """
    SELECT a.assignment_id, a.user_id, a.project_id, a.start_date, a.end_date, a.created_at,
           p.name AS project_name, p.referring_employee_id AS project_manager_id
    FROM assignments a
    JOIN projects p ON p.project_id = a.project_id
"""


def _to_assignment(r: dict) -> Assignment:
    return Assignment(
        assignment_id=int(r["assignment_id"]),
        user_id=int(r["user_id"]),
        project_id=int(r["project_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        project_name=r.get("project_name"),
        project_manager_id=(int(r["project_manager_id"]) if r.get("project_manager_id") is not None else None),
        created_at=r.get("created_at"),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_overlapping(self, *, user_id: int, start: date, end: date) -> Optional[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE a.user_id=%s AND a.start_date <= %s AND a.end_date >= %s
                ORDER BY a.start_date ASC
                LIMIT 1
                """,
                (int(user_id), end, start),
            )
            r = fetchone(cur)
            return _to_assignment(r) if r else None

    def find_covering_date(self, *, user_id: int, day: date) -> Optional[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE a.user_id=%s AND %s BETWEEN a.start_date AND a.end_date
                LIMIT 1
                """,
                (int(user_id), day),
            )
            r = fetchone(cur)
            return _to_assignment(r) if r else None

    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.assignment_id=%s", (int(assignment_id),))
            r = fetchone(cur)
            return _to_assignment(r) if r else None

    def list_all(self) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY a.start_date ASC, a.user_id ASC")
            return [_to_assignment(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.user_id=%s ORDER BY a.start_date ASC", (int(user_id),))
            return [_to_assignment(r) for r in fetchall(cur)]

    def create(self, *, user_id: int, project_id: int, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO assignments(user_id, project_id, start_date, end_date)
                VALUES(%s,%s,%s,%s)
                """,
                (int(user_id), int(project_id), start, end),
            )
            return int(cur.lastrowid)

    def delete(self, *, assignment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM assignments WHERE assignment_id=%s", (int(assignment_id),))
            return cur.rowcount > 0
