from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import EventStatus, EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_integrity_errors
from .model import Event
from .repository import EventRepository

_COLUMNS = "event_id, user_id, event_date, event_type, status, description, created_at, updated_at"


def _to_event(r: dict) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        user_id=int(r["user_id"]),
        event_date=r["event_date"],
        event_type=EventType(r["event_type"]),
        status=EventStatus(r["status"]),
        description=r.get("description"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_user_and_date(self, *, user_id: int, day: date) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM events WHERE user_id=%s AND event_date=%s",
                (int(user_id), day),
            )
            r = fetchone(cur)
            return _to_event(r) if r else None

    def count_by_user_type_and_range(self, *, user_id: int, event_type: EventType, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM events
                WHERE user_id=%s AND event_type=%s AND event_date BETWEEN %s AND %s
                """,
                (int(user_id), event_type.value, start, end),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE event_id=%s", (int(event_id),))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_all(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events ORDER BY event_date ASC, event_id ASC")
            return [_to_event(r) for r in fetchall(cur)]

    def list_for_user_in_range(self, *, user_id: int, start: date, end: date) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM events
                WHERE user_id=%s AND event_date BETWEEN %s AND %s
                ORDER BY event_date ASC
                """,
                (int(user_id), start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_by_type_status_in_range(
        self,
        *,
        event_type: EventType,
        status: EventStatus,
        start: date,
        end: date,
    ) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM events
                WHERE event_type=%s AND status=%s AND event_date BETWEEN %s AND %s
                ORDER BY event_date ASC, user_id ASC
                """,
                (event_type.value, status.value, start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        day: date,
        event_type: EventType,
        status: EventStatus,
        description: Optional[str],
    ) -> int:
        with translate_integrity_errors("An event already exists for this user on the selected date"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO events(user_id, event_date, event_type, status, description)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), day, event_type.value, status.value, description),
                )
                return int(cur.lastrowid)

    def update_status(self, *, event_id: int, status: EventStatus, expected: EventStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET status=%s
                WHERE event_id=%s AND status=%s
                """,
                (status.value, int(event_id), expected.value),
            )
            return cur.rowcount > 0

    def delete(self, *, event_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE event_id=%s", (int(event_id),))
            return cur.rowcount > 0
