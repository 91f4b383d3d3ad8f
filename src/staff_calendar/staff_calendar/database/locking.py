from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, Protocol

from .connection import DatabaseConnection


class EmployeeLock(Protocol):
    """Serialises check-then-write sequences touching one employee's calendar."""

    def hold(self, user_id: int) -> ContextManager[None]:
        raise NotImplementedError


class MySQLEmployeeLock(EmployeeLock):
    """Row lock on the employee inside a transaction shared by the repositories."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        with self._conn_factory.transaction() as conn:
            cur = conn.cursor()
            try:
                cur.execute("SELECT user_id FROM users WHERE user_id=%s FOR UPDATE", (int(user_id),))
                cur.fetchall()
            finally:
                cur.close()
            yield


class LocalEmployeeLock(EmployeeLock):
    """In-process lock per employee, for single-process stores."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.RLock] = {}

    def _lock_for(self, user_id: int) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[user_id] = lock
            return lock

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        with self._lock_for(int(user_id)):
            yield
