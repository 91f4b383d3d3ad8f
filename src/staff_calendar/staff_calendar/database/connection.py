from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: Outside a transaction every repository call gets a short-lived
    connection. Inside ``transaction()`` all calls share one connection.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._bound: ContextVar[Any] = ContextVar(f"staff_calendar_tx_{id(self)}", default=None)

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    @property
    def current(self):
        """Connection bound by an enclosing ``transaction()``, if any."""
        return self._bound.get()

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        existing = self._bound.get()
        if existing is not None:
            # Nested: join the outer transaction.
            yield existing
            return

        conn = self.connect()
        token = self._bound.set(conn)
        try:
            conn.start_transaction(isolation_level="READ COMMITTED")
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._bound.reset(token)
            conn.close()
