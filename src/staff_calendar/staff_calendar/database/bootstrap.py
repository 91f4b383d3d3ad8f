"""Schema and demo-data setup for local databases.

Used by ``create_app()`` (AUTO_INIT_DB / AUTO_SEED_DB) and ``scripts/``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

_SKIPPED = (
    re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$"),
    re.compile(r"(?im)^\s*USE\b.*?;\s*$"),
    re.compile(r"(?m)^\s*--.*$"),
)


def _as_target(db_config: dict) -> DBConfig:
    return DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "staff_calendar_db")),
    )


def _connect(target: DBConfig, *, with_database: bool = True):
    params = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
    }
    if with_database:
        params["database"] = target.database
    return mysql.connector.connect(**params)


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    for pattern in _SKIPPED:
        sql = pattern.sub("", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterator[str]:
    # schema.sql keeps ';' out of string literals, so a plain split is enough.
    for chunk in sql.split(";"):
        stmt = chunk.strip()
        if stmt:
            yield stmt


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_demo_data(db_config: dict) -> None:
    """Idempotently create one user per role and a project run by the manager."""

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(username: str, email: str, role: str) -> int:
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            existing = cur.fetchone()
            if existing:
                cur.execute("UPDATE users SET email=%s, role=%s WHERE user_id=%s", (email, role, existing["user_id"]))
                return int(existing["user_id"])
            cur.execute("INSERT INTO users (username, email, role) VALUES (%s, %s, %s)", (username, email, role))
            return int(cur.lastrowid)

        upsert_user("admin", "admin@example.com", "Admin")
        pm_id = upsert_user("manager", "manager@example.com", "ProjectManager")
        upsert_user("employee", "employee@example.com", "Employee")

        cur.execute("SELECT project_id FROM projects WHERE name=%s", ("Internal Tools",))
        if not cur.fetchone():
            cur.execute(
                "INSERT INTO projects (name, description, referring_employee_id) VALUES (%s, %s, %s)",
                ("Internal Tools", "Demo project", pm_id),
            )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
