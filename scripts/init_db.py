"""Create the calendar tables, and seed demo data when AUTO_SEED_DB is set.

Safe to re-run: every statement in database/schema.sql is IF NOT EXISTS.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staff_calendar.staff_calendar.database.bootstrap import apply_schema, ensure_demo_data, list_tables

SCHEMA_PATH = REPO_ROOT / "database" / "schema.sql"
REQUIRED_TABLES = ("users", "projects", "assignments", "events")


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=SCHEMA_PATH)
    tables = list_tables(db_config)
    missing = [t for t in REQUIRED_TABLES if t not in tables]
    if missing:
        print(f"ERROR: {target} is missing tables after applying schema: {', '.join(missing)}", file=sys.stderr)
        return 1

    if getattr(settings, "AUTO_SEED_DB", False):
        ensure_demo_data(db_config)
        print(f"OK: Schema ready and demo data seeded -> {target}")
    else:
        print(f"OK: Schema ready -> {target} (tables: {', '.join(tables)})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
