from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .common.request_logging import configure_logging, install_request_logging
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables

from .container import Container, build_container
from .assignments.controller import register as register_assignments
from .events.controller import register as register_events
from .projects.controller import register as register_projects
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), log_file=getattr(settings, "LOG_FILE", None))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_data(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            meal_voucher_daily_rate=getattr(settings, "MEAL_VOUCHER_DAILY_RATE", 8),
            meal_voucher_currency=getattr(settings, "MEAL_VOUCHER_CURRENCY", "EUR"),
        )

    register_error_handlers(app)
    install_request_logging(app)

    register_projects(app, container)
    register_assignments(app, container)
    register_events(app, container)
    register_users(app, container)

    return app
