from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import Flask, Response, request

REQUEST_LOGGER = "staff_calendar.requests"

_INITIALIZED = False


def configure_logging(level: str = "INFO", *, log_file: Optional[str] = None) -> None:
    """Configure application-wide logging: console, plus a request log file.

    The request log only receives the ``staff_calendar.requests`` logger.
    """

    global _INITIALIZED
    if _INITIALIZED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(str(path), maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(fmt="%(asctime)s - %(message)s"))
        logging.getLogger(REQUEST_LOGGER).addHandler(file_handler)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured. Request log: %s", log_file or "-")


def _dump(value) -> str:
    return json.dumps(value or {}, default=str, ensure_ascii=False)


def install_request_logging(app: Flask) -> None:
    """One line per handled request: ip, method, path, params, query, body, status."""

    log = logging.getLogger(REQUEST_LOGGER)

    @app.after_request
    def _log_request(response: Response) -> Response:
        body = request.get_json(silent=True) if request.is_json else None
        log.info(
            "%s - %s %s - params: %s - query: %s - body: %s - %s",
            request.remote_addr or "unknown",
            request.method,
            request.full_path.rstrip("?"),
            _dump(request.view_args),
            _dump(request.args.to_dict()),
            _dump(body),
            response.status_code,
        )
        return response
