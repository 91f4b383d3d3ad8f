"""Flask glue shared by the feature controllers.

Identity comes from the gateway in front of this service, which
authenticates the caller and forwards ``X-User-Id`` / ``X-User-Role``.
"""

from __future__ import annotations

from typing import Any, Dict

from flask import Flask, jsonify, request

from .validators import require_id
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidOperationError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from ..users.model import Actor

USER_ID_HEADER = "X-User-Id"
USER_ROLE_HEADER = "X-User-Role"

STATUS_CODES = {
    ValidationError: 400,
    InvalidOperationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    QuotaExceededError: 422,
}


def status_for(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 400


def current_actor() -> Actor:
    raw_id = (request.headers.get(USER_ID_HEADER) or "").strip()
    raw_role = (request.headers.get(USER_ROLE_HEADER) or "").strip()
    if not raw_id or not raw_role:
        raise AuthenticationError("Missing user identity")
    try:
        return Actor(user_id=int(raw_id), role=Role(raw_role))
    except ValueError:
        raise AuthenticationError("Invalid user identity")


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def int_field(data: Dict[str, Any], name: str) -> int:
    return require_id(data.get(name), name)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return jsonify({"error": e.kind, "message": str(e)}), status_for(e)
