"""Shared helpers for the JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.enums import ErrorKind, Role
from ..core.exceptions import AuthorizationError, DomainError, InvalidIdentifierError, ValidationError, unauthorized

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.BUSINESS_RULE_VIOLATION: 422,
}


def ok(data: Any, status: int = 200):
    if hasattr(data, "to_dict"):
        data = data.to_dict()
    return jsonify({"success": True, "data": data}), status


def error_response(error: DomainError):
    return jsonify({"success": False, "error": error.to_dict()}), STATUS_BY_KIND.get(error.kind, 400)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return error_response(error)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        if isinstance(error, HTTPException):
            return jsonify({"success": False, "error": {"type": error.name, "message": error.description}}), error.code
        logger.exception("unhandled error on %s %s", request.method, request.path)
        message = str(error) if app.config.get("DEBUG") else "Internal server error"
        return jsonify({"success": False, "error": {"type": "INTERNAL_ERROR", "message": message}}), 500


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def optional_json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def require_field(payload: dict, name: str) -> Any:
    value = payload.get(name)
    if value is None:
        raise ValidationError(f"Missing field: {name}")
    return value


def parse_id(factory, value: Optional[str], field: str):
    try:
        return factory(value)
    except InvalidIdentifierError:
        raise ValidationError(f"Invalid {field}")


def token_required(container):
    """Decorator factory: resolve the bearer token into ``g.claims``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            header = request.headers.get("Authorization", "")
            if not header.startswith("Bearer "):
                raise unauthorized("Missing bearer token")
            g.claims = container.auth_service.verify_token(header[len("Bearer "):].strip())
            return view(*args, **kwargs)

        return wrapper

    return decorator


def require_role(*roles: Role) -> None:
    if g.claims.role not in roles:
        raise AuthorizationError("You do not have permission for this action")
