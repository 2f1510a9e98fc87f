"""JSON response helpers shared by the API controllers.

Every response carries ``success`` and ``message``. Domain errors map onto
status codes here; anything else is a 500 exposing the raw error message.
"""
from __future__ import annotations

import logging
from typing import Any

from flask import jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    SheetNotAccessibleError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def ok(message: str, status: int = 200, **payload: Any):
    return jsonify({"success": True, "message": message, **payload}), status


def fail(message: str, status: int, **payload: Any):
    return jsonify({"success": False, "message": message, **payload}), status


def domain_error(e: DomainError, message: str = "Server error"):
    if isinstance(e, ValidationError):
        return fail(str(e), 400, **e.details)
    if isinstance(e, AuthenticationError):
        return fail(str(e), 401)
    if isinstance(e, SheetNotAccessibleError):
        return fail(str(e), 403, error=e.reason)
    if isinstance(e, NotFoundError):
        return fail(str(e), 404)
    if isinstance(e, ConflictError):
        if e.existing is not None:
            return fail(str(e), 409, data=e.existing)
        return fail(str(e), 409)
    return server_error(message, e)


def server_error(message: str, e: Exception):
    logger.exception("%s: %s", message, e)
    return fail(message, 500, error=str(e))
