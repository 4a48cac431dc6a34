from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    StaleAuthorizationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific class first.
STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (StaleAuthorizationError, 409),
    (ValidationError, 400),
)


def status_for(error: DomainError) -> int:
    for cls, status in STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"message": str(e), "error": type(e).__name__}), status_for(e)

    @app.errorhandler(Exception)
    def handle_exception(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"message": e.description, "error": e.name}), e.code

        logger.exception("Unhandled exception")
        message = str(e) if app.config.get("DEBUG") else "Internal server error"
        return jsonify({"message": message, "error": "InternalServerError"}), 500
