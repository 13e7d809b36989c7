from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError

logger = logging.getLogger(__name__)

CHECKIN_PASS_KEY = "checkin_pass"


def error_response(*, status_code: int, code: str, message: str):
    return jsonify({"error": {"code": code, "message": message}}), status_code


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_user_id() -> str:
    return str(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Silakan login terlebih dahulu")
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Silakan login terlebih dahulu")
            if session.get("role") != role.value:
                raise AuthorizationError("Anda tidak memiliki akses")
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
member_required = role_required(Role.MEMBER)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("domain_error", extra={"code": e.code, "path": request.path}, exc_info=e)
        return error_response(status_code=e.status_code, code=e.code, message=str(e))

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return error_response(status_code=e.code or 500, code="http_error", message=e.description or e.name)

        logger.exception("unhandled_error", extra={"path": request.path})
        message = f"Kesalahan sistem: {e}" if app.config.get("DEBUG") else "Kesalahan sistem"
        return error_response(status_code=500, code="internal_error", message=message)
