"""RFC 7807 problem responses for every error the API can return.

Bodies are ``application/problem+json`` objects carrying a stable ``code`` and
the ``request_id`` of the failing request. 4xx responses log at WARNING; 5xx
responses log at ERROR, with the traceback when an exception caused them.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from shop.core.logger import ensure_request_id

log = logging.getLogger(__name__)

STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    422: "validation_error",
    429: "too_many_requests",
    500: "internal_server_error",
    503: "service_unavailable",
}


def as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build a problem details mapping for the current request.

    :param status: HTTP status code.
    :param code: Stable machine-readable code (``"invalid_id"``).
    :param message: Client-safe summary, rendered as ``detail``.
    :param details: Optional structured payload (validation messages).
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def problem_response(problem: dict[str, Any]) -> Response:
    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    if problem["status"] == HTTPStatus.UNAUTHORIZED:
        resp.headers["WWW-Authenticate"] = "Bearer"
    return resp


def render_problem(
    status: int,
    code: str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
    cause: str = "error",
    exc_info: bool = False,
) -> tuple[Response, int]:
    """Log and render one problem; ``cause`` names the error family in the log line."""
    problem = as_problem(status=status, code=code, message=message, details=details)
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "%s: code=%s status=%s detail=%s request_id=%s",
        cause,
        code,
        status,
        message,
        problem["request_id"],
        exc_info=exc_info,
    )
    return problem_response(problem), int(status)


class APIError(Exception):
    """
    Error raised by views (or translated from services) with a fixed status.

    Parameters
    ----------
    message : str
        Client-safe description, rendered as the problem ``detail``.
    status_code : int, optional
        HTTP status code. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier, snake_case.
    details : dict[str, Any] | None, optional
        Structured payload rendered under ``details``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return as_problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details or None,
        )


def api_error_response(err: APIError) -> tuple[Response, int]:
    """Render ``err``; server-side statuses keep the traceback of the active exception."""
    return render_problem(
        err.status_code,
        err.code,
        err.message,
        details=err.details or None,
        cause=type(err).__name__,
        exc_info=err.status_code >= 500,
    )


class BadRequest(APIError):
    def __init__(self, message: str = "Bad request", code: str = "bad_request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code=code)


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    """409 for unique or reference constraint violations."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class Unauthorized(APIError):
    """401: missing, malformed or rejected credentials."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class Forbidden(APIError):
    """403: authenticated, but the roles do not allow the action."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN, code="forbidden")


def init_app(app: Flask) -> None:
    """Register problem+json handlers for API, HTTP, validation and database errors."""

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return api_error_response(err)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = STATUS_CODES.get(status, "error")
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or code.replace("_", " ").capitalize()).strip()
        return render_problem(status, code, message, cause="HTTPException")

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return render_problem(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            details={"errors": err.messages},
            cause="ValidationError",
        )

    # Database errors escaping a service; never leak driver text
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        return render_problem(
            HTTPStatus.CONFLICT,
            "conflict",
            "Resource conflict",
            cause="IntegrityError",
            exc_info=True,
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return render_problem(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
            cause="OperationalError",
            exc_info=True,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        return render_problem(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "Unexpected error",
            cause="Unhandled exception",
            exc_info=True,
        )
