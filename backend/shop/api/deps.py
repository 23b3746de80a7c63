"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from marshmallow import Schema

from shop.auth import AuthenticationError, Claims, Role, verify_request
from shop.core.errors import Forbidden, Unauthorized
from shop.core.logger import ensure_request_id

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True, slots=True)
class RequestValues:
    """Per-request values handed to services: trace id and request time."""

    trace_id: str
    now: datetime


def request_values() -> RequestValues:
    """Return the trace id and a UTC timestamp for the current request."""

    return RequestValues(trace_id=ensure_request_id(), now=datetime.now(UTC))


def load_json(schema: Schema, *, partial: bool = False) -> Any:
    """Validate the JSON body with ``schema`` (raises ``ValidationError`` -> 422)."""

    return schema.load(request.get_json(silent=True) or {}, partial=partial)


def authenticate_request() -> Claims:
    """Verify the ``Authorization: Bearer`` token and return its claims.

    :raises Unauthorized: On any token rejection.
    """

    try:
        return verify_request()
    except AuthenticationError as exc:
        current_app.logger.info("auth.rejected", extra={"endpoint": request.endpoint})
        raise Unauthorized(str(exc)) from exc


def require_auth(func: F) -> F:
    """Ensure the request carries a valid token; pass ``claims=`` to the view."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        kwargs["claims"] = authenticate_request()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(*roles: Role | str) -> Callable[[F], F]:
    """Ensure the verified claims hold at least one of ``roles``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            claims = authenticate_request()
            if not claims.authorized(*roles):
                raise Forbidden("you are not authorized for that action")
            kwargs["claims"] = claims
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def no_content() -> Response:
    """Return an empty ``204 No Content`` response."""

    return Response(status=204)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
