"""JSON logging and request correlation.

A request id is taken from ``X-Request-ID`` or ``X-Correlation-ID`` when the
client sends a usable one, or generated otherwise. The id is stamped on every
log record, echoed back in ``X-Request-ID`` and used as the trace id services
prefix their log lines with. Each request ends with one ``shop.access`` line.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")
MAX_REQUEST_ID_LENGTH = 128

# ``extra={...}`` attributes copied into the JSON payload
EXTRA_KEYS = (
    "trace_id",
    "entity",
    "operation",
    "arguments",
    "endpoint",
    "method",
    "path",
    "status",
    "elapsed_ms",
)

access_log = logging.getLogger("shop.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, timestamped with the record's creation time."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on records (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _inbound_request_id() -> str | None:
    # Client-supplied ids end up in logs; only short printable values are kept
    for header in CORRELATION_HEADERS:
        value = request.headers.get(header, "").strip()
        if value and len(value) <= MAX_REQUEST_ID_LENGTH and value.isprintable():
            return value
    return None


def ensure_request_id() -> str:
    """Return the id of the current request, or a fresh UUID outside one."""

    if not has_request_context():
        return str(uuid4())
    if "request_id" not in g:
        g.request_id = _inbound_request_id() or str(uuid4())
    return g.request_id  # type: ignore[no-any-return]


def configure_logging(level: str | int = "INFO", *, quiet: tuple[str, ...] = ("werkzeug",)) -> None:
    """Send JSON records to stdout from the root logger.

    Loggers named in ``quiet`` are raised to WARNING so the dev server does not
    duplicate the access lines.
    """

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def init_app(app: Flask) -> None:
    """Assign request ids, echo them, and log one access line per request."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _start_request() -> None:
        # ``g`` lives on the app context, which can outlive a single request
        g.pop("request_id", None)
        g.request_started = time.perf_counter()
        ensure_request_id()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = g.pop("request_started", None)
        access_log.info(
            "%s %s %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                "endpoint": request.endpoint,
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "elapsed_ms": None
                if started is None
                else round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response


__all__ = [
    "JSONFormatter",
    "RequestIdFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
