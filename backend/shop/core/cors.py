"""CORS configuration for the public catalog API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Enable CORS on every route under ``API_BASE_PREFIX``.

    ``CORS_ORIGINS`` is a comma-separated allow list. A blank value or ``"*"``
    opens the catalog to any storefront origin: the literal ``*`` is sent and
    credentials are not supported. ``Authorization`` and the correlation headers are always
    allowed and the request id is exposed to browser clients.
    """
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        send_wildcard=wildcard,
        allow_headers=["Authorization", "Content-Type", "X-Request-ID", "X-Correlation-ID"],
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
