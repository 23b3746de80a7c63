"""HTTP API: versioned blueprint groups mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*segments: str) -> str:
    """Join URL segments into one absolute prefix (``"/api", "v1", ""`` -> ``/api/v1``)."""
    parts = [s.strip("/") for s in segments if s.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register ``(blueprint, relative_prefix)`` pairs beneath ``base_prefix``.

    An empty relative prefix mounts the blueprint at the group root (health
    checks live directly under ``/api/v1``).
    """
    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Mount every API version and the service error handler."""
    from shop.api import v1
    from shop.api.errors import register_service_error_handler

    api_base = app.config.get("API_BASE_PREFIX", "/api")
    for version in (v1,):
        register_blueprint_group(
            app,
            base_prefix=join_prefix(api_base, version.API_VERSION),
            entries=version.REGISTRY,
        )
    register_service_error_handler(app)


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
