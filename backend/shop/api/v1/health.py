"""Health, readiness and liveness endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from shop.api.deps import json_response, timing
from shop.core.extensions import db

bp = Blueprint("health", __name__)


def _database_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db.session.rollback()
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Return application and database health information."""

    version = current_app.config.get("APP_VERSION", "dev")
    commit = current_app.config.get("APP_COMMIT", "unknown")
    payload = {"status": "ok", "db": _database_status(), "version": version, "commit": commit}
    return json_response(payload)


@bp.get("/readiness")
@timing
def readiness():
    """Ready to serve traffic only when the database answers."""

    db_status = _database_status()
    if db_status != "ok":
        return json_response({"status": "db not ready", "db": db_status}, status=500)
    return json_response({"status": "ok", "db": db_status})


@bp.get("/liveness")
def liveness():
    """Report that the process is up, plus build metadata."""

    return json_response(
        {
            "status": "up",
            "version": current_app.config.get("APP_VERSION", "dev"),
            "commit": current_app.config.get("APP_COMMIT", "unknown"),
        }
    )
