"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import Any

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Engine, MetaData, event

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()


def _engine_options(app: Flask) -> dict[str, Any]:
    """Return engine options derived from the configured database URI.

    PostgreSQL connections receive a server-side ``statement_timeout`` so a
    storage call never blocks past ``DB_STATEMENT_TIMEOUT_MS``.
    """
    options: dict[str, Any] = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {})
    uri = str(app.config.get("SQLALCHEMY_DATABASE_URI", ""))
    timeout_ms = int(app.config.get("DB_STATEMENT_TIMEOUT_MS") or 0)
    if uri.startswith("postgresql"):
        options.setdefault("pool_pre_ping", True)
        if timeout_ms > 0:
            connect_args = dict(options.get("connect_args") or {})
            connect_args.setdefault("options", f"-c statement_timeout={timeout_ms}")
            options["connect_args"] = connect_args
    return options


def _configure_sqlite(engine: Engine) -> None:
    """Enforce foreign keys and real SAVEPOINT support on pysqlite engines.

    pysqlite defers ``BEGIN`` until the first DML statement, which breaks
    nested transactions; the driver's own transaction handling is disabled and
    SQLAlchemy emits ``BEGIN`` itself.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # pragma: no cover - driver glue
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):  # pragma: no cover - driver glue
        conn.exec_driver_sql("BEGIN")


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations and the JWT manager.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`shop.models` package to ensure SQLAlchemy metadata is ready for
        migrations.
    """
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = _engine_options(app)
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from shop import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    with app.app_context():
        if db.engine.dialect.name == "sqlite":
            _configure_sqlite(db.engine)
