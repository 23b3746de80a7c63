"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Service commits
release the SAVEPOINT; the outer transaction is rolled back after the test.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy.orm import scoped_session, sessionmaker

from shop.auth.keys import KeyStore, generate_private_key
from shop.core.config import TestingConfig
from shop.core.extensions import db as _db  # Flask-SQLAlchemy instance
from shop.factory import create_app  # application factory under test
from tests.helpers.auth import KID, bearer, make_claims


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Signing keys are injected through :func:`create_app`.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    CORS_ORIGINS = "*"
    LOG_LEVEL = "INFO"


@pytest.fixture(scope="session")
def key_store():
    """One generated RSA key registered under :data:`KID`."""
    return KeyStore({KID: generate_private_key()})


@pytest.fixture(scope="session")
def app(key_store):
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig, key_store=key_store, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a per-test transaction.

    Notes
    -----
    The session joins the outer transaction in ``create_savepoint`` mode, so
    ``commit()`` and ``rollback()`` issued by units of work only affect a
    SAVEPOINT and everything is discarded when the test ends.
    """
    outer = connection.begin()
    factory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(factory)

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture()
def client(app, session):
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Identities ----------------------------------------------------------------


@pytest.fixture()
def admin_claims():
    return make_claims(roles=["ADMIN", "USER"])


@pytest.fixture()
def user_claims():
    return make_claims(roles=["USER"])


@pytest.fixture()
def admin_headers(app, admin_claims):
    return bearer(app, admin_claims)


@pytest.fixture()
def user_headers(app, user_claims):
    return bearer(app, user_claims)


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper to the transactional session fixture.

    Tests that do not touch the database (pure unit tests) skip the wiring.
    """
    if "session" not in request.fixturenames:
        yield
        return
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
