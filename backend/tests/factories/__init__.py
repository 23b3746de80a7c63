"""Factory Boy helpers wired to the project's SQLAlchemy session."""

from __future__ import annotations

from datetime import UTC, datetime

import factory


class SQLAlchemySession:
    """Store the session provided by the pytest fixture layer."""

    _session = None

    @classmethod
    def set(cls, session):
        """Register the SQLAlchemy session used to persist factory objects."""
        cls._session = session

    @classmethod
    def get(cls):
        """Return the registered SQLAlchemy session.

        Raises
        ------
        RuntimeError
            If factories are used without the ``session`` fixture wiring.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


def utcnow() -> datetime:
    return datetime.now(UTC)


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Base class configuring Factory Boy for the transactional session.

    Rows are committed (releasing the test SAVEPOINT) so a later rollback by a
    failing unit of work does not discard them.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "commit"

    id = factory.Faker("uuid4")
    date_created = factory.LazyFunction(utcnow)
    date_updated = factory.LazyAttribute(lambda o: o.date_created)
