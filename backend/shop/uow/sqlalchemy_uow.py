"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

import logging

from sqlalchemy import event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shop.core.extensions import db
from shop.repositories import (
    ArticleCategoryRepository,
    ArticleRepository,
    BrandRepository,
    CategoryRepository,
    ProductRepository,
    SlideRepository,
    UserRepository,
)
from shop.uow.base import UnitOfWork

log = logging.getLogger(__name__)

# Connection.info flag set while a read-only unit of work is active
READONLY_FLAG = "shop.readonly"

# Statements rejected by the write-guard
_WRITE_PREFIXES = (
    "insert",
    "update",
    "delete",
    "merge",
    "alter",
    "drop",
    "truncate",
    "create",
    "replace",
)


def _block_writes(conn, cursor, statement, parameters, context, executemany):
    if not conn.info.get(READONLY_FLAG):
        return
    first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
    if first_token.startswith(_WRITE_PREFIXES):
        raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}")


def install_write_guard(engine: Engine) -> None:
    """Register the read-only write-guard on ``engine`` (idempotent)."""
    if not event.contains(engine, "before_cursor_execute", _block_writes):
        event.listen(engine, "before_cursor_execute", _block_writes)


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session.

    ``session`` is the request-scoped :class:`Session` itself (``db.session()``),
    not the ``scoped_session`` registry, so transaction state can be inspected.
    """

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.categories = CategoryRepository(session=self.session)
        self.products = ProductRepository(session=self.session)
        self.brands = BrandRepository(session=self.session)
        self.article_categories = ArticleCategoryRepository(session=self.session)
        self.articles = ArticleRepository(session=self.session)
        self.slides = SlideRepository(session=self.session)
        self.users = UserRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent transaction.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session())

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Applies ``SET TRANSACTION READ ONLY`` on PostgreSQL when it starts the
      transaction itself.
    - Flags its connection so the engine-level write-guard rejects DML and
      DDL (covers ORM flushes and Core statements alike).
    - Rolls back on exit when it owns the transaction; when a transaction is
      already running it attaches to it and leaves it untouched.
    - Disallows ``commit()``.
    """

    def __init__(self, *, enforce_db_readonly: bool = True) -> None:
        super().__init__(session=db.session())
        self.enforce_db_readonly = enforce_db_readonly
        self._owned = False
        self._conn: Connection | None = None
        self._previous_flag = False

    # ----------------------------- Context Manager -----------------------------

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._owned = not self.session.in_transaction()
        self._conn = self.session.connection()

        if self._owned and self.enforce_db_readonly and self._conn.dialect.name == "postgresql":
            try:
                self.session.execute(text("SET TRANSACTION READ ONLY"))
            except SQLAlchemyError as exc:
                log.warning("SET TRANSACTION READ ONLY failed (%s); relying on guards.", exc)

        install_write_guard(self._conn.engine)
        self._previous_flag = bool(self._conn.info.get(READONLY_FLAG))
        self._conn.info[READONLY_FLAG] = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._conn is not None:
                self._conn.info[READONLY_FLAG] = self._previous_flag
            if self._owned:
                self.session.rollback()
        finally:
            self._conn = None
            self._owned = False

    # ----------------------------- Public API ---------------------------------

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()
