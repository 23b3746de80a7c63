"""Generic repository base for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories:
- Deterministic listing (default order key plus primary-key tiebreaker).
- Single-statement writes (one INSERT, UPDATE or DELETE per call).
- Attribute-name to column translation for models whose primary key column
  is named after the entity (``category_id``) while the attribute is ``id``.
- No business logic, no commit/rollback. Services own transactions.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused:
  - They never implement use cases or authorization.
  - They never call commit/rollback; the Unit of Work does.
* Writes are emitted as Core statements against the mapped table so each
  operation is exactly one SQL statement.
* Reads use ``populate_existing`` so rows changed by Core writes are never
  served stale from the identity map.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar, cast

from sqlalchemy import Column, Select, delete, func, insert, inspect, select, update
from sqlalchemy.orm import Session

from shop.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


# --------------------------- Pagination execution ----------------------------


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
    with_total: bool = True,
) -> tuple[list[Any], int]:
    """Execute a select with pagination and an optional total count.

    The statement's existing ``ORDER BY`` is stripped for the ``COUNT`` to avoid
    unnecessary sorting overhead.

    :param session: Active SQLAlchemy session.
    :type session: :class:`sqlalchemy.orm.Session`
    :param stmt: Base select to paginate (already filtered/sorted).
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param page: 1-based page number (will be clamped to ``>= 1``).
    :type page: int
    :param limit: Page size (will be clamped to ``>= 1``).
    :type limit: int
    :param with_total: Whether to compute the total row count.
    :type with_total: bool
    :returns: Tuple of ``(items, total)`` where ``total`` is 0 when ``with_total=False``.
    :rtype: tuple[list[Any], int]
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)

    total = 0
    if with_total:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = int(session.execute(count_stmt).scalar_one())

    offset = (page - 1) * limit
    sliced = stmt.limit(limit).offset(offset)
    items = list(session.execute(sliced).scalars().all())
    return items, total


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single table.

    Subclasses MUST define:

    * ``model``: the SQLAlchemy mapped class.

    Subclasses MAY override:

    * ``default_order``: attribute name listings are sorted by.
    * ``supports_slug``: whether the table has a unique ``slug`` column.

    This class NEVER:

    * opens/commits/rolls back transactions,
    * implements business rules or authorization.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]
    default_order: ClassVar[str] = "date_created"
    supports_slug: ClassVar[bool] = True

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``shop.core.extensions``.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    # ------------------------------ Session access ---------------------------

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Internals --------------------------------

    def _column(self, attr: str) -> Column[Any]:
        """Return the table column mapped to attribute ``attr``.

        :raises KeyError: If the model has no such column attribute.
        """
        return cast(Column[Any], inspect(self.model).columns[attr])

    def _pk_column(self) -> Column[Any]:
        return self._column("id")

    def _to_columns(self, values: Mapping[str, Any]) -> dict[Column[Any], Any]:
        """Translate attribute-keyed ``values`` into a column-keyed mapping."""
        return {self._column(k): v for k, v in values.items()}

    def _select(self) -> Select[Any]:
        return select(self.model).execution_options(populate_existing=True)

    # --------------------------------- Reads ---------------------------------

    def get(self, entity_id: str) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        stmt = self._select().where(self._pk_column() == entity_id)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def get_by_slug(self, slug: str) -> E | None:
        """Retrieve a single entity by its unique slug, or ``None``.

        :raises RuntimeError: If the table has no slug column.
        """
        if not self.supports_slug:
            raise RuntimeError(f"{self.model.__name__} has no slug column.")
        stmt = self._select().where(self._column("slug") == slug)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def list(self) -> list[E]:
        """List every row ordered by ``default_order`` then primary key."""
        stmt = self._select().order_by(
            self._column(self.default_order).asc(), self._pk_column().asc()
        )
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

    # --------------------------------- Writes --------------------------------

    def insert(self, values: Mapping[str, Any]) -> None:
        """Insert one row from attribute-keyed ``values`` (one statement)."""
        stmt = insert(self.model.__table__).values(self._to_columns(values))  # type: ignore[attr-defined]
        self.session.execute(stmt)

    def update(self, entity_id: str, values: Mapping[str, Any]) -> int:
        """Overwrite the given columns of one row; return the affected row count."""
        stmt = (
            update(self.model.__table__)  # type: ignore[attr-defined]
            .where(self._pk_column() == entity_id)
            .values(self._to_columns(values))
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def delete(self, entity_id: str) -> int:
        """Delete one row by primary key; deleting a missing row is a no-op."""
        stmt = delete(self.model.__table__).where(self._pk_column() == entity_id)  # type: ignore[attr-defined]
        return int(self.session.execute(stmt).rowcount or 0)
