"""Reusable SQLAlchemy mixins and column types shared by the catalog models (typed 2.0)."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware ``DateTime`` that always round-trips as UTC.

    Values are normalised to UTC before binding. Backends that drop the
    offset (SQLite) hand back naive values, which are re-tagged as UTC so
    callers only ever see aware datetimes.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("Naive datetime values are not accepted; pass an aware UTC value.")
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class TimestampMixin:
    """Provide ``date_created`` and ``date_updated`` columns.

    Both are written by the service layer from the request's ``now`` rather
    than by the database, so the value returned on create equals the one read
    back later.
    """

    date_created: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    date_updated: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)


class SeoMixin:
    """Image, description and meta tags shared by catalog pages."""

    image: Mapped[str] = mapped_column(String(512), nullable=False, default="", server_default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    meta_title: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=""
    )
    meta_keywords: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=""
    )
    meta_description: Mapped[str] = mapped_column(
        String(512), nullable=False, default="", server_default=""
    )


class ReprMixin:
    """Provide a concise ``__repr__`` including the class name and id."""

    def __repr__(self) -> str:
        """Return a short and useful string representation.

        :returns: Debug-friendly ``<ClassName id=...>``.
        :rtype: str
        """
        cls = self.__class__.__name__
        key = getattr(self, "id", None)
        return f"<{cls} id={key}>"


def uuid_pk(column_name: str) -> Mapped[str]:
    """Return a 36-char string primary key stored under ``column_name``."""
    return mapped_column(column_name, String(36), primary_key=True)
