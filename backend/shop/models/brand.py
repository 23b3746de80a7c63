"""Product brands."""

from __future__ import annotations

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shop.core.extensions import db

from .base import ReprMixin, SeoMixin, TimestampMixin, uuid_pk


class Brand(ReprMixin, SeoMixin, TimestampMixin, db.Model):
    __tablename__ = "brands"

    id: Mapped[str] = uuid_pk("brand_id")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("slug", name="uq_brands_slug"),
        Index("ix_brands_title", "title"),
    )
