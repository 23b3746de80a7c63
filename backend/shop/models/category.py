"""Product category tree."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shop.core.extensions import db

from .base import ReprMixin, SeoMixin, TimestampMixin, uuid_pk


class Category(ReprMixin, SeoMixin, TimestampMixin, db.Model):
    """A catalog category, optionally nested under a parent category.

    Deleting a parent leaves its children in place with ``parent_id`` nulled.
    """

    __tablename__ = "categories"

    id: Mapped[str] = uuid_pk("category_id")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("categories.category_id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("slug", name="uq_categories_slug"),
        Index("ix_categories_title", "title"),
    )
