"""Sellable products."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shop.core.extensions import db

from .base import ReprMixin, SeoMixin, TimestampMixin, uuid_pk

# Two decimal places, surfaced to Python as float
Money = Numeric(15, 2, asdecimal=False)


class Product(ReprMixin, SeoMixin, TimestampMixin, db.Model):
    """A product listed under an optional category and brand.

    Fields
    ------
    price : float
        Current price, ``0.0`` when unset.
    old_price : float
        Previous price shown struck through, ``0.0`` when unset.
    short_description : str
        Teaser text used in listings.
    """

    __tablename__ = "products"

    id: Mapped[str] = uuid_pk("product_id")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("categories.category_id", ondelete="SET NULL"), nullable=True
    )
    brand_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("brands.brand_id", ondelete="SET NULL"), nullable=True
    )
    price: Mapped[float] = mapped_column(Money, nullable=False, default=0.0, server_default="0")
    old_price: Mapped[float] = mapped_column(Money, nullable=False, default=0.0, server_default="0")
    short_description: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default=""
    )

    __table_args__ = (
        UniqueConstraint("slug", name="uq_products_slug"),
        Index("ix_products_date_created", "date_created"),
        Index("ix_products_category_id", "category_id"),
    )
