"""Blog articles and the categories grouping them."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shop.core.extensions import db

from .base import ReprMixin, SeoMixin, TimestampMixin, uuid_pk


class ArticleCategory(ReprMixin, SeoMixin, TimestampMixin, db.Model):
    """Flat grouping of articles (no nesting, unlike product categories)."""

    __tablename__ = "article_categories"

    id: Mapped[str] = uuid_pk("article_category_id")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("slug", name="uq_article_categories_slug"),
        Index("ix_article_categories_title", "title"),
    )


class Article(ReprMixin, SeoMixin, TimestampMixin, db.Model):
    __tablename__ = "articles"

    id: Mapped[str] = uuid_pk("article_id")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("article_categories.article_category_id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("slug", name="uq_articles_slug"),
        Index("ix_articles_title", "title"),
    )
