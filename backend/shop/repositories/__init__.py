"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from shop.repositories.base import BaseRepository, paginate_select
from shop.repositories.catalog import (
    ArticleCategoryRepository,
    ArticleRepository,
    BrandRepository,
    CategoryRepository,
    ProductRepository,
    SlideRepository,
)
from shop.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "paginate_select",
    # Domain
    "ArticleCategoryRepository",
    "ArticleRepository",
    "BrandRepository",
    "CategoryRepository",
    "ProductRepository",
    "SlideRepository",
    "UserRepository",
]
