"""Persistence-only repositories for the storefront catalog tables."""

from __future__ import annotations

from shop.models import Article, ArticleCategory, Brand, Category, Product, Slide
from shop.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    model = Category
    default_order = "title"


class ProductRepository(BaseRepository[Product]):
    model = Product
    default_order = "date_created"


class BrandRepository(BaseRepository[Brand]):
    model = Brand
    default_order = "title"


class ArticleCategoryRepository(BaseRepository[ArticleCategory]):
    model = ArticleCategory
    default_order = "title"


class ArticleRepository(BaseRepository[Article]):
    model = Article
    default_order = "title"


class SlideRepository(BaseRepository[Slide]):
    """Slides are listed in creation order and have no slug."""

    model = Slide
    default_order = "date_created"
    supports_slug = False
