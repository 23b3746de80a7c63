"""Commands and read models for the storefront catalog."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

# Field-level patch: only the keys present in the request, ``None`` clears a
# nullable reference.
Update = Mapping[str, Any]


# ------------------------------- Categories --------------------------------


@dataclass(frozen=True, slots=True)
class NewCategory:
    title: str
    slug: str
    parent_id: str | None = None
    image: str = ""
    description: str = ""
    meta_title: str = ""
    meta_keywords: str = ""
    meta_description: str = ""


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    id: str
    title: str
    slug: str
    parent_id: str | None
    image: str
    description: str
    meta_title: str
    meta_keywords: str
    meta_description: str
    date_created: datetime
    date_updated: datetime


# -------------------------------- Products ---------------------------------


@dataclass(frozen=True, slots=True)
class NewProduct:
    """
    Input contract for creating a product.

    :param price: Current price; stored with two decimal places.
    :param old_price: Previous price shown struck through.
    """

    title: str
    slug: str
    category_id: str | None = None
    brand_id: str | None = None
    price: float = 0.0
    old_price: float = 0.0
    image: str = ""
    short_description: str = ""
    description: str = ""
    meta_title: str = ""
    meta_keywords: str = ""
    meta_description: str = ""


@dataclass(frozen=True, slots=True)
class ProductInfo:
    id: str
    title: str
    slug: str
    category_id: str | None
    brand_id: str | None
    price: float
    old_price: float
    image: str
    short_description: str
    description: str
    meta_title: str
    meta_keywords: str
    meta_description: str
    date_created: datetime
    date_updated: datetime


# --------------------------------- Brands ----------------------------------


@dataclass(frozen=True, slots=True)
class NewBrand:
    title: str
    slug: str
    image: str = ""
    description: str = ""
    meta_title: str = ""
    meta_keywords: str = ""
    meta_description: str = ""


@dataclass(frozen=True, slots=True)
class BrandInfo:
    id: str
    title: str
    slug: str
    image: str
    description: str
    meta_title: str
    meta_keywords: str
    meta_description: str
    date_created: datetime
    date_updated: datetime


# --------------------------- Article categories ----------------------------


@dataclass(frozen=True, slots=True)
class NewArticleCategory:
    title: str
    slug: str
    image: str = ""
    description: str = ""
    meta_title: str = ""
    meta_keywords: str = ""
    meta_description: str = ""


@dataclass(frozen=True, slots=True)
class ArticleCategoryInfo:
    id: str
    title: str
    slug: str
    image: str
    description: str
    meta_title: str
    meta_keywords: str
    meta_description: str
    date_created: datetime
    date_updated: datetime


# -------------------------------- Articles ---------------------------------


@dataclass(frozen=True, slots=True)
class NewArticle:
    title: str
    slug: str
    category_id: str | None = None
    image: str = ""
    description: str = ""
    meta_title: str = ""
    meta_keywords: str = ""
    meta_description: str = ""


@dataclass(frozen=True, slots=True)
class ArticleInfo:
    id: str
    title: str
    slug: str
    category_id: str | None
    image: str
    description: str
    meta_title: str
    meta_keywords: str
    meta_description: str
    date_created: datetime
    date_updated: datetime


# --------------------------------- Slides ----------------------------------


@dataclass(frozen=True, slots=True)
class NewSlide:
    title: str
    link: str = ""
    image: str = ""
    sub_title: str = ""


@dataclass(frozen=True, slots=True)
class SlideInfo:
    id: str
    title: str
    link: str
    image: str
    sub_title: str
    date_created: datetime
    date_updated: datetime
