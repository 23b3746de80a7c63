"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .cart import bp as cart_bp  # noqa: E402
from .catalog import (  # noqa: E402
    article_categories_bp,
    articles_bp,
    brands_bp,
    categories_bp,
    products_bp,
    slides_bp,
)
from .health import bp as health_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1
    (users_bp, "/users"),
    (categories_bp, "/categories"),
    (products_bp, "/products"),
    (brands_bp, "/brands"),
    (article_categories_bp, "/article-categories"),
    (articles_bp, "/articles"),
    (slides_bp, "/slides"),
    (cart_bp, "/cart"),
]
