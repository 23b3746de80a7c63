"""Convenience exports for application schemas."""

from __future__ import annotations

from .cart import CartItemSchema, CartLineSchema
from .catalog import (
    ArticleCategoryCreateSchema,
    ArticleCategorySchema,
    ArticleCreateSchema,
    ArticleSchema,
    BrandCreateSchema,
    BrandSchema,
    CategoryCreateSchema,
    CategorySchema,
    ProductCreateSchema,
    ProductSchema,
    SlideCreateSchema,
    SlideSchema,
)
from .common import SeoFieldsSchema, TimestampsSchema, validate_uuid
from .user import TokenSchema, UserCreateSchema, UserSchema, UserUpdateSchema

__all__ = [
    "ArticleCategoryCreateSchema",
    "ArticleCategorySchema",
    "ArticleCreateSchema",
    "ArticleSchema",
    "BrandCreateSchema",
    "BrandSchema",
    "CartItemSchema",
    "CartLineSchema",
    "CategoryCreateSchema",
    "CategorySchema",
    "ProductCreateSchema",
    "ProductSchema",
    "SeoFieldsSchema",
    "SlideCreateSchema",
    "SlideSchema",
    "TimestampsSchema",
    "TokenSchema",
    "UserCreateSchema",
    "UserSchema",
    "UserUpdateSchema",
    "validate_uuid",
]
