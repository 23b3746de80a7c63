"""Catalog resource schemas (categories, products, brands, articles, slides).

``*CreateSchema`` classes validate POST payloads; loaded with
``partial=True`` they validate PATCH/PUT payloads, where only the keys sent
are returned. Unknown keys are rejected.
"""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .common import SeoFieldsSchema, TimestampsSchema, reference, text

_title = validate.Length(min=1, max=255)


class _TitledCreateSchema(SeoFieldsSchema):
    title = fields.String(required=True, validate=_title)
    slug = fields.String(required=True, validate=validate.Length(min=1, max=255))


class _TitledSchema(TimestampsSchema):
    title = fields.String(required=True)
    slug = fields.String(required=True)
    image = fields.String(required=True)
    description = fields.String(required=True)
    meta_title = fields.String(required=True)
    meta_keywords = fields.String(required=True)
    meta_description = fields.String(required=True)


# ------------------------------- Categories --------------------------------


class CategoryCreateSchema(_TitledCreateSchema):
    """Payload for creating a category."""

    parent_id = reference()


class CategorySchema(_TitledSchema):
    parent_id = fields.String(allow_none=True)


# -------------------------------- Products ---------------------------------


class ProductCreateSchema(_TitledCreateSchema):
    """Payload for creating a product."""

    category_id = reference()
    brand_id = reference()
    price = fields.Float(load_default=0.0, validate=validate.Range(min=0))
    old_price = fields.Float(load_default=0.0, validate=validate.Range(min=0))
    short_description = fields.String(load_default="")


class ProductSchema(_TitledSchema):
    category_id = fields.String(allow_none=True)
    brand_id = fields.String(allow_none=True)
    price = fields.Float(required=True)
    old_price = fields.Float(required=True)
    short_description = fields.String(required=True)


# ---------------------------- Brands & articles ----------------------------


class BrandCreateSchema(_TitledCreateSchema):
    """Payload for creating a brand."""


class BrandSchema(_TitledSchema):
    pass


class ArticleCategoryCreateSchema(_TitledCreateSchema):
    """Payload for creating an article category."""


class ArticleCategorySchema(_TitledSchema):
    pass


class ArticleCreateSchema(_TitledCreateSchema):
    """Payload for creating an article."""

    category_id = reference()


class ArticleSchema(_TitledSchema):
    category_id = fields.String(allow_none=True)


# --------------------------------- Slides ----------------------------------


class SlideCreateSchema(Schema):
    """Payload for creating a slide. Slides have no slug."""

    title = fields.String(required=True, validate=_title)
    link = text(512)
    image = text(512)
    sub_title = text(255)


class SlideSchema(TimestampsSchema):
    title = fields.String(required=True)
    link = fields.String(required=True)
    image = fields.String(required=True)
    sub_title = fields.String(required=True)
