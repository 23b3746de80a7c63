"""Cart resolution schemas.

The request body of ``POST /cart`` is a bare JSON array of items, loaded with
``CartItemSchema(many=True)``.
"""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .catalog import ProductSchema


class CartItemSchema(Schema):
    id = fields.String(required=True)
    qty = fields.Integer(required=True, validate=validate.Range(min=1))


class CartLineSchema(Schema):
    product = fields.Nested(ProductSchema, required=True)
    qty = fields.Integer(required=True)
