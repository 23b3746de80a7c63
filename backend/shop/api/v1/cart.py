"""Cart endpoint: price a client-side cart against the catalog."""

from __future__ import annotations

from flask import Blueprint, request

from shop.api.deps import json_response, request_values, timing
from shop.schemas import CartItemSchema, CartLineSchema
from shop.services import CartService

bp = Blueprint("cart", __name__)

_items_schema = CartItemSchema(many=True)
_lines_schema = CartLineSchema(many=True)
_service = CartService()


@bp.post("")
@timing
def resolve_cart():
    """Expand ``[{id, qty}, ...]`` into ``[{product, qty}, ...]``."""

    items = _items_schema.load(request.get_json(silent=True) or [])
    values = request_values()
    return json_response(_lines_schema.dump(_service.resolve(values.trace_id, items)))
