"""Resolve a client-side cart into current product data."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from shop.services._shared.base import BaseService
from shop.services.catalog.dto import ProductInfo
from shop.services.catalog.service import ProductService


@dataclass(frozen=True, slots=True)
class CartLine:
    product: ProductInfo
    qty: int


class CartService(BaseService):
    """
    Expand ``{id, qty}`` cart items into product read models.

    The cart itself lives on the client; this service only prices it against
    the catalog at request time.
    """

    def __init__(self, products: ProductService | None = None) -> None:
        self.products = products or ProductService()

    def resolve(self, trace_id: str, items: Iterable[Mapping[str, Any]]) -> list[CartLine]:
        """
        Return one line per item, in request order.

        :raises InvalidIDError: When an item id is not a UUID.
        :raises NotFoundError: When an item names an unknown product.
        """
        items = list(items)
        self.log_operation(trace_id, "cart", "resolve", lines=len(items))
        return [
            CartLine(product=self.products.query_by_id(trace_id, item["id"]), qty=int(item["qty"]))
            for item in items
        ]
