from shop.services.cart.service import CartLine, CartService

__all__ = ["CartLine", "CartService"]
