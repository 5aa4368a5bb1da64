"""Cart API package."""

from techmarket.cart.api.routes import cart_router

__all__ = ["cart_router"]
