"""Wishlist API package."""

from storefront.wishlist.api.routes import router

__all__ = ["router"]
