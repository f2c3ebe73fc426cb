"""Catalogue API package."""

from storefront.catalogue.api.routes import product_router, store_router

__all__ = ["product_router", "store_router"]
