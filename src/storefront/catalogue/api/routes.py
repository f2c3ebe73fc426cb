"""FastAPI endpoints for public store and product pages."""

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    ProductResponse,
    PublicProduct,
    StorePageResponse,
    StoreProductsResponse,
    StoreProfile,
    StoreSummary,
)
from storefront.catalogue.product.product import Product
from storefront.catalogue.store.store import Store
from storefront.errors import NotFound

product_router = APIRouter(prefix="/products", tags=["products"])
store_router = APIRouter(prefix="/stores", tags=["stores"])


def _get_or_404(aggregate_cls, identifier: str, message: str):
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise NotFound(message) from None


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = _get_or_404(Product, product_id, "Product not found")
    if not product.web_visibility:
        raise NotFound("Product not available")

    store = _get_or_404(Store, product.store_id, "Store not found")
    return ProductResponse(product=PublicProduct.from_product(product), store=StoreSummary.from_store(store))


@store_router.get("/{slug}", response_model=StorePageResponse)
async def get_store_page(slug: str) -> StorePageResponse:
    repo = current_domain.repository_for(Store)
    store = repo.find_by_slug(slug)
    if store is None or not store.is_public:
        raise NotFound("Store not found or inactive")

    store.record_page_view()
    repo.add(store)

    products = current_domain.repository_for(Product).listed_for_store(str(store.id))
    return StorePageResponse(
        store=StoreProfile.from_store(store),
        products=[PublicProduct.from_product(product) for product in products],
    )


@store_router.get("/{store_id}/products", response_model=StoreProductsResponse)
async def list_store_products(store_id: str) -> StoreProductsResponse:
    store = _get_or_404(Store, store_id, "Store not found")
    if not store.is_active:
        raise NotFound("Store not found")

    products = current_domain.repository_for(Product).listed_for_store(str(store.id))
    return StoreProductsResponse(
        store=StoreSummary.from_store(store),
        products=[PublicProduct.from_product(product) for product in products],
        total=len(products),
    )
