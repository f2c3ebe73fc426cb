"""Demo catalogue data for local development."""

import uuid

import structlog
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.catalogue.store.store import Branding, Store, StoreAddress

logger = structlog.get_logger(__name__)

DEMO_PRODUCTS = [
    {"product_name": "Ankara Tote Bag", "category": "Bags", "selling_price": 8500.0, "quantity_in_stock": 25},
    {"product_name": "Shea Butter 250g", "category": "Beauty", "selling_price": 3200.0, "quantity_in_stock": 60},
    {"product_name": "Zobo Concentrate 1L", "category": "Drinks", "selling_price": 2500.0, "quantity_in_stock": 4},
    {"product_name": "Adire Scarf", "category": "Fashion", "selling_price": 6000.0, "quantity_in_stock": 0},
]


def seed_demo_store(slug: str = "demo-store") -> tuple[Store, list[Product]]:
    """Create a public store with a few products. Re-running reuses the store."""
    store_repo = current_domain.repository_for(Store)
    product_repo = current_domain.repository_for(Product)

    store = store_repo.find_by_slug(slug)
    if store is not None:
        logger.info("Demo store already present", store_slug=slug)
        return store, product_repo.listed_for_store(str(store.id))

    owner_id = str(uuid.uuid4())
    store = Store(
        owner_id=owner_id,
        store_name="Demo Store",
        store_slug=slug,
        store_description="Sample store for trying out the storefront",
        store_phone="08031234567",
        store_email="hello@demo-store.example",
        address=StoreAddress(street="12 Allen Avenue", city="Ikeja", state="Lagos"),
        branding=Branding(),
        website_enabled=True,
    )
    store_repo.add(store)

    products = []
    for index, fields in enumerate(DEMO_PRODUCTS, start=1):
        product = Product(
            store_id=str(store.id),
            owner_id=owner_id,
            sku=f"DEMO-{index:03d}",
            cost_price=round(fields["selling_price"] * 0.6, 2),
            reorder_level=5,
            web_visibility=True,
            **fields,
        )
        product_repo.add(product)
        products.append(product)

    logger.info("Demo store created", store_slug=slug, products=len(products))
    return store, products
