"""Snapshots copied into carts, wishlists and orders.

A snapshot freezes what the customer saw at the time (names, images,
contact details) so later catalogue edits do not rewrite history.
"""

from protean.fields import String

from storefront.domain import storefront


@storefront.value_object
class ProductSnapshot:
    product_name: String(required=True, max_length=200)
    sku: String(max_length=100)
    category: String(max_length=100)
    image: String(max_length=500)
    unit_of_measure: String(max_length=50)


@storefront.value_object
class StoreSnapshot:
    store_name: String(required=True, max_length=150)
    store_slug: String(max_length=150)
    store_phone: String(max_length=30)
    store_email: String(max_length=254)
    logo: String(max_length=500)
    primary_color: String(max_length=20)


@storefront.value_object
class CustomerSnapshot:
    first_name: String(max_length=50)
    last_name: String(max_length=50)
    email: String(max_length=254)
    phone: String(max_length=30)
