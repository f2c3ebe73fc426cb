"""Domain events for the Wishlist aggregate."""

from protean.fields import Boolean, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Wishlist")
class WishlistItemSaved:
    """A product was added to the wishlist, or re-added with new preferences."""

    __version__ = 1

    wishlist_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    store_id = Identifier(required=True)
    priority = String(required=True)


@storefront.event(part_of="Wishlist")
class WishlistItemRemoved:
    __version__ = 1

    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Wishlist")
class WishlistVisibilityChanged:
    __version__ = 1

    wishlist_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    is_public = Boolean(required=True)
