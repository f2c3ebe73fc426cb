"""Pydantic request/response schemas for the wishlist API."""

from datetime import datetime

from pydantic import Field

from storefront.web.envelope import CamelModel, Envelope

# --- Request Schemas ---


class NotificationSettings(CamelModel):
    price_drop_alert: bool | None = None
    back_in_stock_alert: bool | None = None
    target_price: float | None = Field(None, ge=0)


class AddToWishlistRequest(CamelModel):
    product_id: str | None = None
    priority: str = "medium"
    notes: str | None = Field(None, max_length=500)
    notifications: NotificationSettings | None = None


class UpdateWishlistItemRequest(CamelModel):
    priority: str | None = None
    notes: str | None = Field(None, max_length=500)
    notifications: NotificationSettings | None = None


class UpdateWishlistRequest(CamelModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    is_public: bool | None = None


# --- Response Schemas ---


class WishlistProductSchema(CamelModel):
    product_name: str
    sku: str | None = None
    image: str | None = None
    category: str | None = None
    brand: str | None = None
    description: str | None = None
    unit_of_measure: str | None = None
    selling_price: float | None = None
    quantity_in_stock: int | None = None
    status: str | None = None
    web_visibility: bool | None = None
    in_stock: bool


class WishlistStoreSchema(CamelModel):
    store_name: str
    store_slug: str | None = None
    store_phone: str | None = None
    store_email: str | None = None
    logo: str | None = None
    primary_color: str | None = None


class NotificationSchema(CamelModel):
    price_drop_alert: bool
    back_in_stock_alert: bool
    target_price: float | None = None


class WishlistItemSchema(CamelModel):
    id: str
    product_id: str
    store_id: str
    priority: str
    notes: str | None = None
    notifications: NotificationSchema
    added_at: datetime | None = None
    product_snapshot: WishlistProductSchema | None = None
    store_snapshot: WishlistStoreSchema | None = None

    @classmethod
    def from_item(cls, item) -> "WishlistItemSchema":
        product = item.product_snapshot
        return cls(
            id=str(item.id),
            product_id=str(item.product_id),
            store_id=str(item.store_id),
            priority=item.priority,
            notes=item.notes,
            notifications=NotificationSchema(**item.notifications),
            added_at=item.added_at,
            product_snapshot=(
                WishlistProductSchema(**product.to_dict(), in_stock=product.in_stock) if product else None
            ),
            store_snapshot=(
                WishlistStoreSchema.model_validate(item.store_snapshot.to_dict()) if item.store_snapshot else None
            ),
        )


class WishlistStatsSchema(CamelModel):
    total_items: int
    total_value: float
    store_count: int
    in_stock_items: int
    out_of_stock_items: int
    high_priority_items: int
    price_drop_alerts: int
    back_in_stock_alerts: int

    @classmethod
    def from_wishlist(cls, wishlist) -> "WishlistStatsSchema":
        return cls(
            total_items=wishlist.item_count,
            total_value=wishlist.total_value,
            store_count=wishlist.store_count,
            in_stock_items=len(wishlist.in_stock_items()),
            out_of_stock_items=len(wishlist.out_of_stock_items()),
            high_priority_items=len(wishlist.items_with_priority("high")),
            price_drop_alerts=len(wishlist.price_drop_alerts()),
            back_in_stock_alerts=len(wishlist.back_in_stock_alerts()),
        )


class WishlistSchema(CamelModel):
    id: str
    customer_id: str
    name: str
    description: str | None = None
    is_public: bool
    share_code: str | None = None
    view_count: int
    items: list[WishlistItemSchema]
    stats: WishlistStatsSchema
    updated_at: datetime | None = None

    @classmethod
    def from_wishlist(cls, wishlist) -> "WishlistSchema":
        items = sorted(wishlist.items, key=lambda item: item.added_at, reverse=True)
        return cls(
            id=str(wishlist.id),
            customer_id=str(wishlist.customer_id),
            name=wishlist.name,
            description=wishlist.description,
            is_public=wishlist.is_public,
            share_code=wishlist.share_code,
            view_count=wishlist.view_count,
            items=[WishlistItemSchema.from_item(item) for item in items],
            stats=WishlistStatsSchema.from_wishlist(wishlist),
            updated_at=wishlist.updated_at,
        )


class SharedWishlistSchema(CamelModel):
    """A public wishlist as visitors see it: owner's first name only."""

    name: str
    description: str | None = None
    owner_name: str | None = None
    view_count: int
    items: list[WishlistItemSchema]
    stats: WishlistStatsSchema

    @classmethod
    def from_wishlist(cls, wishlist) -> "SharedWishlistSchema":
        owner = wishlist.customer_snapshot
        items = sorted(wishlist.items, key=lambda item: item.added_at, reverse=True)
        return cls(
            name=wishlist.name,
            description=wishlist.description,
            owner_name=owner.first_name if owner else None,
            view_count=wishlist.view_count,
            items=[WishlistItemSchema.from_item(item) for item in items],
            stats=WishlistStatsSchema.from_wishlist(wishlist),
        )


class WishlistResponse(Envelope):
    wishlist: WishlistSchema


class SharedWishlistResponse(Envelope):
    wishlist: SharedWishlistSchema
