"""Wishlist aggregate: products a customer is watching, across stores.

Each entry keeps a snapshot of the product as it was when saved, including
price and stock, so the list can show what changed since.
"""

import secrets
import string
from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.shared.clock import utcnow
from storefront.shared.snapshots import CustomerSnapshot, StoreSnapshot
from storefront.wishlist.events import WishlistItemRemoved, WishlistItemSaved, WishlistVisibilityChanged

SHARE_CODE_ALPHABET = string.ascii_uppercase + string.digits
SHARE_CODE_LENGTH = 8
DEFAULT_NAME = "My Wishlist"

# Sentinel for distinguishing "not provided" from None in partial updates
UNSET = object()


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def generate_share_code() -> str:
    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(SHARE_CODE_LENGTH))


@storefront.value_object(part_of="Wishlist")
class WishlistProductSnapshot:
    product_name = String(required=True, max_length=200)
    sku = String(max_length=100)
    image = String(max_length=500)
    category = String(max_length=100)
    brand = String(max_length=100)
    description = Text()
    unit_of_measure = String(max_length=50)
    selling_price = Float(min_value=0.0)
    quantity_in_stock = Integer(min_value=0)
    status = String(max_length=20)
    web_visibility = Boolean(default=False)

    @property
    def in_stock(self) -> bool:
        return bool((self.quantity_in_stock or 0) > 0 and self.status == "Active" and self.web_visibility)


@storefront.entity(part_of="Wishlist")
class WishlistItem:
    product_id = Identifier(required=True)
    store_id = Identifier(required=True)
    store_owner_id = Identifier()
    product_snapshot = ValueObject(WishlistProductSnapshot)
    store_snapshot = ValueObject(StoreSnapshot)
    priority = String(choices=Priority, default=Priority.MEDIUM.value)
    notes = String(max_length=500, default="")
    price_drop_alert = Boolean(default=True)
    back_in_stock_alert = Boolean(default=True)
    target_price = Float(min_value=0.0)
    added_at = DateTime()

    @property
    def notifications(self) -> dict:
        return {
            "price_drop_alert": self.price_drop_alert,
            "back_in_stock_alert": self.back_in_stock_alert,
            "target_price": self.target_price,
        }


def _check_priority(priority: str) -> str:
    try:
        return Priority(priority).value
    except ValueError:
        raise ValidationError({"priority": ["Priority must be one of low, medium, high"]}) from None


@storefront.aggregate
class Wishlist:
    customer_id = Identifier(required=True, unique=True)
    customer_snapshot = ValueObject(CustomerSnapshot)
    name = String(max_length=100, default=DEFAULT_NAME)
    description = String(max_length=500, default="")
    is_public = Boolean(default=False)
    share_code = String(max_length=SHARE_CODE_LENGTH)
    view_count = Integer(default=0, min_value=0)
    items = HasMany(WishlistItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id, customer_snapshot=None, name=DEFAULT_NAME, now=None):
        now = now or utcnow()
        return cls(
            customer_id=customer_id,
            customer_snapshot=customer_snapshot,
            name=name,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total_value(self) -> float:
        return round(sum((item.product_snapshot.selling_price or 0.0) for item in self.items), 2)

    @property
    def store_count(self) -> int:
        return len({str(item.store_id) for item in self.items})

    def in_stock_items(self) -> list[WishlistItem]:
        return [item for item in self.items if item.product_snapshot.in_stock]

    def out_of_stock_items(self) -> list[WishlistItem]:
        return [item for item in self.items if not item.product_snapshot.in_stock]

    def items_with_priority(self, priority: str) -> list[WishlistItem]:
        return [item for item in self.items if item.priority == priority]

    def price_drop_alerts(self) -> list[WishlistItem]:
        return [item for item in self.items if item.price_drop_alert]

    def back_in_stock_alerts(self) -> list[WishlistItem]:
        return [item for item in self.items if item.back_in_stock_alert and not item.product_snapshot.in_stock]

    def find_item(self, product_id) -> WishlistItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def _require_item(self, product_id) -> WishlistItem:
        item = self.find_item(product_id)
        if item is None:
            raise NotFound("Item not found in wishlist")
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(
        self,
        product_id,
        store_id,
        store_owner_id,
        product_snapshot: WishlistProductSnapshot,
        store_snapshot: StoreSnapshot,
        priority: str = Priority.MEDIUM.value,
        notes: str = "",
        notifications: dict | None = None,
        now: datetime | None = None,
    ) -> WishlistItem:
        """Save a product. Saving it again replaces priority and notes,
        merges the notification preferences and moves it to the top.
        """
        priority = _check_priority(priority or Priority.MEDIUM.value)
        now = now or utcnow()
        item = self.find_item(product_id)

        if item is None:
            item = WishlistItem(
                product_id=product_id,
                store_id=store_id,
                store_owner_id=store_owner_id,
                product_snapshot=product_snapshot,
                store_snapshot=store_snapshot,
                priority=priority,
                notes=notes or "",
                added_at=now,
            )
            self._apply_notifications(item, notifications or {})
            self.add_items(item)
        else:
            item.priority = priority
            item.notes = notes or ""
            item.added_at = now
            self._apply_notifications(item, notifications or {})

        self.updated_at = now
        self.raise_(
            WishlistItemSaved(
                wishlist_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                store_id=str(store_id),
                priority=priority,
            )
        )
        return item

    @staticmethod
    def _apply_notifications(item: WishlistItem, notifications: dict) -> None:
        if notifications.get("price_drop_alert") is not None:
            item.price_drop_alert = bool(notifications["price_drop_alert"])
        if notifications.get("back_in_stock_alert") is not None:
            item.back_in_stock_alert = bool(notifications["back_in_stock_alert"])
        if "target_price" in notifications:
            item.target_price = notifications["target_price"]

    def update_item_priority(self, product_id, priority: str) -> None:
        self._require_item(product_id).priority = _check_priority(priority)
        self.updated_at = utcnow()

    def update_item_notes(self, product_id, notes: str | None) -> None:
        self._require_item(product_id).notes = notes or ""
        self.updated_at = utcnow()

    def update_notification_settings(self, product_id, notifications: dict) -> None:
        self._apply_notifications(self._require_item(product_id), notifications)
        self.updated_at = utcnow()

    def remove_item(self, product_id) -> bool:
        item = self.find_item(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = utcnow()
        self.raise_(WishlistItemRemoved(wishlist_id=str(self.id), product_id=str(product_id)))
        return True

    # -------------------------------------------------------------------
    # Sharing
    # -------------------------------------------------------------------
    def make_public(self) -> None:
        if not self.share_code:
            self.share_code = generate_share_code()
        if not self.is_public:
            self.is_public = True
            self._visibility_changed()

    def make_private(self) -> None:
        self.share_code = None
        if self.is_public:
            self.is_public = False
            self._visibility_changed()

    def set_visibility(self, is_public: bool) -> None:
        if is_public:
            self.make_public()
        else:
            self.make_private()

    def _visibility_changed(self) -> None:
        self.updated_at = utcnow()
        self.raise_(
            WishlistVisibilityChanged(
                wishlist_id=str(self.id),
                customer_id=str(self.customer_id),
                is_public=self.is_public,
            )
        )

    def update_details(self, name=UNSET, description=UNSET) -> None:
        if name is not UNSET:
            cleaned = (name or "").strip()
            if not cleaned:
                raise ValidationError({"name": ["Wishlist name cannot be empty"]})
            self.name = cleaned
        if description is not UNSET:
            self.description = (description or "").strip()
        self.updated_at = utcnow()

    def record_view(self) -> None:
        self.view_count = (self.view_count or 0) + 1


@storefront.repository(part_of=Wishlist)
class WishlistRepository:
    def find_for_customer(self, customer_id: str) -> Wishlist | None:
        results = self._dao.query.filter(customer_id=customer_id).all().items
        return results[0] if results else None

    def find_shared(self, share_code: str) -> Wishlist | None:
        """A public wishlist by its share code."""
        results = self._dao.query.filter(share_code=share_code.strip().upper(), is_public=True).all().items
        return results[0] if results else None
