"""Shopping Cart aggregate: one per customer, spanning any number of stores.

The cart records what the customer intends to buy at the price seen when
each item was added. It never touches stock; availability is checked when
items go in and again at checkout.
"""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.shared.clock import utcnow
from storefront.shared.snapshots import ProductSnapshot, StoreSnapshot


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    store_id = Identifier(required=True)
    product_snapshot = ValueObject(ProductSnapshot)
    store_snapshot = ValueObject(StoreSnapshot)
    notes = String(max_length=200)
    added_at = DateTime()

    @property
    def subtotal(self) -> float:
        return round(self.price * self.quantity, 2)


@storefront.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id, now=None):
        now = now or utcnow()
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def subtotal(self) -> float:
        return round(sum(item.subtotal for item in self.items), 2)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def store_count(self) -> int:
        return len({str(item.store_id) for item in self.items})

    def items_by_store(self) -> dict[str, list[CartItem]]:
        """Lines grouped by store, in the order each store first appears."""
        groups: dict[str, list[CartItem]] = {}
        for item in self.items:
            groups.setdefault(str(item.store_id), []).append(item)
        return groups

    def find_item(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(
        self,
        product_id,
        quantity: int,
        price: float,
        store_id,
        product_snapshot: ProductSnapshot,
        store_snapshot: StoreSnapshot,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> CartItem:
        """Add a product, or increase the quantity of its existing line.

        The price and snapshots are refreshed to what the caller saw now.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = now or utcnow()
        existing = self.find_item(product_id)

        if existing:
            existing.quantity += quantity
            existing.price = price
            existing.product_snapshot = product_snapshot
            existing.store_snapshot = store_snapshot
            if notes is not None:
                existing.notes = notes
            item = existing
        else:
            item = CartItem(
                product_id=product_id,
                quantity=quantity,
                price=price,
                store_id=store_id,
                product_snapshot=product_snapshot,
                store_snapshot=store_snapshot,
                notes=notes,
                added_at=now,
            )
            self.add_items(item)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item

    def update_item_quantity(self, product_id, quantity: int, now: datetime | None = None) -> None:
        """Set a line's quantity. Zero removes the line."""
        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        item = self.find_item(product_id)
        if item is None:
            raise NotFound("Item not found in cart")

        if quantity == 0:
            self.remove_item(product_id, now=now)
            return

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = now or utcnow()
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id, now: datetime | None = None) -> bool:
        """Drop a product's line. Returns False when it was not in the cart."""
        item = self.find_item(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = now or utcnow()
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))
        return True

    def clear(self, now: datetime | None = None) -> None:
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)

        self.updated_at = now or utcnow()
        self.raise_(CartCleared(cart_id=str(self.id), customer_id=str(self.customer_id), items_removed=removed))


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_for_customer(self, customer_id: str) -> ShoppingCart | None:
        results = self._dao.query.filter(customer_id=customer_id).all().items
        return results[0] if results else None
