"""Order aggregate: a checked-out cart, possibly spanning several stores.

Line items are frozen copies of what was bought (price, product and store
details at checkout) and never change afterwards except for their
fulfilment status. The order status follows an explicit transition graph,
and who may make a change depends on their role.

    pending ──> confirmed ──> processing ──> shipped ──> delivered ──> refunded
       │            │  └──────────────────────┘
       └────────────┴──> cancelled ──> refunded
"""

import secrets
from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.errors import InvalidStatusTransition, StatusChangeNotPermitted
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged
from storefront.shared.clock import utcnow
from storefront.shared.snapshots import CustomerSnapshot, ProductSnapshot, StoreSnapshot


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class ItemStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class Actor(Enum):
    CUSTOMER = "customer"
    SELLER = "seller"
    ADMIN = "admin"
    SYSTEM = "system"


class PaymentMethod(Enum):
    CASH_TO_VENDOR = "cash_to_vendor"
    BANK_TRANSFER = "bank_transfer"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: {OrderStatus.REFUNDED},
    OrderStatus.REFUNDED: set(),  # Terminal
}

# Target statuses each actor may set; None means any allowed transition
_ACTOR_TARGETS = {
    Actor.CUSTOMER: {OrderStatus.CANCELLED, OrderStatus.DELIVERED},
    Actor.SELLER: None,
    Actor.ADMIN: None,
    Actor.SYSTEM: None,
}

OPEN_STATUSES = (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PROCESSING)


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in _VALID_TRANSITIONS[current]


def actor_may_set(actor: Actor, target: OrderStatus) -> bool:
    allowed = _ACTOR_TARGETS[actor]
    return allowed is None or target in allowed


def generate_order_number(now: datetime) -> str:
    return f"ORD-{now:%y%m%d}-{secrets.token_hex(3).upper()}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order goes, as given at checkout."""

    first_name = String(max_length=50)
    last_name = String(max_length=50)
    phone = String(required=True, max_length=20)
    street = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    country = String(max_length=100, default="Nigeria")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    store_id = Identifier(required=True)
    seller_id = Identifier()
    product_snapshot = ValueObject(ProductSnapshot)
    store_snapshot = ValueObject(StoreSnapshot)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    subtotal = Float(required=True, min_value=0.0)
    item_status = String(choices=ItemStatus, default=ItemStatus.PENDING.value)


@storefront.entity(part_of="Order")
class StatusChange:
    status = String(required=True, choices=OrderStatus)
    note = Text()
    actor = String(required=True, choices=Actor)
    changed_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=30, unique=True)
    customer_id = Identifier(required=True)
    customer_snapshot = ValueObject(CustomerSnapshot)
    items = HasMany(OrderItem)
    history = HasMany(StatusChange)
    subtotal = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    shipping_fee = Float(default=0.0, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    total_amount = Float(default=0.0, min_value=0.0)
    shipping_address = ValueObject(ShippingAddress)
    customer_notes = Text()
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.CASH_TO_VENDOR.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    cancelled_by = String(choices=Actor)
    cancellation_reason = Text()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        customer_snapshot: CustomerSnapshot,
        lines: list[dict],
        shipping_address: ShippingAddress,
        customer_notes: str | None = None,
        now: datetime | None = None,
    ):
        """Create a pending order from checkout lines.

        Each line dict carries product_id, store_id, seller_id, product_snapshot,
        store_snapshot, quantity and price.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = now or utcnow()
        order = cls(
            order_number=generate_order_number(now),
            customer_id=customer_id,
            customer_snapshot=customer_snapshot,
            shipping_address=shipping_address,
            customer_notes=customer_notes or "",
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line["product_id"],
                    store_id=line["store_id"],
                    seller_id=line.get("seller_id"),
                    product_snapshot=line["product_snapshot"],
                    store_snapshot=line["store_snapshot"],
                    quantity=line["quantity"],
                    price=line["price"],
                    subtotal=round(line["price"] * line["quantity"], 2),
                )
            )

        order.subtotal = round(sum(item.subtotal for item in order.items), 2)
        order.total_amount = round(order.subtotal + order.tax + order.shipping_fee - order.discount, 2)
        order.add_history(
            StatusChange(
                status=OrderStatus.PENDING.value,
                note="Order created",
                actor=Actor.CUSTOMER.value,
                changed_at=now,
            )
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                customer_id=str(customer_id),
                item_count=order.item_count,
                store_count=len(order.items_by_store()),
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def items_by_store(self) -> dict[str, list[OrderItem]]:
        groups: dict[str, list[OrderItem]] = {}
        for item in self.items:
            groups.setdefault(str(item.store_id), []).append(item)
        return groups

    def allowed_transitions(self) -> list[str]:
        return sorted(target.value for target in _VALID_TRANSITIONS[OrderStatus(self.status)])

    # -------------------------------------------------------------------
    # Status changes
    # -------------------------------------------------------------------
    def update_status(
        self,
        new_status: str,
        note: str | None = None,
        actor: str = Actor.SYSTEM.value,
        now: datetime | None = None,
    ) -> None:
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None
        try:
            role = Actor(actor)
        except ValueError:
            raise ValidationError({"actor": [f"Unknown actor: {actor}"]}) from None

        current = OrderStatus(self.status)
        if not can_transition(current, target):
            raise InvalidStatusTransition(
                f"Cannot change order status from {current.value} to {target.value}",
                current_status=current.value,
                allowed_statuses=self.allowed_transitions(),
            )
        if not actor_may_set(role, target):
            raise StatusChangeNotPermitted(f"A {role.value} cannot mark an order as {target.value}")

        now = now or utcnow()
        self.status = target.value
        self.updated_at = now
        self.add_history(StatusChange(status=target.value, note=note or "", actor=role.value, changed_at=now))

        if target == OrderStatus.SHIPPED and self.shipped_at is None:
            self.shipped_at = now
        elif target == OrderStatus.DELIVERED and self.delivered_at is None:
            self.delivered_at = now
        elif target == OrderStatus.CANCELLED:
            self.cancelled_at = self.cancelled_at or now
            self.cancelled_by = role.value
            self.cancellation_reason = note or ""
            for item in self.items:
                item.item_status = ItemStatus.CANCELLED.value
        elif target == OrderStatus.REFUNDED:
            self.payment_status = PaymentStatus.REFUNDED.value

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                customer_id=str(self.customer_id),
                previous_status=current.value,
                new_status=target.value,
                actor=role.value,
                note=note or "",
                changed_at=now,
            )
        )
