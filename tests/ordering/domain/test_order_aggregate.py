"""Tests for the Order aggregate: placement, transitions and permissions."""

import re

import pytest
from protean.exceptions import ValidationError

from storefront.errors import InvalidStatusTransition, StatusChangeNotPermitted
from storefront.ordering.order.events import OrderPlaced, OrderStatusChanged
from storefront.ordering.order.order import (
    Actor,
    ItemStatus,
    Order,
    OrderStatus,
    PaymentStatus,
    ShippingAddress,
    can_transition,
)
from storefront.shared.snapshots import CustomerSnapshot, ProductSnapshot, StoreSnapshot


def _line(product_id, store_id, quantity, price):
    return {
        "product_id": product_id,
        "store_id": store_id,
        "seller_id": f"owner-{store_id}",
        "product_snapshot": ProductSnapshot(product_name=f"Product {product_id}"),
        "store_snapshot": StoreSnapshot(store_name=f"Store {store_id}"),
        "quantity": quantity,
        "price": price,
    }


def _place(lines=None):
    return Order.place(
        customer_id="cust-1",
        customer_snapshot=CustomerSnapshot(first_name="Ada", last_name="Obi", email="ada@example.com"),
        lines=lines or [_line("p1", "s1", 2, 1500.0), _line("p2", "s2", 1, 999.99)],
        shipping_address=ShippingAddress(phone="08031234567", city="Ikeja", state="Lagos"),
        customer_notes="Call on arrival",
    )


def _order_in(status):
    order = _place()
    order.status = status
    return order


class TestPlace:
    def test_totals(self):
        order = _place()
        assert order.subtotal == 3999.99
        assert order.total_amount == 3999.99
        assert order.item_count == 3
        assert len(order.items_by_store()) == 2

    def test_line_subtotals(self):
        order = _place()
        assert sorted(item.subtotal for item in order.items) == [999.99, 3000.0]

    def test_starts_pending_with_history(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PENDING.value
        assert order.payment_method == "cash_to_vendor"
        assert len(order.history) == 1
        entry = order.history[0]
        assert (entry.status, entry.note, entry.actor) == ("pending", "Order created", "customer")

    def test_order_number_format(self):
        assert re.match(r"^ORD-\d{6}-[0-9A-F]{6}$", _place().order_number)

    def test_shipping_country_defaults_to_nigeria(self):
        assert _place().shipping_address.country == "Nigeria"

    def test_needs_items(self):
        with pytest.raises(ValidationError):
            Order.place(
                customer_id="cust-1",
                customer_snapshot=CustomerSnapshot(first_name="Ada"),
                lines=[],
                shipping_address=ShippingAddress(phone="08031234567", city="Ikeja", state="Lagos"),
            )

    def test_shipping_address_requires_phone_city_state(self):
        with pytest.raises(ValidationError):
            ShippingAddress(phone="08031234567", city="Ikeja")

    def test_raises_order_placed(self):
        order = _place()
        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.store_count == 2
        assert event.total_amount == 3999.99


VALID = [
    ("pending", "confirmed"),
    ("pending", "cancelled"),
    ("confirmed", "processing"),
    ("confirmed", "shipped"),
    ("confirmed", "cancelled"),
    ("processing", "shipped"),
    ("shipped", "delivered"),
    ("delivered", "refunded"),
    ("cancelled", "refunded"),
]

INVALID = [
    ("pending", "shipped"),
    ("pending", "delivered"),
    ("processing", "cancelled"),
    ("shipped", "cancelled"),
    ("delivered", "cancelled"),
    ("refunded", "pending"),
    ("cancelled", "confirmed"),
    ("pending", "pending"),
]


class TestTransitions:
    @pytest.mark.parametrize("current, target", VALID)
    def test_allowed(self, current, target):
        assert can_transition(OrderStatus(current), OrderStatus(target))
        order = _order_in(current)
        order.update_status(target, actor=Actor.ADMIN.value)
        assert order.status == target

    @pytest.mark.parametrize("current, target", INVALID)
    def test_rejected(self, current, target):
        order = _order_in(current)
        with pytest.raises(InvalidStatusTransition) as exc:
            order.update_status(target, actor=Actor.ADMIN.value)
        assert order.status == current
        assert exc.value.payload["current_status"] == current
        assert exc.value.payload["allowed_statuses"] == order.allowed_transitions()

    def test_refunded_is_terminal(self):
        assert _order_in("refunded").allowed_transitions() == []

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            _place().update_status("lost")

    def test_history_and_event(self):
        order = _place()
        order._events.clear()
        order.update_status("confirmed", note="Seller accepted", actor=Actor.SELLER.value)

        assert [entry.status for entry in order.history] == ["pending", "confirmed"]
        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert (event.previous_status, event.new_status, event.actor) == ("pending", "confirmed", "seller")


class TestCustomerPermissions:
    def test_customer_can_cancel_pending(self):
        order = _place()
        order.update_status("cancelled", note="Changed my mind", actor=Actor.CUSTOMER.value)

        assert order.status == "cancelled"
        assert order.cancelled_by == "customer"
        assert order.cancellation_reason == "Changed my mind"
        assert order.cancelled_at is not None
        assert all(item.item_status == ItemStatus.CANCELLED.value for item in order.items)

    def test_customer_can_confirm_delivery(self):
        order = _order_in("shipped")
        order.update_status("delivered", actor=Actor.CUSTOMER.value)
        assert order.delivered_at is not None

    @pytest.mark.parametrize("current, target", [("pending", "confirmed"), ("delivered", "refunded")])
    def test_customer_cannot_make_seller_changes(self, current, target):
        order = _order_in(current)
        with pytest.raises(StatusChangeNotPermitted):
            order.update_status(target, actor=Actor.CUSTOMER.value)
        assert order.status == current


class TestTimestamps:
    def test_shipping_sets_shipped_at(self):
        order = _order_in("confirmed")
        order.update_status("shipped", actor=Actor.SELLER.value)
        assert order.shipped_at is not None

    def test_refund_marks_payment_refunded(self):
        order = _order_in("cancelled")
        order.update_status("refunded", actor=Actor.ADMIN.value)
        assert order.payment_status == PaymentStatus.REFUNDED.value
