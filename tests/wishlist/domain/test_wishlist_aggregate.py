"""Tests for the Wishlist aggregate."""

import re
from datetime import timedelta

import pytest
from protean.exceptions import ValidationError

from storefront.errors import NotFound
from storefront.shared.clock import utcnow
from storefront.shared.snapshots import StoreSnapshot
from storefront.wishlist.events import WishlistItemRemoved, WishlistItemSaved, WishlistVisibilityChanged
from storefront.wishlist.wishlist import (
    DEFAULT_NAME,
    UNSET,
    Wishlist,
    WishlistProductSnapshot,
    generate_share_code,
)


def _snapshot(price=5000.0, stock=3, status="Active", visible=True, name="Aso Oke"):
    return WishlistProductSnapshot(
        product_name=name,
        selling_price=price,
        quantity_in_stock=stock,
        status=status,
        web_visibility=visible,
    )


def _save(wishlist, product_id="p1", store_id="s1", **kwargs):
    kwargs.setdefault("product_snapshot", _snapshot())
    return wishlist.add_item(
        product_id=product_id,
        store_id=store_id,
        store_owner_id=f"owner-{store_id}",
        store_snapshot=StoreSnapshot(store_name=f"Store {store_id}"),
        **kwargs,
    )


@pytest.fixture()
def wishlist():
    wishlist = Wishlist.create("cust-1")
    wishlist._events.clear()
    return wishlist


class TestCreate:
    def test_defaults(self, wishlist):
        assert wishlist.name == DEFAULT_NAME
        assert wishlist.is_public is False
        assert wishlist.share_code is None
        assert wishlist.view_count == 0
        assert wishlist.item_count == 0


class TestAddItem:
    def test_adds_with_default_preferences(self, wishlist):
        item = _save(wishlist)

        assert wishlist.item_count == 1
        assert item.priority == "medium"
        assert item.price_drop_alert is True
        assert item.back_in_stock_alert is True
        assert item.target_price is None
        assert item.added_at is not None

    def test_raises_event(self, wishlist):
        _save(wishlist, priority="high")
        event = wishlist._events[0]
        assert isinstance(event, WishlistItemSaved)
        assert event.priority == "high"

    def test_saving_again_replaces_priority_and_notes(self, wishlist):
        _save(wishlist, priority="low", notes="Birthday")
        _save(wishlist, priority="high")

        assert wishlist.item_count == 1
        item = wishlist.items[0]
        assert item.priority == "high"
        assert item.notes == ""

    def test_saving_again_merges_notifications(self, wishlist):
        _save(wishlist, notifications={"price_drop_alert": False, "target_price": 4000.0})
        _save(wishlist, notifications={"back_in_stock_alert": False})

        item = wishlist.items[0]
        assert item.price_drop_alert is False
        assert item.back_in_stock_alert is False
        assert item.target_price == 4000.0

    def test_saving_again_moves_item_to_top(self, wishlist):
        earlier = utcnow() - timedelta(days=1)
        _save(wishlist, now=earlier)
        _save(wishlist)
        assert wishlist.items[0].added_at > earlier

    def test_unknown_priority(self, wishlist):
        with pytest.raises(ValidationError) as exc:
            _save(wishlist, priority="urgent")
        assert "priority" in exc.value.messages

    def test_notes_are_limited(self, wishlist):
        with pytest.raises(ValidationError):
            _save(wishlist, notes="x" * 501)


class TestItemUpdates:
    def test_update_priority_and_notes(self, wishlist):
        _save(wishlist)
        wishlist.update_item_priority("p1", "low")
        wishlist.update_item_notes("p1", "For mum")

        item = wishlist.items[0]
        assert (item.priority, item.notes) == ("low", "For mum")

    def test_update_notification_settings(self, wishlist):
        _save(wishlist)
        wishlist.update_notification_settings("p1", {"price_drop_alert": False, "target_price": 3500.0})

        assert wishlist.items[0].notifications == {
            "price_drop_alert": False,
            "back_in_stock_alert": True,
            "target_price": 3500.0,
        }

    @pytest.mark.parametrize(
        "call",
        [
            lambda w: w.update_item_priority("missing", "low"),
            lambda w: w.update_item_notes("missing", "x"),
            lambda w: w.update_notification_settings("missing", {}),
        ],
        ids=["priority", "notes", "notifications"],
    )
    def test_missing_item(self, wishlist, call):
        with pytest.raises(NotFound) as exc:
            call(wishlist)
        assert exc.value.message == "Item not found in wishlist"

    def test_remove(self, wishlist):
        _save(wishlist)
        wishlist._events.clear()

        assert wishlist.remove_item("p1") is True
        assert wishlist.item_count == 0
        assert isinstance(wishlist._events[0], WishlistItemRemoved)

    def test_remove_missing(self, wishlist):
        assert wishlist.remove_item("p1") is False


class TestSharing:
    def test_share_codes(self):
        for _ in range(20):
            assert re.fullmatch(r"[A-Z0-9]{8}", generate_share_code())

    def test_make_public_assigns_share_code(self, wishlist):
        wishlist.make_public()

        assert wishlist.is_public is True
        assert re.fullmatch(r"[A-Z0-9]{8}", wishlist.share_code)
        assert isinstance(wishlist._events[0], WishlistVisibilityChanged)

    def test_share_code_is_stable_while_public(self, wishlist):
        wishlist.make_public()
        code = wishlist.share_code
        wishlist.make_public()
        assert wishlist.share_code == code
        assert len(wishlist._events) == 1

    def test_make_private_drops_share_code(self, wishlist):
        wishlist.make_public()
        wishlist.make_private()

        assert wishlist.is_public is False
        assert wishlist.share_code is None

    def test_record_view(self, wishlist):
        wishlist.record_view()
        wishlist.record_view()
        assert wishlist.view_count == 2


class TestDetails:
    def test_rename(self, wishlist):
        wishlist.update_details(name="  Owambe outfits ", description="Saturday")
        assert wishlist.name == "Owambe outfits"
        assert wishlist.description == "Saturday"

    def test_name_cannot_be_blank(self, wishlist):
        with pytest.raises(ValidationError):
            wishlist.update_details(name="   ")

    def test_unset_fields_are_untouched(self, wishlist):
        wishlist.update_details(name="Gifts", description=UNSET)
        wishlist.update_details(name=UNSET, description="For the kids")
        assert (wishlist.name, wishlist.description) == ("Gifts", "For the kids")


class TestStats:
    def test_values_and_stock(self, wishlist):
        _save(wishlist, "p1", "s1", product_snapshot=_snapshot(price=5000.0, stock=2))
        _save(wishlist, "p2", "s1", product_snapshot=_snapshot(price=2500.5, stock=0))
        _save(wishlist, "p3", "s2", product_snapshot=_snapshot(price=1000.0, stock=5, status="Inactive"))
        _save(wishlist, "p4", "s2", product_snapshot=_snapshot(price=750.0, stock=5, visible=False))

        assert wishlist.total_value == 9250.5
        assert wishlist.store_count == 2
        assert [str(item.product_id) for item in wishlist.in_stock_items()] == ["p1"]
        assert len(wishlist.out_of_stock_items()) == 3

    def test_alert_lists(self, wishlist):
        _save(wishlist, "p1", product_snapshot=_snapshot(stock=0))
        _save(wishlist, "p2", product_snapshot=_snapshot(stock=0), notifications={"back_in_stock_alert": False})
        _save(wishlist, "p3", notifications={"price_drop_alert": False})

        assert sorted(str(item.product_id) for item in wishlist.price_drop_alerts()) == ["p1", "p2"]
        assert [str(item.product_id) for item in wishlist.back_in_stock_alerts()] == ["p1"]
