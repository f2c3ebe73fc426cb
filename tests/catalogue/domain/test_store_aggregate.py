import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.store.store import DEFAULT_PRIMARY_COLOR, Branding, Store


def _store(**overrides):
    fields = {"owner_id": "owner-1", "store_name": "Mama Put", "store_slug": "mama-put"}
    fields.update(overrides)
    return Store(**fields)


@pytest.mark.parametrize("slug", ["abc", "mama-put", "shop24", "a" * 30])
def test_valid_slugs(slug):
    assert _store(store_slug=slug).store_slug == slug


@pytest.mark.parametrize("slug", ["ab", "-shop", "shop-", "Shop", "my shop", "a" * 31])
def test_invalid_slugs(slug):
    with pytest.raises(ValidationError) as exc:
        _store(store_slug=slug)
    assert "store_slug" in exc.value.messages


def test_public_only_when_active_and_website_enabled():
    assert _store(website_enabled=True).is_public is True
    assert _store(website_enabled=False).is_public is False
    assert _store(website_enabled=True, is_active=False).is_public is False


def test_defaults():
    store = _store()
    assert store.currency == "NGN"
    assert store.store_type == "physical"
    assert store.page_views == 0


def test_snapshot_carries_contact_and_branding():
    store = _store(store_phone="08031234567", branding=Branding(logo="logo.png", primary_color="#111111"))
    snapshot = store.snapshot()

    assert snapshot.store_name == "Mama Put"
    assert snapshot.store_slug == "mama-put"
    assert snapshot.store_phone == "08031234567"
    assert snapshot.logo == "logo.png"
    assert snapshot.primary_color == "#111111"


def test_snapshot_without_branding_uses_default_color():
    assert _store().snapshot().primary_color == DEFAULT_PRIMARY_COLOR


def test_record_sale_and_page_view():
    store = _store()
    store.record_sale(1000.0)
    store.record_sale(250.25)
    store.record_page_view()

    assert store.total_sales == 2
    assert store.total_revenue == 1250.25
    assert store.last_sale_at is not None
    assert store.page_views == 1
