import os
import re
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay and keeps password hashing cheap before any
    storefront module is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["BCRYPT_ROUNDS"] = "4"
    os.environ["MAIL_ADAPTER"] = "memory"


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def _storefront_domain():
    """Initialize the storefront domain once per session."""
    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    from storefront.notifications import reset_mailer

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    reset_mailer()
    ctx.pop()


@pytest.fixture()
def mailer():
    from storefront.notifications import get_mailer

    return get_mailer()


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from storefront.web.application import create_app

    return TestClient(create_app())


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
STRONG_PASSWORD = "Secur3!Pass"


def code_from(message: dict) -> str:
    """The six-digit verification code inside a verification email."""
    return re.search(r"\b(\d{6})\b", message["body"]).group(1)


@pytest.fixture()
def make_store():
    from protean import current_domain

    from storefront.catalogue.store.store import Branding, Store

    def _make(slug="mama-put", **overrides):
        fields = {
            "owner_id": "owner-1",
            "store_name": "Mama Put Provisions",
            "store_slug": slug,
            "store_phone": "08031234567",
            "store_email": "shop@mamaput.example",
            "branding": Branding(logo="https://cdn.example/logo.png"),
            "website_enabled": True,
        }
        fields.update(overrides)
        store = Store(**fields)
        current_domain.repository_for(Store).add(store)
        return store

    return _make


@pytest.fixture()
def make_product():
    from protean import current_domain

    from storefront.catalogue.product.product import Product

    def _make(store, name="Ofada Rice 5kg", price=7500.0, stock=10, **overrides):
        fields = {
            "store_id": str(store.id),
            "owner_id": str(store.owner_id),
            "product_name": name,
            "sku": name.upper().replace(" ", "-")[:20],
            "category": "Groceries",
            "cost_price": round(price * 0.7, 2),
            "selling_price": price,
            "quantity_in_stock": stock,
            "web_visibility": True,
        }
        fields.update(overrides)
        product = Product(**fields)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def make_customer():
    """A verified customer stored directly, bypassing registration."""
    from protean import current_domain

    from storefront.identity.customer.customer import Customer
    from storefront.identity.customer.passwords import hash_password

    def _make(email="ada@example.com", password=STRONG_PASSWORD, verified=True, **overrides):
        customer = Customer.register(
            email=email,
            password_hash=hash_password(password),
            first_name=overrides.pop("first_name", "Ada"),
            last_name=overrides.pop("last_name", "Obi"),
            phone=overrides.pop("phone", "08031234567"),
        )
        customer.is_verified = verified
        for key, value in overrides.items():
            setattr(customer, key, value)
        current_domain.repository_for(Customer).add(customer)
        return customer

    return _make


@pytest.fixture()
def signed_in(client, make_customer):
    """A verified customer logged in through the API; the client holds the cookie."""
    customer = make_customer()
    response = client.post("/auth/login", json={"email": customer.email, "password": STRONG_PASSWORD})
    assert response.status_code == 200
    return customer
