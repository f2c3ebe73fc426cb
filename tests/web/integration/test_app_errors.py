"""Application-level endpoints and the error envelope."""

import pytest
from fastapi.testclient import TestClient
from protean.exceptions import ObjectNotFoundError, ValidationError
from pydantic import BaseModel

from storefront.web.application import create_app


class Quantity(BaseModel):
    quantity: int


@pytest.fixture()
def app():
    app = create_app()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaput")

    @app.get("/invalid")
    async def invalid():
        raise ValidationError({"quantity": ["is required"]})

    @app.get("/missing")
    async def missing():
        raise ObjectNotFoundError("no such thing")

    @app.post("/echo")
    async def echo(body: Quantity):
        return {"quantity": body.quantity}

    return app


@pytest.fixture()
def raw_client(app):
    return TestClient(app, raise_server_exceptions=False)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "domain": "storefront", "environment": "test"}


def test_unexpected_error_envelope(raw_client):
    response = raw_client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Something went wrong"
    assert body["error"] == "RuntimeError: kaput"


def test_error_detail_is_hidden_in_production(raw_client, monkeypatch):
    monkeypatch.setenv("STOREFRONT_ENV", "production")
    body = raw_client.get("/boom").json()

    assert body == {"success": False, "message": "Something went wrong"}


def test_domain_validation_error(raw_client):
    response = raw_client.get("/invalid")

    assert response.status_code == 400
    assert response.json()["message"] == "quantity: is required"
    assert response.json()["errors"] == {"quantity": ["is required"]}


def test_object_not_found(raw_client):
    response = raw_client.get("/missing")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not found"}


def test_malformed_body(raw_client):
    response = raw_client.post("/echo", json={"quantity": "many"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("quantity: ")
    assert body["errors"][0]["field"] == "quantity"


def test_unknown_route(client):
    assert client.get("/nowhere").status_code == 404


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated(client):
    assert len(client.get("/health").headers["X-Request-ID"]) == 16
