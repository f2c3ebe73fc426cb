"""Integration tests for the /wishlist endpoints."""

import pytest
from fastapi.testclient import TestClient

from storefront.web.application import create_app


@pytest.fixture()
def product(make_store, make_product):
    return make_product(make_store(), name="Aso Oke Fabric", price=12000.0, stock=3)


def _share(client):
    response = client.put("/wishlist", json={"isPublic": True})
    return response.json()["wishlist"]["shareCode"]


class TestWishlist:
    def test_requires_login(self, client):
        assert client.get("/wishlist").status_code == 401

    def test_empty_wishlist_on_first_visit(self, client, signed_in):
        response = client.get("/wishlist")

        assert response.status_code == 200
        wishlist = response.json()["wishlist"]
        assert wishlist["name"] == "My Wishlist"
        assert wishlist["items"] == []
        assert wishlist["stats"]["totalItems"] == 0

    def test_add_item(self, client, signed_in, product):
        response = client.post(
            "/wishlist",
            json={
                "productId": str(product.id),
                "priority": "high",
                "notes": "For the wedding",
                "notifications": {"priceDropAlert": True, "targetPrice": 10000},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Item added to wishlist"
        item = data["wishlist"]["items"][0]
        assert item["priority"] == "high"
        assert item["notifications"] == {"priceDropAlert": True, "backInStockAlert": True, "targetPrice": 10000.0}
        assert item["productSnapshot"]["productName"] == "Aso Oke Fabric"
        assert item["productSnapshot"]["inStock"] is True
        assert "costPrice" not in item["productSnapshot"]
        assert data["wishlist"]["stats"]["totalValue"] == 12000.0
        assert data["wishlist"]["stats"]["highPriorityItems"] == 1

    def test_missing_product_id(self, client, signed_in):
        response = client.post("/wishlist", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Product ID is required"

    def test_unknown_product(self, client, signed_in):
        response = client.post("/wishlist", json={"productId": "missing"})

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_update_item(self, client, signed_in, product):
        client.post("/wishlist", json={"productId": str(product.id), "notes": "Maybe"})

        response = client.put(
            f"/wishlist/{product.id}",
            json={"priority": "low", "notifications": {"backInStockAlert": False}},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Wishlist item updated"
        item = response.json()["wishlist"]["items"][0]
        assert item["priority"] == "low"
        assert item["notes"] == "Maybe"
        assert item["notifications"]["backInStockAlert"] is False

    def test_update_item_without_wishlist(self, client, signed_in):
        response = client.put("/wishlist/missing", json={"priority": "low"})

        assert response.status_code == 404
        assert response.json()["message"] == "Wishlist not found"

    def test_update_missing_item(self, client, signed_in):
        client.get("/wishlist")
        response = client.put("/wishlist/missing", json={"priority": "low"})

        assert response.status_code == 404
        assert response.json()["message"] == "Item not found in wishlist"

    def test_remove_item(self, client, signed_in, product):
        client.post("/wishlist", json={"productId": str(product.id)})
        response = client.delete(f"/wishlist/{product.id}")

        assert response.status_code == 200
        assert response.json()["message"] == "Item removed from wishlist"
        assert response.json()["wishlist"]["items"] == []

    def test_update_details(self, client, signed_in):
        client.get("/wishlist")
        response = client.put("/wishlist", json={"name": "Christmas", "description": "Family gifts"})

        assert response.status_code == 200
        assert response.json()["message"] == "Wishlist updated successfully"
        assert response.json()["wishlist"]["name"] == "Christmas"
        assert response.json()["wishlist"]["isPublic"] is False

    def test_update_details_without_wishlist(self, client, signed_in):
        response = client.put("/wishlist", json={"name": "Christmas"})
        assert response.status_code == 404


class TestSharedWishlist:
    def test_public_wishlist_is_viewable_without_login(self, client, signed_in, product):
        client.post("/wishlist", json={"productId": str(product.id)})
        code = _share(client)

        visitor = TestClient(create_app())
        response = visitor.get(f"/wishlist/shared/{code}")

        assert response.status_code == 200
        wishlist = response.json()["wishlist"]
        assert wishlist["ownerName"] == "Ada"
        assert wishlist["viewCount"] == 1
        assert len(wishlist["items"]) == 1
        assert "customerId" not in wishlist
        assert "shareCode" not in wishlist

    def test_views_are_counted(self, client, signed_in):
        client.get("/wishlist")
        code = _share(client)
        client.get(f"/wishlist/shared/{code}")
        client.get(f"/wishlist/shared/{code}")

        assert client.get("/wishlist").json()["wishlist"]["viewCount"] == 2

    def test_private_wishlist_is_hidden(self, client, signed_in):
        client.get("/wishlist")
        code = _share(client)
        client.put("/wishlist", json={"isPublic": False})

        response = client.get(f"/wishlist/shared/{code}")
        assert response.status_code == 404
        assert response.json()["message"] == "Wishlist not found"

    def test_unknown_share_code(self, client):
        assert client.get("/wishlist/shared/ZZZZZZZZ").status_code == 404
