"""Tests for the FastAPI cart endpoints."""

import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.api.app import create_app
from tests.infrastructure.helpers import LAPTOP, MOUSE, auth

CART = "/api/v1/cart"


def _items(response) -> list[tuple[str, int]]:
    return [(i["productId"], i["quantity"]) for i in response.json()["data"]["items"]]


class TestGetCart:

    def test_seeded_cart(self, api_client):
        response = api_client.get(f"{CART}/", headers=auth("u1"))

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {
                "userId": "u1",
                "items": [
                    {
                        "productId": LAPTOP,
                        "quantity": 2,
                        "product": {
                            "id": LAPTOP,
                            "name": "Laptop",
                            "price": 1000.0,
                            "images": ["/img/laptop.png"],
                        },
                    }
                ],
            },
        }

    def test_unknown_user_gets_empty_cart(self, api_client):
        response = api_client.get(f"{CART}/", headers=auth("u2"))
        assert response.status_code == 200
        assert response.json()["data"]["items"] == []

    def test_requires_token(self, api_client):
        response = api_client.get(f"{CART}/")
        assert response.status_code == 401
        assert response.json()["error"] == "Access denied. No token provided."


class TestAddToCart:

    def test_adds_new_product(self, api_client, json_store):
        response = api_client.post(
            f"{CART}/", json={"productId": MOUSE, "quantity": 3}, headers=auth("u1")
        )

        assert response.status_code == 200
        assert _items(response) == [(LAPTOP, 2), (MOUSE, 3)]
        with json_store.unit_of_work() as uow:
            assert [c.quantity for c in uow.users.get_by_id("u1").cart] == [2, 3]

    def test_quantity_defaults_to_one(self, api_client):
        response = api_client.post(f"{CART}/", json={"productId": LAPTOP}, headers=auth("u1"))
        assert _items(response) == [(LAPTOP, 3)]

    def test_unknown_product(self, api_client):
        response = api_client.post(
            f"{CART}/", json={"productId": "000000000000000000000000"}, headers=auth("u1")
        )
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}

    def test_missing_product_id(self, api_client):
        response = api_client.post(f"{CART}/", json={"quantity": 1}, headers=auth("u1"))
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid productId"

    def test_bad_quantity(self, api_client):
        response = api_client.post(
            f"{CART}/", json={"productId": LAPTOP, "quantity": 0}, headers=auth("u1")
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Quantity must be positive"


class TestChangeCart:

    def test_update_quantity(self, api_client):
        response = api_client.put(f"{CART}/{LAPTOP}", json={"quantity": 4}, headers=auth("u1"))
        assert response.status_code == 200
        assert _items(response) == [(LAPTOP, 4)]

    def test_update_item_not_in_cart(self, api_client):
        response = api_client.put(f"{CART}/{MOUSE}", json={"quantity": 4}, headers=auth("u1"))
        assert response.status_code == 404
        assert response.json()["message"] == "Item not in cart"

    def test_remove(self, api_client):
        response = api_client.delete(f"{CART}/{LAPTOP}", headers=auth("u1"))
        assert response.status_code == 200
        assert _items(response) == []

    def test_clear(self, api_client, json_store):
        api_client.post(f"{CART}/", json={"productId": MOUSE}, headers=auth("u1"))

        response = api_client.delete(f"{CART}/", headers=auth("u1"))

        assert response.status_code == 200
        assert _items(response) == []
        with json_store.unit_of_work() as uow:
            assert uow.users.get_by_id("u1").cart == []

    def test_clear_unknown_user(self, api_client):
        response = api_client.delete(f"{CART}/", headers=auth("u2"))
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestCartFailures:

    @staticmethod
    def _broken_store():
        raise RuntimeError("database unreachable")

    @pytest.fixture
    def broken_client(self, settings):
        app = create_app(settings, unit_of_work=self._broken_store)
        return TestClient(app, raise_server_exceptions=False)

    def test_get_cart_failure_message(self, broken_client):
        response = broken_client.get(f"{CART}/", headers=auth("u1"))
        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch cart."

    def test_add_failure_message(self, broken_client):
        response = broken_client.post(f"{CART}/", json={"productId": LAPTOP}, headers=auth("u1"))
        assert response.status_code == 500
        assert response.json()["message"] == "Failed to add to cart."
