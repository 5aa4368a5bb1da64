"""Integration tests for the cart endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from techmarket.cart.api import cart_router
from techmarket.catalogue.api import category_router, product_router
from techmarket.errors import register_exception_handlers
from techmarket.identity.api import user_router
from techmarket.reviews.api import review_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(user_router)
    app.include_router(review_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def product_id(client):
    response = client.post("/products", json={"name": "Laptop Pro 15", "price": 1299.99})
    return response.json()["product"]["id"]


def _add(client, product_id, quantity=1, user_id="user-1"):
    return client.post("/cart", json={"userId": user_id, "productId": product_id, "quantity": quantity})


class TestAddToCartEndpoint:
    def test_first_add_creates_cart(self, client, product_id):
        response = _add(client, product_id, 2)

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Cart created and product added successfully"
        assert data["cart"]["user_id"] == "user-1"
        assert data["cart"]["product_ids"] == [product_id]
        assert data["cart"]["quantities"] == {product_id: 2}

    def test_adding_another_product(self, client, product_id):
        other = client.post("/products", json={"name": "Mouse", "price": 25}).json()["product"]["id"]
        _add(client, product_id)

        response = _add(client, other, 3)

        assert response.json()["message"] == "Product added to cart successfully"
        assert response.json()["cart"]["product_ids"] == [product_id, other]

    def test_repeat_add_merges(self, client, product_id):
        _add(client, product_id, 2)
        response = _add(client, product_id, 3)

        assert response.json()["message"] == "Product quantity updated successfully"
        assert response.json()["cart"]["quantities"][product_id] == 5

    def test_snake_case_body_accepted(self, client, product_id):
        response = client.post("/cart", json={"user_id": "user-9", "product_id": product_id, "quantity": 1})
        assert response.status_code == 200

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity(self, client, product_id, quantity):
        response = _add(client, product_id, quantity)

        assert response.status_code == 400
        assert response.json()["message"] == "Quantity must be at least 1"

    def test_non_integer_quantity(self, client, product_id):
        response = _add(client, product_id, "lots")
        assert response.status_code == 400
        assert "quantity" in response.json()["errors"]

    def test_missing_user(self, client, product_id):
        response = client.post("/cart", json={"productId": product_id, "quantity": 1})
        assert response.status_code == 400

    def test_unknown_product(self, client):
        response = _add(client, "no-such-product")
        assert response.status_code == 404


class TestGetCartEndpoints:
    def test_line_items(self, client, product_id):
        _add(client, product_id, 2)

        response = client.get("/cart/user/user-1")

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == "user-1"
        assert data["items"][0]["product_id"] == product_id
        assert data["items"][0]["quantity"] == 2
        assert data["items"][0]["product"]["name"] == "Laptop Pro 15"

    def test_no_cart(self, client):
        response = client.get("/cart/user/nobody")
        assert response.status_code == 404
        assert response.json()["message"] == "Cart is empty for this user"

    def test_full_cart(self, client, product_id):
        user = client.post("/users", json={"username": "alice", "email": "alice@example.com"}).json()["user"]
        client.post(
            "/reviews",
            json={
                "productId": product_id,
                "userId": user["id"],
                "rating": 5,
                "title": "Superb",
                "content": "Best laptop I have owned so far.",
            },
        )
        _add(client, product_id, user_id=user["id"])

        response = client.get(f"/cart/user/full/{user['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["username"] == "alice"
        assert data["products"][0]["product"]["id"] == product_id
        assert data["products"][0]["reviews"][0]["rating"] == 5
        assert data["quantities"] == {product_id: 1}

    def test_full_cart_missing(self, client):
        response = client.get("/cart/user/full/nobody")
        assert response.status_code == 404
        assert response.json()["message"] == "Cart not found for this user"


class TestCartItemEndpoints:
    def test_update_quantity(self, client, product_id):
        cart_id = _add(client, product_id, 2).json()["cart"]["id"]

        response = client.patch(f"/cart/{cart_id}/product/{product_id}", json={"quantity": 7})

        assert response.status_code == 200
        assert response.json()["message"] == "Cart item updated successfully"
        assert response.json()["cart"]["quantities"][product_id] == 7

    def test_update_to_zero_rejected(self, client, product_id):
        cart_id = _add(client, product_id, 2).json()["cart"]["id"]

        response = client.patch(f"/cart/{cart_id}/product/{product_id}", json={"quantity": 0})

        assert response.status_code == 400
        assert response.json()["message"] == "Quantity must be at least 1"

    def test_update_product_not_in_cart(self, client, product_id):
        cart_id = _add(client, product_id).json()["cart"]["id"]

        response = client.patch(f"/cart/{cart_id}/product/other", json={"quantity": 1})

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found in the cart"

    def test_remove_product(self, client, product_id):
        cart_id = _add(client, product_id).json()["cart"]["id"]

        response = client.delete(f"/cart/{cart_id}/product/{product_id}")

        assert response.status_code == 200
        assert response.json()["message"] == "Product removed from cart successfully"
        assert response.json()["cart"]["product_ids"] == []

    def test_remove_from_unknown_cart(self, client):
        response = client.delete("/cart/missing/product/p1")
        assert response.status_code == 404


class TestDeleteCartEndpoint:
    def test_delete(self, client, product_id):
        cart_id = _add(client, product_id).json()["cart"]["id"]

        response = client.delete(f"/cart/{cart_id}")

        assert response.status_code == 200
        assert response.json()["message"] == "Cart deleted successfully"
        assert client.get("/cart/user/user-1").status_code == 404

    def test_delete_is_idempotent(self, client):
        assert client.delete("/cart/never-existed").status_code == 200
