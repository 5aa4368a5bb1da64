"""Integration tests for the user endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from techmarket.errors import register_exception_handlers
from techmarket.identity.api import user_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(user_router)
    register_exception_handlers(app)
    return TestClient(app)


def _register(client, username="alice", email="alice@example.com", **extra):
    return client.post("/users", json={"username": username, "email": email, **extra})


class TestUserEndpoints:
    def test_register(self, client):
        response = _register(client, firstName="Alice")

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["username"] == "alice"
        assert user["first_name"] == "Alice"
        assert "password" not in user

    def test_invalid_email(self, client):
        response = _register(client, email="not-an-email")
        assert response.status_code == 400
        assert "email" in response.json()["errors"]

    def test_duplicate_username(self, client):
        _register(client)
        response = _register(client, email="other@example.com")
        assert response.status_code == 400
        assert response.json()["message"] == "Username is already taken"

    def test_list_and_get(self, client):
        user_id = _register(client).json()["user"]["id"]
        _register(client, username="bob", email="bob@example.com")

        assert [u["username"] for u in client.get("/users").json()] == ["alice", "bob"]
        assert client.get(f"/users/{user_id}").json()["email"] == "alice@example.com"

    def test_delete(self, client):
        user_id = _register(client).json()["user"]["id"]
        assert client.delete(f"/users/{user_id}").status_code == 200
        assert client.get(f"/users/{user_id}").status_code == 404
