"""Integration tests for the review endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from techmarket.catalogue.api import product_router
from techmarket.errors import register_exception_handlers
from techmarket.reviews.api import review_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(review_router)
    app.include_router(product_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def product_id(client):
    return client.post("/products", json={"name": "Laptop Pro 15", "price": 1299.99}).json()["product"]["id"]


def _review_body(product_id, **overrides):
    body = {
        "productId": product_id,
        "userId": "user-1",
        "rating": 4,
        "title": "Great laptop",
        "content": "Fast, light and the screen is superb.",
    }
    body.update(overrides)
    return body


def _create(client, product_id, **overrides):
    return client.post("/reviews", json=_review_body(product_id, **overrides))


class TestCreateReviewEndpoint:
    def test_create(self, client, product_id):
        response = _create(client, product_id, pros=["fast", "light"], verifiedPurchase=True)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Review created successfully"
        assert data["review"]["id"] == data["review_id"]
        assert data["review"]["pros"] == ["fast", "light"]
        assert data["review"]["verified_purchase"] is True
        assert data["review"]["helpful_votes"] == 0

    def test_product_summary_follows(self, client, product_id):
        for rating in (5, 4, 4, 3):
            _create(client, product_id, rating=rating)

        product = client.get(f"/products/{product_id}").json()
        assert product["total_reviews"] == 4
        assert product["average_rating"] == 4.0
        assert product["rating_distribution"] == {"1": 0, "2": 0, "3": 1, "4": 2, "5": 1}

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"rating": 6}, "rating"),
            ({"rating": 0}, "rating"),
            ({"title": "ok"}, "title"),
            ({"content": "short"}, "content"),
            ({"pros": ["x"]}, "pros.0"),
            ({"cons": [f"point {i}" for i in range(11)]}, "cons"),
        ],
    )
    def test_invalid_fields(self, client, product_id, overrides, field):
        response = _create(client, product_id, **overrides)

        assert response.status_code == 400
        assert field in response.json()["errors"]

    def test_unknown_product(self, client):
        assert _create(client, "no-such-product").status_code == 404


class TestReadEndpoints:
    def test_get_review(self, client, product_id):
        review_id = _create(client, product_id).json()["review_id"]

        response = client.get(f"/reviews/{review_id}")

        assert response.status_code == 200
        assert response.json()["title"] == "Great laptop"

    def test_get_missing_review(self, client):
        assert client.get("/reviews/missing").status_code == 404

    def test_product_reviews(self, client, product_id):
        _create(client, product_id, rating=2)
        _create(client, product_id, rating=5)

        response = client.get(f"/reviews/product/{product_id}", params={"sortBy": "rating", "sortOrder": "asc"})

        assert response.status_code == 200
        assert [r["rating"] for r in response.json()["reviews"]] == [2, 5]
        assert response.json()["pagination"]["total"] == 2

    def test_statistics(self, client, product_id):
        for rating in (5, 4, 4, 3):
            _create(client, product_id, rating=rating, verifiedPurchase=rating == 5)

        response = client.get(f"/reviews/product/{product_id}/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["product_id"] == product_id
        assert data["total_reviews"] == 4
        assert data["average_rating"] == 4.0
        assert data["rating_distribution"] == {"1": 0, "2": 0, "3": 1, "4": 2, "5": 1}
        assert data["rating_percentages"]["4"] == 50.0
        assert data["verified_purchases"] == 1

    def test_statistics_without_reviews(self, client, product_id):
        data = client.get(f"/reviews/product/{product_id}/stats").json()
        assert data["total_reviews"] == 0
        assert data["average_rating"] == 0


class TestSearchEndpoint:
    def test_min_rating(self, client, product_id):
        for rating in (2, 3, 4, 5):
            _create(client, product_id, rating=rating)

        response = client.get("/reviews/search", params={"productId": product_id, "minRating": 4})

        assert response.status_code == 200
        assert sorted(r["rating"] for r in response.json()["reviews"]) == [4, 5]
        assert response.json()["filters"]["min_rating"] == 4

    def test_has_pros_cons(self, client, product_id):
        _create(client, product_id, pros=["fast"], cons=["heavy"])
        _create(client, product_id, pros=["fast"])

        response = client.get("/reviews/search", params={"hasProsCons": "true"})

        assert response.json()["pagination"]["total"] == 1

    def test_invalid_sort_field(self, client):
        response = client.get("/reviews/search", params={"sortBy": "content"})
        assert response.status_code == 400
        assert "sort_by" in response.json()["errors"]

    def test_limit_out_of_range(self, client):
        assert client.get("/reviews/search", params={"limit": 500}).status_code == 400


class TestUpdateReviewEndpoint:
    def test_partial_update(self, client, product_id):
        review_id = _create(client, product_id, rating=5).json()["review_id"]

        response = client.patch(f"/reviews/{review_id}", json={"rating": 1})

        assert response.status_code == 200
        assert response.json()["message"] == "Review updated successfully"
        assert response.json()["review"]["rating"] == 1
        assert response.json()["review"]["title"] == "Great laptop"
        assert client.get(f"/products/{product_id}").json()["average_rating"] == 1.0

    def test_put_is_accepted(self, client, product_id):
        review_id = _create(client, product_id).json()["review_id"]
        response = client.put(f"/reviews/{review_id}", json={"title": "Changed title"})
        assert response.json()["review"]["title"] == "Changed title"

    def test_invalid_rating(self, client, product_id):
        review_id = _create(client, product_id).json()["review_id"]
        assert client.patch(f"/reviews/{review_id}", json={"rating": 7}).status_code == 400

    def test_missing_review(self, client):
        assert client.patch("/reviews/missing", json={"rating": 3}).status_code == 404


class TestDeleteReviewEndpoint:
    def test_delete(self, client, product_id):
        review_id = _create(client, product_id).json()["review_id"]

        response = client.delete(f"/reviews/{review_id}")

        assert response.status_code == 200
        assert response.json()["message"] == "Review deleted successfully"
        assert client.get(f"/products/{product_id}").json()["total_reviews"] == 0

    def test_missing_review(self, client):
        assert client.delete("/reviews/missing").status_code == 404


class TestHelpfulVotesEndpoint:
    def test_upvote_and_downvote(self, client, product_id):
        review_id = _create(client, product_id).json()["review_id"]

        up = client.patch(f"/reviews/{review_id}/helpful", json={"increment": True})
        down = client.patch(f"/reviews/{review_id}/helpful", json={"increment": False})

        assert up.json() == {"message": "Review upvoted successfully", "helpful_votes": 1}
        assert down.json() == {"message": "Review downvoted successfully", "helpful_votes": 0}

    def test_downvote_at_zero(self, client, product_id):
        review_id = _create(client, product_id).json()["review_id"]

        response = client.patch(f"/reviews/{review_id}/helpful", json={"increment": False})

        assert response.status_code == 400
        assert response.json()["message"] == "Helpful votes cannot go below 0"

    def test_increment_required(self, client, product_id):
        review_id = _create(client, product_id).json()["review_id"]
        assert client.patch(f"/reviews/{review_id}/helpful", json={}).status_code == 400
