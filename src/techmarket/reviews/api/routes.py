"""FastAPI routes for product reviews.

Each write route translates its Pydantic schema into a Protean command.
Statistics, listing and search read through the review repository.
"""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from techmarket.reviews.api.schemas import (
    CreateReviewRequest,
    HelpfulVoteRequest,
    HelpfulVotesResponse,
    ReviewDeletedResponse,
    ReviewEnvelope,
    ReviewListResponse,
    ReviewResponse,
    ReviewSearchResponse,
    ReviewStatisticsResponse,
    UpdateReviewRequest,
)
from techmarket.reviews.review.editing import UpdateReview
from techmarket.reviews.review.removal import DeleteReview
from techmarket.reviews.review.review import Review
from techmarket.reviews.review.submission import CreateReview
from techmarket.reviews.review.voting import SetHelpfulVotes
from techmarket.reviews.search import product_reviews, search_reviews
from techmarket.reviews.statistics import compute_statistics

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


def review_response(review) -> ReviewResponse:
    return ReviewResponse(
        id=str(review.id),
        product_id=str(review.product_id),
        user_id=str(review.user_id),
        rating=review.rating,
        title=review.title,
        content=review.content,
        pros=review.pros_list,
        cons=review.cons_list,
        verified_purchase=bool(review.verified_purchase),
        helpful_votes=review.helpful_votes or 0,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
@review_router.get("/search", response_model=ReviewSearchResponse)
async def search(
    product_id: str | None = Query(default=None, alias="productId"),
    query: str | None = None,
    min_rating: int | None = Query(default=None, alias="minRating", ge=1, le=5),
    max_rating: int | None = Query(default=None, alias="maxRating", ge=1, le=5),
    verified_purchase: bool | None = Query(default=None, alias="verifiedPurchase"),
    has_pros_cons: bool | None = Query(default=None, alias="hasProsCons"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    page: int = 1,
    limit: int = 10,
) -> ReviewSearchResponse:
    """Search reviews by product, text, rating range, verification and pros/cons."""
    result = search_reviews(
        product_id=product_id,
        query=query,
        min_rating=min_rating,
        max_rating=max_rating,
        verified_purchase=verified_purchase,
        has_pros_cons=has_pros_cons,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return ReviewSearchResponse(
        reviews=[review_response(r) for r in result["reviews"]],
        pagination=result["pagination"],
        filters=result["filters"],
    )


@review_router.get("/product/{product_id}/stats", response_model=ReviewStatisticsResponse)
async def product_statistics(product_id: str) -> ReviewStatisticsResponse:
    """Rating statistics computed from the product's current reviews."""
    return ReviewStatisticsResponse(product_id=product_id, **compute_statistics(product_id))


@review_router.get("/product/{product_id}", response_model=ReviewListResponse)
async def list_product_reviews(
    product_id: str,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    page: int = 1,
    limit: int = 10,
) -> ReviewListResponse:
    """One page of a product's reviews, newest first by default."""
    result = product_reviews(product_id, sort_by=sort_by, sort_order=sort_order, page=page, limit=limit)
    return ReviewListResponse(
        reviews=[review_response(r) for r in result["reviews"]],
        pagination=result["pagination"],
    )


@review_router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: str) -> ReviewResponse:
    return review_response(current_domain.repository_for(Review).get(review_id))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=ReviewEnvelope)
async def create_review(body: CreateReviewRequest) -> ReviewEnvelope:
    """Submit a review and refresh the product's rating summary."""
    command = CreateReview(
        product_id=body.product_id,
        user_id=body.user_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
        pros=json.dumps(body.pros),
        cons=json.dumps(body.cons),
        verified_purchase=body.verified_purchase,
    )
    review_id = current_domain.process(command, asynchronous=False)
    review = current_domain.repository_for(Review).get(review_id)
    return ReviewEnvelope(
        message="Review created successfully",
        review_id=review_id,
        review=review_response(review),
    )


@review_router.put("/{review_id}", response_model=ReviewEnvelope)
@review_router.patch("/{review_id}", response_model=ReviewEnvelope)
async def update_review(review_id: str, body: UpdateReviewRequest) -> ReviewEnvelope:
    """Apply a partial update to a review."""
    command = UpdateReview(
        review_id=review_id,
        rating=body.rating,
        title=body.title,
        content=body.content,
        pros=json.dumps(body.pros) if body.pros is not None else None,
        cons=json.dumps(body.cons) if body.cons is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    review = current_domain.repository_for(Review).get(review_id)
    return ReviewEnvelope(
        message="Review updated successfully",
        review_id=review_id,
        review=review_response(review),
    )


@review_router.delete("/{review_id}", response_model=ReviewDeletedResponse)
async def delete_review(review_id: str) -> ReviewDeletedResponse:
    current_domain.process(DeleteReview(review_id=review_id), asynchronous=False)
    return ReviewDeletedResponse(message="Review deleted successfully", review_id=review_id)


@review_router.patch("/{review_id}/helpful", response_model=HelpfulVotesResponse)
async def vote_helpful(review_id: str, body: HelpfulVoteRequest) -> HelpfulVotesResponse:
    """Add (``increment: true``) or take away one helpful vote."""
    helpful_votes = current_domain.process(
        SetHelpfulVotes(review_id=review_id, increment=body.increment),
        asynchronous=False,
    )
    return HelpfulVotesResponse(
        message=f"Review {'upvoted' if body.increment else 'downvoted'} successfully",
        helpful_votes=helpful_votes,
    )
