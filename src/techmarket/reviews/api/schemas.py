"""Pydantic request/response schemas for the Reviews API.

These are separate from Protean commands: the API layer is the external
contract, commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from techmarket.schemas import PaginationResponse, RequestModel

Point = Annotated[str, Field(min_length=2, max_length=100)]


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateReviewRequest(RequestModel):
    product_id: str
    user_id: str
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=3, max_length=100)
    content: str = Field(min_length=10, max_length=1000)
    pros: list[Point] = Field(default_factory=list, max_length=10)
    cons: list[Point] = Field(default_factory=list, max_length=10)
    verified_purchase: bool = False


class UpdateReviewRequest(RequestModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    title: str | None = Field(default=None, min_length=3, max_length=100)
    content: str | None = Field(default=None, min_length=10, max_length=1000)
    pros: list[Point] | None = Field(default=None, max_length=10)
    cons: list[Point] | None = Field(default=None, max_length=10)


class HelpfulVoteRequest(RequestModel):
    increment: bool


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewResponse(BaseModel):
    id: str
    product_id: str
    user_id: str
    rating: int
    title: str
    content: str
    pros: list[str] = []
    cons: list[str] = []
    verified_purchase: bool = False
    helpful_votes: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewEnvelope(BaseModel):
    message: str
    review_id: str
    review: ReviewResponse


class ReviewDeletedResponse(BaseModel):
    message: str
    review_id: str


class HelpfulVotesResponse(BaseModel):
    message: str
    helpful_votes: int


class ReviewStatisticsResponse(BaseModel):
    product_id: str
    total_reviews: int
    average_rating: float
    rating_distribution: dict[int, int]
    rating_percentages: dict[int, float]
    verified_purchases: int


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    pagination: PaginationResponse


class ReviewSearchFilters(BaseModel):
    product_id: str | None = None
    query: str | None = None
    min_rating: int | None = None
    max_rating: int | None = None
    verified_purchase: bool | None = None
    has_pros_cons: bool | None = None
    sort_by: str
    sort_order: str


class ReviewSearchResponse(ReviewListResponse):
    filters: ReviewSearchFilters
