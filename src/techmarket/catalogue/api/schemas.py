"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from techmarket.schemas import PaginationResponse, RequestModel

AttributeValue = str | float | int | bool


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateCategoryRequest(RequestModel):
    name: str = Field(min_length=2, max_length=50)
    description: str | None = None


class UpdateCategoryRequest(RequestModel):
    name: str | None = Field(default=None, min_length=2, max_length=50)
    description: str | None = None


class CreateProductRequest(RequestModel):
    name: str = Field(min_length=2, max_length=100)
    price: float = Field(ge=0)
    description: str | None = None
    category_id: str | None = None
    attributes: dict[str, AttributeValue] | None = None
    stock_count: int = Field(default=0, ge=0)


class UpdateProductRequest(RequestModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    category_id: str | None = None
    attributes: dict[str, AttributeValue] | None = None
    stock_count: int | None = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryEnvelope(BaseModel):
    message: str
    category: CategoryResponse


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    category_id: str | None = None
    attributes: dict[str, AttributeValue] = {}
    stock_count: int = 0
    average_rating: float = 0.0
    total_reviews: int = 0
    rating_distribution: dict[int, int]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductEnvelope(BaseModel):
    message: str
    product: ProductResponse


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: PaginationResponse
