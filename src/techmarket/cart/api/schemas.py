"""Pydantic request/response schemas for the Cart API.

Quantities are plain integers here; the positive-quantity rule lives in the
domain so that every entry point reports it the same way.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from techmarket.catalogue.api.schemas import CategoryResponse, ProductResponse
from techmarket.identity.api.schemas import UserResponse
from techmarket.reviews.api.schemas import ReviewResponse
from techmarket.schemas import RequestModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(RequestModel):
    user_id: str
    product_id: str
    quantity: int


class UpdateCartItemRequest(RequestModel):
    quantity: int


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartResponse(BaseModel):
    id: str
    user_id: str
    product_ids: list[str]
    quantities: dict[str, int]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CartEnvelope(BaseModel):
    message: str
    cart: CartResponse


class CartLineItemResponse(BaseModel):
    product_id: str
    quantity: int
    product: ProductResponse | None = None


class CartItemsResponse(BaseModel):
    cart_id: str
    user_id: str
    items: list[CartLineItemResponse]


class CartProductDetail(BaseModel):
    product: ProductResponse
    category: CategoryResponse | None = None
    reviews: list[ReviewResponse] = []


class FullCartResponse(CartResponse):
    user: UserResponse | None = None
    products: list[CartProductDetail] = []


class CartDeletedResponse(BaseModel):
    message: str
    cart_id: str
