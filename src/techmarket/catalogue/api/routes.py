"""FastAPI routes for the Catalogue — categories and products.

Writes go through Protean commands; reads go straight to the repositories.
"""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from techmarket.catalogue.api.schemas import (
    CategoryEnvelope,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    ProductEnvelope,
    ProductListResponse,
    ProductResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from techmarket.catalogue.category.category import Category
from techmarket.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from techmarket.catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct
from techmarket.catalogue.product.product import Product
from techmarket.schemas import MessageResponse
from techmarket.utils.pagination import paginate

category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])

PRODUCT_SORTABLE_FIELDS = ("created_at", "name", "price", "average_rating", "total_reviews")


def category_response(category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        description=category.description,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


def product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        category_id=str(product.category_id) if product.category_id else None,
        attributes=product.attribute_map,
        stock_count=product.stock_count or 0,
        average_rating=product.average_rating or 0.0,
        total_reviews=product.total_reviews or 0,
        rating_distribution=product.distribution,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@category_router.post("", status_code=201, response_model=CategoryEnvelope)
async def create_category(body: CreateCategoryRequest) -> CategoryEnvelope:
    category_id = current_domain.process(
        CreateCategory(name=body.name, description=body.description),
        asynchronous=False,
    )
    category = current_domain.repository_for(Category).get(category_id)
    return CategoryEnvelope(message="Category created successfully", category=category_response(category))


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [category_response(c) for c in current_domain.repository_for(Category).list_all()]


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    return category_response(current_domain.repository_for(Category).get(category_id))


@category_router.put("/{category_id}", response_model=CategoryEnvelope)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> CategoryEnvelope:
    current_domain.process(
        UpdateCategory(category_id=category_id, name=body.name, description=body.description),
        asynchronous=False,
    )
    category = current_domain.repository_for(Category).get(category_id)
    return CategoryEnvelope(message="Category updated successfully", category=category_response(category))


@category_router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: str) -> MessageResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return MessageResponse(message="Category deleted successfully")


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductEnvelope)
async def create_product(body: CreateProductRequest) -> ProductEnvelope:
    command = CreateProduct(
        name=body.name,
        price=body.price,
        description=body.description,
        category_id=body.category_id,
        attributes=json.dumps(body.attributes) if body.attributes else None,
        stock_count=body.stock_count,
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ProductEnvelope(message="Product created successfully", product=product_response(product))


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    min_price: float | None = Query(default=None, alias="minPrice"),
    max_price: float | None = Query(default=None, alias="maxPrice"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    page: int = 1,
    limit: int = 10,
) -> ProductListResponse:
    products = current_domain.repository_for(Product).search(
        category_id=category,
        min_price=min_price,
        max_price=max_price,
    )
    items, pagination = paginate(products, PRODUCT_SORTABLE_FIELDS, sort_by, sort_order, page, limit)
    return ProductListResponse(products=[product_response(p) for p in items], pagination=pagination)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return product_response(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=ProductEnvelope)
@product_router.patch("/{product_id}", response_model=ProductEnvelope)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductEnvelope:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        price=body.price,
        description=body.description,
        category_id=body.category_id,
        attributes=json.dumps(body.attributes) if body.attributes is not None else None,
        stock_count=body.stock_count,
    )
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ProductEnvelope(message="Product updated successfully", product=product_response(product))


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str) -> MessageResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product and its reviews deleted successfully")
