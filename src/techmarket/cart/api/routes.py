"""FastAPI routes for shopping carts.

A user has at most one cart. Adding a product creates the cart on first use,
adding a product already in the cart increases its quantity, and the PATCH
route sets a line's quantity outright.
"""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from techmarket.cart.api.schemas import (
    AddToCartRequest,
    CartDeletedResponse,
    CartEnvelope,
    CartItemsResponse,
    CartLineItemResponse,
    CartProductDetail,
    CartResponse,
    FullCartResponse,
    UpdateCartItemRequest,
)
from techmarket.cart.cart import Cart, CartChange
from techmarket.cart.hydration import cart_items_for_user, full_cart_for_user
from techmarket.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from techmarket.cart.management import DeleteCart
from techmarket.catalogue.api.routes import category_response, product_response
from techmarket.identity.api.routes import user_response
from techmarket.reviews.api.routes import review_response

cart_router = APIRouter(prefix="/cart", tags=["cart"])

ADD_MESSAGES = {
    CartChange.CREATED.value: "Cart created and product added successfully",
    CartChange.ADDED.value: "Product added to cart successfully",
    CartChange.MERGED.value: "Product quantity updated successfully",
}


def cart_response(cart) -> CartResponse:
    return CartResponse(
        id=str(cart.id),
        user_id=str(cart.user_id),
        product_ids=cart.items_order,
        quantities=cart.quantity_map,
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


@cart_router.post("", response_model=CartEnvelope)
async def add_to_cart(body: AddToCartRequest) -> CartEnvelope:
    """Add a product to the user's cart, creating the cart if needed."""
    result = current_domain.process(
        AddToCart(user_id=body.user_id, product_id=body.product_id, quantity=body.quantity),
        asynchronous=False,
    )
    cart = current_domain.repository_for(Cart).get(result["cart_id"])
    return CartEnvelope(message=ADD_MESSAGES[result["change"]], cart=cart_response(cart))


@cart_router.get("/user/full/{user_id}", response_model=FullCartResponse)
async def get_full_cart(user_id: str) -> FullCartResponse:
    """The user's cart with owner details and products expanded."""
    full_cart = full_cart_for_user(user_id)
    user = full_cart["user"]
    return FullCartResponse(
        **cart_response(full_cart["cart"]).model_dump(),
        user=user_response(user) if user is not None else None,
        products=[
            CartProductDetail(
                product=product_response(entry["product"]),
                category=category_response(entry["category"]) if entry["category"] is not None else None,
                reviews=[review_response(review) for review in entry["reviews"]],
            )
            for entry in full_cart["products"]
        ],
    )


@cart_router.get("/user/{user_id}", response_model=CartItemsResponse)
async def get_cart_items(user_id: str) -> CartItemsResponse:
    """Line items of the user's cart, each joined with its product."""
    cart, items = cart_items_for_user(user_id)
    return CartItemsResponse(
        cart_id=str(cart.id),
        user_id=str(cart.user_id),
        items=[
            CartLineItemResponse(
                product_id=product_id,
                quantity=quantity,
                product=product_response(product) if product is not None else None,
            )
            for product_id, quantity, product in items
        ],
    )


@cart_router.patch("/{cart_id}/product/{product_id}", response_model=CartEnvelope)
async def update_cart_item(cart_id: str, product_id: str, body: UpdateCartItemRequest) -> CartEnvelope:
    current_domain.process(
        UpdateCartQuantity(cart_id=cart_id, product_id=product_id, quantity=body.quantity),
        asynchronous=False,
    )
    cart = current_domain.repository_for(Cart).get(cart_id)
    return CartEnvelope(message="Cart item updated successfully", cart=cart_response(cart))


@cart_router.delete("/{cart_id}/product/{product_id}", response_model=CartEnvelope)
async def remove_cart_item(cart_id: str, product_id: str) -> CartEnvelope:
    current_domain.process(RemoveFromCart(cart_id=cart_id, product_id=product_id), asynchronous=False)
    cart = current_domain.repository_for(Cart).get(cart_id)
    return CartEnvelope(message="Product removed from cart successfully", cart=cart_response(cart))


@cart_router.delete("/{cart_id}", response_model=CartDeletedResponse)
async def delete_cart(cart_id: str) -> CartDeletedResponse:
    current_domain.process(DeleteCart(cart_id=cart_id), asynchronous=False)
    return CartDeletedResponse(message="Cart deleted successfully", cart_id=cart_id)
