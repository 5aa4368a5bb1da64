"""Read side of the cart store: carts joined with product details.

``cart_items_for_user`` returns the flat line-item view used by the cart
page; ``full_cart_for_user`` returns the cart record itself with the owning
user and every product expanded with its category and reviews.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from techmarket.cart.cart import Cart
from techmarket.catalogue.category.category import Category
from techmarket.catalogue.product.product import Product
from techmarket.identity.user.user import User
from techmarket.reviews.review.review import Review


def _lookup(aggregate_cls, identifier):
    if not identifier:
        return None
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        return None


def cart_items_for_user(user_id):
    """``(cart, [(product_id, quantity, product)])`` for a user with a non-empty cart."""
    cart = current_domain.repository_for(Cart).find_by_user(user_id)
    if cart is None or not cart.line_items:
        raise ObjectNotFoundError("Cart is empty for this user")

    products = {str(p.id): p for p in current_domain.repository_for(Product).find_many(cart.items_order)}
    return cart, [
        (product_id, quantity, products.get(product_id))
        for product_id, quantity in cart.line_items
    ]


def full_cart_for_user(user_id):
    """Cart, owner and expanded products as a dict of domain objects.

    Products that no longer exist are left out of ``products``; their ids stay
    in the cart.
    """
    cart = current_domain.repository_for(Cart).find_by_user(user_id)
    if cart is None:
        raise ObjectNotFoundError("Cart not found for this user")

    review_repo = current_domain.repository_for(Review)
    products = []
    for product in current_domain.repository_for(Product).find_many(cart.items_order):
        products.append(
            {
                "product": product,
                "category": _lookup(Category, product.category_id),
                "reviews": review_repo.for_product(product.id),
            }
        )

    return {
        "cart": cart,
        "user": _lookup(User, cart.user_id),
        "products": products,
    }
