"""Cart line-item management — commands and handler.

AddToCart finds or creates the user's cart. UpdateCartQuantity and
RemoveFromCart address a cart by id and fail when the cart or the product
line is missing.
"""

from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.cart.cart import Cart, CartChange, ensure_positive_quantity
from techmarket.catalogue.product.product import Product
from techmarket.domain import techmarket
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


@techmarket.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@techmarket.command(part_of="Cart")
class UpdateCartQuantity:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@techmarket.command(part_of="Cart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@techmarket.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        ensure_positive_quantity(command.quantity)
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_user(command.user_id)

        if cart is None:
            cart = Cart.create(
                user_id=command.user_id,
                product_id=command.product_id,
                quantity=command.quantity,
            )
            change = CartChange.CREATED
        else:
            change = cart.add_item(
                product_id=command.product_id,
                quantity=command.quantity,
            )

        repo.add(cart)

        logger.info(
            "Cart item added",
            cart_id=str(cart.id),
            user_id=str(command.user_id),
            product_id=str(command.product_id),
            quantity=command.quantity,
            change=change.value,
        )
        return {"cart_id": str(cart.id), "change": change.value}

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        ensure_positive_quantity(command.quantity)

        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.set_item_quantity(
            product_id=command.product_id,
            quantity=command.quantity,
        )
        repo.add(cart)

        logger.info(
            "Cart item quantity set",
            cart_id=str(cart.id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)

        logger.info(
            "Cart item removed",
            cart_id=str(cart.id),
            product_id=str(command.product_id),
        )
