"""Cart management — whole-cart deletion.

Deletion is idempotent: an unknown cart id is not an error.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from techmarket.cart.cart import Cart
from techmarket.domain import techmarket
from techmarket.utils.logging import get_logger

logger = get_logger(__name__)


@techmarket.command(part_of="Cart")
class DeleteCart:
    cart_id = Identifier(required=True)


@techmarket.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(DeleteCart)
    def delete_cart(self, command):
        repo = current_domain.repository_for(Cart)
        try:
            cart = repo.get(command.cart_id)
        except ObjectNotFoundError:
            logger.debug("Cart already absent", cart_id=str(command.cart_id))
            return False

        repo._dao.delete(cart)
        logger.info("Cart deleted", cart_id=str(command.cart_id), user_id=str(cart.user_id))
        return True
