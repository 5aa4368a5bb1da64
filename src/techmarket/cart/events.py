"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from techmarket.domain import techmarket


@techmarket.event(part_of="Cart")
class CartCreated:
    """A user's first add-to-cart created their cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    created_at = DateTime(required=True)


@techmarket.event(part_of="Cart")
class CartItemAdded:
    """A product not yet in the cart was added."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@techmarket.event(part_of="Cart")
class CartItemQuantityChanged:
    """The quantity of a product already in the cart changed (merge or overwrite)."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@techmarket.event(part_of="Cart")
class CartItemRemoved:
    """A product was removed from the cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
