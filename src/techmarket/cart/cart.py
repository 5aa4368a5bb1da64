"""Cart aggregate — one cart per user, kept as a product id list plus a quantity map.

``product_ids`` is the ordered list of products in the cart and ``quantities``
maps each of those ids to a positive quantity. Both are stored as JSON and
always change together: every id in the list has exactly one positive entry in
the map and the map has no other keys.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier, Text

from techmarket.cart.events import (
    CartCreated,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
)
from techmarket.domain import techmarket


class CartChange(Enum):
    CREATED = "Created"
    ADDED = "Added"
    MERGED = "Merged"


def ensure_positive_quantity(quantity):
    """Reject anything but an integer of at least 1."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})


@techmarket.aggregate
class Cart:
    user_id = Identifier(required=True)
    product_ids = Text()  # JSON array of product ids, insertion order
    quantities = Text()  # JSON object: {product_id: quantity}
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_ids_and_quantities_in_lockstep(self):
        ids = self.items_order
        counts = self.quantity_map
        if len(ids) != len(set(ids)):
            raise ValidationError({"product_ids": ["A product can appear only once in the cart"]})
        if set(ids) != set(counts):
            raise ValidationError({"quantities": ["Quantities must match the products in the cart"]})
        if any(qty < 1 for qty in counts.values()):
            raise ValidationError({"quantities": ["Quantity must be at least 1"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, product_id, quantity):
        """Create a cart holding exactly one line item."""
        ensure_positive_quantity(quantity)

        now = datetime.now(UTC)
        product_id = str(product_id)
        cart = cls(
            user_id=user_id,
            product_ids=json.dumps([product_id]),
            quantities=json.dumps({product_id: quantity}),
            created_at=now,
            updated_at=now,
        )

        cart.raise_(
            CartCreated(
                cart_id=str(cart.id),
                user_id=str(user_id),
                product_id=product_id,
                quantity=quantity,
                created_at=now,
            )
        )
        return cart

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    @property
    def items_order(self):
        return json.loads(self.product_ids) if self.product_ids else []

    @property
    def quantity_map(self):
        return json.loads(self.quantities) if self.quantities else {}

    @property
    def line_items(self):
        """``(product_id, quantity)`` pairs in cart order."""
        counts = self.quantity_map
        return [(product_id, counts[product_id]) for product_id in self.items_order]

    def contains(self, product_id):
        return str(product_id) in self.items_order

    def quantity_of(self, product_id):
        return self.quantity_map.get(str(product_id))

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def _store(self, ids, counts):
        with atomic_change(self):
            self.product_ids = json.dumps(ids)
            self.quantities = json.dumps(counts)
            self.updated_at = datetime.now(UTC)

    def _require_item(self, product_id):
        if not self.contains(product_id):
            raise ObjectNotFoundError("Product not found in the cart")

    def add_item(self, product_id, quantity):
        """Add ``quantity`` of a product; an existing line item is increased, not replaced."""
        ensure_positive_quantity(quantity)

        product_id = str(product_id)
        ids = self.items_order
        counts = self.quantity_map

        if product_id in counts:
            previous = counts[product_id]
            counts[product_id] = previous + quantity
            self._store(ids, counts)
            self.raise_(
                CartItemQuantityChanged(
                    cart_id=str(self.id),
                    product_id=product_id,
                    previous_quantity=previous,
                    new_quantity=counts[product_id],
                )
            )
            return CartChange.MERGED

        ids.append(product_id)
        counts[product_id] = quantity
        self._store(ids, counts)
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=product_id,
                quantity=quantity,
            )
        )
        return CartChange.ADDED

    def set_item_quantity(self, product_id, quantity):
        """Overwrite the quantity of a product already in the cart."""
        ensure_positive_quantity(quantity)
        self._require_item(product_id)

        product_id = str(product_id)
        counts = self.quantity_map
        previous = counts[product_id]
        counts[product_id] = quantity
        self._store(self.items_order, counts)

        self.raise_(
            CartItemQuantityChanged(
                cart_id=str(self.id),
                product_id=product_id,
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        """Drop a product and its quantity from the cart."""
        self._require_item(product_id)

        product_id = str(product_id)
        ids = [pid for pid in self.items_order if pid != product_id]
        counts = self.quantity_map
        del counts[product_id]
        self._store(ids, counts)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=product_id,
            )
        )


@techmarket.repository(part_of=Cart)
class CartRepository:
    def find_by_user(self, user_id):
        """The cart owned by ``user_id``, or None."""
        results = self._dao.query.filter(user_id=str(user_id)).all().items
        return results[0] if results else None
