"""Tests for the Cart aggregate root."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.reflection import declared_fields

from techmarket.cart.cart import Cart, CartChange
from techmarket.cart.events import (
    CartCreated,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
)


def _cart(product_id="p1", quantity=2):
    return Cart.create(user_id="user-1", product_id=product_id, quantity=quantity)


class TestCartConstruction:
    def test_element_type(self):
        from protean.utils import DomainObjects

        assert Cart.element_type == DomainObjects.AGGREGATE

    def test_declared_fields(self):
        fields = declared_fields(Cart)
        for name in ("user_id", "product_ids", "quantities", "created_at", "updated_at"):
            assert name in fields

    def test_create_holds_one_line_item(self):
        cart = _cart()
        assert cart.user_id == "user-1"
        assert cart.items_order == ["p1"]
        assert cart.quantity_map == {"p1": 2}
        assert cart.line_items == [("p1", 2)]
        assert cart.created_at is not None

    def test_create_raises_cart_created(self):
        cart = _cart()
        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartCreated)
        assert event.product_id == "p1"
        assert event.quantity == 2

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_create_rejects_non_positive_quantity(self, quantity):
        with pytest.raises(ValidationError) as exc:
            _cart(quantity=quantity)
        assert exc.value.messages["quantity"] == ["Quantity must be at least 1"]


class TestAddItem:
    def test_new_product_is_appended(self):
        cart = _cart()
        change = cart.add_item("p2", 1)

        assert change == CartChange.ADDED
        assert cart.items_order == ["p1", "p2"]
        assert cart.quantity_map == {"p1": 2, "p2": 1}
        assert isinstance(cart._events[-1], CartItemAdded)

    def test_existing_product_quantity_is_increased(self):
        cart = _cart(quantity=2)
        change = cart.add_item("p1", 3)

        assert change == CartChange.MERGED
        assert cart.items_order == ["p1"]
        assert cart.quantity_of("p1") == 5

        event = cart._events[-1]
        assert isinstance(event, CartItemQuantityChanged)
        assert event.previous_quantity == 2
        assert event.new_quantity == 5

    def test_zero_quantity_rejected_without_change(self):
        cart = _cart()
        with pytest.raises(ValidationError):
            cart.add_item("p2", 0)
        assert cart.items_order == ["p1"]

    def test_boolean_quantity_rejected(self):
        cart = _cart()
        with pytest.raises(ValidationError):
            cart.add_item("p2", True)


class TestSetItemQuantity:
    def test_quantity_is_overwritten(self):
        cart = _cart(quantity=2)
        cart.add_item("p2", 1)
        cart.set_item_quantity("p1", 7)

        assert cart.quantity_map == {"p1": 7, "p2": 1}
        assert cart.items_order == ["p1", "p2"]

    def test_unknown_product(self):
        cart = _cart()
        with pytest.raises(ObjectNotFoundError) as exc:
            cart.set_item_quantity("missing", 1)
        assert "Product not found in the cart" in str(exc.value)

    def test_non_positive_quantity(self):
        cart = _cart()
        with pytest.raises(ValidationError):
            cart.set_item_quantity("p1", 0)
        assert cart.quantity_of("p1") == 2


class TestRemoveItem:
    def test_removes_id_and_quantity_together(self):
        cart = _cart()
        cart.add_item("p2", 4)
        cart.remove_item("p1")

        assert cart.items_order == ["p2"]
        assert cart.quantity_map == {"p2": 4}
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_removing_last_item_leaves_empty_cart(self):
        cart = _cart()
        cart.remove_item("p1")

        assert cart.items_order == []
        assert cart.quantity_map == {}
        assert cart.line_items == []

    def test_unknown_product(self):
        cart = _cart()
        with pytest.raises(ObjectNotFoundError):
            cart.remove_item("missing")


class TestLockstepInvariant:
    def test_quantities_without_matching_product_rejected(self):
        cart = _cart()
        with pytest.raises(ValidationError) as exc:
            cart.quantities = '{"p1": 2, "ghost": 1}'
        assert "quantities" in exc.value.messages

    def test_duplicate_product_ids_rejected(self):
        cart = _cart()
        with pytest.raises(ValidationError) as exc:
            cart.product_ids = '["p1", "p1"]'
        assert "product_ids" in exc.value.messages
