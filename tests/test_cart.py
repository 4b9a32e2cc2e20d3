import pytest
from pydantic import ValidationError

from checkout_service.cart import Cart
from checkout_service.errors import CheckoutError, InvalidArgumentError


class TestAddItem:

    def test_add_new_product_appends_line_item(self, coffee):
        cart = Cart()
        cart.add_item(coffee, 2)

        items = cart.get_items()
        assert len(items) == 1
        assert items[0].product == coffee
        assert items[0].quantity == 2

    def test_default_quantity_is_one(self, coffee):
        cart = Cart()
        cart.add_item(coffee)
        assert cart.get_items()[0].quantity == 1

    def test_same_product_accumulates_quantity(self, coffee):
        cart = Cart()
        cart.add_item(coffee, 2)
        cart.add_item(coffee, 1)

        items = cart.get_items()
        assert len(items) == 1
        assert items[0].quantity == 3

    def test_merge_keeps_first_add_order(self, coffee, mug):
        cart = Cart()
        cart.add_item(coffee, 1)
        cart.add_item(mug, 1)
        cart.add_item(coffee, 4)

        assert [i.product.id for i in cart.get_items()] == ["p1", "p2"]
        assert cart.get_items()[0].quantity == 5

    @pytest.mark.parametrize("quantity", [0, -1, -10])
    def test_non_positive_quantity_is_rejected(self, cart, coffee, quantity):
        before = cart.get_items()

        with pytest.raises(InvalidArgumentError) as exc_info:
            cart.add_item(coffee, quantity)

        assert exc_info.value.kind == "InvalidArgument"
        assert isinstance(exc_info.value, CheckoutError)
        assert isinstance(exc_info.value, ValueError)
        assert cart.get_items() == before


class TestRemoveItem:

    def test_remove_existing_product(self, cart):
        cart.remove_item("p1")
        assert [i.product.id for i in cart.get_items()] == ["p2"]

    def test_remove_missing_product_is_noop(self, cart):
        cart.remove_item("does-not-exist")
        assert len(cart) == 2

    def test_remove_last_item_empties_cart(self, coffee):
        cart = Cart()
        cart.add_item(coffee, 3)
        cart.remove_item(coffee.id)
        assert cart.is_empty()
        assert cart.get_items() == []


class TestGetItems:

    def test_repeated_calls_return_equal_sequences(self, cart):
        assert cart.get_items() == cart.get_items()

    def test_returned_list_does_not_alias_cart(self, cart, coffee):
        items = cart.get_items()
        items.clear()
        items.append("garbage")

        assert len(cart.get_items()) == 2

    def test_line_items_are_read_only_snapshots(self, cart, coffee):
        snapshot = cart.get_items()[0]
        with pytest.raises(ValidationError):
            snapshot.quantity = 100

        cart.add_item(coffee, 1)
        assert snapshot.quantity == 2
        assert cart.get_items()[0].quantity == 3
