"""Tests for Cart Store item management and derived totals."""

from decimal import Decimal

import pytest
from ordering.cart.line import CartLine


class TestAddItem:
    def test_add_item_creates_line(self, cart, keyboard):
        line = cart.add_item(keyboard)
        assert line.product_id == 1
        assert line.name == "Mechanical Keyboard"
        assert line.unit_price == Decimal("50")
        assert line.quantity == 1
        assert len(cart.lines) == 1

    def test_add_with_quantity(self, cart, keyboard):
        cart.add_item(keyboard, qty=3)
        assert cart.get(1).quantity == 3

    def test_adding_same_product_accumulates(self, cart, keyboard):
        cart.add_item(keyboard)
        cart.add_item(keyboard, qty=2)
        assert len(cart.lines) == 1
        assert cart.get(1).quantity == 3

    def test_lines_keep_insertion_order(self, cart, keyboard, mouse, cable):
        cart.add_item(mouse)
        cart.add_item(keyboard)
        cart.add_item(cable)
        cart.add_item(mouse)
        assert [line.product_id for line in cart.lines] == [2, 1, 3]

    def test_accepts_catalogue_dict(self, cart):
        cart.add_item({"id": 9, "name": "Monitor", "price": 199.5})
        assert cart.get(9).unit_price == Decimal("199.5")

    def test_zero_quantity_is_rejected(self, cart, keyboard):
        with pytest.raises(ValueError):
            cart.add_item(keyboard, qty=0)
        assert cart.is_empty


class TestSetQuantity:
    def test_sets_quantity(self, cart, keyboard):
        cart.add_item(keyboard)
        cart.set_quantity(1, 5)
        assert cart.get(1).quantity == 5

    def test_zero_removes_line(self, cart, keyboard):
        cart.add_item(keyboard)
        cart.set_quantity(1, 0)
        assert cart.get(1) is None
        assert cart.is_empty

    def test_negative_removes_line(self, cart, keyboard):
        cart.add_item(keyboard)
        cart.set_quantity(1, -2)
        assert cart.is_empty

    def test_unknown_product_is_noop(self, cart, keyboard):
        cart.add_item(keyboard)
        cart.set_quantity(999, 4)
        assert [line.product_id for line in cart.lines] == [1]
        assert cart.total_items() == 1


class TestRemoveAndClear:
    def test_remove_item(self, two_item_cart):
        two_item_cart.remove_item(1)
        assert [line.product_id for line in two_item_cart.lines] == [2]

    def test_remove_unknown_is_noop(self, two_item_cart):
        two_item_cart.remove_item(999)
        assert len(two_item_cart.lines) == 2

    def test_clear_empties_cart(self, two_item_cart):
        two_item_cart.clear()
        assert two_item_cart.is_empty
        assert two_item_cart.total_items() == 0
        assert two_item_cart.total_amount() == Decimal("0")


class TestTotals:
    def test_empty_cart_totals(self, cart):
        assert cart.total_items() == 0
        assert cart.total_amount() == Decimal("0")

    def test_totals_follow_lines(self, cart, keyboard, cable):
        cart.add_item(keyboard, qty=2)
        cart.add_item(cable, qty=3)
        assert cart.total_items() == 5
        assert cart.total_amount() == Decimal("129.97")

    def test_two_item_scenario(self, two_item_cart):
        assert two_item_cart.total_amount() == Decimal("110")


class TestSnapshots:
    def test_lines_snapshot_is_not_affected_by_later_mutation(self, cart, keyboard, mouse):
        cart.add_item(keyboard)
        snapshot = cart.lines
        cart.add_item(keyboard)
        cart.add_item(mouse)
        assert len(snapshot) == 1
        assert snapshot[0].quantity == 1

    def test_cart_line_rejects_invalid_values(self):
        with pytest.raises(ValueError):
            CartLine(product_id=1, name="Free thing", unit_price=Decimal("0"), quantity=1)
        with pytest.raises(ValueError):
            CartLine(product_id=1, name="Nothing", unit_price=Decimal("1"), quantity=0)
