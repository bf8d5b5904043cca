"""Tests for the cart aggregator."""

import pytest

from foodchat.marketplace.cart import Cart
from foodchat.marketplace.shared.models import CatalogEntry, FoodCategory, MenuItem, Seller


@pytest.fixture
def other_entry() -> CatalogEntry:
    """An entry from a second seller."""
    seller = Seller(
        id="T002",
        name="Drinks Stall",
        category=FoodCategory.DRINKS,
        rating=4.2,
        menu=[MenuItem(id="T002-1", name="Es Teh", price=5000, rating=4.5, prep_minutes=5)],
    )
    return CatalogEntry(seller=seller, item=seller.menu[0])


class TestCart:
    """Test suite for Cart."""

    def test_add_merges_same_entry(self, entries):
        """Test adding the same entry twice yields one line."""
        cart = Cart()
        cart.add(entries[0])
        cart.add(entries[0])
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.total() == 30000
        assert cart.count() == 2

    def test_add_rejects_non_positive_quantity(self, entries):
        """Test zero and negative quantities are rejected."""
        cart = Cart()
        with pytest.raises(ValueError):
            cart.add(entries[0], 0)
        with pytest.raises(ValueError):
            cart.add(entries[0], -2)
        assert cart.is_empty

    def test_lines_keep_insertion_order(self, entries):
        """Test lines appear in the order they were first added."""
        cart = Cart()
        cart.add(entries[1])
        cart.add(entries[0], 3)
        cart.add(entries[1])
        assert [line.key for line in cart.items] == [("T001-2", "T001"), ("T001-1", "T001")]
        assert cart.total() == 2 * 18000 + 3 * 15000

    def test_items_is_a_snapshot(self, entries):
        """Test editing the snapshot leaves the cart unchanged."""
        cart = Cart()
        cart.add(entries[0])
        snapshot = cart.items
        snapshot[0].quantity = 10
        assert cart.items[0].quantity == 1

    def test_set_quantity(self, entries):
        """Test setting an explicit quantity."""
        cart = Cart()
        cart.add(entries[0])
        cart.set_quantity("T001-1", "T001", 4)
        assert cart.items[0].quantity == 4
        assert cart.items[0].total == 60000

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_set_quantity_non_positive_removes(self, entries, quantity: int):
        """Test a quantity of zero or less removes the line."""
        cart = Cart()
        cart.add(entries[0])
        cart.set_quantity("T001-1", "T001", quantity)
        assert cart.is_empty

    def test_absent_lines_are_no_ops(self, entries):
        """Test removing or updating a missing line does nothing."""
        cart = Cart()
        cart.add(entries[0])
        cart.remove("nope", "T001")
        cart.set_quantity("nope", "T001", 3)
        assert [line.key for line in cart.items] == [("T001-1", "T001")]

    def test_remove(self, entries):
        """Test removing an existing line."""
        cart = Cart()
        cart.add(entries[0])
        cart.add(entries[1])
        cart.remove("T001-1", "T001")
        assert [line.key for line in cart.items] == [("T001-2", "T001")]

    def test_dominant_seller(self, entries, other_entry):
        """Test the seller with the most units wins."""
        cart = Cart()
        cart.add(entries[0])
        cart.add(other_entry, 2)
        assert cart.dominant_seller().id == "T002"
        cart.add(entries[1], 2)
        assert cart.dominant_seller().id == "T001"

    def test_dominant_seller_tie_goes_to_first(self, entries, other_entry):
        """Test ties resolve to the first seller in the cart."""
        cart = Cart()
        cart.add(other_entry)
        cart.add(entries[0])
        assert cart.dominant_seller().id == "T002"

    def test_dominant_seller_empty(self):
        """Test an empty cart has no dominant seller."""
        assert Cart().dominant_seller() is None

    def test_clear(self, entries):
        """Test clearing empties the cart."""
        cart = Cart()
        cart.add(entries[0])
        cart.clear()
        assert cart.is_empty
        assert cart.total() == 0
