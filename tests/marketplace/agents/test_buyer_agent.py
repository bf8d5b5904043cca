"""Tests for the buyer agent: cart actions and checkout."""

import pytest

from foodchat.errors import CheckoutError
from foodchat.marketplace.messaging import NewOrderPayload
from foodchat.marketplace.orders import CheckoutDetails, OrderStatus

DETAILS = CheckoutDetails(
    name="Budi", phone="0812-3456-7890", address="Jl. Merdeka 10", notes="no onion"
)


class TestBuyerCart:
    """Test suite for the buyer's cart actions."""

    @pytest.mark.asyncio
    async def test_cart_actions(self, session, catalog):
        """Test add, update and remove go through to the cart."""
        buyer = session.buyer
        buyer.add_to_cart(catalog.get_entry("S005-1"), 2)
        buyer.add_to_cart(catalog.get_entry("S007-1"))
        buyer.update_quantity("S005-1", "S005", 3)
        buyer.remove("S007-1", "S007")
        assert [(line.key, line.quantity) for line in buyer.cart.items] == [
            (("S005-1", "S005"), 3)
        ]

    @pytest.mark.asyncio
    async def test_add_offer(self, session, catalog):
        """Test a bundle adds one of each of its items."""
        session.buyer.add_offer(catalog.get_offer("OFF-S003-1"))
        assert [line.key for line in session.buyer.cart.items] == [
            ("S003-1", "S003"),
            ("S003-4", "S003"),
        ]

    @pytest.mark.asyncio
    async def test_remembers_last_results(self, session):
        """Test the buyer keeps the last shown entries and offers."""
        session.buyer.send("nasi goreng under 20k")
        await session.bus.flush()
        assert session.buyer.last_entries[0].item.id == "S005-1"

        session.buyer.send("special offer")
        await session.bus.flush()
        assert len(session.buyer.last_offers) == 5

        session.buyer.send("special offer")
        await session.bus.flush()
        assert len(session.buyer.last_offers) == 5


class TestCheckout:
    """Test suite for BuyerAgent.checkout."""

    @pytest.mark.asyncio
    async def test_empty_phone_is_rejected(self, session, catalog):
        """Test a missing phone number leaves the cart intact and creates no order."""
        buyer = session.buyer
        buyer.add_to_cart(catalog.get_entry("S005-1"))

        with pytest.raises(CheckoutError) as exc_info:
            buyer.checkout(DETAILS.model_copy(update={"phone": ""}))

        assert exc_info.value.missing_fields == ["phone"]
        assert not buyer.cart.is_empty
        assert session.orders.orders() == []
        await session.bus.flush()
        assert session.bus.history == []

    @pytest.mark.asyncio
    async def test_empty_cart_is_rejected(self, session):
        """Test checkout needs at least one item."""
        with pytest.raises(CheckoutError, match="empty"):
            session.buyer.checkout(DETAILS)

    @pytest.mark.asyncio
    async def test_successful_checkout(self, session, catalog):
        """Test the order is placed, announced and delivered to its seller."""
        buyer = session.buyer
        buyer.add_to_cart(catalog.get_entry("S005-1"), 2)
        buyer.add_to_cart(catalog.get_entry("S007-1"))

        order = buyer.checkout(DETAILS)

        assert order.id == "ORD-1001"
        assert order.seller.id == "S005"
        assert order.subtotal == 2 * 15000 + 5000
        assert order.status == OrderStatus.PENDING
        assert order.estimated_minutes == 30
        assert buyer.cart.is_empty
        assert buyer.placed_orders == [order]
        assert session.bus.history[-1].body == (
            "Order ORD-1001 placed with Warteg Bahagia! Est. 30 minutes."
        )

        await session.bus.flush()
        new_order, confirmation = session.bus.history[-2:]
        assert isinstance(new_order.payload, NewOrderPayload)
        assert new_order.payload.order is order
        assert confirmation.sender_name == "Warteg Bahagia"
        assert confirmation.body == (
            "Order received! Warteg Bahagia is preparing your food. Est. 30 minutes."
        )
        assert catalog.get_seller("S005").queue_count == 1

    @pytest.mark.asyncio
    async def test_second_order_waits_longer(self, session, catalog):
        """Test queued orders push up the next estimate."""
        buyer = session.buyer
        buyer.add_to_cart(catalog.get_entry("S005-1"))
        buyer.checkout(DETAILS)
        await session.bus.flush()

        buyer.add_to_cart(catalog.get_entry("S005-3"))
        second = buyer.checkout(DETAILS)
        assert second.id == "ORD-1002"
        assert second.estimated_minutes == 40
