"""Seller agent: receives orders, toggles busy and pushes promotions."""

from ....platform.bus import EventBus
from ...catalog.store import CatalogStore
from ...messaging import (
    ChatMessage,
    NewOrderPayload,
    OrderUpdatePayload,
    SpecialOfferPayload,
)
from ...orders.book import OrderBook
from ...orders.models import Order, OrderStatus
from ...shared.models import Seller
from ..base import BaseChatAgent


class SellerAgent(BaseChatAgent):
    """The single owner of one seller's ``busy`` flag and ``queue_count``."""

    role = "seller"

    def __init__(
        self,
        seller: Seller,
        bus: EventBus[ChatMessage],
        orders: OrderBook,
        catalog: CatalogStore,
    ):
        """Initialize the seller agent.

        Args:
            seller: The seller this agent runs.
            bus: The shared event bus.
            orders: Order book shared with the buyer.
            catalog: Catalog holding the seller's static offers.

        """
        super().__init__(seller.name, bus)
        self.seller = seller
        self.orders = orders
        self.catalog = catalog
        self.received_orders: list[Order] = []

    @property
    def id(self) -> str:
        """The seller id."""
        return self.seller.id

    def on_message(self, message: ChatMessage) -> None:
        """Take new orders and status updates addressed to this seller."""
        payload = message.payload
        if isinstance(payload, NewOrderPayload) and payload.seller_id == self.id:
            self.receive_order(payload.order)
        elif isinstance(payload, OrderUpdatePayload) and payload.seller_id == self.id:
            self._refresh_queue()

    def receive_order(self, order: Order) -> None:
        """Take a new order into the queue and confirm it to the buyer."""
        self.received_orders.append(order)
        self._refresh_queue()
        self.logger.info(
            f"{self.seller.name} received order {order.id} "
            f"(queue: {self.seller.queue_count})"
        )
        self.say(
            f"Order received! {self.seller.name} is preparing your food. "
            f"Est. {order.estimated_minutes} minutes."
        )

    def set_busy(self, busy: bool) -> None:
        """Mark the seller busy or open again and tell everyone."""
        self.seller.busy = busy
        self.logger.info(f"{self.seller.name} busy={busy}")
        if busy:
            body = f"{self.seller.name} is currently busy. Orders may take longer."
        else:
            body = f"{self.seller.name} is back and ready for orders!"
        self.bus.publish(ChatMessage.system(body))

    def send_offer(self, offer_id: str) -> bool:
        """Push one of this seller's static offers to the chat.

        Returns:
            False when the seller has no offer with that id.

        """
        offer = next(
            (o for o in self.catalog.offers_for(self.id) if o.id == offer_id), None
        )
        if offer is None:
            self.logger.warning(f"{self.seller.name} has no offer {offer_id}")
            return False

        self.bus.publish(
            ChatMessage(
                sender_name=self.name,
                sender_role=self.role,
                body=f"Special Offer! {offer.title}",
                payload=SpecialOfferPayload(offer=offer),
            )
        )
        return True

    def advance_order(self, order_id: str, status: OrderStatus) -> Order:
        """Move one of this seller's orders to ``status``.

        Raises:
            KeyError: If the order is unknown or belongs to another seller.

        """
        order = self.orders.get(order_id)
        if order.seller.id != self.id:
            raise KeyError(f"Order {order_id} does not belong to {self.id}")
        return self.orders.set_status(order_id, status)

    def send_message(self, text: str) -> ChatMessage:
        """Send a free-text message to the buyer."""
        return self.say(text)

    def _refresh_queue(self) -> None:
        self.seller.queue_count = len(self.orders.active_orders_for(self.id))
