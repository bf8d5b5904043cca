"""Order registry that drives status transitions and announces them."""

import logging
from collections.abc import Sequence

from ...errors import CheckoutError
from ...platform.bus import EventBus
from ...platform.idgen import SequentialIdGenerator
from ..cart.cart import CartItem
from ..messaging import ChatMessage, OrderUpdatePayload
from ..shared.models import Seller
from .models import CheckoutDetails, Order, OrderStatus

logger = logging.getLogger(__name__)

DEFAULT_BUSY_PENALTY_MINUTES = 20


class OrderBook:
    """Creates orders and applies status changes to them.

    Every status change is announced on the bus as an ``order_update`` message.
    """

    def __init__(
        self,
        bus: EventBus[ChatMessage],
        id_generator: SequentialIdGenerator | None = None,
        busy_penalty_minutes: int = DEFAULT_BUSY_PENALTY_MINUTES,
    ):
        """Initialize the order book.

        Args:
            bus: Bus that receives ``order_update`` messages.
            id_generator: Source of order ids; defaults to ``ORD-1001``, ``ORD-1002``, ...
            busy_penalty_minutes: Minutes added to the estimate when an order is
                marked busy.

        """
        self.bus = bus
        self.busy_penalty_minutes = busy_penalty_minutes
        self._next_id = id_generator or SequentialIdGenerator()
        self._orders: dict[str, Order] = {}

    def create(
        self,
        details: CheckoutDetails,
        items: Sequence[CartItem],
        subtotal: int,
        seller: Seller,
    ) -> Order:
        """Register a new PENDING order with the seller's current wait estimate.

        Raises:
            CheckoutError: If a required delivery field is blank or there are no items.

        """
        missing = details.missing_fields()
        if missing:
            raise CheckoutError(
                f"Please fill all required fields: {', '.join(missing)}",
                missing_fields=missing,
            )
        if not items:
            raise CheckoutError("Cannot place an order without items")

        order = Order(
            id=self._next_id(),
            customer_name=details.name,
            phone=details.phone,
            address=details.address,
            notes=details.notes,
            items=[item.model_copy() for item in items],
            subtotal=subtotal,
            seller=seller,
            estimated_minutes=seller.estimated_wait_time(),
        )
        self._orders[order.id] = order
        logger.info(
            f"Order {order.id} created for {seller.name} "
            f"(Rp {subtotal:,}, est. {order.estimated_minutes} min)"
        )
        return order

    def get(self, order_id: str) -> Order:
        """Look up an order.

        Raises:
            KeyError: If the order id is unknown.

        """
        try:
            return self._orders[order_id]
        except KeyError:
            raise KeyError(f"Unknown order id: {order_id}") from None

    def orders(self) -> list[Order]:
        """All orders, oldest first."""
        return list(self._orders.values())

    def orders_for(self, seller_id: str) -> list[Order]:
        """Orders placed with one seller, oldest first."""
        return [o for o in self._orders.values() if o.seller.id == seller_id]

    def active_orders_for(self, seller_id: str) -> list[Order]:
        """A seller's orders that are neither rejected nor completed."""
        return [o for o in self.orders_for(seller_id) if o.is_active]

    def set_status(self, order_id: str, status: OrderStatus) -> Order:
        """Move an order to ``status`` and publish an ``order_update`` message.

        Any transition is accepted. Entering BUSY delays the estimate by
        ``busy_penalty_minutes``.

        Raises:
            KeyError: If the order id is unknown.

        """
        order = self.get(order_id)
        order.status = status
        if status == OrderStatus.BUSY:
            order.estimated_minutes += self.busy_penalty_minutes

        logger.info(
            f"Order {order.id} -> {status.value} (est. {order.estimated_minutes} min)"
        )
        self.bus.publish(
            ChatMessage(
                sender_name="System",
                sender_role="system",
                body=f"Order {order.id} is now {status.value}",
                payload=OrderUpdatePayload(
                    order_id=order.id,
                    seller_id=order.seller.id,
                    status=status,
                    estimated_minutes=order.estimated_minutes,
                ),
            )
        )
        return order
