"""The buyer: chats, fills a cart and checks out."""

from ....errors import CheckoutError
from ....platform.bus import EventBus
from ...cart import Cart, CartItem
from ...messaging import (
    ChatMessage,
    NewOrderPayload,
    RecommendationPayload,
    SpecialOfferPayload,
)
from ...orders.book import OrderBook
from ...orders.models import CheckoutDetails, Order
from ...shared.models import CatalogEntry, SpecialOffer
from ..base import BaseChatAgent

DEFAULT_DISPATCH_DELAY = 0.5


class BuyerAgent(BaseChatAgent):
    """Buyer actor that owns the cart and places orders."""

    role = "buyer"

    def __init__(
        self,
        name: str,
        bus: EventBus[ChatMessage],
        orders: OrderBook,
        dispatch_delay: float = DEFAULT_DISPATCH_DELAY,
    ):
        """Initialize the buyer.

        Args:
            name: Display name of the buyer.
            bus: The shared event bus.
            orders: Order book that registers placed orders.
            dispatch_delay: Seconds before a placed order reaches its seller.

        """
        super().__init__(name, bus)
        self.orders = orders
        self.dispatch_delay = dispatch_delay
        self.cart = Cart()
        self.last_entries: list[CatalogEntry] = []
        self.last_offers: list[SpecialOffer] = []
        self.placed_orders: list[Order] = []

    def on_message(self, message: ChatMessage) -> None:
        """Track the latest recommendations and offers shown to the buyer."""
        if self.is_own(message) and message.type == "text":
            self.last_offers = []
        elif isinstance(message.payload, RecommendationPayload):
            self.last_entries = list(message.payload.entries)
        elif isinstance(message.payload, SpecialOfferPayload):
            self.last_offers.append(message.payload.offer)

    def send(self, text: str) -> ChatMessage:
        """Send a chat message to the assistant and sellers."""
        return self.say(text)

    def add_to_cart(self, entry: CatalogEntry, quantity: int = 1) -> CartItem:
        """Add ``quantity`` of ``entry`` to the cart.

        Raises:
            ValueError: If ``quantity`` is not positive.

        """
        line = self.cart.add(entry, quantity)
        self.logger.info(
            f"Added {quantity} x {entry.item.name} ({entry.seller.name}) to cart"
        )
        return line

    def add_offer(self, offer: SpecialOffer) -> None:
        """Add one of every item of a bundle to the cart."""
        for entry in offer.entries:
            self.cart.add(entry)
        self.logger.info(f"Added offer {offer.id} ({offer.title}) to cart")

    def update_quantity(self, item_id: str, seller_id: str, quantity: int) -> None:
        """Change a cart line's quantity; zero or less removes it."""
        self.cart.set_quantity(item_id, seller_id, quantity)

    def remove(self, item_id: str, seller_id: str) -> None:
        """Remove a cart line."""
        self.cart.remove(item_id, seller_id)

    def checkout(self, details: CheckoutDetails) -> Order:
        """Place an order with the seller holding most of the cart.

        The order reaches the seller as a ``new_order`` message after
        ``dispatch_delay`` seconds. The cart is emptied only on success.

        Raises:
            CheckoutError: If the cart is empty or a required field is blank.
                The cart is left untouched.

        """
        seller = self.cart.dominant_seller()
        if seller is None:
            raise CheckoutError("Your cart is empty")

        order = self.orders.create(details, self.cart.items, self.cart.total(), seller)
        self.placed_orders.append(order)
        self.cart.clear()

        self.bus.publish(
            ChatMessage.system(
                f"Order {order.id} placed with {seller.name}! "
                f"Est. {order.estimated_minutes} minutes."
            )
        )
        self.say_later(
            self.dispatch_delay,
            lambda: ChatMessage(
                sender_name=self.name,
                sender_role="buyer",
                body=f"New order {order.id}",
                payload=NewOrderPayload(order=order),
            ),
        )
        return order
