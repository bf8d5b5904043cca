"""Launcher that wires the catalog, bus, order book and agents together."""

import logging
from types import TracebackType

from ..config import FoodChatConfig
from ..platform.bus import EventBus
from ..platform.idgen import SequentialIdGenerator
from .agents import AssistantAgent, BuyerAgent, ResponseHandler, SellerAgent
from .catalog import CatalogStore, load_catalog
from .messaging import ChatMessage
from .offers import OfferBundler
from .orders.book import OrderBook
from .search import SearchEngine

logger = logging.getLogger(__name__)


class FoodChatLauncher:
    """Builds one chat session and manages the lifetime of its agents.

    Use as an async context manager: agents subscribe on entry, and on exit
    every pending deferred message is flushed before the agents leave.

    Example:
        async with FoodChatLauncher(config) as session:
            session.buyer.send("spicy food under 20k")
            await session.bus.flush()

    """

    def __init__(
        self,
        config: FoodChatConfig | None = None,
        catalog: CatalogStore | None = None,
        order_ids: SequentialIdGenerator | None = None,
    ):
        """Initialize the launcher.

        Args:
            config: Session configuration; defaults come from the environment.
            catalog: Catalog to use instead of loading ``config.catalog_path``.
            order_ids: Order id generator, mainly for reproducible tests.

        """
        self.config = config or FoodChatConfig()
        self.catalog = (
            catalog if catalog is not None else load_catalog(self.config.catalog_path)
        )
        delays = self.config.delays

        self.bus: EventBus[ChatMessage] = EventBus()
        self.search = SearchEngine(self.catalog, result_limit=self.config.result_limit)
        self.bundler = OfferBundler(discount_percent=self.config.bundle_discount)
        self.orders = OrderBook(
            self.bus,
            id_generator=order_ids,
            busy_penalty_minutes=self.config.busy_penalty_minutes,
        )

        self.assistant = AssistantAgent(
            self.bus,
            ResponseHandler(
                self.config.assistant_name,
                self.catalog,
                self.search,
                self.bundler,
                popular_limit=self.config.popular_limit,
            ),
            latency=delays,
        )
        self.buyer = BuyerAgent(
            self.config.buyer_name,
            self.bus,
            self.orders,
            dispatch_delay=delays.order_dispatch,
        )
        self.sellers: dict[str, SellerAgent] = {
            seller.id: SellerAgent(seller, self.bus, self.orders, self.catalog)
            for seller in self.catalog.sellers
        }

    def seller(self, seller_id: str) -> SellerAgent:
        """The agent of one seller.

        Raises:
            KeyError: If the seller id is unknown.

        """
        try:
            return self.sellers[seller_id]
        except KeyError:
            raise KeyError(f"Unknown seller id: {seller_id}") from None

    def start(self) -> None:
        """Subscribe every agent to the bus."""
        self.buyer.start()
        self.assistant.start()
        for agent in self.sellers.values():
            agent.start()
        logger.info(
            f"Chat session started with {len(self.sellers)} sellers "
            f"(latency x{self.config.latency_scale})"
        )

    def stop(self) -> None:
        """Unsubscribe every agent."""
        for agent in self.sellers.values():
            agent.stop()
        self.assistant.stop()
        self.buyer.stop()

    async def __aenter__(self) -> "FoodChatLauncher":
        """Async context manager entry."""
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit."""
        try:
            await self.bus.flush()
        finally:
            self.stop()
