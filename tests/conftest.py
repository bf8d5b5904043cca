"""Shared fixtures for FoodChat tests."""

import pytest
import pytest_asyncio

from foodchat.config import FoodChatConfig
from foodchat.marketplace.catalog import CatalogStore, load_default_catalog
from foodchat.marketplace.launcher import FoodChatLauncher
from foodchat.marketplace.messaging import ChatMessage
from foodchat.marketplace.search import SearchEngine
from foodchat.marketplace.shared.models import (
    CatalogEntry,
    FoodCategory,
    MenuItem,
    Seller,
)
from foodchat.platform.bus import EventBus
from foodchat.platform.idgen import SequentialIdGenerator


@pytest.fixture
def catalog() -> CatalogStore:
    """A fresh copy of the bundled demo catalog."""
    return load_default_catalog()


@pytest.fixture
def engine(catalog: CatalogStore) -> SearchEngine:
    """Search engine over the demo catalog."""
    return SearchEngine(catalog)


@pytest.fixture
def bus() -> EventBus[ChatMessage]:
    """An empty event bus."""
    return EventBus()


@pytest.fixture
def instant_config() -> FoodChatConfig:
    """Configuration without simulated latency."""
    return FoodChatConfig(latency_scale=0, catalog_path=None, buyer_name="Customer")


@pytest_asyncio.fixture
async def session(instant_config: FoodChatConfig, catalog: CatalogStore):
    """A started chat session with instant replies."""
    async with FoodChatLauncher(
        instant_config, catalog=catalog, order_ids=SequentialIdGenerator()
    ) as launcher:
        yield launcher


@pytest.fixture
def seller() -> Seller:
    """A small standalone seller."""
    return Seller(
        id="T001",
        name="Test Kitchen",
        category=FoodCategory.WARTEG,
        rating=4.5,
        menu=[
            MenuItem(
                id="T001-1",
                name="Nasi Goreng",
                price=15000,
                rating=4.5,
                prep_minutes=20,
                tags=["rice", "fried", "indonesian"],
            ),
            MenuItem(
                id="T001-2",
                name="Nasi Goreng Seafood",
                price=18000,
                rating=4.6,
                prep_minutes=25,
                tags=["rice", "fried", "seafood"],
            ),
            MenuItem(
                id="T001-3",
                name="Sate",
                price=25000,
                rating=4.7,
                prep_minutes=30,
                tags=["grilled", "chicken", "indonesian"],
            ),
        ],
    )


@pytest.fixture
def entries(seller: Seller) -> list[CatalogEntry]:
    """Entries for every item of the standalone seller."""
    return [CatalogEntry(seller=seller, item=item) for item in seller.menu]
