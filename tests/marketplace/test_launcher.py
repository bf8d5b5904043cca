"""Tests for wiring a chat session together."""

from pathlib import Path

import pytest
import yaml

from foodchat.config import FoodChatConfig
from foodchat.marketplace.launcher import FoodChatLauncher


class TestFoodChatLauncher:
    """Test suite for FoodChatLauncher."""

    def test_builds_agents_for_every_seller(self, instant_config, catalog):
        """Test one seller agent is created per seller."""
        launcher = FoodChatLauncher(instant_config, catalog=catalog)
        assert sorted(launcher.sellers) == [s.id for s in catalog.sellers]
        assert launcher.buyer.name == "Customer"
        assert launcher.assistant.name == "FoodChat AI"

    def test_loads_catalog_path(self, tmp_path: Path):
        """Test the catalog file from the configuration is used."""
        path = tmp_path / "catalog.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "sellers": [
                        {
                            "id": "X",
                            "name": "Solo Stall",
                            "category": "drinks",
                            "rating": 4.0,
                            "menu": [
                                {
                                    "id": "X-1",
                                    "name": "Tea",
                                    "price": 5000,
                                    "rating": 4.0,
                                    "prep_minutes": 5,
                                    "tags": ["tea"],
                                }
                            ],
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        launcher = FoodChatLauncher(FoodChatConfig(catalog_path=path, latency_scale=0))
        assert list(launcher.sellers) == ["X"]

    @pytest.mark.asyncio
    async def test_exit_flushes_then_detaches(self, instant_config, catalog):
        """Test pending replies are delivered before agents leave the bus."""
        launcher = FoodChatLauncher(instant_config, catalog=catalog)
        async with launcher:
            launcher.buyer.send("hi")
        assert len(launcher.bus.history) == 2

        launcher.buyer.send("hi")
        assert launcher.bus.pending == 0

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, instant_config, catalog):
        """Test starting twice does not duplicate replies."""
        launcher = FoodChatLauncher(instant_config, catalog=catalog)
        launcher.start()
        launcher.start()
        launcher.buyer.send("hi")
        await launcher.bus.flush()
        assert len(launcher.bus.history) == 2
        launcher.stop()
