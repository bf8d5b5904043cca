"""Configuration management for the FoodChat simulation.

Every setting can be overridden through an environment variable, which makes it
easy to speed up the simulated latency in tests or point the CLI at another
catalog file without touching code.
"""

import logging
import os
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

TField = TypeVar("TField")


def EnvField(*env_vars: str, default: TField | None = None, **kwargs: Any) -> TField:  # noqa: N802, UP047
    """Create a Field that gets its default value from an environment variable."""

    def get_env_value():
        for env_var in env_vars:
            value = os.getenv(env_var)
            if value is not None:
                return value
        logger.debug(
            f"No environment variable found among: {env_vars}, using default value: {default}"
        )
        return default

    return Field(default_factory=get_env_value, validate_default=True, **kwargs)  # pyright: ignore[reportReturnType]


class LatencyConfig(BaseModel):
    """Simulated response delays, in seconds, before scaling."""

    greeting: float = 0.6
    help: float = 0.6
    thanks: float = 0.5
    offers_intro: float = 0.8
    offers_cards: float = 0.4
    seller_status: float = 0.6
    recommendation: float = 0.7
    popular: float = 0.7
    search_results: float = 0.8
    no_results: float = 0.7
    order_dispatch: float = 0.5

    def scaled(self, scale: float) -> "LatencyConfig":
        """Return a copy with every delay multiplied by ``scale``."""
        return LatencyConfig(
            **{name: value * scale for name, value in self.model_dump().items()}
        )


class FoodChatConfig(BaseModel):
    """Top level configuration for a FoodChat session."""

    catalog_path: Path | None = EnvField("FOODCHAT_CATALOG", default=None)
    latency_scale: float = EnvField(
        "FOODCHAT_LATENCY_SCALE", default=1.0, ge=0
    )
    result_limit: int = EnvField("FOODCHAT_RESULT_LIMIT", default=8, ge=1)
    popular_limit: int = EnvField("FOODCHAT_POPULAR_LIMIT", default=5, ge=1)
    bundle_discount: int = EnvField(
        "FOODCHAT_BUNDLE_DISCOUNT", default=10, ge=0, le=100
    )
    busy_penalty_minutes: int = EnvField(
        "FOODCHAT_BUSY_PENALTY", default=20, ge=0
    )
    buyer_name: str = EnvField("FOODCHAT_BUYER_NAME", default="Customer")
    assistant_name: str = "FoodChat AI"
    latency: LatencyConfig = Field(default_factory=LatencyConfig)

    @property
    def delays(self) -> LatencyConfig:
        """Latency table with ``latency_scale`` applied."""
        return self.latency.scaled(self.latency_scale)
