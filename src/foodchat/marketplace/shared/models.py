"""Shared catalog models for the food marketplace."""

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

# Wait time used when a seller has nothing on the menu yet.
DEFAULT_BASE_WAIT_MINUTES = 20
QUEUE_DELAY_MINUTES = 10
DISPATCH_BUFFER_MINUTES = 5


class FoodCategory(str, Enum):
    """Kind of kitchen a seller runs."""

    PADANG = "padang"
    KOREAN = "korean"
    FASTFOOD = "fastfood"
    HEALTHY = "healthy"
    WARTEG = "warteg"
    DESSERT = "dessert"
    DRINKS = "drinks"


class MenuItem(BaseModel):
    """A dish or drink sold by one seller. Immutable once the catalog is loaded."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Menu item ID, unique across the catalog")
    name: str = Field(description="Display name")
    price: int = Field(description="Price in the smallest currency unit", ge=0)
    rating: float = Field(description="Average rating", ge=0, le=5)
    prep_minutes: int = Field(description="Preparation time in minutes", ge=0)
    category: str = Field(default="food", description="food, drink or dessert")
    tags: frozenset[str] = Field(
        default_factory=frozenset, description="Lower-cased search tags"
    )
    best_seller: bool = Field(default=False, description="Seller's best seller")
    recommended: bool = Field(default=False, description="Recommended by the store")

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return frozenset(tag.strip().lower() for tag in value if tag and tag.strip())

    def has_any_tag(self, tags: set[str] | frozenset[str]) -> bool:
        """Whether at least one of ``tags`` is attached to this item."""
        return not self.tags.isdisjoint(tags)

    def has_all_tags(self, tags: set[str] | frozenset[str]) -> bool:
        """Whether every one of ``tags`` is attached to this item."""
        return self.tags.issuperset(tags)

    def match_count(self, tags: set[str] | frozenset[str]) -> int:
        """Number of ``tags`` attached to this item."""
        return len(self.tags & tags)


class Seller(BaseModel):
    """A store on the marketplace.

    Everything except ``busy`` and ``queue_count`` is fixed after catalog load.
    Those two fields belong to the seller's own agent; other components only
    read them and accept that the value may be slightly stale.
    """

    id: str = Field(description="Seller ID")
    name: str = Field(description="Store name")
    category: FoodCategory = Field(description="Kind of kitchen")
    rating: float = Field(description="Store rating", ge=0, le=5)
    distance_km: float = Field(default=0.0, description="Distance to the buyer", ge=0)
    busy: bool = Field(default=False, description="Seller flagged itself as busy")
    queue_count: int = Field(default=0, description="Orders in the kitchen queue", ge=0)
    menu: list[MenuItem] = Field(default_factory=list, description="Ordered menu")

    def estimated_wait_time(self) -> int:
        """Minutes until a new order would arrive, computed from the current state."""
        base = max(
            (item.prep_minutes for item in self.menu), default=DEFAULT_BASE_WAIT_MINUTES
        )
        return base + self.queue_count * QUEUE_DELAY_MINUTES + DISPATCH_BUFFER_MINUTES

    def get_item(self, item_id: str) -> MenuItem | None:
        """Look up one of this seller's menu items."""
        for item in self.menu:
            if item.id == item_id:
                return item
        return None


class CatalogEntry(BaseModel):
    """A (seller, menu item) pair as returned by search. Never persisted."""

    model_config = ConfigDict(frozen=True)

    seller: Seller
    item: MenuItem

    @property
    def key(self) -> tuple[str, str]:
        """The ``(item id, seller id)`` pair identifying this entry."""
        return (self.item.id, self.seller.id)

    @property
    def price(self) -> int:
        """Price of the underlying item."""
        return self.item.price


class SpecialOffer(BaseModel):
    """A discounted bundle of at least two distinct catalog entries."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Offer ID", min_length=1)
    title: str = Field(description="Short headline")
    description: str = Field(default="", description="What the bundle contains")
    entries: list[CatalogEntry] = Field(
        description="Bundled entries, in display order"
    )
    discount_percent: int = Field(
        description="Discount applied to the bundle", ge=0, le=100
    )

    @model_validator(mode="after")
    def _require_two_distinct_entries(self):
        if len({entry.key for entry in self.entries}) < 2:
            raise ValueError("a special offer needs at least two distinct entries")
        return self

    @computed_field  # type: ignore[misc]
    @property
    def original_price(self) -> int:
        """Sum of the bundled entries' prices."""
        return sum(entry.price for entry in self.entries)

    @computed_field  # type: ignore[misc]
    @property
    def offer_price(self) -> int:
        """Discounted price, rounded down."""
        return self.original_price * (100 - self.discount_percent) // 100

    @computed_field  # type: ignore[misc]
    @property
    def savings(self) -> int:
        """How much the buyer saves compared to buying separately."""
        return self.original_price - self.offer_price

    @property
    def seller_ids(self) -> list[str]:
        """IDs of the sellers contributing to this bundle, in first-seen order."""
        return list(dict.fromkeys(entry.seller.id for entry in self.entries))
