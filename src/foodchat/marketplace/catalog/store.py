"""Read-only catalog of sellers, menu items and their special offers."""

import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, Field, ValidationError

from ...errors import CatalogError
from ..query import QueryParser, SynonymNormalizer
from ..shared.models import CatalogEntry, FoodCategory, MenuItem, Seller, SpecialOffer

logger = logging.getLogger(__name__)


class OfferSpec(BaseModel):
    """A static bundle as written in a catalog file."""

    id: str = Field(description="Offer ID")
    title: str = Field(description="Short headline")
    description: str = Field(default="", description="What the bundle contains")
    items: list[str] = Field(description="IDs of this seller's bundled menu items")
    discount_percent: int = Field(ge=0, le=100)


class SellerSpec(BaseModel):
    """A seller as written in a catalog file."""

    id: str
    name: str
    category: FoodCategory
    rating: float = Field(ge=0, le=5)
    distance_km: float = Field(default=0.0, ge=0)
    menu: list[MenuItem] = Field(default_factory=list)
    offers: list[OfferSpec] = Field(default_factory=list)


class CatalogSpec(BaseModel):
    """Complete catalog file contents."""

    sellers: list[SellerSpec] = Field(default_factory=list)
    synonyms: dict[str, str] = Field(default_factory=dict)


class CatalogStore:
    """Sellers and menu items indexed by id.

    The catalog is built once at startup. Duplicate ids are a corrupt catalog and
    fail immediately with :class:`CatalogError`.
    """

    def __init__(
        self,
        sellers: Iterable[Seller],
        offers: Iterable[SpecialOffer] = (),
        synonyms: Mapping[str, str] | None = None,
    ):
        """Index ``sellers`` and ``offers``.

        Raises:
            CatalogError: On duplicate seller, item or offer ids, or offers that
                reference sellers outside this catalog.

        """
        self._sellers: dict[str, Seller] = {}
        self._entries: list[CatalogEntry] = []
        self._entries_by_item: dict[str, CatalogEntry] = {}

        for seller in sellers:
            if seller.id in self._sellers:
                raise CatalogError(f"Duplicate seller id: {seller.id}")
            self._sellers[seller.id] = seller
            for item in seller.menu:
                if item.id in self._entries_by_item:
                    raise CatalogError(f"Duplicate menu item id: {item.id}")
                entry = CatalogEntry(seller=seller, item=item)
                self._entries.append(entry)
                self._entries_by_item[item.id] = entry

        self._offers: dict[str, SpecialOffer] = {}
        for offer in offers:
            if offer.id in self._offers:
                raise CatalogError(f"Duplicate offer id: {offer.id}")
            for entry in offer.entries:
                if self._sellers.get(entry.seller.id) is not entry.seller:
                    raise CatalogError(
                        f"Offer {offer.id} references seller {entry.seller.id} outside the catalog"
                    )
            self._offers[offer.id] = offer

        self.normalizer = SynonymNormalizer(synonyms)
        logger.debug(
            f"Catalog loaded: {len(self._sellers)} sellers, "
            f"{len(self._entries)} items, {len(self._offers)} offers"
        )

    @classmethod
    def from_spec(cls, spec: CatalogSpec) -> "CatalogStore":
        """Build a store from parsed catalog file contents."""
        sellers: list[Seller] = []
        offer_specs: list[tuple[Seller, OfferSpec]] = []
        for seller_spec in spec.sellers:
            seller = Seller(
                id=seller_spec.id,
                name=seller_spec.name,
                category=seller_spec.category,
                rating=seller_spec.rating,
                distance_km=seller_spec.distance_km,
                menu=seller_spec.menu,
            )
            sellers.append(seller)
            offer_specs.extend((seller, offer) for offer in seller_spec.offers)

        offers: list[SpecialOffer] = []
        for seller, offer_spec in offer_specs:
            entries: list[CatalogEntry] = []
            for item_id in offer_spec.items:
                item = seller.get_item(item_id)
                if item is None:
                    raise CatalogError(
                        f"Offer {offer_spec.id} references unknown item {item_id} "
                        f"of seller {seller.id}"
                    )
                entries.append(CatalogEntry(seller=seller, item=item))
            try:
                offers.append(
                    SpecialOffer(
                        id=offer_spec.id,
                        title=offer_spec.title,
                        description=offer_spec.description,
                        entries=entries,
                        discount_percent=offer_spec.discount_percent,
                    )
                )
            except ValidationError as e:
                raise CatalogError(f"Invalid offer {offer_spec.id}: {e}") from e

        return cls(sellers, offers, spec.synonyms)

    @property
    def sellers(self) -> list[Seller]:
        """All sellers in catalog order."""
        return list(self._sellers.values())

    def get_seller(self, seller_id: str) -> Seller | None:
        """Look up a seller by id."""
        return self._sellers.get(seller_id)

    def sellers_by_category(self, category: FoodCategory) -> list[Seller]:
        """Sellers of one kitchen category, in catalog order."""
        return [s for s in self._sellers.values() if s.category == category]

    def entries(self) -> list[CatalogEntry]:
        """Every (seller, item) pair in catalog order, busy sellers included."""
        return list(self._entries)

    def get_entry(self, item_id: str) -> CatalogEntry | None:
        """Look up the entry for a menu item id."""
        return self._entries_by_item.get(item_id)

    def get_offer(self, offer_id: str) -> SpecialOffer | None:
        """Look up a static offer by id."""
        return self._offers.get(offer_id)

    def offers_for(self, seller_id: str) -> list[SpecialOffer]:
        """Static offers owned by one seller."""
        return [
            offer
            for offer in self._offers.values()
            if offer.seller_ids == [seller_id]
        ]

    def all_offers(self) -> list[SpecialOffer]:
        """All static offers in catalog order."""
        return list(self._offers.values())

    def known_tags(self) -> frozenset[str]:
        """Every tag attached to at least one menu item."""
        tags: set[str] = set()
        for entry in self._entries:
            tags |= entry.item.tags
        return frozenset(tags)

    def query_parser(self) -> QueryParser:
        """A parser using this catalog's synonyms and multi-word tags."""
        return QueryParser(self.normalizer, phrases=self.known_tags())
