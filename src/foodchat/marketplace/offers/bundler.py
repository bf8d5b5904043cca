"""Group catalog entries into discounted bundles."""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from ...platform.idgen import SequentialIdGenerator
from ..shared.models import CatalogEntry, SpecialOffer

logger = logging.getLogger(__name__)

DEFAULT_DYNAMIC_DISCOUNT = 10
MIN_BUNDLE_TAGS = 2
MIN_BUNDLE_ENTRIES = 2
MAX_BUNDLE_ENTRIES = 3

_THEMES: dict[str, str] = {
    "spicy": "Spicy Adventure",
    "sweet": "Sweet Tooth Treat",
    "savory": "Savory Feast",
    "healthy": "Healthy Choice",
    "vegetarian": "Green Plate",
    "cheap": "Budget Saver",
    "cold": "Cool Down",
    "refreshing": "Cool Down",
    "korean": "Taste of Seoul",
    "indonesian": "Nusantara Favorites",
    "western": "Western Classics",
    "fried": "Crispy Crunch",
    "rice": "Rice Lovers",
    "noodle": "Noodle Night",
    "chicken": "Chicken Party",
    "fast": "Quick Bites",
}


def theme_for_tag(tag: str) -> str:
    """Human readable bundle theme for a dominant tag."""
    return _THEMES.get(tag, f"{tag.title()} Bundle")


class OfferBundler:
    """Builds themed bundles from search results."""

    def __init__(
        self,
        discount_percent: int = DEFAULT_DYNAMIC_DISCOUNT,
        id_generator: SequentialIdGenerator | None = None,
    ):
        """Initialize the bundler.

        Args:
            discount_percent: Fixed discount for every dynamic bundle.
            id_generator: Source of offer ids; defaults to ``DYN-1``, ``DYN-2``, ...

        """
        self.discount_percent = discount_percent
        self._next_id = id_generator or SequentialIdGenerator(prefix="DYN", start=0)

    def build_dynamic(
        self, tags: Iterable[str], entries: Sequence[CatalogEntry]
    ) -> SpecialOffer | None:
        """Synthesize a bundle from ranked ``entries``.

        Needs at least two tags and two distinct entries; takes the top three
        distinct entries (or two when only two exist).

        Returns:
            The bundle, or None when there is not enough to bundle.

        """
        tag_set = frozenset(tags)
        if len(tag_set) < MIN_BUNDLE_TAGS:
            return None

        picked: list[CatalogEntry] = []
        seen: set[tuple[str, str]] = set()
        for entry in entries:
            if entry.key in seen:
                continue
            seen.add(entry.key)
            picked.append(entry)
            if len(picked) == MAX_BUNDLE_ENTRIES:
                break

        if len(picked) < MIN_BUNDLE_ENTRIES:
            return None

        dominant = self.dominant_tag(tag_set, picked)
        offer = SpecialOffer(
            id=self._next_id(),
            title=theme_for_tag(dominant),
            description=" + ".join(entry.item.name for entry in picked),
            entries=picked,
            discount_percent=self.discount_percent,
        )
        logger.debug(f"Built dynamic bundle {offer.id} ({offer.title})")
        return offer

    def bundle_or_list(
        self, tags: Iterable[str], entries: Sequence[CatalogEntry]
    ) -> SpecialOffer | list[CatalogEntry]:
        """Return a dynamic bundle, or the plain entries when none can be built."""
        offer = self.build_dynamic(tags, entries)
        if offer is None:
            return list(entries)
        return offer

    @staticmethod
    def dominant_tag(tags: frozenset[str], entries: Sequence[CatalogEntry]) -> str:
        """The query tag shared by most of ``entries``; alphabetical on ties."""
        counts: Counter[str] = Counter()
        for entry in entries:
            counts.update(entry.item.tags & tags)
        return min(tags, key=lambda tag: (-counts[tag], tag))
