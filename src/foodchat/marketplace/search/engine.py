"""Tag-based search over the catalog."""

import logging
from collections.abc import Iterable
from enum import Enum

from ..catalog.store import CatalogStore
from ..query import ParsedQuery
from ..shared.models import CatalogEntry
from .ranking import MATCH_WEIGHTS, RECOMMENDATION_WEIGHTS, ScoreWeights, rank_entries

logger = logging.getLogger(__name__)

DEFAULT_RESULT_LIMIT = 8


class SortMode(str, Enum):
    """How search results are ordered."""

    MATCH = "match"
    RATING = "rating"
    SPEED = "speed"


class TagMatch(str, Enum):
    """How query tags must match an item's tags."""

    ANY = "any"
    ALL = "all"


class SearchEngine:
    """Filters catalog entries by tags and price, then ranks them."""

    def __init__(
        self,
        catalog: CatalogStore,
        result_limit: int = DEFAULT_RESULT_LIMIT,
        recommendation_weights: ScoreWeights = RECOMMENDATION_WEIGHTS,
    ):
        """Initialize the engine.

        Args:
            catalog: The catalog to search.
            result_limit: Maximum number of entries returned by default.
            recommendation_weights: Weight table used by :meth:`recommend`.

        """
        self.catalog = catalog
        self.result_limit = result_limit
        self.recommendation_weights = recommendation_weights

    def filter(
        self,
        tags: Iterable[str],
        max_price: int | None = None,
        match: TagMatch = TagMatch.ANY,
    ) -> list[CatalogEntry]:
        """Entries that qualify for ``tags`` and ``max_price``, in catalog order.

        No tags means every entry qualifies. ``max_price`` is inclusive.
        """
        tag_set = frozenset(tags)
        results: list[CatalogEntry] = []
        for entry in self.catalog.entries():
            if tag_set:
                if match == TagMatch.ALL:
                    if not entry.item.has_all_tags(tag_set):
                        continue
                elif not entry.item.has_any_tag(tag_set):
                    continue
            if max_price is not None and entry.price > max_price:
                continue
            results.append(entry)
        return results

    def search(
        self,
        tags: Iterable[str],
        max_price: int | None = None,
        sort: SortMode = SortMode.MATCH,
        match: TagMatch = TagMatch.ANY,
        limit: int | None = None,
    ) -> list[CatalogEntry]:
        """Search the catalog.

        Args:
            tags: Canonical query tags; empty matches everything.
            max_price: Inclusive price ceiling.
            sort: Match score (default), item rating or preparation speed.
            match: Whether an item needs any (default) or all of the tags.
            limit: Maximum number of results; defaults to ``result_limit``.

        Returns:
            Ranked entries; an empty list when nothing qualifies.

        """
        tag_set = frozenset(tags)
        results = self.filter(tag_set, max_price, match)

        if sort == SortMode.RATING:
            results.sort(key=lambda e: e.item.rating, reverse=True)
        elif sort == SortMode.SPEED:
            results.sort(key=lambda e: e.item.prep_minutes)
        else:
            results = rank_entries(results, tag_set, MATCH_WEIGHTS)

        logger.debug(
            f"search tags={sorted(tag_set)} max_price={max_price} sort={sort.value}: "
            f"{len(results)} matches"
        )
        return results[: self._limit(limit)]

    def recommend(
        self,
        tags: Iterable[str],
        max_price: int | None = None,
        limit: int | None = None,
    ) -> list[CatalogEntry]:
        """Rank qualifying entries with the recommendation weight table."""
        tag_set = frozenset(tags)
        results = rank_entries(
            self.filter(tag_set, max_price), tag_set, self.recommendation_weights
        )
        return results[: self._limit(limit)]

    def search_query(
        self,
        query: ParsedQuery,
        sort: SortMode = SortMode.MATCH,
        match: TagMatch = TagMatch.ANY,
        limit: int | None = None,
    ) -> list[CatalogEntry]:
        """Search with the tags and price ceiling of a parsed query."""
        return self.search(query.tags, query.max_price, sort, match, limit)

    def _limit(self, limit: int | None) -> int:
        return self.result_limit if limit is None else max(limit, 0)
