"""Score catalog entries against query tags with a configurable weight table.

Plain search and assistant recommendations share :func:`rank_entries`. Plain
search uses :data:`MATCH_WEIGHTS`, which only counts tag overlap; the
recommendation path adds bonuses for best sellers, store recommendations and
store rating through :data:`RECOMMENDATION_WEIGHTS`.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from ..shared.models import CatalogEntry


class ScoreWeights(BaseModel):
    """Weights applied by :func:`score_entry`."""

    model_config = ConfigDict(frozen=True)

    tag_match: float = Field(default=10.0, description="Per matching tag")
    best_seller: float = Field(default=0.0, description="Bonus for best sellers")
    recommended: float = Field(
        default=0.0, description="Bonus for store-recommended items"
    )
    store_rating: float = Field(default=0.0, description="Multiplier on store rating")
    item_rating: float = Field(default=0.0, description="Multiplier on item rating")


MATCH_WEIGHTS = ScoreWeights()
RECOMMENDATION_WEIGHTS = ScoreWeights(
    best_seller=15.0, recommended=10.0, store_rating=2.0
)


def score_entry(
    entry: CatalogEntry,
    tags: frozenset[str] | set[str],
    weights: ScoreWeights = MATCH_WEIGHTS,
) -> float:
    """Compute the relevance score of one entry.

    Args:
        entry: The (seller, item) pair to score.
        tags: Canonical query tags.
        weights: Weight table; the default gives 10 points per matching tag.

    Returns:
        float: The weighted score. Higher is better.

    """
    item = entry.item
    score = weights.tag_match * item.match_count(tags)
    if item.best_seller:
        score += weights.best_seller
    if item.recommended:
        score += weights.recommended
    score += weights.store_rating * entry.seller.rating
    score += weights.item_rating * item.rating
    return score


def rank_entries(
    entries: Iterable[CatalogEntry],
    tags: frozenset[str] | set[str],
    weights: ScoreWeights = MATCH_WEIGHTS,
) -> list[CatalogEntry]:
    """Order ``entries`` by descending score.

    The sort is stable, so ties keep their input (catalog) order.
    """
    scored = [(entry, score_entry(entry, tags, weights)) for entry in entries]
    scored = sorted(scored, key=lambda x: x[1], reverse=True)
    return [entry for entry, _ in scored]
