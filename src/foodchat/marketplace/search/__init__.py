"""Catalog search and ranking."""

from .engine import DEFAULT_RESULT_LIMIT, SearchEngine, SortMode, TagMatch
from .ranking import (
    MATCH_WEIGHTS,
    RECOMMENDATION_WEIGHTS,
    ScoreWeights,
    rank_entries,
    score_entry,
)

__all__ = [
    "DEFAULT_RESULT_LIMIT",
    "MATCH_WEIGHTS",
    "RECOMMENDATION_WEIGHTS",
    "ScoreWeights",
    "SearchEngine",
    "SortMode",
    "TagMatch",
    "rank_entries",
    "score_entry",
]
