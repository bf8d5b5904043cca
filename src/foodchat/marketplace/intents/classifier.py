"""Ordered keyword cascade that routes a buyer message to an intent.

Rules are evaluated top to bottom and the first match wins, so the more
specific intents (greetings, offers, seller status) shadow the generic search
fallback. Keep the order of ``_RULES`` stable; conversation scripts depend on
it.
"""

import re
from collections.abc import Callable
from enum import Enum

from ..query.parser import extract_max_price
from ..search.engine import SortMode


class Intent(str, Enum):
    """What the buyer is asking for."""

    GREETING = "greeting"
    HELP = "help"
    THANKS = "thanks"
    SPECIAL_OFFER = "special_offer"
    SELLER_STATUS = "seller_status"
    RECOMMENDATION = "recommendation"
    POPULAR = "popular"
    FILTERED_SEARCH = "filtered_search"
    SEARCH = "search"


# Longest vague request still treated as "recommend me something".
VAGUE_REQUEST_MAX_LENGTH = 50

_GREETING_RE = re.compile(
    r"(?:hi|hello|hey|halo|hai|pagi|siang|malam|selamat.*"
    r"|good\s+(?:morning|afternoon|evening))[!.?]*"
)
_HELP_RE = re.compile(r"help|bantuan|apa aja|what can|list menu|show menu")
_THANKS_RE = re.compile(r"thank|terima|makasih|thx")
_OFFER_RE = re.compile(r"special|offer|promo|diskon|discount|deal|bundle|paket")
_STATUS_RE = re.compile(r"\b(?:open|available|buka|tutup|busy)\b")
_RECOMMEND_RE = re.compile(r"recommend|suggest|rekomendasi|saranin|what should|apa yang")
_POPULAR_RE = re.compile(r"popular|favorit|favorite|best seller|bestseller|terlaris")
_DIETARY_RE = re.compile(
    r"\b(?:vegetarian|vegan|healthy|sehat|cheap|murah|hemat|halal|gluten)\b"
)

_RATING_RE = re.compile(r"\b(?:ratings?|rated|best|top|terbaik)\b")
_SPEED_RE = re.compile(r"\b(?:fastest|quick|quickest|quickly|cepat|tercepat)\b")


def _is_vague_recommendation(message: str) -> bool:
    return (
        bool(_RECOMMEND_RE.search(message))
        and "food" not in message
        and len(message) < VAGUE_REQUEST_MAX_LENGTH
    )


def _is_filtered_search(message: str) -> bool:
    return extract_max_price(message) is not None or bool(_DIETARY_RE.search(message))


_RULES: list[tuple[Intent, Callable[[str], bool]]] = [
    (Intent.GREETING, lambda m: _GREETING_RE.fullmatch(m) is not None),
    (Intent.HELP, lambda m: _HELP_RE.search(m) is not None),
    (Intent.THANKS, lambda m: _THANKS_RE.search(m) is not None),
    (Intent.SPECIAL_OFFER, lambda m: _OFFER_RE.search(m) is not None),
    (Intent.SELLER_STATUS, lambda m: _STATUS_RE.search(m) is not None),
    (Intent.RECOMMENDATION, _is_vague_recommendation),
    (Intent.POPULAR, lambda m: _POPULAR_RE.search(m) is not None),
    (Intent.FILTERED_SEARCH, _is_filtered_search),
]


def classify(message: str) -> Intent:
    """Classify a buyer message. Pure; falls back to :attr:`Intent.SEARCH`."""
    normalized = (message or "").strip().lower()
    for intent, predicate in _RULES:
        if predicate(normalized):
            return intent
    return Intent.SEARCH


def sort_mode_for(message: str) -> SortMode:
    """Pick the result ordering the buyer hinted at ("best", "fastest", ...)."""
    normalized = (message or "").strip().lower()
    if _RATING_RE.search(normalized):
        return SortMode.RATING
    if _SPEED_RE.search(normalized):
        return SortMode.SPEED
    return SortMode.MATCH
