"""Rule-based parsing of buyer queries into tags and a price ceiling."""

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from .synonyms import SynonymNormalizer

# Split on whitespace and the , + & / delimiters.
_SPLIT_RE = re.compile(r"[\s,+&/]+")

# Characters trimmed from both ends of every token ("offer?" -> "offer").
_TOKEN_STRIP = "!\"#$%'()*.:;<=>?@[\\]^_`{|}~"

# Price ceiling: "under 20k", "< 20", "max 15000", "dibawah 20rb", "budget 15 ribu",
# "under 1.5k". A one or two digit fraction is a decimal, three digits group thousands.
_PRICE_RE = re.compile(
    r"(?:\bunder|\bbelow|<=?|\bmax(?:imum)?|\bat\s+most|\bdibawah|\bdi\s+bawah"
    r"|\bkurang\s+dari|\bbudget)"
    r"\s*(?:rp\.?\s*)?"
    r"(\d+(?:[.,]\d{3})*)(?:[.,](\d{1,2})(?!\d))?"
    r"\s*(k|rb|ribu|thousand)?(?![a-z])",
    re.IGNORECASE,
)

# Literals below this are read as thousands ("under 20" means 20,000).
THOUSANDS_THRESHOLD = 500


class ParsedQuery(BaseModel):
    """Tags and constraints extracted from one buyer message."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="The raw query")
    tags: frozenset[str] = Field(default_factory=frozenset)
    max_price: int | None = Field(default=None, description="Inclusive price ceiling")

    @property
    def is_empty(self) -> bool:
        """True when the query carries no tags at all."""
        return not self.tags


def extract_max_price(text: str) -> int | None:
    """Return the first "at most N" price ceiling found in ``text``, if any.

    Examples:
      "nasi goreng under 20k" -> 20000
      "max 15000"             -> 15000
      "dibawah 25 ribu"       -> 25000
      "under 1.5k"            -> 1500

    """
    match = _PRICE_RE.search(text or "")
    if not match:
        return None

    literal, fraction, marker = match.groups()
    value = int(re.sub(r"[.,]", "", literal))
    if marker or value < THOUSANDS_THRESHOLD:
        return value * 1000 + int((fraction or "").ljust(3, "0"))
    return value


def tokenize(text: str) -> list[str]:
    """Lower-case and split ``text``; empty segments are dropped."""
    tokens: list[str] = []
    for raw in _SPLIT_RE.split((text or "").lower()):
        token = raw.strip(_TOKEN_STRIP)
        if token:
            tokens.append(token)
    return tokens


class QueryParser:
    """Turns free text into a :class:`ParsedQuery`."""

    def __init__(
        self,
        normalizer: SynonymNormalizer | None = None,
        phrases: Iterable[str] = (),
    ):
        """Initialize the parser.

        Args:
            normalizer: Synonym normalizer applied to every token.
            phrases: Multi-word tags (e.g. "ice cream") recognised as a whole when
                they appear in the text.

        """
        self.normalizer = normalizer or SynonymNormalizer()
        self.phrases = frozenset(p.strip().lower() for p in phrases if " " in p.strip())

    def parse(self, raw_query: str) -> ParsedQuery:
        """Parse ``raw_query``. Never raises; an empty query yields no tags."""
        tokens = tokenize(raw_query)
        tags = {self.normalizer.normalize(token) for token in tokens}

        if self.phrases and len(tokens) > 1:
            joined = f" {' '.join(tokens)} "
            tags.update(phrase for phrase in self.phrases if f" {phrase} " in joined)

        return ParsedQuery(
            text=raw_query or "",
            tags=frozenset(tags),
            max_price=extract_max_price(raw_query),
        )
