"""Free-text query handling: synonym normalization and query parsing."""

from .parser import ParsedQuery, QueryParser, extract_max_price
from .synonyms import SynonymNormalizer, default_synonyms

__all__ = [
    "ParsedQuery",
    "QueryParser",
    "SynonymNormalizer",
    "default_synonyms",
    "extract_max_price",
]
