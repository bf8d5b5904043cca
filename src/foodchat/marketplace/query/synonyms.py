"""Map Indonesian and colloquial words onto canonical catalog tags."""

from collections.abc import Mapping

# Indonesian -> English tag vocabulary used by the bundled catalog.
_DEFAULT_SYNONYMS: dict[str, str] = {
    # taste
    "manis": "sweet",
    "pedas": "spicy",
    "pedes": "spicy",
    "asin": "salty",
    "gurih": "savory",
    "asam": "sour",
    # temperature
    "es": "cold",
    "dingin": "cold",
    "panas": "hot",
    # food / drink
    "makanan": "food",
    "minuman": "drink",
    "nasi": "rice",
    "mie": "noodle",
    "mi": "noodle",
    "noodles": "noodle",
    "ayam": "chicken",
    "sapi": "beef",
    "ikan": "fish",
    "sayur": "vegetables",
    "sayuran": "vegetables",
    "buah": "fruit",
    "teh": "tea",
    "kopi": "coffee",
    # cuisine
    "korea": "korean",
    "indonesia": "indonesian",
    "barat": "western",
    # price / speed / health
    "murah": "cheap",
    "hemat": "cheap",
    "sehat": "healthy",
    "cepat": "fast",
    # cooking
    "goreng": "fried",
    "bakar": "grilled",
    "sup": "soup",
    "soto": "soup",
}


def default_synonyms() -> dict[str, str]:
    """Base synonym map. Catalog files can extend it with a ``synonyms`` section."""
    return dict(_DEFAULT_SYNONYMS)


class SynonymNormalizer:
    """Total mapping from a word to its canonical tag.

    Words without a dictionary entry are returned unchanged, so new tags work
    without a dictionary update.
    """

    def __init__(self, synonyms: Mapping[str, str] | None = None):
        """Initialize with the default dictionary, overridden by ``synonyms``."""
        table = default_synonyms()
        for word, tag in (synonyms or {}).items():
            table[word.strip().lower()] = tag.strip().lower()
        self._synonyms = table

    @property
    def synonyms(self) -> dict[str, str]:
        """A copy of the active synonym table."""
        return dict(self._synonyms)

    def normalize(self, token: str) -> str:
        """Return the canonical tag for ``token``, or ``token`` itself."""
        return self._synonyms.get(token.lower(), token)
