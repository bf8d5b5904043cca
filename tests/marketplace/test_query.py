"""Tests for synonym normalization and query parsing."""

import pytest

from foodchat.marketplace.query import (
    QueryParser,
    SynonymNormalizer,
    default_synonyms,
    extract_max_price,
)
from foodchat.marketplace.query.parser import tokenize


class TestSynonymNormalizer:
    """Test suite for SynonymNormalizer."""

    def test_maps_indonesian_words(self):
        """Test dictionary words map to canonical tags."""
        normalizer = SynonymNormalizer()
        assert normalizer.normalize("pedas") == "spicy"
        assert normalizer.normalize("manis") == "sweet"
        assert normalizer.normalize("nasi") == "rice"
        assert normalizer.normalize("goreng") == "fried"
        assert normalizer.normalize("korea") == "korean"

    def test_lookup_is_case_insensitive(self):
        """Test upper-case input still hits the dictionary."""
        assert SynonymNormalizer().normalize("PEDAS") == "spicy"

    @pytest.mark.parametrize("token", ["burger", "", "123", "!!", "ramen-ish"])
    def test_unknown_tokens_are_returned_unchanged(self, token: str):
        """Test normalization is total and never raises."""
        assert SynonymNormalizer().normalize(token) == token

    def test_extensions_override_defaults(self):
        """Test catalog synonyms extend and override the built-in map."""
        normalizer = SynonymNormalizer({"Nasi": "Nasi", "kfc": "chicken"})
        assert normalizer.normalize("nasi") == "nasi"
        assert normalizer.normalize("kfc") == "chicken"
        assert normalizer.normalize("pedas") == "spicy"

    def test_synonyms_property_is_a_copy(self):
        """Test callers cannot mutate the active table."""
        normalizer = SynonymNormalizer()
        normalizer.synonyms["pedas"] = "mild"
        assert normalizer.normalize("pedas") == "spicy"
        assert default_synonyms()["pedas"] == "spicy"


class TestExtractMaxPrice:
    """Test suite for price ceiling extraction."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("nasi goreng under 20k", 20000),
            ("something below 15", 15000),
            ("max 15000", 15000),
            ("< 25k please", 25000),
            ("<=30", 30000),
            ("dibawah 20rb", 20000),
            ("di bawah 25 ribu", 25000),
            ("kurang dari 12000", 12000),
            ("budget rp 15.000", 15000),
            ("at most 18,000", 18000),
            ("maximum 40 thousand", 40000),
            ("UNDER 20K", 20000),
        ],
    )
    def test_patterns(self, text: str, expected: int):
        """Test supported ceilings and thousand markers."""
        assert extract_max_price(text) == expected

    def test_small_literals_mean_thousands(self):
        """Test literals below 500 are read as thousands."""
        assert extract_max_price("under 499") == 499000
        assert extract_max_price("under 500") == 500

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("under 1.5k", 1500),
            ("dibawah 2,5 ribu", 2500),
            ("max 12.75k", 12750),
            ("below 1.5", 1500),
            ("budget 15.000", 15000),
            ("max 15000.50", 15000),
        ],
    )
    def test_decimal_fractions(self, text: str, expected: int):
        """Test short fractions are decimals while three digits group thousands."""
        assert extract_max_price(text) == expected

    def test_first_match_wins(self):
        """Test only the first ceiling is used."""
        assert extract_max_price("under 20k or under 30k") == 20000

    @pytest.mark.parametrize("text", ["", "spicy food", "20k", "korean kimchi"])
    def test_no_ceiling(self, text: str):
        """Test text without an "at most" phrase has no ceiling."""
        assert extract_max_price(text) is None

    def test_marker_must_follow_the_number(self):
        """Test a stray "k" elsewhere does not scale the value."""
        assert extract_max_price("korean under 5000") == 5000
        assert extract_max_price("under 20 kimchi") == 20000


class TestQueryParser:
    """Test suite for QueryParser."""

    def test_tokenize_splits_on_delimiters(self):
        """Test whitespace and , + & / delimiters and punctuation stripping."""
        assert tokenize("Spicy,sweet + rice&noodle / Tea?") == [
            "spicy",
            "sweet",
            "rice",
            "noodle",
            "tea",
        ]

    def test_parse_normalizes_and_collapses(self):
        """Test tokens are normalized and duplicates collapse."""
        query = QueryParser().parse("Pedas spicy  nasi")
        assert query.tags == frozenset({"spicy", "rice"})
        assert query.max_price is None

    def test_parse_extracts_price(self):
        """Test the price ceiling is attached to the parsed query."""
        query = QueryParser().parse("nasi goreng under 20k")
        assert {"rice", "fried"} <= query.tags
        assert query.max_price == 20000

    @pytest.mark.parametrize("text", ["", "   ", ",,,", "?!"])
    def test_empty_query_has_no_tags(self, text: str):
        """Test empty input degrades to an empty tag set."""
        query = QueryParser().parse(text)
        assert query.is_empty
        assert query.max_price is None

    def test_multi_word_phrases(self):
        """Test multi-word catalog tags are recognised as phrases."""
        parser = QueryParser(phrases=["ice cream", "street food", "spicy"])
        query = parser.parse("any ice cream?")
        assert "ice cream" in query.tags
        assert "street food" not in query.tags
        assert parser.phrases == frozenset({"ice cream", "street food"})

    def test_catalog_parser_uses_catalog_synonyms(self, catalog):
        """Test the catalog's parser applies its synonym extensions."""
        query = catalog.query_parser().parse("kfc and ramen")
        assert {"chicken", "noodle"} <= query.tags
