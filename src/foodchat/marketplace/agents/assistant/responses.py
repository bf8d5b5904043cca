"""Reply construction for the FoodChat assistant.

Each method builds the message(s) for one response path. Nothing here
publishes; the agent decides when replies go out.
"""

import logging

from ...catalog.store import CatalogStore
from ...intents import Intent, sort_mode_for
from ...messaging import ChatMessage, RecommendationPayload, SpecialOfferPayload
from ...offers import OfferBundler
from ...query import ParsedQuery, QueryParser
from ...search import SearchEngine, SortMode

logger = logging.getLogger(__name__)

DEFAULT_POPULAR_LIMIT = 5

# Below this budget the no-results reply suggests raising it.
LOW_BUDGET_THRESHOLD = 10_000

GREETING_TEXT = (
    "Hello! Welcome to FoodChat! What can I help you find today? "
    "Try: 'nasi goreng', 'korean food', 'special offer', or 'cheap food'"
)
HELP_TEXT = (
    "I can help you find:\n"
    "• Padang food\n"
    "• Korean dishes\n"
    "• Fast food\n"
    "• Healthy options\n"
    "• Warteg/local food\n"
    "• Desserts\n"
    "• Drinks\n\n"
    "Just tell me what you're craving! Or ask for 'special offer' for deals!"
)
THANKS_TEXT = "You're welcome! Anything else?"
OFFERS_INTRO_TEXT = "Here are today's special offers:"
MOOD_PROMPT_TEXT = (
    "What are you in the mood for?\n"
    "• Spicy (pedas)\n"
    "• Sweet (manis)\n"
    "• Healthy (sehat)\n"
    "• Fast/Quick (cepat)\n"
    "• Cheap (murah)\n\n"
    "Or tell me a category: Korean, Padang, Warteg, etc."
)
NOT_FOUND_TEXT = (
    "I couldn't find that. Try:\n"
    "• Specific foods: 'nasi goreng', 'burger', 'salad'\n"
    "• Categories: 'korean', 'padang', 'healthy'\n"
    "• Taste: 'spicy', 'sweet', 'savory'\n"
    "• Or just ask: 'what's popular?'"
)
POPULAR_TEXT = "Top-rated items across all sellers:"


def format_price(amount: int) -> str:
    """Format an amount in Rupiah, e.g. ``Rp 20,000``."""
    return f"Rp {amount:,}"


class ResponseHandler:
    """Builds assistant replies from the catalog, search engine and bundler."""

    def __init__(
        self,
        name: str,
        catalog: CatalogStore,
        search: SearchEngine,
        bundler: OfferBundler,
        popular_limit: int = DEFAULT_POPULAR_LIMIT,
    ):
        """Initialize the response handler.

        Args:
            name: Sender name of every reply.
            catalog: Catalog with sellers and static offers.
            search: Search engine over the same catalog.
            bundler: Builder for dynamic bundles.
            popular_limit: Number of items in the "popular" reply.

        """
        self.name = name
        self.catalog = catalog
        self.search = search
        self.bundler = bundler
        self.popular_limit = popular_limit
        self.parser: QueryParser = catalog.query_parser()

    def _text(self, body: str) -> ChatMessage:
        return ChatMessage.text(self.name, "seller", body)

    def _recommendations(self, body, entries) -> ChatMessage:
        return ChatMessage(
            sender_name=self.name,
            sender_role="seller",
            body=body,
            payload=RecommendationPayload(entries=list(entries)),
        )

    def parse(self, message: str) -> ParsedQuery:
        """Parse a buyer message with the catalog's vocabulary."""
        return self.parser.parse(message)

    def known_tags(self, query: ParsedQuery) -> frozenset[str]:
        """The query tags that appear on at least one menu item."""
        return query.tags & self.catalog.known_tags()

    def greeting(self) -> ChatMessage:
        """Welcome message with example queries."""
        return self._text(GREETING_TEXT)

    def help(self) -> ChatMessage:
        """What the buyer can ask for."""
        return self._text(HELP_TEXT)

    def thanks(self) -> ChatMessage:
        """Reply to a thank-you."""
        return self._text(THANKS_TEXT)

    def offers_intro(self) -> ChatMessage:
        """Header shown before the offer cards."""
        return self._text(OFFERS_INTRO_TEXT)

    def offer_message(self, offer) -> ChatMessage:
        """A single special offer card."""
        return ChatMessage(
            sender_name=self.name,
            sender_role="seller",
            body=(
                f"{offer.title}: {offer.description} "
                f"{format_price(offer.original_price)} -> {format_price(offer.offer_price)} "
                f"(Save {offer.discount_percent}%)"
            ),
            payload=SpecialOfferPayload(offer=offer),
        )

    def offer_cards(self, query: ParsedQuery) -> list[ChatMessage]:
        """Every static offer, followed by a bundle tailored to the query.

        When the query names food tags but no bundle can be built, the ranked
        entries are sent as a plain recommendation list instead.
        """
        messages = [self.offer_message(offer) for offer in self.catalog.all_offers()]

        tags = self.known_tags(query)
        if tags:
            entries = self.search.recommend(tags, query.max_price)
            bundle = self.bundler.bundle_or_list(tags, entries)
            if isinstance(bundle, list):
                if bundle:
                    messages.append(
                        self._recommendations("You might also like:", bundle)
                    )
            else:
                messages.append(self.offer_message(bundle))
        return messages

    def seller_status(self) -> ChatMessage:
        """Open/busy status and current wait estimate of every seller."""
        lines = ["Seller Status:"]
        for seller in self.catalog.sellers:
            wait = seller.estimated_wait_time()
            if seller.busy:
                status = f"Busy (~{wait} min wait)"
            else:
                status = f"Open (~{wait} min)"
            lines.append(f"• {seller.name}: {status}")
        return self._text("\n".join(lines))

    def recommendation(self, query: ParsedQuery) -> ChatMessage:
        """Recommend from known tags, or ask the buyer what they feel like."""
        tags = self.known_tags(query)
        if tags:
            entries = self.search.recommend(tags, query.max_price)
            if entries:
                return self._recommendations("You might like these:", entries)
        return self._text(MOOD_PROMPT_TEXT)

    def popular(self) -> ChatMessage:
        """The best rated items across all sellers."""
        entries = self.search.search(
            [], sort=SortMode.RATING, limit=self.popular_limit
        )
        return self._recommendations(POPULAR_TEXT, entries)

    def search_results(self, message: str, query: ParsedQuery) -> ChatMessage:
        """Search results for a free-text request, or suggestions when nothing matches."""
        entries = self.search.search(query.tags, query.max_price, sort_mode_for(message))
        if not entries:
            return self.no_results(query)

        if query.max_price is not None:
            body = f"Here are options under {format_price(query.max_price)}:"
        else:
            body = "Here are some recommendations:"
        return self._recommendations(body, entries)

    def no_results(self, query: ParsedQuery) -> ChatMessage:
        """Helpful suggestions when a search came back empty."""
        if query.max_price is not None and query.max_price < LOW_BUDGET_THRESHOLD:
            return self._text(
                f"Hmm, not much under {format_price(query.max_price)}. "
                "Try 'cheap food' or increase your budget to 15k-20k!"
            )
        return self._text(NOT_FOUND_TEXT)

    def reply_for(self, intent: Intent, message: str) -> ChatMessage:
        """The single reply for every intent except :attr:`Intent.SPECIAL_OFFER`."""
        if intent == Intent.GREETING:
            return self.greeting()
        if intent == Intent.HELP:
            return self.help()
        if intent == Intent.THANKS:
            return self.thanks()
        if intent == Intent.SELLER_STATUS:
            return self.seller_status()
        if intent == Intent.RECOMMENDATION:
            return self.recommendation(self.parse(message))
        if intent == Intent.POPULAR:
            return self.popular()
        if intent == Intent.SPECIAL_OFFER:
            raise ValueError("Special offers are sent as several messages")
        return self.search_results(message, self.parse(message))
