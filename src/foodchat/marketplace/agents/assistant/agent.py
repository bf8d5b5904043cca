"""The FoodChat assistant: answers buyer chat with simulated latency."""

from ....config import LatencyConfig
from ....platform.bus import EventBus
from ...intents import Intent, classify
from ...messaging import ChatMessage
from ..base import BaseChatAgent
from .responses import ResponseHandler

DEFAULT_ASSISTANT_NAME = "FoodChat AI"

_DELAY_FIELDS: dict[Intent, str] = {
    Intent.GREETING: "greeting",
    Intent.HELP: "help",
    Intent.THANKS: "thanks",
    Intent.SELLER_STATUS: "seller_status",
    Intent.RECOMMENDATION: "recommendation",
    Intent.POPULAR: "popular",
    Intent.FILTERED_SEARCH: "search_results",
    Intent.SEARCH: "search_results",
}


class AssistantAgent(BaseChatAgent):
    """Classifies every buyer text message and schedules the matching reply."""

    role = "seller"

    def __init__(
        self,
        bus: EventBus[ChatMessage],
        responses: ResponseHandler,
        latency: LatencyConfig | None = None,
    ):
        """Initialize the assistant.

        Args:
            bus: The shared event bus.
            responses: Builder for the reply messages; its name is the sender name.
            latency: Reply delays; defaults to the unscaled latency table.

        """
        super().__init__(responses.name, bus)
        self.responses = responses
        self.latency = latency or LatencyConfig()

    def on_message(self, message: ChatMessage) -> None:
        """Answer buyer text; everything else is ignored."""
        if message.sender_role != "buyer" or message.type != "text":
            return
        self.handle(message.body)

    def handle(self, text: str) -> Intent:
        """Schedule the reply to one buyer message.

        Returns:
            The intent the message was classified as.

        """
        intent = classify(text)
        self.logger.debug(f"Classified {text!r} as {intent.value}")

        if intent == Intent.SPECIAL_OFFER:
            self._send_offers(text)
        else:
            delay = getattr(self.latency, _DELAY_FIELDS[intent])
            self.say_later(delay, lambda: self.responses.reply_for(intent, text))
        return intent

    def _send_offers(self, text: str) -> None:
        query = self.responses.parse(text)

        def intro() -> ChatMessage:
            # Cards follow the intro once it has actually been shown.
            self.say_later(
                self.latency.offers_cards, lambda: self.responses.offer_cards(query)
            )
            return self.responses.offers_intro()

        self.say_later(self.latency.offers_intro, intro)
