"""Base agent functionality for the chat marketplace."""

import asyncio
import logging

from ...platform.bus import EventBus, MessageFactory
from ..messaging import ChatMessage, SenderRole


class BaseChatAgent:
    """An actor that talks and listens on the shared event bus.

    Subclasses override :meth:`on_message` to react to traffic. Agents are
    attached with :meth:`start` and detached with :meth:`stop`; the bus is the
    only place the subscription is recorded.
    """

    role: SenderRole = "system"

    def __init__(self, name: str, bus: EventBus[ChatMessage]):
        """Initialize the agent.

        Args:
            name: Display name used as the sender of every message.
            bus: The shared event bus.

        """
        self.name = name
        self.bus = bus
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")
        self._started = False

    def start(self) -> None:
        """Subscribe to the bus. Calling it twice has no effect."""
        if self._started:
            return
        self.bus.subscribe(self.on_message)
        self._started = True
        self.logger.debug(f"{self.name} joined the chat")

    def stop(self) -> None:
        """Unsubscribe from the bus."""
        if not self._started:
            return
        self.bus.unsubscribe(self.on_message)
        self._started = False

    def on_message(self, message: ChatMessage) -> None:
        """React to a message on the bus. The default ignores everything."""

    def is_own(self, message: ChatMessage) -> bool:
        """Whether ``message`` was sent by this agent."""
        return message.sender_role == self.role and message.sender_name == self.name

    def say(self, body: str) -> ChatMessage:
        """Publish a text message immediately.

        Returns:
            The published message.

        """
        message = ChatMessage.text(self.name, self.role, body)
        self.bus.publish(message)
        return message

    def say_later(self, delay: float, factory: MessageFactory[ChatMessage]) -> asyncio.Task:
        """Publish whatever ``factory`` returns after ``delay`` seconds."""
        return self.bus.publish_after(delay, factory)

    def text(self, body: str) -> ChatMessage:
        """Build, without publishing, a text message from this agent."""
        return ChatMessage.text(self.name, self.role, body)
