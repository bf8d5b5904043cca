"""In-process messaging substrate: event bus, id generation and logging."""

from .bus import EventBus, MessageFactory, MessageHandler
from .idgen import SequentialIdGenerator

__all__ = ["EventBus", "MessageFactory", "MessageHandler", "SequentialIdGenerator"]
