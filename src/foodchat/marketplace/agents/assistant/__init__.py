"""Assistant agent that answers buyer questions."""

from .agent import DEFAULT_ASSISTANT_NAME, AssistantAgent
from .responses import ResponseHandler

__all__ = ["DEFAULT_ASSISTANT_NAME", "AssistantAgent", "ResponseHandler"]
