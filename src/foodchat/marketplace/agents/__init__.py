"""Chat marketplace agents."""

from .assistant import AssistantAgent, ResponseHandler
from .base import BaseChatAgent
from .buyer import BuyerAgent
from .seller import SellerAgent

__all__ = [
    "AssistantAgent",
    "BaseChatAgent",
    "BuyerAgent",
    "ResponseHandler",
    "SellerAgent",
]
