"""Buyer agent."""

from .agent import BuyerAgent

__all__ = ["BuyerAgent"]
