"""Seller agent."""

from .agent import SellerAgent

__all__ = ["SellerAgent"]
