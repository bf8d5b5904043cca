"""Shared marketplace models."""

from .models import CatalogEntry, FoodCategory, MenuItem, Seller, SpecialOffer

__all__ = ["CatalogEntry", "FoodCategory", "MenuItem", "Seller", "SpecialOffer"]
