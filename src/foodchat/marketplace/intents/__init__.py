"""Rule-based classification of buyer messages."""

from .classifier import Intent, classify, sort_mode_for

__all__ = ["Intent", "classify", "sort_mode_for"]
