"""Static and dynamically built special offers."""

from .bundler import DEFAULT_DYNAMIC_DISCOUNT, OfferBundler, theme_for_tag

__all__ = ["DEFAULT_DYNAMIC_DISCOUNT", "OfferBundler", "theme_for_tag"]
