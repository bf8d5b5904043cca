"""Catalog of sellers, menus and static offers."""

from .store import CatalogSpec, CatalogStore, OfferSpec, SellerSpec
from .yaml_loader import load_catalog, load_catalog_from_yaml, load_default_catalog

__all__ = [
    "CatalogSpec",
    "CatalogStore",
    "OfferSpec",
    "SellerSpec",
    "load_catalog",
    "load_catalog_from_yaml",
    "load_default_catalog",
]
