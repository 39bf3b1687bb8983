"""Catalog package for card and expansion lookups."""

from .client import CatalogClient

__all__ = ["CatalogClient"]
