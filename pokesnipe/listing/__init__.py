"""Listing package: where listings come from and their condition hints."""

from .condition import (
    ListingCondition,
    extract_condition_from_descriptors,
    extract_condition_from_title,
    get_listing_condition,
    is_blocked_condition,
    map_condition_text,
)
from .source import ListingSource, StaticListingSource

__all__ = [
    "ListingCondition",
    "ListingSource",
    "StaticListingSource",
    "map_condition_text",
    "is_blocked_condition",
    "extract_condition_from_descriptors",
    "extract_condition_from_title",
    "get_listing_condition",
]
