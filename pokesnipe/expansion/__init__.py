"""Expansion package: built-in set table and set-name matching."""

from .data import ALIASES, EXPANSIONS, PROMO_PREFIX_TO_ID, SUBSET_MAP
from .matcher import ExpansionMatcher, expansion_matcher

__all__ = [
    "ExpansionMatcher",
    "expansion_matcher",
    "EXPANSIONS",
    "ALIASES",
    "PROMO_PREFIX_TO_ID",
    "SUBSET_MAP",
]
