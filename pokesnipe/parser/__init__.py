"""Parser package for marketplace listing titles."""

from .patterns import CARD_NUMBER_RULES, NumberHit, NumberRule
from .title_parser import TitleParser, normalize_title, parse_title, title_parser

__all__ = [
    "TitleParser",
    "title_parser",
    "parse_title",
    "normalize_title",
    "CARD_NUMBER_RULES",
    "NumberRule",
    "NumberHit",
]
