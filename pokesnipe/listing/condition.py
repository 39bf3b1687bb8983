"""Map marketplace condition hints to the catalog's NM/LP/MP/HP grades."""

import re
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_CONDITION
from ..utils.log import get_logger

logger = get_logger(__name__)

BLOCKED_CONDITION_PATTERNS: Tuple[str, ...] = (
    "damaged",
    "dmg",
    "creased",
    "crease",
    "water damage",
    "water damaged",
    "torn",
    "ripped",
    "destroyed",
)

# Ungraded card condition descriptor ("Card Condition") and its value ids
CONDITION_DESCRIPTOR_NAME = "40001"
DESCRIPTOR_CONDITIONS: Dict[str, str] = {
    "400010": "NM",
    "400015": "LP",
    "400016": "MP",
    "400017": "HP",
}

# Checked in order; longer phrasings come first within each grade
CONDITION_TEXT_MAP: Tuple[Tuple[str, str], ...] = (
    ("near mint or better", "NM"),
    ("near mint", "NM"),
    ("nm-mt", "NM"),
    ("nm/m", "NM"),
    ("gem mint", "NM"),
    ("pack fresh", "NM"),
    ("factory sealed", "NM"),
    ("unplayed", "NM"),
    ("mint", "NM"),
    ("nm", "NM"),
    ("lightly played (excellent)", "LP"),
    ("lightly played", "LP"),
    ("light play", "LP"),
    ("slightly played", "LP"),
    ("excellent-", "LP"),
    ("very good", "LP"),
    ("ex-", "LP"),
    ("lp", "LP"),
    ("vg", "LP"),
    ("sp", "LP"),
    ("moderately played (very good)", "MP"),
    ("moderately played", "MP"),
    ("moderate play", "MP"),
    ("mp", "MP"),
    ("heavily played (poor)", "HP"),
    ("heavily played", "HP"),
    ("heavy play", "HP"),
    ("hp", "HP"),
    ("poor", "HP"),
    ("fair", "HP"),
    ("excellent", "NM"),
    ("good", "MP"),
    ("played", "MP"),
    ("ex", "NM"),
    ("gd", "MP"),
    ("pl", "MP"),
    ("pr", "HP"),
    ("fr", "HP"),
)
_EXACT_TEXT = dict(CONDITION_TEXT_MAP)

TITLE_CONDITION_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("NM", re.compile(r"\b(NM(?:[\-/]?M(?:INT)?)?|NEAR\s*MINT|GEM\s*MINT|PACK\s*FRESH|MINT)\b", re.I)),
    ("LP", re.compile(r"\b(LP|LIGHT(?:LY)?\s*PLAY(?:ED)?|EX(?:CELLENT)?-?|VG|VERY\s*GOOD)\b", re.I)),
    # Heavy play before moderate so "Heavily Played" is not read as bare "Played"
    ("HP", re.compile(r"\b(HP|HEAV(?:Y|ILY)\s*PLAY(?:ED)?|POOR|PR|FAIR)\b", re.I)),
    ("MP", re.compile(r"\b(MP|MODERATE(?:LY)?\s*PLAY(?:ED)?|GOOD|GD|PLAYED)\b", re.I)),
)

ASPECT_CONDITION_NAMES = ("card condition", "condition", "card grade", "grade")


class ListingCondition(NamedTuple):
    condition: str
    source: str  # condition_descriptor | item_specifics | title | default
    raw_value: Optional[str] = None
    descriptor_id: Optional[str] = None
    blocked: bool = False


def is_blocked_condition(text: Optional[str]) -> bool:
    """True for damaged, creased or torn cards, which are never priced."""
    if not text:
        return False
    lowered = text.lower()
    return any(pattern in lowered for pattern in BLOCKED_CONDITION_PATTERNS)


def map_condition_text(text: Optional[str]) -> Optional[str]:
    """Marketplace condition text -> NM/LP/MP/HP, or None if blocked or unknown."""
    if not text:
        return None
    normalized = text.lower().strip()
    if is_blocked_condition(normalized):
        logger.debug("condition_blocked", condition=text)
        return None
    if normalized in _EXACT_TEXT:
        return _EXACT_TEXT[normalized]
    for phrase, condition in CONDITION_TEXT_MAP:
        if len(phrase) > 2 and phrase in normalized:
            return condition
    return None


def extract_condition_from_title(title: str) -> Optional[str]:
    """Condition named in a title, "BLOCKED" for damage keywords, else None."""
    if is_blocked_condition(title):
        logger.debug("title_condition_blocked", title=title[:80])
        return "BLOCKED"
    for condition, pattern in TITLE_CONDITION_PATTERNS:
        if pattern.search(title):
            return condition
    return None


def _first_descriptor_value(descriptor: Dict[str, Any]) -> Optional[str]:
    values = descriptor.get("values") or []
    if not values:
        return None
    first = values[0]
    if isinstance(first, dict):
        return first.get("value") or first.get("content")
    return str(first)


def extract_condition_from_descriptors(
    descriptors: Optional[Sequence[Dict[str, Any]]],
) -> Optional[Tuple[str, str]]:
    """Read the ungraded condition descriptor.

    Returns ``(condition, descriptor_id)``. Numeric value ids are mapped
    directly; free-text "Card Condition" descriptors go through the text rules.
    """
    for descriptor in descriptors or []:
        name = str(descriptor.get("name", "")).strip()
        value = _first_descriptor_value(descriptor)
        if not value:
            continue
        if name == CONDITION_DESCRIPTOR_NAME:
            condition = DESCRIPTOR_CONDITIONS.get(value.strip())
            if condition:
                return condition, value.strip()
            logger.warning("unknown_condition_descriptor", descriptor_id=value)
            continue
        if name.lower() == "card condition":
            lowered = value.lower()
            if "near mint" in lowered or "nm" in lowered:
                return "NM", value
            if "lightly played" in lowered or "excellent" in lowered:
                return "LP", value
            if "moderately played" in lowered or "very good" in lowered:
                return "MP", value
            if "heavily played" in lowered or "poor" in lowered:
                return "HP", value
            logger.warning("unknown_condition_text", value=value)
    return None


def extract_condition_from_aspects(aspects: Optional[Sequence[Dict[str, Any]]]) -> Optional[str]:
    for aspect in aspects or []:
        if str(aspect.get("name", "")).lower().strip() in ASPECT_CONDITION_NAMES:
            return aspect.get("value")
    return None


def get_listing_condition(
    descriptors: Optional[Sequence[Dict[str, Any]]] = None,
    aspects: Optional[List[Dict[str, Any]]] = None,
    title: Optional[str] = None,
    item_id: Optional[str] = None,
) -> ListingCondition:
    """Best condition estimate for a listing.

    Order: blocked title keywords, condition descriptors, item specifics,
    title, then the LP default.
    """
    if title and is_blocked_condition(title):
        logger.debug("condition_blocked_title", item_id=item_id, title=title[:80])
        return ListingCondition("HP", "title", blocked=True)

    from_descriptor = extract_condition_from_descriptors(descriptors)
    if from_descriptor:
        condition, descriptor_id = from_descriptor
        return ListingCondition(condition, "condition_descriptor", descriptor_id=descriptor_id)

    aspect_value = extract_condition_from_aspects(aspects)
    if aspect_value:
        if is_blocked_condition(aspect_value):
            logger.debug("condition_blocked_aspect", item_id=item_id, value=aspect_value)
            return ListingCondition("HP", "item_specifics", raw_value=aspect_value, blocked=True)
        mapped = map_condition_text(aspect_value)
        if mapped:
            return ListingCondition(mapped, "item_specifics", raw_value=aspect_value)

    if title:
        from_title = extract_condition_from_title(title)
        if from_title and from_title != "BLOCKED":
            return ListingCondition(from_title, "title")

    return ListingCondition(DEFAULT_CONDITION, "default")
