"""Card-name similarity used to validate catalog candidates."""

import re
from typing import Optional, Sequence, TypeVar

from rapidfuzz import fuzz

from ..core.types import CatalogCard

T = TypeVar("T")

# canonical -> spellings that refer to the same species
NAME_ALIASES = {
    "charizard": ("zard",),
    "blastoise": ("stoise",),
    "venusaur": ("saur",),
    "pikachu": ("pika",),
    "mewtwo": ("mew two", "mew 2"),
    "mr mime": ("mr. mime", "mrmime"),
    "mimejr": ("mime jr", "mime jr."),
    "farfetchd": ("farfetch'd", "farfetch d"),
    "type null": ("type: null", "typenull"),
    "hooh": ("ho-oh", "ho oh"),
    "porygonz": ("porygon-z", "porygon z"),
    "porygon2": ("porygon-2", "porygon 2"),
    "jangmoo": ("jangmo-o",),
    "hakamoo": ("hakamo-o",),
    "kommoo": ("kommo-o",),
    "tapukoko": ("tapu koko", "tapu-koko"),
    "tapulele": ("tapu lele", "tapu-lele"),
    "tapubulu": ("tapu bulu", "tapu-bulu"),
    "tapufini": ("tapu fini", "tapu-fini"),
}

_DASHES = re.compile(r"[-–—]")
_APOSTROPHES = re.compile(r"[‘’`]")
_SPECIAL = re.compile(r"[^\w\s']")
_SPACES = re.compile(r"\s+")


def _nidoran_gender(name: str) -> Optional[str]:
    lowered = name.lower()
    if "nidoran" not in lowered:
        return None
    if "♀" in lowered or "nidoran f" in lowered or "female" in lowered:
        return "female"
    if "♂" in lowered or "nidoran m" in lowered or " male" in lowered:
        return "male"
    return "unknown"


def normalize_name(name: str) -> str:
    text = _DASHES.sub(" ", name.lower())
    text = _APOSTROPHES.sub("'", text)
    text = _SPECIAL.sub("", text)
    return _SPACES.sub(" ", text).strip()


def calculate_name_similarity(parsed_name: str, catalog_name: str) -> float:
    """Similarity in [0, 1] between a parsed name and a catalog name.

    Two Nidoran with different known genders always score 0. Otherwise:
    identical 1.0, containment 0.85, shared alias 0.9, else token Jaccard.
    """
    parsed_gender = _nidoran_gender(parsed_name)
    catalog_gender = _nidoran_gender(catalog_name)
    if parsed_gender and catalog_gender:
        if parsed_gender != catalog_gender and "unknown" not in (parsed_gender, catalog_gender):
            return 0.0
        return 1.0 if parsed_gender == catalog_gender else 0.8

    a = normalize_name(parsed_name)
    b = normalize_name(catalog_name)
    if a == b:
        return 1.0
    if a in b or b in a:
        return 0.85

    for canonical, aliases in NAME_ALIASES.items():
        spellings = (canonical, *aliases)
        if any(s in a for s in spellings) and any(s in b for s in spellings):
            return 0.9

    tokens_a = {t for t in a.split(" ") if len(t) > 1}
    tokens_b = {t for t in b.split(" ") if len(t) > 1}
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / len(tokens_a | tokens_b)


def best_name_match(
    parsed_name: str,
    cards: Sequence[CatalogCard],
    threshold: float,
) -> Optional[CatalogCard]:
    """Highest-similarity card at or above `threshold`.

    Ties on similarity go to the closer character-level spelling.
    """
    scored = [
        (calculate_name_similarity(parsed_name, card.name), fuzz.ratio(parsed_name.lower(), card.name.lower()), card)
        for card in cards
    ]
    scored = [entry for entry in scored if entry[0] >= threshold]
    if not scored:
        return None
    return max(scored, key=lambda entry: (entry[0], entry[1]))[2]
