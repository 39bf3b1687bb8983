"""Pick the catalog price point that corresponds to a listing."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.types import CatalogCard, CatalogPrice, CatalogVariant, ParsedTitle
from ..utils.log import get_logger

logger = get_logger(__name__)

GRADING_COMPANY_ALIASES = {
    "AGS": "ACE",
    "BECKETT": "BGS",
    "PROFESSIONAL SPORTS AUTHENTICATOR": "PSA",
    "CERTIFIED GUARANTY COMPANY": "CGC",
}

# Used when the listing names no specific printing
FALLBACK_VARIANT_ORDER: Tuple[str, ...] = (
    "unlimitedholofoil",
    "unlimitedshadowlessholofoil",
    "holofoil",
    "normal",
    "reverseholofoil",
    "unlimited",
)


@dataclass(frozen=True)
class VariantPrices:
    variant_name: str
    prices: Tuple[CatalogPrice, ...]


def normalize_grading_company(company: Optional[str]) -> str:
    if not company:
        return ""
    upper = company.upper().strip()
    return GRADING_COMPANY_ALIASES.get(upper, upper)


def target_variant_name(parsed: ParsedTitle) -> Optional[str]:
    """Catalog variant name implied by the edition and holo flags, if any."""
    first, shadowless = parsed.is_first_edition, parsed.is_shadowless
    holo, reverse = parsed.is_holo, parsed.is_reverse_holo
    if first and shadowless and holo:
        return "firstEditionShadowlessHolofoil"
    if first and shadowless:
        return "firstEditionShadowless"
    if first and holo:
        return "firstEditionHolofoil"
    if first and reverse:
        return "firstEditionReverseHolofoil"
    if first:
        return "firstEdition"
    if shadowless and holo:
        return "unlimitedShadowlessHolofoil"
    if shadowless:
        return "unlimitedShadowless"
    if reverse:
        return "reverseHolofoil"
    if holo:
        return "holofoil"
    return None


def _is_first_edition(name: str) -> bool:
    lowered = name.lower()
    return "firstedition" in lowered or "1stedition" in lowered


def _priced(variants: Sequence[CatalogVariant]) -> List[CatalogVariant]:
    return [v for v in variants if v.prices]


def _found(variant: CatalogVariant, how: str, card: CatalogCard) -> VariantPrices:
    logger.info(
        "variant_selected",
        how=how,
        variant=variant.name,
        available=[v.name for v in card.variants],
        raw_prices=sum(1 for p in variant.prices if p.type == "raw"),
        graded_prices=sum(1 for p in variant.prices if p.type == "graded"),
    )
    return VariantPrices(variant.name, variant.prices)


def find_variant_prices(card: CatalogCard, parsed: ParsedTitle) -> Optional[VariantPrices]:
    """Choose the printing whose prices apply to this listing.

    Precedence: exact flag-derived name; relaxed 1st-edition match; unlimited
    when the listing is not 1st edition but both printings exist; a fixed
    preference order; finally the first priced printing, avoiding 1st edition.
    """
    priced = _priced(card.variants)
    if not priced:
        return None

    target = target_variant_name(parsed)
    if target:
        target_lower = target.lower()
        match = next((v for v in priced if v.name.lower() == target_lower), None)

        if match is None and "firstedition" in target_lower:
            suffix = target_lower.replace("firstedition", "").replace("shadowless", "")
            wants_shadowless = "shadowless" in target_lower
            match = next(
                (
                    v for v in priced
                    if _is_first_edition(v.name)
                    and (suffix in v.name.lower() if suffix else True)
                    and ("shadowless" in v.name.lower()) == wants_shadowless
                ),
                None,
            )

        if match is None and target_lower == "holofoil":
            match = next((v for v in priced if v.name.lower() == "unlimitedholofoil"), None)

        if match is not None:
            return _found(match, "flags", card)

    names = [v.name.lower() for v in card.variants]
    has_first = any(_is_first_edition(n) for n in names)
    has_unlimited = any("unlimited" in n and "firstedition" not in n for n in names)
    if has_first and has_unlimited and not parsed.is_first_edition:
        unlimited = next(
            (v for v in priced if "unlimited" in v.name.lower() and "firstedition" not in v.name.lower()),
            None,
        )
        if unlimited is not None:
            return _found(unlimited, "defaulted_unlimited", card)

    for preferred in FALLBACK_VARIANT_ORDER:
        variant = next((v for v in priced if v.name.lower() == preferred), None)
        if variant is not None:
            return _found(variant, "preference_order", card)

    variant = next((v for v in priced if "firstedition" not in v.name.lower()), priced[0])
    return _found(variant, "last_resort", card)


def _same_grade(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    try:
        return float(a) == float(b)
    except ValueError:
        return a.strip().upper() == b.strip().upper()


def select_best_price(
    prices: Sequence[CatalogPrice],
    is_graded: bool = False,
    grading_company: Optional[str] = None,
    grade: Optional[str] = None,
    condition: Optional[str] = None,
) -> Optional[CatalogPrice]:
    """Pick one price point from a variant.

    Graded: same company (after alias normalisation) and same grade only,
    preferring standard entries over perfect/signed/error ones, lowest value
    first; entries without a value are skipped. Raw: the listed condition,
    else NM, else the first raw price.
    """
    if is_graded and grading_company and grade:
        company = normalize_grading_company(grading_company)
        graded = [
            p for p in prices
            if p.type == "graded"
            and normalize_grading_company(p.company) == company
            and _same_grade(p.grade, grade)
        ]
        if not graded:
            logger.warning(
                "graded_price_no_match",
                company=company,
                grade=grade,
                available_companies=sorted({p.company for p in prices if p.type == "graded" and p.company}),
            )
            return None
        priced = [p for p in graded if p.value]
        if not priced:
            logger.warning("graded_price_unpriced", company=company, grade=grade, entries=len(graded))
            return None
        standard = [p for p in priced if not p.is_special]
        return min(standard or priced, key=lambda p: p.value)

    raw = [p for p in prices if p.type == "raw"]
    if not raw:
        return None
    if condition:
        wanted = condition.upper()
        match = next((p for p in raw if (p.condition or "").upper() == wanted), None)
        if match:
            return match
    nm = next((p for p in raw if p.condition == "NM"), None)
    return nm or raw[0]
