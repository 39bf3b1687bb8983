from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from .constants import DEFAULT_TIER_THRESHOLDS


class ConfidenceLevel(str, Enum):
    PERFECT = "PERFECT"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class DealTier(str, Enum):
    PREMIUM = "PREMIUM"
    HIGH = "HIGH"
    STANDARD = "STANDARD"


@dataclass(frozen=True)
class VariantFlags:
    is_holo: bool = False
    is_reverse_holo: bool = False
    is_full_art: bool = False
    is_alt_art: bool = False
    is_promo: bool = False
    is_secret: bool = False
    is_rainbow: bool = False
    is_gold: bool = False
    variant_name: Optional[str] = None


@dataclass(frozen=True)
class ParsedTitle:
    """Structured attributes extracted from one listing title."""
    original_title: str
    normalized_title: str
    card_name: Optional[str] = None
    card_number: Optional[str] = None
    printed_number: Optional[str] = None
    set_name: Optional[str] = None
    set_code: Optional[str] = None
    promo_prefix: Optional[str] = None
    is_graded: bool = False
    grading_company: Optional[str] = None
    grade: Optional[str] = None
    grade_modifier: Optional[str] = None
    condition: Optional[str] = None
    variant: VariantFlags = field(default_factory=VariantFlags)
    language: str = "English"
    language_code: str = "EN"
    is_first_edition: bool = False
    is_shadowless: bool = False
    card_type: Optional[str] = None
    confidence: ConfidenceLevel = ConfidenceLevel.LOW
    confidence_score: int = 0
    matched_patterns: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    is_fake: bool = False
    is_junk: bool = False

    @property
    def denominator(self) -> Optional[int]:
        """Printed set total after the slash, e.g. 102 for "4/102"."""
        if not self.printed_number or "/" not in self.printed_number:
            return None
        tail = self.printed_number.rsplit("/", 1)[1].strip()
        return int(tail) if tail.isdigit() else None

    @property
    def is_holo(self) -> bool:
        return self.variant.is_holo

    @property
    def is_reverse_holo(self) -> bool:
        return self.variant.is_reverse_holo


@dataclass(frozen=True)
class Expansion:
    id: str
    name: str
    series: str
    code: str
    total: int
    printed_total: int
    language: str = "English"
    language_code: str = "EN"
    release_date: str = ""  # YYYY/MM/DD
    is_online_only: bool = False
    logo: Optional[str] = None
    symbol: Optional[str] = None


@dataclass(frozen=True)
class ExpansionMatch:
    expansion: Expansion
    match_score: int
    match_type: str
    matched_on: str


@dataclass
class MatchResult:
    success: bool
    query: str
    match: Optional[ExpansionMatch] = None
    alternates: List[ExpansionMatch] = field(default_factory=list)


@dataclass
class ReconciliationReport:
    validated: bool = False
    direct: int = 0
    remapped: Dict[str, str] = field(default_factory=dict)
    invalid_local_ids: List[str] = field(default_factory=list)
    missing_catalog_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CatalogPrice:
    type: str  # raw | graded
    currency: str = "USD"
    condition: Optional[str] = None
    grade: Optional[str] = None
    company: Optional[str] = None
    low: Optional[float] = None
    mid: Optional[float] = None
    high: Optional[float] = None
    market: Optional[float] = None
    is_perfect: bool = False
    is_signed: bool = False
    is_error: bool = False

    @property
    def value(self) -> Optional[float]:
        """Best single figure for this price point: market, then mid, then low."""
        return self.market or self.mid or self.low

    @property
    def is_special(self) -> bool:
        return self.is_perfect or self.is_signed or self.is_error


@dataclass(frozen=True)
class CatalogVariant:
    name: str
    prices: Tuple[CatalogPrice, ...] = ()
    images: Tuple[Dict[str, str], ...] = ()


@dataclass(frozen=True)
class CatalogCard:
    id: str
    name: str
    number: str
    printed_number: Optional[str] = None
    rarity: Optional[str] = None
    expansion_id: Optional[str] = None
    expansion_name: Optional[str] = None
    printed_total: Optional[int] = None
    images: Tuple[Dict[str, str], ...] = ()
    variants: Tuple[CatalogVariant, ...] = ()

    @property
    def all_prices(self) -> List[CatalogPrice]:
        return [p for v in self.variants for p in v.prices]

    @property
    def image_url(self) -> Optional[str]:
        for image_set in (self.images, *(v.images for v in self.variants)):
            for image in image_set:
                url = image.get("large") or image.get("medium") or image.get("small")
                if url:
                    return url
        return None


@dataclass(frozen=True)
class Listing:
    """A marketplace offer as handed over by a listing source."""
    item_id: str
    title: str
    price: float
    shipping: float = 0.0
    currency: str = "GBP"
    url: Optional[str] = None
    seller: Optional[str] = None
    seller_feedback: Optional[int] = None
    seller_feedback_percent: Optional[float] = None
    item_location: Optional[str] = None
    country: Optional[str] = None
    raw_condition: Optional[str] = None
    mapped_condition: Optional[str] = None
    condition_source: Optional[str] = None
    condition_blocked: bool = False
    listing_time: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Listing":
        listing_time = data.get("listing_time")
        if isinstance(listing_time, str):
            listing_time = datetime.fromisoformat(listing_time)
        return cls(
            item_id=str(data["item_id"]),
            title=data["title"],
            price=float(data["price"]),
            shipping=float(data.get("shipping") or 0.0),
            currency=data.get("currency", "GBP"),
            url=data.get("url"),
            seller=data.get("seller"),
            seller_feedback=data.get("seller_feedback"),
            seller_feedback_percent=data.get("seller_feedback_percent"),
            item_location=data.get("item_location"),
            country=data.get("country"),
            raw_condition=data.get("raw_condition"),
            mapped_condition=data.get("mapped_condition"),
            condition_source=data.get("condition_source"),
            condition_blocked=bool(data.get("condition_blocked", False)),
            listing_time=listing_time,
        )


@dataclass(frozen=True)
class MatchDetails:
    is_first_edition: bool
    is_shadowless: bool
    is_holo: bool
    is_reverse_holo: bool
    parsed_set_name: Optional[str]
    parsed_card_number: Optional[str]
    parsed_name: Optional[str]
    expansion_match_type: str
    expansion_match_score: int
    name_similarity: float
    price_variant: Optional[str]
    condition_source: str


@dataclass(frozen=True)
class Deal:
    id: str
    item_id: str
    url: str
    affiliate_url: str
    title: str
    card_id: str
    card_name: str
    card_number: str
    expansion_id: str
    expansion_name: str
    image_url: Optional[str]
    price_gbp: float
    shipping_gbp: float
    total_cost_gbp: float
    market_value_usd: float
    market_value_gbp: float
    exchange_rate: float
    profit_gbp: float
    discount_percent: float
    tier: DealTier
    is_graded: bool
    grading_company: Optional[str]
    grade: Optional[str]
    condition: Optional[str]
    variant: Optional[str]
    seller: Optional[str]
    seller_feedback: Optional[int]
    item_country: Optional[str]
    found_at: datetime
    expires_at: datetime
    match_confidence: int
    match_type: str
    match_details: MatchDetails


@dataclass(frozen=True)
class ProcessResult:
    success: bool
    reason: Optional[str] = None
    stage: Optional[str] = None
    matched: bool = False
    deal: Optional[Deal] = None
    stored: bool = False


@dataclass(frozen=True)
class TierThreshold:
    min_discount: float
    min_value: float


@dataclass(frozen=True)
class TierThresholds:
    premium: TierThreshold
    high: TierThreshold
    standard: TierThreshold

    @classmethod
    def defaults(cls) -> "TierThresholds":
        return cls(**{
            name: TierThreshold(min_discount=discount, min_value=value)
            for name, (discount, value) in DEFAULT_TIER_THRESHOLDS.items()
        })


@dataclass(frozen=True)
class Preferences:
    allowed_conditions: Tuple[str, ...]
    min_profit_gbp: float
    preferred_grading_companies: Tuple[str, ...]
    min_grade: float
    max_grade: float
    tier_thresholds: TierThresholds


@dataclass(frozen=True)
class SignatureEntry:
    found: bool
    card_id: Optional[str] = None
    card: Optional[CatalogCard] = None
    expansion_id: Optional[str] = None
    match_type: Optional[str] = None
