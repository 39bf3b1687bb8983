"""Profit, discount and tier arithmetic for a priced listing."""

from typing import NamedTuple, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..core.constants import AFFILIATE_PARAMS, LISTING_URL_TEMPLATE
from ..core.types import DealTier, TierThresholds
from ..utils.config import settings


class Profit(NamedTuple):
    total_cost_gbp: float
    market_value_gbp: float
    profit_gbp: float
    discount_percent: float


def compute_profit(price_gbp: float, shipping_gbp: float, market_value_gbp: float) -> Profit:
    """All-in cost against market value. Discount is 0 when the market value is not positive."""
    total = price_gbp + (shipping_gbp or 0.0)
    profit = market_value_gbp - total
    discount = (profit / market_value_gbp) * 100 if market_value_gbp > 0 else 0.0
    return Profit(total, market_value_gbp, profit, discount)


def determine_tier(
    market_value_gbp: float,
    discount_percent: float,
    thresholds: TierThresholds,
) -> Optional[DealTier]:
    """Classify a discount.

    The value band is picked first (premium, then high, then standard); within
    a band the discount must reach that band's minimum or the listing gets no
    tier at all. It never falls through to a cheaper band.
    """
    if discount_percent <= 0:
        return None

    if market_value_gbp >= thresholds.premium.min_value:
        return DealTier.PREMIUM if discount_percent >= thresholds.premium.min_discount else None

    if market_value_gbp >= thresholds.high.min_value:
        return DealTier.HIGH if discount_percent >= thresholds.high.min_discount else None

    if discount_percent >= thresholds.standard.min_discount:
        return DealTier.STANDARD
    return None


def listing_url(item_id: str, url: Optional[str] = None) -> str:
    """The listing's own URL when it points at an item page, else one built from the id."""
    if url and "/itm/" in url:
        return url
    return LISTING_URL_TEMPLATE.format(item_id=item_id)


def affiliate_url(url: str, campaign_id: Optional[str] = None) -> str:
    """Add partner-network tracking parameters. Unchanged without a campaign id."""
    campaign_id = campaign_id if campaign_id is not None else settings.EBAY_CAMPAIGN_ID
    if not campaign_id:
        return url

    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query))
    query.update(AFFILIATE_PARAMS)
    query["campid"] = campaign_id
    return urlunsplit(parts._replace(query=urlencode(query)))
