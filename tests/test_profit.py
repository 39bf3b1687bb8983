"""Unit tests for profit arithmetic, tiers and listing links."""

from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

import pytest

from pokesnipe.arbitrage.profit import affiliate_url, compute_profit, determine_tier, listing_url
from pokesnipe.core.types import DealTier, TierThresholds


class TestComputeProfit:
    def test_profit_and_discount(self):
        result = compute_profit(12.0, 0.0, 20.0)

        assert result.total_cost_gbp == 12.0
        assert result.profit_gbp == 8.0
        assert result.discount_percent == pytest.approx(40.0)

    def test_shipping_counts_towards_cost(self):
        assert compute_profit(12.0, 3.0, 20.0).profit_gbp == 5.0

    def test_zero_market_value(self):
        result = compute_profit(5.0, 0.0, 0.0)

        assert result.profit_gbp == -5.0
        assert result.discount_percent == 0.0


class TestDetermineTier:
    """Value band first, then that band's discount floor."""

    @pytest.mark.parametrize("value,discount,tier", [
        (1200.0, 12.0, DealTier.PREMIUM),
        (1200.0, 8.0, None),
        (600.0, 16.0, DealTier.HIGH),
        (600.0, 14.0, None),
        (100.0, 25.0, DealTier.STANDARD),
        (100.0, 19.0, None),
        (100.0, 0.0, None),
        (1200.0, -5.0, None),
    ])
    def test_bands(self, value, discount, tier):
        assert determine_tier(value, discount, TierThresholds.defaults()) == tier


class TestListingLinks:
    """Test listing and affiliate URLs."""

    def test_item_url_kept(self):
        url = "https://www.ebay.co.uk/itm/123456"
        assert listing_url("v1|123456|0", url) == url

    def test_url_built_from_id(self):
        assert listing_url("123456", "https://example.com/search") == "https://www.ebay.co.uk/itm/123456"

    def test_affiliate_params_added(self):
        url = affiliate_url("https://www.ebay.co.uk/itm/123?hash=abc", campaign_id="5338")

        query = parse_qs(urlsplit(url).query)
        assert query["campid"] == ["5338"]
        assert query["mkevt"] == ["1"]
        assert query["hash"] == ["abc"]

    def test_unchanged_without_campaign(self):
        url = "https://www.ebay.co.uk/itm/123"

        with patch("pokesnipe.arbitrage.profit.settings") as mock_settings:
            mock_settings.EBAY_CAMPAIGN_ID = None
            assert affiliate_url(url) == url

    def test_campaign_from_settings(self):
        with patch("pokesnipe.arbitrage.profit.settings") as mock_settings:
            mock_settings.EBAY_CAMPAIGN_ID = "777"
            url = affiliate_url("https://www.ebay.co.uk/itm/123")

        assert "campid=777" in url
