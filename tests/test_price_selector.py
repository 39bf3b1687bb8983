"""Tests for variant and price-point selection."""

import pytest

from conftest import make_card
from pokesnipe.core.types import CatalogPrice, CatalogVariant
from pokesnipe.parser.title_parser import parse_title
from pokesnipe.pricing.selector import (
    find_variant_prices,
    normalize_grading_company,
    select_best_price,
    target_variant_name,
)


def variant(name, *prices):
    return CatalogVariant(name=name, prices=prices or (CatalogPrice(type="raw", condition="NM", market=10.0),))


class TestTargetVariantName:
    """Edition and holo flags map to a catalog printing."""

    @pytest.mark.parametrize("title,expected", [
        ("Charizard 1st Edition Shadowless Holo Base Set 4/102", "firstEditionShadowlessHolofoil"),
        ("Charizard 1st Edition Holo Base Set 4/102", "firstEditionHolofoil"),
        ("Charizard Shadowless Holo Base Set 4/102", "unlimitedShadowlessHolofoil"),
        ("Pikachu Reverse Holo 025/165 151", "reverseHolofoil"),
        ("Charizard Holo Base Set 4/102", "holofoil"),
        ("Charizard Base Set 4/102", None),
    ])
    def test_target(self, title, expected):
        assert target_variant_name(parse_title(title)) == expected


class TestFindVariantPrices:
    """Test printing selection precedence."""

    def test_exact_flag_match(self):
        card = make_card(variants=(variant("normal"), variant("reverseHolofoil")))

        chosen = find_variant_prices(card, parse_title("Pikachu Reverse Holo 025/165 151"))

        assert chosen.variant_name == "reverseHolofoil"

    def test_holo_falls_back_to_unlimited_holo(self):
        card = make_card(variants=(variant("firstEditionHolofoil"), variant("unlimitedHolofoil")))

        chosen = find_variant_prices(card, parse_title("Charizard Holo Base Set 4/102"))

        assert chosen.variant_name == "unlimitedHolofoil"

    def test_relaxed_first_edition(self):
        card = make_card(variants=(variant("unlimitedHolofoil"), variant("1stEditionHolofoil")))

        chosen = find_variant_prices(card, parse_title("Charizard 1st Edition Holo Base Set 4/102"))

        assert chosen.variant_name == "1stEditionHolofoil"

    def test_defaults_to_unlimited_when_edition_unstated(self):
        card = make_card(variants=(variant("firstEdition"), variant("unlimited")))

        chosen = find_variant_prices(card, parse_title("Charizard Base Set 4/102"))

        assert chosen.variant_name == "unlimited"

    def test_preference_order(self):
        card = make_card(variants=(variant("reverseHolofoil"), variant("normal")))

        chosen = find_variant_prices(card, parse_title("Pikachu 025/165"))

        assert chosen.variant_name == "normal"

    def test_last_resort_avoids_first_edition(self):
        card = make_card(variants=(variant("firstEditionSpecial"), variant("staffStamp")))

        chosen = find_variant_prices(card, parse_title("Pikachu 025/165"))

        assert chosen.variant_name == "staffStamp"

    def test_unpriced_variants_ignored(self):
        card = make_card(variants=(CatalogVariant(name="normal", prices=()),))

        assert find_variant_prices(card, parse_title("Pikachu 025/165")) is None


class TestSelectBestPrice:
    """Test price-point selection."""

    PRICES = (
        CatalogPrice(type="raw", condition="NM", market=100.0),
        CatalogPrice(type="raw", condition="LP", market=80.0),
        CatalogPrice(type="graded", company="PSA", grade="10", market=1000.0),
        CatalogPrice(type="graded", company="PSA", grade="10", market=1500.0, is_signed=True),
        CatalogPrice(type="graded", company="PSA", grade="9", market=400.0),
        CatalogPrice(type="graded", company="ACE", grade="10", market=300.0),
    )

    def test_raw_condition(self):
        assert select_best_price(self.PRICES, condition="LP").market == 80.0

    def test_raw_falls_back_to_nm(self):
        assert select_best_price(self.PRICES, condition="HP").market == 100.0

    def test_raw_without_nm_uses_first(self):
        prices = (CatalogPrice(type="raw", condition="MP", market=50.0),)
        assert select_best_price(prices, condition="HP").market == 50.0

    def test_graded_exact_company_and_grade(self):
        price = select_best_price(self.PRICES, is_graded=True, grading_company="PSA", grade="9")

        assert price.market == 400.0

    def test_graded_prefers_standard_entries(self):
        price = select_best_price(self.PRICES, is_graded=True, grading_company="PSA", grade="10.0")

        assert price.market == 1000.0
        assert price.is_special is False

    def test_graded_skips_unpriced_entries(self):
        prices = (
            CatalogPrice(type="graded", company="PSA", grade="9"),
            CatalogPrice(type="graded", company="PSA", grade="9", market=400.0),
        )

        assert select_best_price(prices, is_graded=True, grading_company="PSA", grade="9").market == 400.0

    def test_graded_all_unpriced(self):
        prices = (CatalogPrice(type="graded", company="PSA", grade="9"),)

        assert select_best_price(prices, is_graded=True, grading_company="PSA", grade="9") is None

    def test_graded_company_alias(self):
        price = select_best_price(self.PRICES, is_graded=True, grading_company="AGS", grade="10")

        assert price.market == 300.0

    def test_graded_never_uses_another_grade(self):
        assert select_best_price(self.PRICES, is_graded=True, grading_company="PSA", grade="8") is None

    def test_graded_never_uses_raw(self):
        assert select_best_price(self.PRICES, is_graded=True, grading_company="CGC", grade="10") is None

    def test_value_prefers_market_then_mid_then_low(self):
        assert CatalogPrice(type="raw", mid=5.0, low=3.0).value == 5.0
        assert CatalogPrice(type="raw", low=3.0).value == 3.0
        assert CatalogPrice(type="raw").value is None


class TestNormalizeGradingCompany:
    def test_aliases(self):
        assert normalize_grading_company("Beckett") == "BGS"
        assert normalize_grading_company(" psa ") == "PSA"
        assert normalize_grading_company(None) == ""
