"""Unit tests for the compiled title rule tables."""

import pytest

from pokesnipe.parser import patterns as p


class TestNumberRules:
    """Each number rule can be applied on its own."""

    def rule(self, name):
        return next(r for r in p.CARD_NUMBER_RULES if r.name == name)

    def test_rule_order_puts_subsets_first(self):
        names = [r.name for r in p.CARD_NUMBER_RULES]

        assert names.index("SHINY_VAULT") < names.index("STANDARD")
        assert names.index("TRAINER_GALLERY") < names.index("STANDARD")
        assert names.index("STANDARD") < names.index("SV_ONLY")

    def test_galarian_gallery(self):
        hit = self.rule("GALARIAN_GALLERY").apply("Mewtwo GG44/GG70 Crown Zenith")

        assert hit.number == "GG44"
        assert hit.tag == "NUMBER_GALARIAN_GALLERY"

    def test_letter_suffix(self):
        hit = self.rule("VARIANT").apply("Unown 25a/105")

        assert hit.number == "25a"
        assert hit.printed == "25a/105"

    def test_slash_code_sets_promo_prefix(self):
        hit = self.rule("SLASH_CODE").apply("Pikachu 020/SWSH")

        assert hit.number == "020"
        assert hit.promo_prefix == "SWSH"

    def test_sv_only_rejected_next_to_standard_number(self):
        assert self.rule("SV_ONLY").apply("Charizard SV49 4/102") is None

    def test_sv_only_accepts_vault_number(self):
        hit = self.rule("SV_ONLY").apply("Charizard GX SV49")

        assert hit.number == "SV49"

    def test_wotc_standalone_rejects_out_of_range(self):
        assert self.rule("WOTC_STANDALONE").apply("Jungle 500") is None

    def test_no_match_returns_none(self):
        assert self.rule("STANDARD").apply("Charizard Holo") is None


class TestConditionMap:
    """Condition aliases are looked up without spaces."""

    def test_aliases(self):
        assert p.CONDITION_MAP["NEARMINT"] == "NM"
        assert p.CONDITION_MAP["LIGHTLYPLAYED"] == "LP"
        assert p.CONDITION_MAP["PLAYED"] == "MP"
        assert p.CONDITION_MAP["DAMAGED"] == "DM"

    def test_map_is_read_only(self):
        with pytest.raises(TypeError):
            p.CONDITION_MAP["NEW"] = "NM"


class TestSetCodes:
    """Set code tables."""

    def test_english_code(self):
        assert p.EN_SET_CODE.search("Charizard sv3 ").group(1) == "sv3"
        assert p.EN_SET_CODE_MAP["sv3"] == "Obsidian Flames"

    def test_promo_sets(self):
        assert p.PROMO_CODE_TO_SET["SVP"] == "SV Black Star Promos"
