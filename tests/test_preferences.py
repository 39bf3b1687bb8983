"""Tests for the preference store."""

from dataclasses import replace
from unittest.mock import patch

import pytest

from pokesnipe.arbitrage.preferences import StaticPreferenceStore, default_preferences
from pokesnipe.core.types import TierThresholds


class TestDefaultPreferences:
    def test_defaults(self):
        prefs = default_preferences()

        assert prefs.allowed_conditions == ("NM", "LP", "MP")
        assert prefs.preferred_grading_companies == ("PSA", "CGC", "BGS")
        assert prefs.min_grade == 1.0
        assert prefs.max_grade == 10.0
        assert prefs.tier_thresholds == TierThresholds.defaults()

    def test_min_profit_from_settings(self):
        with patch("pokesnipe.arbitrage.preferences.settings") as mock_settings:
            mock_settings.MIN_PROFIT_GBP = 12.5
            assert default_preferences().min_profit_gbp == 12.5


class TestStaticPreferenceStore:
    """Reads are counted and updates apply to the next read."""

    @pytest.mark.asyncio
    async def test_read_and_update(self):
        store = StaticPreferenceStore()
        first = await store.read()

        store.update(replace(first, min_profit_gbp=20.0))
        second = await store.read()

        assert first.min_profit_gbp != 20.0
        assert second.min_profit_gbp == 20.0
        assert store.reads == 2
