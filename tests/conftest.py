"""Pytest configuration and shared fixtures for PokeSnipe tests."""

import os
from typing import Any, Dict, Iterable, List, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pokesnipe.arbitrage.engine import ArbitrageEngine
from pokesnipe.arbitrage.preferences import StaticPreferenceStore
from pokesnipe.core.types import CatalogCard, CatalogPrice, CatalogVariant, Listing
from pokesnipe.expansion.matcher import ExpansionMatcher
from pokesnipe.parser.title_parser import TitleParser
from pokesnipe.store.deal_store import InMemoryDealStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_listing(
    title: str = "Charizard Holo Base Set 4/102 NM",
    item_id: str = "v1|1000|0",
    price: float = 12.0,
    shipping: float = 0.0,
    **kwargs: Any,
) -> Listing:
    kwargs.setdefault("country", "GB")
    kwargs.setdefault("seller", "cardshop_uk")
    return Listing(item_id=item_id, title=title, price=price, shipping=shipping, **kwargs)


def make_card(
    card_id: str = "base1-4",
    name: str = "Charizard",
    number: str = "4",
    expansion_id: str = "base1",
    printed_total: Optional[int] = 102,
    variants: Optional[Iterable[CatalogVariant]] = None,
) -> CatalogCard:
    if variants is None:
        variants = (
            CatalogVariant(
                name="unlimitedHolofoil",
                prices=(
                    CatalogPrice(type="raw", condition="NM", market=25.4),
                    CatalogPrice(type="raw", condition="LP", market=19.05),
                    CatalogPrice(type="graded", company="PSA", grade="10", market=5000.0),
                ),
            ),
        )
    return CatalogCard(
        id=card_id,
        name=name,
        number=number,
        expansion_id=expansion_id,
        printed_total=printed_total,
        images=({"large": f"https://images.example/{card_id}.png"},),
        variants=tuple(variants),
    )


@pytest.fixture(scope="function")
def clock():
    return FakeClock()


@pytest.fixture(scope="function")
def matcher():
    """A private matcher so reconciliation in one test never leaks into another."""
    return ExpansionMatcher()


@pytest.fixture(scope="function")
def parser():
    return TitleParser()


@pytest.fixture(scope="function")
def fake_catalog():
    """Catalog double whose searches find nothing unless a test says otherwise."""
    catalog = MagicMock()
    catalog.search_cards = AsyncMock(return_value=[])
    catalog.search_cards_in_expansion = AsyncMock(return_value=[])
    catalog.get_all_english_expansions = AsyncMock(return_value=[])
    catalog.close = AsyncMock()
    return catalog


@pytest.fixture(scope="function")
def exchange_rate():
    """Fixed 1.27 USD per GBP."""
    service = MagicMock()
    service.get_usd_rate = AsyncMock(return_value=1.27)
    return service


@pytest.fixture(scope="function")
def preference_store():
    return StaticPreferenceStore()


@pytest.fixture(scope="function")
def deal_store():
    return InMemoryDealStore()


@pytest.fixture(scope="function")
def engine(fake_catalog, matcher, parser, preference_store, deal_store, exchange_rate, clock):
    return ArbitrageEngine(
        fake_catalog,
        matcher=matcher,
        parser=parser,
        preference_store=preference_store,
        deal_sink=deal_store,
        exchange_rate=exchange_rate,
        clock=clock,
        preferences_reload_s=60,
    )


@pytest.fixture(scope="function")
def sample_listing_dicts() -> List[Dict[str, Any]]:
    """Listing payloads as a listing source would hand them over."""
    return [
        {
            "item_id": "v1|2001|0",
            "title": "Charizard Holo Base Set 4/102 NM",
            "price": "12.00",
            "shipping": "0",
            "country": "GB",
            "seller": "cardshop_uk",
        },
        {
            "item_id": "v1|2002|0",
            "title": "Pikachu VMAX 044/185 Vivid Voltage",
            "price": 30,
            "country": "GB",
            "aspects": [{"name": "Card Condition", "value": "Lightly Played"}],
        },
    ]


@pytest.fixture(scope="function")
def clean_env():
    """Environment without catalog credentials or overrides."""
    keys = ("CATALOG_API_KEY", "CATALOG_TEAM_ID", "EBAY_CAMPAIGN_ID", "LOG_LEVEL", "SCAN_CONCURRENCY")
    with patch.dict(os.environ, {}, clear=False):
        for key in keys:
            os.environ.pop(key, None)
            os.environ.pop(key.lower(), None)
        yield


# Configure pytest options
def pytest_configure(config):
    """Configure pytest with custom options."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark integration tests
        if "integration" in item.name.lower() or "TestPipelineIntegration" in str(item.cls):
            item.add_marker(pytest.mark.integration)

        # Mark slow tests
        if any(slow_indicator in item.name.lower() for slow_indicator in ['performance', 'bulk', 'eviction_at_scale']):
            item.add_marker(pytest.mark.slow)

        # Mark unit tests (default)
        if not item.get_closest_marker('integration') and not item.get_closest_marker('slow'):
            item.add_marker(pytest.mark.unit)
