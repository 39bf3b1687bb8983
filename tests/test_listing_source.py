"""Tests for the in-memory listing source."""

import pytest

from conftest import make_listing
from pokesnipe.listing.source import StaticListingSource


@pytest.fixture
def source():
    return StaticListingSource([
        make_listing(item_id="a", price=12.0, shipping=1.5),
        make_listing("Blastoise Holo Base Set 2/102", item_id="b", price=40.0, country="DE"),
        make_listing("Charizard VMAX 020/189 Darkness Ablaze", item_id="c", price=90.0),
    ])


class TestStaticListingSource:
    """Query words and price/country filters."""

    @pytest.mark.asyncio
    async def test_empty_query_returns_everything(self, source):
        listings = await source.search("")

        assert [l.item_id for l in listings] == ["a", "b", "c"]
        assert source.searches == 1

    @pytest.mark.asyncio
    async def test_every_query_word_must_match(self, source):
        listings = await source.search("CHARIZARD base")

        assert [l.item_id for l in listings] == ["a"]

    @pytest.mark.asyncio
    async def test_price_filters_include_shipping(self, source):
        listings = await source.search("", {"min_price": 13.5, "max_price": 50})

        assert [l.item_id for l in listings] == ["a", "b"]

        listings = await source.search("", {"max_price": 13.0})

        assert listings == []

    @pytest.mark.asyncio
    async def test_country_filter(self, source):
        listings = await source.search("", {"item_location_country": "gb"})

        assert [l.item_id for l in listings] == ["a", "c"]
