"""Tests for the catalog client transport, caching and parsing."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from pokesnipe.catalog.client import CatalogClient, _parse_card
from pokesnipe.core.constants import BACKOFF_S, TTL_GRADED_VINTAGE, TTL_MODERN_STABLE, TTL_RECENT_SETS
from pokesnipe.utils.error_handler import CatalogError, NetworkError

CARD_PAYLOAD = {
    "id": "base1-4",
    "name": "Charizard",
    "number": 4,
    "printed_number": "4/102",
    "rarity": "Rare Holo",
    "expansion": {"id": "base1", "name": "Base Set", "printed_total": 102},
    "images": [{"type": "front", "large": "https://images.example/base1-4.png"}],
    "variants": [
        {
            "name": "unlimitedHolofoil",
            "prices": [
                {"type": "raw", "condition": "NM", "market": "320.50", "low": 250},
                {"type": "graded", "company": "PSA", "grade": 10, "market": 9500},
            ],
        }
    ],
}


def mock_get(status, payload=None):
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload or {})
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=None)
    return context


def mock_session(*responses):
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.get.side_effect = list(responses)
    return session


@pytest.fixture
def client():
    return CatalogClient(api_key="test-key", team_id="test-team", base_url="https://api.test/")


class TestTransport:
    """Test retries and error mapping."""

    @pytest.mark.asyncio
    async def test_backoff_sequence_429_to_200(self, client):
        session = mock_session(mock_get(429), mock_get(200, {"data": [CARD_PAYLOAD]}))

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session) as session_cls:
            with patch("pokesnipe.catalog.client.asyncio.sleep") as mock_sleep:
                cards = await client.search_cards("expansion.id:base1 number:4", page_size=1)

        assert session.get.call_count == 2
        mock_sleep.assert_called_once_with(BACKOFF_S[0])
        assert [card.id for card in cards] == ["base1-4"]
        headers = session_cls.call_args.kwargs["headers"]
        assert headers["X-Api-Key"] == "test-key"
        assert headers["X-Team-ID"] == "test-team"

    @pytest.mark.asyncio
    async def test_request_url_and_params(self, client):
        session = mock_session(mock_get(200, {"data": []}))

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            await client.search_cards("name:Charizard", page_size=10, include="prices")

        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url == "https://api.test/pokemon/v1/cards"
        assert params == {"q": "name:Charizard", "page": 1, "pageSize": 10, "include": "prices"}

    @pytest.mark.asyncio
    async def test_server_errors_exhaust_retries(self, client):
        session = mock_session(*[mock_get(503) for _ in range(len(BACKOFF_S) + 1)])

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            with patch("pokesnipe.catalog.client.asyncio.sleep"):
                with pytest.raises(CatalogError) as exc_info:
                    await client.search_cards("name:Charizard")

        assert exc_info.value.status == 503
        assert session.get.call_count == len(BACKOFF_S) + 1

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, client):
        session = mock_session(mock_get(400))

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            with pytest.raises(CatalogError):
                await client.search_cards("bad query")

        assert session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_connection_errors_become_network_error(self, client):
        session = MagicMock()
        session.closed = False
        session.get.side_effect = aiohttp.ClientConnectionError("refused")

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            with patch("pokesnipe.catalog.client.asyncio.sleep"):
                with pytest.raises(NetworkError):
                    await client.search_cards("name:Charizard")

    @pytest.mark.asyncio
    async def test_unknown_expansion_yields_no_cards(self, client):
        session = mock_session(mock_get(404))

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            cards = await client.search_cards_in_expansion("nope1", "number:4")

        assert cards == []
        assert session.get.call_args.args[0].endswith("/pokemon/v1/expansions/nope1/cards")

    @pytest.mark.asyncio
    async def test_close(self, client):
        session = mock_session(mock_get(200, {"data": []}))

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            async with client:
                await client.search_cards("name:Pikachu")

        session.close.assert_awaited_once()


class TestCaching:
    """Test response caching and TTL tiers."""

    @pytest.mark.asyncio
    async def test_repeat_query_served_from_cache(self, client):
        session = mock_session(mock_get(200, {"data": [CARD_PAYLOAD]}))

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            first = await client.search_cards("expansion.id:base1 number:4")
            second = await client.search_cards("expansion.id:base1 number:4")

        assert first == second
        assert session.get.call_count == 1
        assert client.request_count == 1

    @pytest.mark.asyncio
    async def test_clear_cache(self, client):
        session = mock_session(mock_get(200, {"data": []}), mock_get(200, {"data": []}))

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            with patch("pokesnipe.catalog.client.asyncio.sleep"):
                await client.search_cards("name:Pikachu")
                client.clear_cache()
                await client.search_cards("name:Pikachu")

        assert session.get.call_count == 2

    def test_ttl_graded_query(self, client):
        assert client.ttl_for("sv8", "name:Pikachu PSA 10") == TTL_GRADED_VINTAGE

    def test_ttl_vintage_set(self, client):
        assert client.ttl_for("base1", "number:4") == TTL_GRADED_VINTAGE

    def test_ttl_by_release_date(self, client):
        recent = (datetime.now() - timedelta(days=10)).strftime("%Y/%m/%d")
        client.register_release_dates({"swsh1": "2020/02/07", "sv10": recent, "bad": ""})

        assert client.ttl_for("swsh1", "number:1") == TTL_MODERN_STABLE
        assert client.ttl_for("sv10", "number:1") == TTL_RECENT_SETS
        assert client.ttl_for("unknown", None) == TTL_RECENT_SETS


class TestParsing:
    """Test payload conversion."""

    def test_parse_card(self):
        card = _parse_card(CARD_PAYLOAD)

        assert card.number == "4"
        assert card.expansion_id == "base1"
        assert card.printed_total == 102
        raw, graded = card.variants[0].prices
        assert raw.market == 320.5
        assert raw.low == 250.0
        assert graded.grade == "10"
        assert graded.company == "PSA"

    def test_incomplete_card_skipped(self):
        assert _parse_card({"id": "x"}) is None
        assert _parse_card("not a card") is None

    @pytest.mark.asyncio
    async def test_search_skips_incomplete_cards(self, client):
        session = mock_session(mock_get(200, {"data": [CARD_PAYLOAD, {"id": "broken"}]}))

        with patch("pokesnipe.catalog.client.aiohttp.ClientSession", return_value=session):
            cards = await client.search_cards("number:4")

        assert len(cards) == 1


class TestExpansions:
    @pytest.mark.asyncio
    async def test_pages_until_short_page(self, client):
        full_page = [{"id": f"set{i}"} for i in range(100)]
        client.search_expansions = AsyncMock(side_effect=[full_page, [{"id": "last"}]])

        expansions = await client.get_all_english_expansions()

        assert len(expansions) == 101
        assert client.search_expansions.await_args_list[1].args == ("language:English", 2, 100)
