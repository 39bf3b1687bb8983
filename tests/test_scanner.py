"""Tests for batch scanning through the engine."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_card, make_listing
from pokesnipe.arbitrage.scanner import STOPPED_REASON, run_scan, scan_source
from pokesnipe.core.types import ProcessResult
from pokesnipe.listing.source import StaticListingSource
from pokesnipe.utils.error_handler import ConfigurationError


class TestRunScan:
    """Test ordering, dedup and diagnostics across a scan."""

    @pytest.mark.asyncio
    async def test_results_in_input_order(self, engine, fake_catalog):
        fake_catalog.search_cards.return_value = [make_card()]
        listings = [
            make_listing(item_id="a"),
            make_listing(item_id="b", country="DE"),
            make_listing(item_id="a"),
        ]

        results = await run_scan(engine, listings, concurrency=1)

        assert [r.stage for r in results] == ["complete", "international_seller", "dedup"]
        assert results[0].deal is not None

        last_scan = engine.diagnostics.last_scan
        assert last_scan.total_scanned == 3
        assert last_scan.stage1_already_processed == 1
        assert last_scan.stage2_international_seller == 1
        assert last_scan.successful_deals == 1

    @pytest.mark.asyncio
    async def test_concurrency_bound(self):
        in_flight = 0
        peak = 0

        async def process(listing):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0)
            in_flight -= 1
            return ProcessResult(success=False, reason="test")

        engine = MagicMock()
        engine.process_listing = process

        results = await run_scan(engine, [make_listing(item_id=str(i)) for i in range(10)], concurrency=2)

        assert len(results) == 10
        assert peak == 2
        engine.start_scan.assert_called_once()
        engine.end_scan.assert_called_once()

    @pytest.mark.asyncio
    async def test_scan_closed_on_failure(self):
        async def process(listing):
            raise RuntimeError("boom")

        engine = MagicMock()
        engine.process_listing = process

        with pytest.raises(RuntimeError):
            await run_scan(engine, [make_listing()], concurrency=1)

        engine.end_scan.assert_called_once()


class TestStopScan:
    """Stopping admits no new listings but lets in-flight ones finish."""

    @pytest.mark.asyncio
    async def test_stop_prevents_new_listings(self):
        stop = asyncio.Event()
        processed = []

        async def process(listing):
            processed.append(listing.item_id)
            await asyncio.sleep(0)
            stop.set()
            return ProcessResult(success=True, stage="complete")

        engine = MagicMock()
        engine.process_listing = process

        results = await run_scan(
            engine, [make_listing(item_id=str(i)) for i in range(5)], concurrency=1, stop_event=stop
        )

        assert processed == ["0"]
        assert results[0].stage == "complete"
        assert [r.stage for r in results[1:]] == ["stopped"] * 4
        assert results[1].reason == STOPPED_REASON
        engine.end_scan.assert_called_once()

    @pytest.mark.asyncio
    async def test_in_flight_listings_finish(self):
        stop = asyncio.Event()
        release = asyncio.Event()
        both_started = asyncio.Event()
        started, finished = [], []

        async def process(listing):
            started.append(listing.item_id)
            if len(started) == 2:
                both_started.set()
            await release.wait()
            finished.append(listing.item_id)
            return ProcessResult(success=True, stage="complete")

        engine = MagicMock()
        engine.process_listing = process

        task = asyncio.create_task(run_scan(
            engine, [make_listing(item_id=str(i)) for i in range(4)], concurrency=2, stop_event=stop
        ))
        await both_started.wait()
        stop.set()
        release.set()
        results = await task

        assert sorted(finished) == ["0", "1"]
        assert [r.stage for r in results] == ["complete", "complete", "stopped", "stopped"]


class TestScanSource:
    """Scans fed by the engine's listing source."""

    @pytest.mark.asyncio
    async def test_searches_source_then_scans(self, engine, fake_catalog):
        fake_catalog.search_cards.return_value = [make_card()]
        source = MagicMock()
        source.search = AsyncMock(return_value=[make_listing(item_id="a"), make_listing(item_id="b", country="DE")])
        engine.listing_source = source

        results = await scan_source(engine, "charizard", {"max_price": 50})

        source.search.assert_awaited_once_with("charizard", {"max_price": 50})
        assert [r.stage for r in results] == ["complete", "international_seller"]
        assert engine.diagnostics.last_scan.total_scanned == 2

    @pytest.mark.asyncio
    async def test_static_source_end_to_end(self, engine, fake_catalog):
        fake_catalog.search_cards.return_value = [make_card()]
        engine.listing_source = StaticListingSource([
            make_listing(item_id="a"),
            make_listing("Pikachu VMAX 044/185 Vivid Voltage", item_id="b"),
        ])

        results = await scan_source(engine, "charizard")

        assert len(results) == 1
        assert results[0].deal is not None

    @pytest.mark.asyncio
    async def test_stopped_before_search(self, engine):
        source = MagicMock()
        source.search = AsyncMock()
        engine.listing_source = source
        stop = asyncio.Event()
        stop.set()

        assert await scan_source(engine, "charizard", stop_event=stop) == []
        source.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_requires_listing_source(self, engine):
        with pytest.raises(ConfigurationError):
            await scan_source(engine, "charizard")
