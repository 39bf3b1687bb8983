"""Fan a batch of listings out through one engine as a single scan."""

import asyncio
from typing import Any, Iterable, List, Mapping, Optional

from ..core.types import Listing, ProcessResult
from ..utils.config import settings
from ..utils.error_handler import ConfigurationError
from ..utils.log import get_logger
from .engine import ArbitrageEngine

logger = get_logger(__name__)

STOPPED_REASON = "Scan stopped"


async def run_scan(
    engine: ArbitrageEngine,
    listings: Iterable[Listing],
    concurrency: Optional[int] = None,
    stop_event: Optional[asyncio.Event] = None,
) -> List[ProcessResult]:
    """Process listings concurrently and close the scan's diagnostics.

    Results come back in input order. At most `concurrency` listings are in
    flight at once. Once `stop_event` is set, listings still waiting for a
    slot are not admitted and come back with stage "stopped"; listings
    already in the pipeline run to completion.
    """
    limit = concurrency or settings.SCAN_CONCURRENCY
    semaphore = asyncio.Semaphore(limit)
    batch = list(listings)
    skipped = 0

    async def _process(listing: Listing) -> ProcessResult:
        nonlocal skipped
        async with semaphore:
            if stop_event is not None and stop_event.is_set():
                skipped += 1
                return ProcessResult(success=False, reason=STOPPED_REASON, stage="stopped")
            return await engine.process_listing(listing)

    engine.start_scan()
    logger.info("scan_started", listings=len(batch), concurrency=limit)
    try:
        results = await asyncio.gather(*(_process(listing) for listing in batch))
    finally:
        engine.end_scan()
    if skipped:
        logger.info("scan_stopped", skipped=skipped, processed=len(batch) - skipped)
    return list(results)


async def scan_source(
    engine: ArbitrageEngine,
    query: str,
    filters: Optional[Mapping[str, Any]] = None,
    concurrency: Optional[int] = None,
    stop_event: Optional[asyncio.Event] = None,
) -> List[ProcessResult]:
    """Search the engine's listing source and scan whatever it returns."""
    if engine.listing_source is None:
        raise ConfigurationError("Engine has no listing source")
    if stop_event is not None and stop_event.is_set():
        return []

    listings = await engine.listing_source.search(query, filters)
    logger.info("listings_fetched", query=query, count=len(listings))
    return await run_scan(engine, listings, concurrency, stop_event)
