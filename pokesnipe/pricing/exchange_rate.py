"""GBP/USD exchange rate with caching and a fixed fallback."""

import asyncio
import time
from typing import Callable, Optional

import aiohttp

from ..core.constants import FX_CACHE_TTL_S
from ..utils.config import settings
from ..utils.error_handler import PricingError
from ..utils.log import get_logger
from ..utils.retry import retry

logger = get_logger(__name__)


class ExchangeRateService:
    """USD-per-GBP rate from Frankfurter, cached for six hours."""

    def __init__(
        self,
        url: Optional[str] = None,
        fallback_rate: Optional[float] = None,
        ttl_s: float = FX_CACHE_TTL_S,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.url = url or settings.EXCHANGE_RATE_URL
        self.fallback_rate = fallback_rate or settings.FALLBACK_USD_RATE
        self.ttl_s = ttl_s
        self._clock = clock
        self._rate: Optional[float] = None
        self._fetched_at = 0.0
        self.is_live = False

    @retry(
        max_attempts=3,
        base_delay=2.0,
        exceptions=(aiohttp.ClientError, asyncio.TimeoutError, PricingError),
        logger=logger,
    )
    async def _fetch_rate(self) -> float:
        timeout = aiohttp.ClientTimeout(total=15)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(self.url, params={"from": "GBP", "to": "USD"}) as response:
                response.raise_for_status()
                payload = await response.json()
        rate = (payload.get("rates") or {}).get("USD")
        if not rate:
            raise PricingError("Exchange rate response has no USD rate", {"payload": payload})
        return float(rate)

    async def get_usd_rate(self) -> float:
        """USD per 1 GBP. Falls back to the configured rate when the service is down."""
        if self._rate is not None and self._clock() - self._fetched_at < self.ttl_s:
            return self._rate
        try:
            self._rate = await self._fetch_rate()
            self._fetched_at = self._clock()
            self.is_live = True
            logger.info("exchange_rate_updated", usd_rate=self._rate)
            return self._rate
        except (aiohttp.ClientError, asyncio.TimeoutError, PricingError) as e:
            self.is_live = False
            logger.warning("exchange_rate_fallback", error=str(e), fallback=self.fallback_rate)
            return self.fallback_rate

    async def usd_to_gbp(self, amount_usd: float) -> float:
        return amount_usd / await self.get_usd_rate()

    async def gbp_to_usd(self, amount_gbp: float) -> float:
        return amount_gbp * await self.get_usd_rate()
