"""Card catalog API client (Scrydex-style query grammar)."""

import asyncio
import json
import re
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import aiohttp

from ..core.constants import (
    BACKOFF_S,
    CATALOG_CACHE_MAX,
    GRADED_QUERY_COMPANIES,
    RATE_LIMIT_QPS,
    RECENT_SET_AGE_DAYS,
    RETRYABLE_STATUS,
    TTL_EXPANSIONS,
    TTL_GRADED_VINTAGE,
    TTL_MODERN_STABLE,
    TTL_RECENT_SETS,
    VINTAGE_SET_PREFIXES,
)
from ..core.types import CatalogCard, CatalogPrice, CatalogVariant
from ..store.bounded_cache import BoundedTTLCache
from ..utils.config import settings
from ..utils.error_handler import CatalogError, NetworkError
from ..utils.log import LoggerMixin

CARDS_PATH = "/pokemon/v1/cards"
EXPANSIONS_PATH = "/pokemon/v1/expansions"
EXPANSION_CARDS_PATH = "/pokemon/v1/expansions/{expansion_id}/cards"
EXPANSION_IN_QUERY = re.compile(r"expansion\.id:(\S+)", re.IGNORECASE)
EXPANSION_PAGE_SIZE = 100


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_price(raw: Dict[str, Any]) -> CatalogPrice:
    grade = raw.get("grade")
    return CatalogPrice(
        type=raw.get("type", "raw"),
        currency=raw.get("currency", "USD"),
        condition=raw.get("condition"),
        grade=str(grade) if grade is not None else None,
        company=raw.get("company"),
        low=_to_float(raw.get("low")),
        mid=_to_float(raw.get("mid")),
        high=_to_float(raw.get("high")),
        market=_to_float(raw.get("market")),
        is_perfect=bool(raw.get("is_perfect")),
        is_signed=bool(raw.get("is_signed")),
        is_error=bool(raw.get("is_error")),
    )


def _parse_card(raw: Dict[str, Any]) -> Optional[CatalogCard]:
    """Convert one catalog card payload; None when required fields are missing."""
    if not isinstance(raw, dict) or not raw.get("id") or not raw.get("name"):
        return None
    expansion = raw.get("expansion") or {}
    variants = tuple(
        CatalogVariant(
            name=variant.get("name", ""),
            prices=tuple(_parse_price(p) for p in variant.get("prices") or [] if isinstance(p, dict)),
            images=tuple(variant.get("images") or ()),
        )
        for variant in raw.get("variants") or []
        if isinstance(variant, dict)
    )
    printed_total = expansion.get("printed_total")
    return CatalogCard(
        id=raw["id"],
        name=raw["name"],
        number=str(raw.get("number", "")),
        printed_number=raw.get("printed_number"),
        rarity=raw.get("rarity"),
        expansion_id=expansion.get("id"),
        expansion_name=expansion.get("name"),
        printed_total=int(printed_total) if printed_total is not None else None,
        images=tuple(raw.get("images") or ()),
        variants=variants,
    )


def _parse_release_date(value: str) -> Optional[datetime]:
    for fmt in ("%Y/%m/%d", "%Y-%m-%d"):
        try:
            return datetime.strptime(value, fmt)
        except (TypeError, ValueError):
            continue
    return None


class CatalogClient(LoggerMixin):
    """Async client for card and expansion lookups with response caching."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        team_id: Optional[str] = None,
        base_url: Optional[str] = None,
        page_size: int = 100,
        timeout_s: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.CATALOG_API_KEY
        self.team_id = team_id if team_id is not None else settings.CATALOG_TEAM_ID
        self.base_url = (base_url or settings.CATALOG_BASE_URL).rstrip("/")
        self.page_size = page_size
        self.timeout_s = timeout_s or settings.CATALOG_TIMEOUT_S
        self.min_request_interval = 1.0 / RATE_LIMIT_QPS
        self.session: Optional[aiohttp.ClientSession] = None
        self.last_request_time = 0.0
        self.cache: BoundedTTLCache[str, Any] = BoundedTTLCache(TTL_RECENT_SETS, CATALOG_CACHE_MAX)
        self._release_dates: Dict[str, datetime] = {}
        self.request_count = 0

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key
        if self.team_id:
            headers["X-Team-ID"] = self.team_id
        return headers

    async def _ensure_session(self) -> None:
        """Ensure aiohttp session exists."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout_s),
            )

    async def _rate_limit(self) -> None:
        """Apply rate limiting between requests."""
        loop = asyncio.get_running_loop()
        time_since_last = loop.time() - self.last_request_time
        if time_since_last < self.min_request_interval:
            await asyncio.sleep(self.min_request_interval - time_since_last)
        self.last_request_time = loop.time()

    async def _request_with_backoff(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET `path`, retrying 429/5xx on the BACKOFF_S schedule."""
        await self._ensure_session()
        await self._rate_limit()
        url = f"{self.base_url}{path}"

        for attempt, delay in enumerate([0.0, *BACKOFF_S]):
            if delay > 0:
                await asyncio.sleep(delay)
            self.request_count += 1
            try:
                async with self.session.get(url, params=params) as response:
                    if response.status in RETRYABLE_STATUS and attempt < len(BACKOFF_S):
                        self.logger.warning("catalog_retrying", status=response.status, attempt=attempt + 1, path=path)
                        continue
                    if response.status >= 400:
                        raise CatalogError(
                            f"Catalog request failed with HTTP {response.status}",
                            {"path": path, "params": params},
                            status=response.status,
                        )
                    return await response.json()
            except aiohttp.ClientConnectionError as e:
                if attempt < len(BACKOFF_S):
                    continue
                raise NetworkError(f"Catalog unreachable: {e}", {"path": path}) from e
            except asyncio.TimeoutError as e:
                if attempt < len(BACKOFF_S):
                    continue
                raise NetworkError("Catalog request timed out", {"path": path}) from e

        raise CatalogError("All retry attempts failed", {"path": path, "params": params})

    # ------------------------------------------------------------------
    # Caching
    # ------------------------------------------------------------------

    def register_release_dates(self, release_dates: Mapping[str, str]) -> None:
        """Record expansion release dates (YYYY/MM/DD) for cache TTL tiering."""
        for expansion_id, value in release_dates.items():
            parsed = _parse_release_date(value) if value else None
            if parsed:
                self._release_dates[expansion_id.lower()] = parsed
        self.logger.debug("release_dates_registered", count=len(self._release_dates))

    def ttl_for(self, expansion_id: Optional[str], query: Optional[str]) -> int:
        """Graded or vintage: 7 days; sets older than 60 days: 72 h; otherwise 48 h."""
        upper_query = (query or "").upper()
        if any(company in upper_query for company in GRADED_QUERY_COMPANIES):
            return TTL_GRADED_VINTAGE
        if expansion_id:
            lowered = expansion_id.lower()
            if lowered.startswith(VINTAGE_SET_PREFIXES):
                return TTL_GRADED_VINTAGE
            released = self._release_dates.get(lowered)
            if released and (datetime.now() - released).days > RECENT_SET_AGE_DAYS:
                return TTL_MODERN_STABLE
        return TTL_RECENT_SETS

    async def _cached_get(self, path: str, params: Dict[str, Any], ttl_s: int) -> Dict[str, Any]:
        key = f"{path}?{json.dumps(params, sort_keys=True)}"
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("catalog_cache_hit", key=key)
            return cached
        data = await self._request_with_backoff(path, params)
        self.cache.set(key, data, ttl_s=ttl_s)
        self.logger.debug("catalog_cache_set", key=key, ttl_hours=round(ttl_s / 3600, 1))
        return data

    def _parse_cards(self, payload: Dict[str, Any]) -> List[CatalogCard]:
        cards = []
        for raw in payload.get("data") or []:
            card = _parse_card(raw)
            if card is None:
                self.logger.debug("catalog_card_skipped", raw_id=raw.get("id") if isinstance(raw, dict) else None)
                continue
            cards.append(card)
        return cards

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------

    async def search_cards(
        self,
        query: str,
        page_size: int = 100,
        include: Optional[str] = "prices",
        page: int = 1,
    ) -> List[CatalogCard]:
        """Search all cards with the catalog query grammar (``field:value``, ``OR``, trailing ``*``)."""
        params: Dict[str, Any] = {"q": query, "page": page, "pageSize": page_size}
        if include:
            params["include"] = include
        expansion = EXPANSION_IN_QUERY.search(query)
        ttl = self.ttl_for(expansion.group(1) if expansion else None, query)
        payload = await self._cached_get(CARDS_PATH, params, ttl)
        return self._parse_cards(payload)

    async def search_cards_in_expansion(
        self,
        expansion_id: str,
        query: str,
        page_size: int = 100,
        include: Optional[str] = "prices,images",
    ) -> List[CatalogCard]:
        """Search within one expansion. An unknown expansion yields no cards."""
        params: Dict[str, Any] = {"q": query, "page": 1, "pageSize": page_size}
        if include:
            params["include"] = include
        path = EXPANSION_CARDS_PATH.format(expansion_id=expansion_id)
        try:
            payload = await self._cached_get(path, params, self.ttl_for(expansion_id, query))
        except CatalogError as e:
            if e.status == 404:
                return []
            raise
        return self._parse_cards(payload)

    async def search_expansions(
        self,
        query: Optional[str] = None,
        page: int = 1,
        page_size: int = EXPANSION_PAGE_SIZE,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"page": page, "pageSize": page_size}
        if query:
            params["q"] = query
        payload = await self._cached_get(EXPANSIONS_PATH, params, TTL_EXPANSIONS)
        return list(payload.get("data") or [])

    async def get_all_english_expansions(self) -> List[Dict[str, Any]]:
        """Page through English expansions until a short page."""
        expansions: List[Dict[str, Any]] = []
        page = 1
        while True:
            batch = await self.search_expansions("language:English", page, EXPANSION_PAGE_SIZE)
            expansions.extend(batch)
            if len(batch) < EXPANSION_PAGE_SIZE:
                break
            page += 1
        self.logger.info("catalog_expansions_loaded", count=len(expansions))
        return expansions

    def clear_cache(self) -> None:
        self.cache.clear()
        self.logger.info("catalog_cache_cleared")

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
