"""Per-listing arbitrage pipeline: parse, resolve, query, validate, price, emit."""

import asyncio
import re
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from ..core.constants import (
    CANDIDATE_NAME_SIMILARITY,
    DEAL_TTL_HOURS,
    DEFAULT_CONDITION,
    DIRECT_NUMBER_PAGE_SIZE,
    EARLY_PRINTED_TOTAL_TOLERANCE,
    FAILED_QUERY_MAX,
    FAILED_QUERY_TTL_S,
    HOME_COUNTRY,
    MIN_CONFIDENCE_WITH_NUMBER,
    MIN_CONFIDENCE_WITHOUT_NUMBER,
    MIN_NAME_SEARCH_LENGTH,
    MIN_NAME_SIMILARITY,
    NAME_SEARCH_PAGE_SIZE,
    NAME_SIMILARITY_WARN,
    OR_QUERY_EXPANSIONS,
    OR_QUERY_PAGE_SIZE,
    POST_MATCH_PRINTED_TOTAL_TOLERANCE,
    PROCESSED_MAX,
    PROCESSED_TTL_S,
    PRUNE_INTERVAL_S,
    RECENT_EXPANSION_POOL,
    SECRET_DENOMINATOR_FLOOR,
    SECRET_NUMBER_FLOOR,
    SIGNATURE_MAX,
    SIGNATURE_TTL_S,
    WILDCARD_PAGE_SIZE,
)
from ..core.types import (
    CatalogCard,
    Deal,
    Expansion,
    Listing,
    MatchDetails,
    ParsedTitle,
    Preferences,
    ProcessResult,
    SignatureEntry,
)
from ..expansion.matcher import ExpansionMatcher, expansion_matcher
from ..listing.source import ListingSource
from ..match.similarity import best_name_match, calculate_name_similarity
from ..parser.title_parser import TitleParser, title_parser
from ..pricing.exchange_rate import ExchangeRateService
from ..pricing.selector import find_variant_prices, normalize_grading_company, select_best_price
from ..store.bounded_cache import BoundedTTLCache
from ..utils.config import settings
from ..utils.log import LoggerMixin
from ..utils.retry import is_retryable_error
from .diagnostics import DiagnosticsAggregator, ScanDiagnostics
from .preferences import PreferenceStore, StaticPreferenceStore, default_preferences
from .profit import affiliate_url, compute_profit, determine_tier, listing_url

# Numbers printed outside the main set count; their totals never match
PRINTED_TOTAL_EXEMPT = re.compile(r"^(TG|GG|SV|RC|H)\d+$", re.IGNORECASE)
SUBSET_PREFIXED = re.compile(r"^(TG|GG|SV)(\d+)$", re.IGNORECASE)
NON_DIGITS = re.compile(r"\D")


def _strip_zeros(number: str) -> str:
    return number.lstrip("0") or number


def _numeric(number: str) -> int:
    digits = NON_DIGITS.sub("", number or "")
    return int(digits) if digits else 0


@dataclass(frozen=True)
class LadderQuery:
    """Everything the catalog rungs need for one listing."""
    listing: Listing
    parsed: ParsedTitle
    expansion: Expansion
    match_type: str
    card_number: str
    query_expansion_id: str
    catalog_expansion_id: str
    subset_prefix: Optional[str] = None
    alternate_number: Optional[str] = None

    @property
    def signature(self) -> str:
        return f"{self.expansion.id}:{self.card_number}"


class LadderHit(NamedTuple):
    card: CatalogCard
    expansion: Expansion
    match_type: str
    rung: str


class ArbitrageEngine(LoggerMixin):
    """Turns marketplace listings into deals.

    One instance owns the dedup, signature and failed-query caches and the
    scan diagnostics. Collaborators are injected so tests can run isolated
    engines against fake catalogs.
    """

    def __init__(
        self,
        catalog: Any,
        matcher: Optional[ExpansionMatcher] = None,
        parser: Optional[TitleParser] = None,
        preference_store: Optional[PreferenceStore] = None,
        deal_sink: Any = None,
        exchange_rate: Optional[ExchangeRateService] = None,
        clock: Callable[[], float] = time.monotonic,
        preferences_reload_s: Optional[float] = None,
        listing_source: Optional[ListingSource] = None,
    ):
        self.catalog = catalog
        self.listing_source = listing_source
        self.matcher = matcher or expansion_matcher
        self.parser = parser or title_parser
        self.preference_store = preference_store or StaticPreferenceStore()
        self.deal_sink = deal_sink
        self.exchange_rate = exchange_rate or ExchangeRateService()
        self._clock = clock
        self.preferences_reload_s = (
            settings.PREFERENCES_RELOAD_S if preferences_reload_s is None else preferences_reload_s
        )

        self.preferences: Preferences = default_preferences()
        self._preferences_loaded_at: Optional[float] = None

        self.processed = BoundedTTLCache(PROCESSED_TTL_S, PROCESSED_MAX, clock)
        self.signatures = BoundedTTLCache(SIGNATURE_TTL_S, SIGNATURE_MAX, clock)
        self.failed_queries = BoundedTTLCache(FAILED_QUERY_TTL_S, FAILED_QUERY_MAX, clock)

        self.diagnostics = DiagnosticsAggregator()
        self._prune_task: Optional[asyncio.Task] = None

        self._ladder = (
            ("exact", self._rung_exact),
            ("zero_padded", self._rung_zero_padded),
            ("subset_wildcard", self._rung_subset_wildcard),
            ("number_wildcard", self._rung_number_wildcard),
            ("name_in_expansion", self._rung_name_in_expansion),
            ("recent_or_query", self._rung_recent_or_query),
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _reject(
        self,
        reason: str,
        stage: str,
        counter: Optional[str] = None,
        matched: bool = False,
    ) -> ProcessResult:
        if counter:
            self.diagnostics.track(counter)
        return ProcessResult(success=False, reason=reason, stage=stage, matched=matched)

    async def process_listing(self, listing: Listing) -> ProcessResult:
        """Run one listing through every stage. Business outcomes never raise."""
        self.diagnostics.track("total_scanned")

        if listing.item_id in self.processed:
            return self._reject("Already processed", "dedup", "stage1_already_processed")
        self.processed.set(listing.item_id, self._clock())

        await self._refresh_preferences()

        parsed = self.parser.parse(listing.title)
        self.logger.debug(
            "title_parsed",
            item_id=listing.item_id,
            card_name=parsed.card_name,
            card_number=parsed.card_number,
            printed_number=parsed.printed_number,
            set_name=parsed.set_name,
            confidence=parsed.confidence_score,
            language_code=parsed.language_code,
            is_graded=parsed.is_graded,
        )

        country = (listing.country or "").upper()
        if country and country != HOME_COUNTRY:
            self.logger.debug(
                "listing_skipped",
                item_id=listing.item_id,
                reason="international_seller",
                country=listing.country,
                location=listing.item_location,
            )
            return self._reject(
                f"International seller: {listing.country}",
                "international_seller",
                "stage2_international_seller",
            )

        if listing.condition_blocked:
            self.logger.debug("listing_skipped", item_id=listing.item_id, reason="blocked_condition")
            return self._reject("Blocked condition (damaged/creased)", "blocked_condition")

        if parsed.language_code != "EN":
            return self._reject(
                f"Non-English card: {parsed.language}", "non_english", "stage3_non_english"
            )

        # Fakes and junk score 0-10 and fall out at the confidence gate
        if parsed.is_fake or parsed.is_junk:
            kind = "Fake/replica listing" if parsed.is_fake else "Bulk/junk listing"
            self.logger.debug("listing_skipped", item_id=listing.item_id, reason=kind)
            return self._reject(kind, "low_confidence", "stage4_low_confidence")

        min_confidence = MIN_CONFIDENCE_WITH_NUMBER if parsed.card_number else MIN_CONFIDENCE_WITHOUT_NUMBER
        if parsed.confidence_score < min_confidence:
            self.logger.debug(
                "listing_skipped",
                item_id=listing.item_id,
                reason="low_confidence",
                confidence=parsed.confidence_score,
                min_required=min_confidence,
            )
            return self._reject(
                f"Low confidence: {parsed.confidence_score} (min: {min_confidence})",
                "low_confidence",
                "stage4_low_confidence",
            )

        match = self.matcher.match(parsed.set_name, parsed.card_number, parsed.promo_prefix)
        if not match.success or match.match is None:
            hit = await self._denominator_or_query(listing, parsed)
            if hit is not None:
                self.diagnostics.track("successful_matches")
                return await self._process_matched_card(listing, parsed, hit.expansion, hit.card, hit.match_type)

            self.logger.debug(
                "listing_skipped",
                item_id=listing.item_id,
                reason="no_expansion_match",
                parsed_set_name=parsed.set_name,
                card_number=parsed.card_number,
                near_misses=[(a.expansion.id, a.match_score) for a in match.alternates[:5]],
            )
            return self._reject("No expansion match", "expansion_match", "stage5_no_expansion_match")

        expansion = match.match.expansion
        match_type = match.match.match_type
        self.logger.debug(
            "expansion_matched",
            item_id=listing.item_id,
            parsed_set_name=parsed.set_name,
            expansion_id=expansion.id,
            match_type=match_type,
            score=match.match.match_score,
        )

        if expansion.language_code != "EN":
            return self._reject("Non-English expansion skipped", "non_english_expansion")

        if not parsed.card_number:
            return self._reject("No card number found", "card_number", "stage6_no_card_number")

        mismatch = self._early_printed_total_mismatch(parsed, expansion)
        if mismatch is not None:
            self.logger.warning(
                "early_printed_total_mismatch",
                item_id=listing.item_id,
                listing_denominator=mismatch,
                expansion_id=expansion.id,
                expansion_printed_total=expansion.printed_total,
            )
            return self._reject(
                f"Printed total mismatch: /{mismatch} vs {expansion.name} ({expansion.printed_total} cards)",
                "printed_total",
                "stage7_printed_total_mismatch",
            )

        query = self._build_ladder_query(listing, parsed, expansion, match_type)

        cached: Optional[SignatureEntry] = self.signatures.get(query.signature)
        if cached is not None:
            if not cached.found:
                return self._reject("Card previously not found (cached)", "catalog_cached")
            if cached.card is not None:
                self.logger.debug("card_cache_hit", signature=query.signature, card_id=cached.card_id)
                self.diagnostics.track("successful_matches")
                cached_expansion = self.matcher.get(cached.expansion_id or "") or expansion
                return await self._process_matched_card(
                    listing, parsed, cached_expansion, cached.card, cached.match_type or match_type,
                    match.match.match_score if cached_expansion.id == expansion.id else 0,
                )

        if query.signature in self.failed_queries:
            return self._reject("Query recently failed (cached)", "catalog_cached")

        hit = await self._run_ladder(query)
        if hit is None:
            self.signatures.set(query.signature, SignatureEntry(found=False), ttl_s=FAILED_QUERY_TTL_S)
            self.failed_queries.set(query.signature, self._clock())
            self.logger.info(
                "catalog_no_match",
                item_id=listing.item_id,
                signature=query.signature,
                alternate_number=query.alternate_number,
            )
            return self._reject("Card not found in catalog", "catalog_lookup", "stage8_catalog_not_found")

        self.signatures.set(
            query.signature,
            SignatureEntry(
                found=True,
                card_id=hit.card.id,
                card=hit.card,
                expansion_id=hit.expansion.id,
                match_type=hit.match_type,
            ),
        )
        self.diagnostics.track("successful_matches")
        score = match.match.match_score if hit.expansion.id == expansion.id else 0
        return await self._process_matched_card(listing, parsed, hit.expansion, hit.card, hit.match_type, score)

    async def _refresh_preferences(self) -> None:
        now = self._clock()
        if self._preferences_loaded_at is not None and now - self._preferences_loaded_at < self.preferences_reload_s:
            return
        try:
            self.preferences = await self.preference_store.read()
            self._preferences_loaded_at = now
            self.logger.debug("preferences_loaded", min_profit_gbp=self.preferences.min_profit_gbp)
        except Exception as e:
            # keep serving the previous preferences and retry on the next listing
            self.logger.warning("preferences_load_failed", error=str(e))

    @staticmethod
    def _early_printed_total_mismatch(parsed: ParsedTitle, expansion: Expansion) -> Optional[int]:
        """The listing's denominator when it cannot belong to `expansion`, else None."""
        denominator = parsed.denominator
        if denominator is None or not expansion.printed_total:
            return None
        number = parsed.card_number or ""
        numeric = _numeric(number)
        exempt = (
            bool(PRINTED_TOTAL_EXEMPT.match(number))
            or numeric > expansion.printed_total
            or numeric > SECRET_NUMBER_FLOOR
            or denominator > SECRET_DENOMINATOR_FLOOR
        )
        if exempt or abs(denominator - expansion.printed_total) <= EARLY_PRINTED_TOTAL_TOLERANCE:
            return None
        return denominator

    def _build_ladder_query(
        self,
        listing: Listing,
        parsed: ParsedTitle,
        expansion: Expansion,
        match_type: str,
    ) -> LadderQuery:
        alternate = None
        if parsed.promo_prefix and parsed.printed_number:
            card_number = parsed.printed_number.upper()
        else:
            card_number = _strip_zeros(parsed.card_number or "")
            subset = SUBSET_PREFIXED.match(card_number)
            if subset:
                alternate = _strip_zeros(subset.group(2))

        query_expansion_id = expansion.id
        subset_prefix = self.matcher.get_subset_prefix(card_number)
        if subset_prefix:
            query_expansion_id = self.matcher.get_subset_expansion_id(expansion.id, subset_prefix)

        return LadderQuery(
            listing=listing,
            parsed=parsed,
            expansion=expansion,
            match_type=match_type,
            card_number=card_number,
            query_expansion_id=query_expansion_id,
            catalog_expansion_id=self.matcher.get_catalog_id(query_expansion_id),
            subset_prefix=subset_prefix,
            alternate_number=alternate,
        )

    # ------------------------------------------------------------------
    # Catalog fallback ladder
    # ------------------------------------------------------------------

    async def _run_ladder(self, query: LadderQuery) -> Optional[LadderHit]:
        """Try each rung in order; a rung that raises counts as a miss."""
        for rung, attempt in self._ladder:
            try:
                hit = await attempt(query)
            except Exception as e:
                self.logger.warning(
                    "catalog_rung_failed",
                    rung=rung,
                    signature=query.signature,
                    error=str(e),
                    error_type=type(e).__name__,
                    retryable=is_retryable_error(e),
                )
                continue
            if hit is not None:
                self.logger.info(
                    "catalog_card_found",
                    rung=rung,
                    signature=query.signature,
                    card_id=hit.card.id,
                    card_name=hit.card.name,
                )
                return hit
        return None

    def _hit(self, query: LadderQuery, card: Optional[CatalogCard], rung: str) -> Optional[LadderHit]:
        if card is None:
            return None
        return LadderHit(card, query.expansion, query.match_type, rung)

    async def _rung_exact(self, query: LadderQuery) -> Optional[LadderHit]:
        q = f"expansion.id:{query.catalog_expansion_id} number:{query.card_number}"
        cards = await self.catalog.search_cards(q, page_size=1, include="prices,images")
        return self._hit(query, cards[0] if cards else None, "exact")

    async def _rung_zero_padded(self, query: LadderQuery) -> Optional[LadderHit]:
        subset = SUBSET_PREFIXED.match(query.card_number)
        if not subset:
            return None
        prefix, digits = subset.group(1).upper(), subset.group(2)
        padded = digits.zfill(2)
        if padded == digits:
            return None
        q = f"expansion.id:{query.catalog_expansion_id} number:{prefix}{padded}"
        cards = await self.catalog.search_cards(q, page_size=1, include="prices,images")
        return self._hit(query, cards[0] if cards else None, "zero_padded")

    async def _rung_subset_wildcard(self, query: LadderQuery) -> Optional[LadderHit]:
        subset = SUBSET_PREFIXED.match(query.card_number)
        if not subset:
            return None
        prefix, digits = subset.group(1).upper(), subset.group(2)
        cards = await self.catalog.search_cards_in_expansion(
            query.catalog_expansion_id, f"number:{prefix}*", page_size=WILDCARD_PAGE_SIZE
        )
        bare, padded = _strip_zeros(digits), digits.zfill(2)
        wanted = {query.card_number.upper(), f"{prefix}{bare}", f"{prefix}{padded}", bare, padded}
        card = next((c for c in cards if str(c.number).upper() in wanted), None)
        return self._hit(query, card, "subset_wildcard")

    async def _rung_number_wildcard(self, query: LadderQuery) -> Optional[LadderHit]:
        if SUBSET_PREFIXED.match(query.card_number):
            return None
        bare = _strip_zeros(query.card_number)
        cards = await self.catalog.search_cards_in_expansion(
            query.catalog_expansion_id, f"number:{bare}*", page_size=WILDCARD_PAGE_SIZE
        )
        padded = query.card_number.zfill(3)
        card = next(
            (
                c for c in cards
                if _strip_zeros(str(c.number)) == bare or str(c.number) in (query.card_number, padded)
            ),
            None,
        )
        if card is None and bare.isdigit() and int(bare) > 100:
            # Secret-rare numbers above the set total are missed by some wildcard lookups
            direct = await self.catalog.search_cards_in_expansion(
                query.catalog_expansion_id, f"number:{bare}", page_size=DIRECT_NUMBER_PAGE_SIZE
            )
            card = direct[0] if direct else None
        return self._hit(query, card, "number_wildcard")

    async def _rung_name_in_expansion(self, query: LadderQuery) -> Optional[LadderHit]:
        name = query.parsed.card_name
        if not name or len(name) < MIN_NAME_SEARCH_LENGTH:
            return None
        cards = await self.catalog.search_cards_in_expansion(
            self.matcher.get_catalog_id(query.expansion.id),
            f"name:{name.lower()}",
            page_size=NAME_SEARCH_PAGE_SIZE,
        )
        bare = _strip_zeros(query.card_number)
        wanted = {bare, query.card_number}
        if query.alternate_number:
            wanted.add(query.alternate_number)
        card = next(
            (c for c in cards if str(c.number) in wanted or _strip_zeros(str(c.number)) == bare),
            None,
        )
        return self._hit(query, card, "name_in_expansion")

    async def _rung_recent_or_query(self, query: LadderQuery) -> Optional[LadderHit]:
        if not query.parsed.card_name:
            return None
        tried = {query.query_expansion_id, query.catalog_expansion_id}
        candidates = [
            exp_id
            for exp_id in self.matcher.rank_recent_expansions(query.parsed.set_name, RECENT_EXPANSION_POOL)
            if exp_id not in tried
        ][:OR_QUERY_EXPANSIONS]
        return await self._or_query(
            candidates, query.card_number, query.parsed.card_name, "or_query_fallback"
        )

    async def _denominator_or_query(self, listing: Listing, parsed: ParsedTitle) -> Optional[LadderHit]:
        """Last resort when no set name resolved: search sets whose size fits the denominator."""
        denominator = parsed.denominator
        if not parsed.card_number or denominator is None:
            return None
        inferred = [
            self.matcher.get(exp_id)
            for exp_id in self.matcher.infer_expansions_from_denominator(denominator)
        ]
        candidates = [
            exp.id for exp in inferred if exp is not None and exp.language_code == "EN"
        ][:OR_QUERY_EXPANSIONS]
        if not candidates:
            return None
        self.logger.info(
            "denominator_or_query",
            item_id=listing.item_id,
            denominator=denominator,
            candidates=candidates,
        )
        try:
            return await self._or_query(
                candidates, _strip_zeros(parsed.card_number), parsed.card_name, "denominator_or_query"
            )
        except Exception as e:
            self.logger.warning("catalog_rung_failed", rung="denominator_or_query", error=str(e))
            return None

    async def _or_query(
        self,
        expansion_ids: Sequence[str],
        card_number: str,
        card_name: Optional[str],
        match_type: str,
    ) -> Optional[LadderHit]:
        """One catalog call across several expansions; the best-named card wins."""
        if not expansion_ids:
            return None
        clause = " OR ".join(f"expansion.id:{self.matcher.get_catalog_id(i)}" for i in expansion_ids)
        cards = await self.catalog.search_cards(
            f"({clause}) number:{card_number}", page_size=OR_QUERY_PAGE_SIZE, include="prices,images"
        )

        if card_name:
            best = best_name_match(card_name, cards, CANDIDATE_NAME_SIMILARITY)
        else:
            best = cards[0] if cards else None
        if best is None:
            return None
        best_similarity = calculate_name_similarity(card_name, best.name) if card_name else 0.0
        expansion = self.matcher.from_catalog_id(best.expansion_id)
        if expansion is None:
            self.logger.debug("or_query_unknown_expansion", card_id=best.id, expansion_id=best.expansion_id)
            return None
        self.logger.info(
            "or_query_match",
            match_type=match_type,
            expansion_id=expansion.id,
            card_id=best.id,
            name_similarity=round(best_similarity, 2),
        )
        return LadderHit(best, expansion, match_type, match_type)

    # ------------------------------------------------------------------
    # Validation, pricing and deal emission
    # ------------------------------------------------------------------

    @staticmethod
    def _post_match_printed_total_mismatch(
        parsed: ParsedTitle,
        expansion: Expansion,
        card: CatalogCard,
    ) -> Optional[int]:
        denominator = parsed.denominator
        total = expansion.printed_total or card.printed_total
        if denominator is None or not total:
            return None
        number = str(card.number or "")
        if PRINTED_TOTAL_EXEMPT.match(number) or _numeric(number) > total:
            return None
        if abs(denominator - total) > POST_MATCH_PRINTED_TOTAL_TOLERANCE:
            return denominator
        return None

    def _listing_condition(self, listing: Listing, parsed: ParsedTitle) -> Tuple[str, str]:
        if listing.mapped_condition:
            return listing.mapped_condition, listing.condition_source or "default"
        if parsed.condition:
            return parsed.condition, "title"
        return DEFAULT_CONDITION, "default"

    async def _process_matched_card(
        self,
        listing: Listing,
        parsed: ParsedTitle,
        expansion: Expansion,
        card: CatalogCard,
        match_type: str,
        match_score: int = 0,
    ) -> ProcessResult:
        prefs = self.preferences

        mismatch = self._post_match_printed_total_mismatch(parsed, expansion, card)
        if mismatch is not None:
            self.logger.warning(
                "printed_total_mismatch",
                item_id=listing.item_id,
                listing_denominator=mismatch,
                expansion_id=expansion.id,
                expansion_printed_total=expansion.printed_total,
                card_id=card.id,
            )
            return self._reject(
                f"Printed total mismatch: listing shows /{mismatch} but {expansion.name} "
                f"has {expansion.printed_total or card.printed_total} cards",
                "printed_total",
                "stage7_printed_total_mismatch",
                matched=True,
            )

        similarity = 1.0
        if parsed.card_name and card.name:
            similarity = calculate_name_similarity(parsed.card_name, card.name)
            if similarity < MIN_NAME_SIMILARITY:
                self.logger.warning(
                    "card_name_mismatch",
                    item_id=listing.item_id,
                    parsed_name=parsed.card_name,
                    catalog_name=card.name,
                    similarity=round(similarity, 2),
                )
                return self._reject(
                    f'Card name mismatch: parsed "{parsed.card_name}" but catalog returned "{card.name}"',
                    "name_similarity",
                    "stage9_name_mismatch",
                    matched=True,
                )
            if similarity < NAME_SIMILARITY_WARN:
                self.logger.warning(
                    "card_name_low_similarity",
                    parsed_name=parsed.card_name,
                    catalog_name=card.name,
                    similarity=round(similarity, 2),
                )

        condition, condition_source = self._listing_condition(listing, parsed)

        variant = find_variant_prices(card, parsed)
        price = None
        if variant is not None:
            price = select_best_price(
                variant.prices,
                is_graded=parsed.is_graded,
                grading_company=parsed.grading_company,
                grade=parsed.grade,
                condition=condition,
            )
        if price is None or not price.value:
            self.logger.debug(
                "no_price_match",
                item_id=listing.item_id,
                card_id=card.id,
                is_graded=parsed.is_graded,
                grading_company=parsed.grading_company,
                grade=parsed.grade,
                condition=condition,
                variants=[v.name for v in card.variants],
            )
            return self._reject("No matching price found", "price_selection", "stage10_no_price_match", matched=True)

        usd_rate = await self.exchange_rate.get_usd_rate()
        market_usd = price.value
        profit = compute_profit(listing.price, listing.shipping, market_usd / usd_rate)
        self.logger.info(
            "arbitrage_calculated",
            item_id=listing.item_id,
            total_cost_gbp=round(profit.total_cost_gbp, 2),
            market_value_gbp=round(profit.market_value_gbp, 2),
            profit_gbp=round(profit.profit_gbp, 2),
            discount_percent=round(profit.discount_percent, 1),
        )

        if profit.profit_gbp < prefs.min_profit_gbp:
            return self._reject(
                f"Profit £{profit.profit_gbp:.2f} below minimum £{prefs.min_profit_gbp}",
                "min_profit",
                "stage11_below_profit",
                matched=True,
            )

        tier = determine_tier(profit.market_value_gbp, profit.discount_percent, prefs.tier_thresholds)
        if tier is None:
            return self._reject("Does not meet threshold", "tier_threshold", "stage12_below_threshold", matched=True)

        preference_rejection = self._preference_rejection(parsed, condition)
        if preference_rejection:
            self.logger.debug("listing_skipped", item_id=listing.item_id, reason=preference_rejection)
            return self._reject(preference_rejection, "preferences", matched=True)

        url = listing_url(listing.item_id, listing.url)
        found_at = datetime.now(timezone.utc)
        deal = Deal(
            id=uuid.uuid4().hex,
            item_id=listing.item_id,
            url=url,
            affiliate_url=affiliate_url(url),
            title=listing.title,
            card_id=card.id,
            card_name=card.name,
            card_number=card.number,
            expansion_id=expansion.id,
            expansion_name=expansion.name,
            image_url=card.image_url,
            price_gbp=listing.price,
            shipping_gbp=listing.shipping,
            total_cost_gbp=profit.total_cost_gbp,
            market_value_usd=market_usd,
            market_value_gbp=profit.market_value_gbp,
            exchange_rate=usd_rate,
            profit_gbp=profit.profit_gbp,
            discount_percent=profit.discount_percent,
            tier=tier,
            is_graded=parsed.is_graded,
            grading_company=parsed.grading_company,
            grade=parsed.grade,
            condition=None if parsed.is_graded else condition,
            variant=variant.variant_name if variant else None,
            seller=listing.seller,
            seller_feedback=listing.seller_feedback,
            item_country=listing.country,
            found_at=found_at,
            expires_at=found_at + timedelta(hours=DEAL_TTL_HOURS),
            match_confidence=parsed.confidence_score,
            match_type=match_type,
            match_details=MatchDetails(
                is_first_edition=parsed.is_first_edition,
                is_shadowless=parsed.is_shadowless,
                is_holo=parsed.is_holo,
                is_reverse_holo=parsed.is_reverse_holo,
                parsed_set_name=parsed.set_name,
                parsed_card_number=parsed.card_number,
                parsed_name=parsed.card_name,
                expansion_match_type=match_type,
                expansion_match_score=match_score,
                name_similarity=round(similarity, 3),
                price_variant=variant.variant_name if variant else None,
                condition_source=condition_source,
            ),
        )

        stored = await self._store_deal(deal)
        if stored:
            self.diagnostics.track("successful_deals")
            self.logger.info(
                "deal_found",
                deal_id=deal.id,
                card=deal.card_name,
                expansion=deal.expansion_name,
                tier=deal.tier.value,
                profit_gbp=round(deal.profit_gbp, 2),
                discount_percent=round(deal.discount_percent, 1),
            )
        return ProcessResult(
            success=stored,
            reason=None if stored else "Deal not stored",
            stage="complete",
            matched=True,
            deal=deal,
            stored=stored,
        )

    def _preference_rejection(self, parsed: ParsedTitle, condition: str) -> Optional[str]:
        prefs = self.preferences
        if not parsed.is_graded:
            if condition and condition not in prefs.allowed_conditions:
                return f"Condition {condition} not in allowed list"
            return None

        if parsed.grading_company and prefs.preferred_grading_companies:
            company = normalize_grading_company(parsed.grading_company)
            preferred = {normalize_grading_company(c) for c in prefs.preferred_grading_companies}
            if company not in preferred:
                return f"Grading company {parsed.grading_company} not in preferred list"

        if parsed.grade is not None:
            try:
                grade = float(parsed.grade)
            except ValueError:
                return None
            if grade < prefs.min_grade or grade > prefs.max_grade:
                return f"Grade {parsed.grade} outside range {prefs.min_grade}-{prefs.max_grade}"
        return None

    async def _store_deal(self, deal: Deal) -> bool:
        if self.deal_sink is None:
            return False
        try:
            stored = await self.deal_sink.add_async(deal)
        except Exception as e:
            self.logger.error(
                "deal_store_failed",
                deal_id=deal.id,
                item_id=deal.item_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        if not stored:
            self.logger.warning("deal_not_stored", deal_id=deal.id, item_id=deal.item_id)
        return bool(stored)

    # ------------------------------------------------------------------
    # Scans, caches and diagnostics
    # ------------------------------------------------------------------

    def start_scan(self) -> None:
        self.diagnostics.start_scan()

    def end_scan(self) -> ScanDiagnostics:
        return self.diagnostics.end_scan()

    def get_diagnostics(self) -> Dict[str, Any]:
        return self.diagnostics.snapshot()

    def clear_processed_listings(self) -> None:
        self.processed.clear()
        self.logger.info("processed_listings_cleared")

    def clear_query_caches(self) -> None:
        self.signatures.clear()
        self.failed_queries.clear()
        self.logger.info("query_caches_cleared")

    def get_query_cache_stats(self) -> Dict[str, int]:
        entries: List[SignatureEntry] = [entry for _, entry in self.signatures.items()]
        found = sum(1 for entry in entries if entry.found)
        return {
            "queried_cards": len(entries),
            "found": found,
            "not_found": len(entries) - found,
            "failed_queries": len(self.failed_queries.items()),
        }

    def prune_expired_failed_queries(self) -> int:
        """Forget failed signatures past their TTL so the next listing queries again."""
        pruned = 0
        for signature in self.failed_queries.expired_keys():
            self.failed_queries.delete(signature)
            self.signatures.delete(signature)
            pruned += 1
        if pruned:
            self.logger.debug("failed_queries_pruned", count=pruned)
        return pruned

    def prune_caches(self) -> Dict[str, int]:
        pruned = {
            "failed_queries": self.prune_expired_failed_queries(),
            "processed_listings": self.processed.prune(),
            "queried_cards": self.signatures.prune(),
        }
        if any(pruned.values()):
            self.logger.info(
                "caches_pruned",
                **pruned,
                remaining={
                    "processed_listings": len(self.processed),
                    "queried_cards": len(self.signatures),
                    "failed_queries": len(self.failed_queries),
                },
            )
        return pruned

    async def _prune_loop(self, interval_s: float) -> None:
        while True:
            await asyncio.sleep(interval_s)
            self.prune_caches()

    def start_pruning(self, interval_s: float = PRUNE_INTERVAL_S) -> None:
        """Sweep caches every `interval_s` seconds on the running loop."""
        self.stop_pruning()
        self._prune_task = asyncio.get_running_loop().create_task(self._prune_loop(interval_s))
        self.logger.debug("cache_pruning_started", interval_s=interval_s)

    def stop_pruning(self) -> None:
        if self._prune_task is not None:
            self._prune_task.cancel()
            self._prune_task = None
