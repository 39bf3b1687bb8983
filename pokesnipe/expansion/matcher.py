"""Resolve free-text set names to canonical expansions."""

import re
from collections import Counter
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional

from rapidfuzz import fuzz

from ..core.constants import DENOMINATOR_TOLERANCE, RECENT_EXPANSION_POOL
from ..core.types import Expansion, ExpansionMatch, MatchResult, ReconciliationReport
from ..utils.log import LoggerMixin
from .data import ALIASES, EXPANSIONS, PROMO_PREFIX_TO_ID, SUBSET_MAP

SUBSET_NUMBER = re.compile(r"^(SV|TG|GG)\d+$", re.IGNORECASE)

FUZZY_ACCEPT_SCORE = 60
FUZZY_ALTERNATE_SCORE = 50
CONTAINMENT_WEIGHT = 80
UNDATED = "1999/01/01"


class ExpansionMatcher(LoggerMixin):
    """In-memory expansion catalog with alias, id, name and fuzzy lookup."""

    def __init__(
        self,
        expansions: Iterable[Expansion] = EXPANSIONS,
        aliases: Mapping[str, str] = ALIASES,
    ):
        self._expansions: Dict[str, Expansion] = {exp.id: exp for exp in expansions}
        self._aliases = dict(aliases)
        self._catalog_ids: Dict[str, str] = {}
        self.report = ReconciliationReport()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, expansion_id: str) -> Optional[Expansion]:
        return self._expansions.get(expansion_id)

    def all(self) -> List[Expansion]:
        return list(self._expansions.values())

    def match(
        self,
        set_name: Optional[str],
        card_number: Optional[str] = None,
        promo_prefix: Optional[str] = None,
    ) -> MatchResult:
        """Resolve a set name.

        Order: promo prefix, alias, id, exact name, then containment scoring
        (shorter/longer length ratio x 80). A containment match is only
        accepted at 60 or above; anything above 50 is reported as an alternate.
        """
        query = (set_name or "").lower().strip()

        if promo_prefix:
            promo_id = PROMO_PREFIX_TO_ID.get(promo_prefix.upper())
            expansion = self._expansions.get(promo_id) if promo_id else None
            if expansion:
                return MatchResult(True, query, ExpansionMatch(expansion, 100, "promo_prefix", promo_prefix))

        alias_id = self._aliases.get(query)
        if alias_id and alias_id in self._expansions:
            return MatchResult(True, query, ExpansionMatch(self._expansions[alias_id], 95, "alias", query))

        if query in self._expansions:
            return MatchResult(True, query, ExpansionMatch(self._expansions[query], 100, "id", query))

        best: Optional[ExpansionMatch] = None
        best_score = 0.0
        alternates: List[ExpansionMatch] = []
        for expansion in self._expansions.values():
            name = expansion.name.lower()
            if name == query:
                return MatchResult(True, query, ExpansionMatch(expansion, 100, "exact_name", expansion.name))

            if query not in name and name not in query:
                continue
            score = min(len(query), len(name)) / max(len(query), len(name)) * CONTAINMENT_WEIGHT
            candidate = ExpansionMatch(expansion, round(score), "partial", expansion.name)
            if score > best_score:
                best_score = score
                best = candidate
            if score > FUZZY_ALTERNATE_SCORE:
                alternates.append(candidate)

        if best and best_score >= FUZZY_ACCEPT_SCORE:
            others = [alt for alt in alternates if alt.expansion.id != best.expansion.id]
            return MatchResult(True, query, best, others)

        return MatchResult(False, query, None, alternates)

    # ------------------------------------------------------------------
    # Subsets and inference
    # ------------------------------------------------------------------

    @staticmethod
    def get_subset_prefix(card_number: Optional[str]) -> Optional[str]:
        """'SV65' -> 'SV', 'TG01' -> 'TG', '4' -> None."""
        if not card_number:
            return None
        m = SUBSET_NUMBER.match(card_number)
        return m.group(1).upper() if m else None

    def get_subset_expansion_id(self, main_id: str, prefix: str) -> str:
        subset_id = SUBSET_MAP.get(main_id, {}).get(prefix.upper())
        if subset_id:
            self.logger.debug("subset_expansion_mapped", main_id=main_id, prefix=prefix, subset_id=subset_id)
            return subset_id
        return main_id

    def infer_expansions_from_denominator(self, denominator: int) -> List[str]:
        """English expansions whose printed total is within tolerance, newest first."""
        candidates = [
            exp for exp in self._expansions.values()
            if exp.language_code == "EN" and abs(exp.printed_total - denominator) <= DENOMINATOR_TOLERANCE
        ]
        candidates.sort(key=lambda exp: exp.release_date or UNDATED, reverse=True)
        return [exp.id for exp in candidates]

    def get_recent_expansion_ids(self, limit: int = 10) -> List[str]:
        """Newest English main sets, skipping promo and subset ids."""
        candidates = [
            exp for exp in self._expansions.values()
            if exp.language_code == "EN"
            and not ("sv" in exp.id and len(exp.id) > 4)
            and "tg" not in exp.id
            and "gg" not in exp.id
        ]
        candidates.sort(key=lambda exp: exp.release_date or UNDATED, reverse=True)
        return [exp.id for exp in candidates[:limit]]

    def rank_recent_expansions(self, set_name: Optional[str], limit: int) -> List[str]:
        """Recent expansion ids ordered by how closely their name resembles `set_name`."""
        pool = self.get_recent_expansion_ids(RECENT_EXPANSION_POOL)
        if set_name:
            query = set_name.lower()
            # sort is stable, so equal scores keep newest-first order
            pool.sort(
                key=lambda exp_id: fuzz.partial_ratio(query, self._expansions[exp_id].name.lower()),
                reverse=True,
            )
        return pool[:limit]

    # ------------------------------------------------------------------
    # Catalog reconciliation
    # ------------------------------------------------------------------

    def get_catalog_id(self, local_id: str) -> str:
        return self._catalog_ids.get(local_id, local_id)

    def from_catalog_id(self, catalog_id: Optional[str]) -> Optional[Expansion]:
        """Local expansion for an id as the catalog reports it."""
        if not catalog_id:
            return None
        for local_id, mapped in self._catalog_ids.items():
            if mapped == catalog_id:
                return self._expansions.get(local_id)
        return self._expansions.get(catalog_id)

    def reconcile(self, catalog_expansions: List[Dict[str, Any]]) -> ReconciliationReport:
        """Align local ids with the catalog's expansion list.

        Local ids the catalog knows map to themselves and pick up logo/symbol.
        Unknown local ids are remapped by exact name, then by code; whatever is
        left is recorded as invalid.
        """
        report = ReconciliationReport(validated=True)
        by_name: Dict[str, Dict[str, Any]] = {}
        by_code: Dict[str, Dict[str, Any]] = {}
        catalog_ids = set()

        for entry in catalog_expansions:
            exp_id = entry.get("id")
            if not exp_id:
                continue
            catalog_ids.add(exp_id)
            by_name[(entry.get("name") or "").lower().strip()] = entry
            if entry.get("code"):
                by_code[entry["code"].lower()] = entry

            local = self._expansions.get(exp_id)
            if local is None:
                report.missing_catalog_ids.append(f"{exp_id} ({entry.get('name')})")
                continue
            self._catalog_ids[exp_id] = exp_id
            report.direct += 1
            logo, symbol = entry.get("logo"), entry.get("symbol")
            if logo or symbol:
                self._expansions[exp_id] = replace(local, logo=logo, symbol=symbol)

        for local_id, local in self._expansions.items():
            if local_id in catalog_ids:
                continue
            found = by_name.get(local.name.lower().strip())
            if found is None and local.code:
                found = by_code.get(local.code.lower())
            if found:
                self._catalog_ids[local_id] = found["id"]
                report.remapped[local_id] = found["id"]
            else:
                report.invalid_local_ids.append(f"{local_id} ({local.name})")

        self.report = report
        if report.remapped:
            self.logger.info("expansion_ids_remapped", count=len(report.remapped),
                             remapped=dict(list(report.remapped.items())[:30]))
        if report.invalid_local_ids or report.missing_catalog_ids:
            self.logger.warning(
                "expansion_id_mismatch",
                invalid_local=len(report.invalid_local_ids),
                missing_catalog=len(report.missing_catalog_ids),
                invalid_local_ids=report.invalid_local_ids[:20],
                missing_catalog_ids=report.missing_catalog_ids[:20],
            )
        self.logger.info("expansion_reconciled", catalog=len(catalog_ids),
                         local=len(self._expansions), direct=report.direct)
        return report

    async def initialize(self, catalog) -> ReconciliationReport:
        """Register release dates with the catalog client and reconcile ids once.

        A catalog failure leaves the local ids in place and is only logged.
        """
        catalog.register_release_dates(self.release_dates())
        if self.report.validated:
            return self.report
        context = self.log_start("expansion_reconcile", local=len(self._expansions))
        try:
            expansions = await catalog.get_all_english_expansions()
        except Exception as e:
            self.log_error(context, e)
            return self.report
        report = self.reconcile(expansions)
        self.log_success(context, direct=report.direct, remapped=len(report.remapped))
        return report

    def release_dates(self) -> Dict[str, str]:
        return {exp.id: exp.release_date for exp in self._expansions.values()}

    def get_stats(self) -> Dict[str, Any]:
        by_series = Counter(exp.series for exp in self._expansions.values())
        by_language = Counter(exp.language_code for exp in self._expansions.values())
        return {
            "total_expansions": len(self._expansions),
            "english_expansions": by_language.get("EN", 0),
            "japanese_expansions": by_language.get("JA", 0),
            "alias_count": len(self._aliases),
            "by_series": dict(by_series),
            "validated": self.report.validated,
            "remapped": len(self.report.remapped),
            "invalid_local_ids": len(self.report.invalid_local_ids),
        }


expansion_matcher = ExpansionMatcher()
