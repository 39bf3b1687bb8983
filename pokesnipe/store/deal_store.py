"""In-memory deal sink."""

import asyncio
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.types import Deal
from ..utils.error_handler import DealStoreError
from ..utils.log import LoggerMixin


class InMemoryDealStore(LoggerMixin):
    """Deals keyed by id, at most one per marketplace listing."""

    def __init__(self):
        self._deals: Dict[str, Deal] = {}
        self._by_item: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def add_async(self, deal: Deal) -> bool:
        """Store a deal. Returns False when the listing already has one.

        Raises DealStoreError if the id is taken by a deal for another listing.
        """
        async with self._lock:
            existing = self._deals.get(deal.id)
            if existing is not None and existing.item_id != deal.item_id:
                raise DealStoreError(
                    "Deal id already stored for another listing",
                    {"deal_id": deal.id, "item_id": deal.item_id, "stored_item_id": existing.item_id},
                )
            if deal.item_id in self._by_item:
                self.logger.debug("deal_duplicate", deal_id=deal.id, item_id=deal.item_id)
                return False
            self._deals[deal.id] = deal
            self._by_item[deal.item_id] = deal.id
        self.logger.info(
            "deal_stored",
            deal_id=deal.id,
            item_id=deal.item_id,
            card_name=deal.card_name,
            tier=deal.tier.value,
            profit_gbp=round(deal.profit_gbp, 2),
        )
        return True

    def get(self, deal_id: str) -> Optional[Deal]:
        return self._deals.get(deal_id)

    def has_deal(self, item_id: str) -> bool:
        return item_id in self._by_item

    def list_active(self, now: Optional[datetime] = None) -> List[Deal]:
        """Unexpired deals, best discount first."""
        now = now or datetime.now(timezone.utc)
        active = [deal for deal in self._deals.values() if deal.expires_at > now]
        return sorted(active, key=lambda deal: deal.discount_percent, reverse=True)

    async def purge_expired(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(timezone.utc)
        async with self._lock:
            expired = [deal for deal in self._deals.values() if deal.expires_at <= now]
            for deal in expired:
                del self._deals[deal.id]
                self._by_item.pop(deal.item_id, None)
        if expired:
            self.logger.info("deals_expired", count=len(expired), remaining=len(self._deals))
        return len(expired)

    def get_stats(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        active = self.list_active(now)
        tiers = Counter(deal.tier.value for deal in active)
        return {
            "total": len(self._deals),
            "active": len(active),
            "by_tier": {tier.lower(): tiers.get(tier, 0) for tier in ("PREMIUM", "HIGH", "STANDARD")},
            "avg_discount": (
                round(sum(d.discount_percent for d in active) / len(active), 1) if active else 0.0
            ),
            "total_potential_profit": round(sum(d.profit_gbp for d in active), 2),
        }

    def __len__(self) -> int:
        return len(self._deals)
