"""Per-scan and session counters keyed by where listings leave the pipeline."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from ..utils.log import get_logger

logger = get_logger(__name__)


@dataclass
class ScanDiagnostics:
    total_scanned: int = 0
    stage1_already_processed: int = 0
    stage2_international_seller: int = 0
    stage3_non_english: int = 0
    stage4_low_confidence: int = 0
    stage5_no_expansion_match: int = 0
    stage6_no_card_number: int = 0
    stage7_printed_total_mismatch: int = 0
    stage8_catalog_not_found: int = 0
    stage9_name_mismatch: int = 0
    stage10_no_price_match: int = 0
    stage11_below_profit: int = 0
    stage12_below_threshold: int = 0
    successful_matches: int = 0
    successful_deals: int = 0

    def track(self, counter: str) -> None:
        if not hasattr(self, counter):
            raise KeyError(f"Unknown diagnostics counter: {counter}")
        setattr(self, counter, getattr(self, counter) + 1)

    def merge(self, other: "ScanDiagnostics") -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))

    def copy(self) -> "ScanDiagnostics":
        return ScanDiagnostics(**asdict(self))

    @property
    def catalog_attempts(self) -> int:
        """Listings that reached the catalog, hit or miss."""
        return self.successful_matches + self.stage8_catalog_not_found

    def rates(self) -> Dict[str, float]:
        """Eligibility and match rates per scanned listing; deal rate per match."""
        scanned = self.total_scanned
        return {
            "eligibility_rate": round(self.catalog_attempts / scanned * 100, 1) if scanned else 0.0,
            "match_rate": round(self.successful_matches / scanned * 100, 1) if scanned else 0.0,
            "deal_rate": (
                round(self.successful_deals / self.successful_matches * 100, 1)
                if self.successful_matches else 0.0
            ),
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DiagnosticsAggregator:
    """Owns the running scan, the last finished scan and the session totals."""

    def __init__(self):
        self.current = ScanDiagnostics()
        self.last_scan: Optional[ScanDiagnostics] = None
        self.session = ScanDiagnostics()
        self.scan_count = 0

    def track(self, counter: str) -> None:
        self.current.track(counter)

    def start_scan(self) -> None:
        self.current = ScanDiagnostics()

    def end_scan(self) -> ScanDiagnostics:
        finished = self.current.copy()
        self.last_scan = finished
        self.session.merge(finished)
        self.scan_count += 1

        logger.info(
            "scan_complete",
            total_scanned=finished.total_scanned,
            catalog_attempts=finished.catalog_attempts,
            successful_matches=finished.successful_matches,
            successful_deals=finished.successful_deals,
            **finished.rates(),
            breakdown={
                name: value for name, value in finished.to_dict().items()
                if name.startswith("stage")
            },
        )
        return finished

    def reset_session(self) -> None:
        self.session = ScanDiagnostics()
        self.scan_count = 0

    def snapshot(self) -> Dict[str, Any]:
        return {
            "session": self.session.copy(),
            "last_scan": self.last_scan.copy() if self.last_scan else None,
            "current": self.current.copy(),
            "scan_count": self.scan_count,
        }
