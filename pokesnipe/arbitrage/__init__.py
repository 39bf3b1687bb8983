"""Arbitrage package: the listing pipeline and its bookkeeping."""

from .diagnostics import DiagnosticsAggregator, ScanDiagnostics
from .engine import ArbitrageEngine
from .preferences import PreferenceStore, StaticPreferenceStore, default_preferences
from .profit import affiliate_url, compute_profit, determine_tier, listing_url
from .scanner import run_scan, scan_source

__all__ = [
    "ArbitrageEngine",
    "ScanDiagnostics",
    "DiagnosticsAggregator",
    "PreferenceStore",
    "StaticPreferenceStore",
    "default_preferences",
    "determine_tier",
    "compute_profit",
    "listing_url",
    "affiliate_url",
    "run_scan",
    "scan_source",
]
