"""PokeSnipe - find underpriced Pokemon card listings by parsing titles and pricing them against a card catalog."""

__version__ = "1.0.0"
__author__ = "PokeSnipe Team"
__description__ = "Listing title parser, set matcher and arbitrage pipeline for Pokemon cards"

from .arbitrage.engine import ArbitrageEngine
from .arbitrage.scanner import run_scan
from .catalog.client import CatalogClient
from .expansion.matcher import ExpansionMatcher, expansion_matcher
from .parser.title_parser import TitleParser, parse_title, title_parser
from .pricing.exchange_rate import ExchangeRateService
from .store.deal_store import InMemoryDealStore
from .utils.config import settings

# Core functionality imports
from .utils.log import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__description__",
    # Core components
    "configure_logging",
    "get_logger",
    "settings",
    "TitleParser",
    "title_parser",
    "parse_title",
    "ExpansionMatcher",
    "expansion_matcher",
    "CatalogClient",
    "ExchangeRateService",
    "ArbitrageEngine",
    "run_scan",
    "InMemoryDealStore",
]
