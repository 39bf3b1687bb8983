from typing import Final, Dict, List, Tuple

# Catalog HTTP
CATALOG_BASE_URL: Final[str] = "https://api.scrydex.com"
RATE_LIMIT_QPS: Final[float] = 5.0
BACKOFF_S = [0.2, 1.0, 3.0]
RETRYABLE_STATUS: Final[Tuple[int, ...]] = (429, 500, 502, 503, 504)

# Catalog response cache TTLs (seconds)
TTL_GRADED_VINTAGE: Final[int] = 7 * 24 * 3600
TTL_MODERN_STABLE: Final[int] = 72 * 3600
TTL_RECENT_SETS: Final[int] = 48 * 3600
TTL_EXPANSIONS: Final[int] = 24 * 3600
RECENT_SET_AGE_DAYS: Final[int] = 60
CATALOG_CACHE_MAX: Final[int] = 5000

VINTAGE_SET_PREFIXES: Final[Tuple[str, ...]] = (
    "base", "jungle", "fossil", "bs2", "tr", "gym1", "gym2",
    "neo1", "neo2", "neo3", "neo4", "si", "lc", "ecard1", "ecard2", "ecard3",
    "mcd", "wizpro",
)
GRADED_QUERY_COMPANIES: Final[Tuple[str, ...]] = (
    "PSA", "CGC", "BGS", "SGC", "TAG", "ARS", "GMA", "HGA", "MNT", "ACE",
)

# Exchange rate
FX_CACHE_TTL_S: Final[int] = 6 * 3600
FALLBACK_USD_RATE: Final[float] = 1.27

# Orchestrator caches
PROCESSED_TTL_S: Final[int] = 24 * 3600
PROCESSED_MAX: Final[int] = 10_000
SIGNATURE_TTL_S: Final[int] = 24 * 3600
SIGNATURE_MAX: Final[int] = 5_000
FAILED_QUERY_TTL_S: Final[int] = 15 * 60
FAILED_QUERY_MAX: Final[int] = 5_000
PRUNE_INTERVAL_S: Final[int] = 30 * 60
PREFERENCES_RELOAD_S: Final[int] = 60

# Confidence gates
MIN_CONFIDENCE_WITH_NUMBER: Final[int] = 28
MIN_CONFIDENCE_WITHOUT_NUMBER: Final[int] = 40

# Name similarity gates. Candidate acceptance and post-match rejection are
# separate stages and use separate thresholds.
CANDIDATE_NAME_SIMILARITY: Final[float] = 0.25
MIN_NAME_SIMILARITY: Final[float] = 0.3
NAME_SIMILARITY_WARN: Final[float] = 0.7

# Printed-total checks
EARLY_PRINTED_TOTAL_TOLERANCE: Final[int] = 25
POST_MATCH_PRINTED_TOTAL_TOLERANCE: Final[int] = 15
SECRET_NUMBER_FLOOR: Final[int] = 150
SECRET_DENOMINATOR_FLOOR: Final[int] = 180
DENOMINATOR_TOLERANCE: Final[int] = 5

# Ladder sizing
OR_QUERY_EXPANSIONS: Final[int] = 5
RECENT_EXPANSION_POOL: Final[int] = 8
WILDCARD_PAGE_SIZE: Final[int] = 50
DIRECT_NUMBER_PAGE_SIZE: Final[int] = 5
NAME_SEARCH_PAGE_SIZE: Final[int] = 10
OR_QUERY_PAGE_SIZE: Final[int] = 10
MIN_NAME_SEARCH_LENGTH: Final[int] = 3

# Defaults for user preferences
DEFAULT_UNGRADED_CONDITIONS: Final[List[str]] = ["NM", "LP", "MP"]
DEFAULT_PREFERRED_GRADERS: Final[List[str]] = ["PSA", "CGC", "BGS"]
DEFAULT_MIN_PROFIT_GBP: Final[float] = 5.0
DEFAULT_MIN_GRADE: Final[float] = 1.0
DEFAULT_MAX_GRADE: Final[float] = 10.0
DEFAULT_CONDITION: Final[str] = "LP"

# Tier thresholds: (min discount %, min market value GBP)
DEFAULT_TIER_THRESHOLDS: Final[Dict[str, Tuple[float, float]]] = {
    "premium": (10.0, 1000.0),
    "high": (15.0, 500.0),
    "standard": (20.0, 0.0),
}

# Deals
DEAL_TTL_HOURS: Final[int] = 48
HOME_COUNTRY: Final[str] = "GB"
LISTING_URL_TEMPLATE: Final[str] = "https://www.ebay.co.uk/itm/{item_id}"
AFFILIATE_PARAMS: Final[Dict[str, str]] = {
    "mkevt": "1",
    "mkcid": "1",
    "mkrid": "710-53481-19255-0",
    "toolid": "10001",
}

# Confidence score weights
SCORE_CARD_NUMBER: Final[int] = 40
SCORE_SET_NAME: Final[int] = 30
SCORE_KNOWN_POKEMON: Final[int] = 25
SCORE_KNOWN_TRAINER: Final[int] = 20
SCORE_GENERIC_NAME: Final[int] = 15
SCORE_GRADED: Final[int] = 10
SCORE_PER_VARIANT: Final[int] = 3
SCORE_VARIANT_CAP: Final[int] = 10
