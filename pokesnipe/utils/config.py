"""Configuration and settings management."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator

from ..core.constants import (
    CATALOG_BASE_URL,
    DEFAULT_MIN_PROFIT_GBP,
    FALLBACK_USD_RATE,
    PREFERENCES_RELOAD_S,
)


class Settings(BaseSettings):
    # Card catalog API
    CATALOG_API_KEY: Optional[str] = None
    CATALOG_TEAM_ID: Optional[str] = None
    CATALOG_BASE_URL: str = CATALOG_BASE_URL
    CATALOG_TIMEOUT_S: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"

    # Currency
    EXCHANGE_RATE_URL: str = "https://api.frankfurter.app/latest"
    FALLBACK_USD_RATE: float = FALLBACK_USD_RATE

    # Marketplace affiliate tracking
    EBAY_CAMPAIGN_ID: Optional[str] = None

    # Scanning
    MIN_PROFIT_GBP: float = DEFAULT_MIN_PROFIT_GBP
    PREFERENCES_RELOAD_S: int = PREFERENCES_RELOAD_S
    SCAN_CONCURRENCY: int = 8

    @field_validator('CATALOG_API_KEY', 'CATALOG_TEAM_ID', 'EBAY_CAMPAIGN_ID', mode='before')
    @classmethod
    def validate_optional_secret(cls, v):
        """Convert empty/whitespace strings to None."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Convert empty/whitespace strings to default."""
        if isinstance(v, str) and not v.strip():
            return "INFO"
        return v

    @field_validator('CATALOG_BASE_URL', mode='before')
    @classmethod
    def validate_base_url(cls, v):
        """Convert empty/whitespace strings to default and drop trailing slashes."""
        if isinstance(v, str):
            if not v.strip():
                return CATALOG_BASE_URL
            return v.strip().rstrip("/")
        return v

    @field_validator('SCAN_CONCURRENCY')
    @classmethod
    def validate_concurrency(cls, v):
        if v < 1:
            raise ValueError("SCAN_CONCURRENCY must be at least 1")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @property
    def has_catalog_credentials(self) -> bool:
        return bool(self.CATALOG_API_KEY)


# Global settings instance
settings = Settings()
