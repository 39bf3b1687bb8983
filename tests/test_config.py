"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from pokesnipe.core.constants import CATALOG_BASE_URL
from pokesnipe.utils.config import Settings


class TestSettings:
    """Test Settings class configuration."""

    def test_settings_default_values(self, clean_env):
        """Test that Settings has correct default values."""
        settings = Settings(_env_file=None)

        assert settings.LOG_LEVEL == "INFO"
        assert settings.CATALOG_API_KEY is None
        assert settings.CATALOG_TEAM_ID is None
        assert settings.CATALOG_BASE_URL == CATALOG_BASE_URL
        assert settings.EBAY_CAMPAIGN_ID is None
        assert settings.MIN_PROFIT_GBP == 5.0
        assert settings.FALLBACK_USD_RATE == 1.27
        assert settings.SCAN_CONCURRENCY == 8
        assert settings.has_catalog_credentials is False

    def test_settings_from_environment(self, clean_env):
        """Test that Settings can be configured from environment variables."""
        with patch.dict(os.environ, {
            "LOG_LEVEL": "DEBUG",
            "CATALOG_API_KEY": "test_key_123",
            "CATALOG_TEAM_ID": "team_1",
            "EBAY_CAMPAIGN_ID": "5338",
            "MIN_PROFIT_GBP": "7.5",
            "SCAN_CONCURRENCY": "4",
        }):
            settings = Settings(_env_file=None)

            assert settings.LOG_LEVEL == "DEBUG"
            assert settings.CATALOG_API_KEY == "test_key_123"
            assert settings.CATALOG_TEAM_ID == "team_1"
            assert settings.EBAY_CAMPAIGN_ID == "5338"
            assert settings.MIN_PROFIT_GBP == 7.5
            assert settings.SCAN_CONCURRENCY == 4
            assert settings.has_catalog_credentials is True

    def test_settings_case_insensitive(self, clean_env):
        """Test that Settings is case insensitive."""
        with patch.dict(os.environ, {"log_level": "WARNING", "catalog_api_key": "lower"}):
            settings = Settings(_env_file=None)

            assert settings.LOG_LEVEL == "WARNING"
            assert settings.CATALOG_API_KEY == "lower"

    def test_settings_validation(self, clean_env):
        """Test that Settings validates input types."""
        with patch.dict(os.environ, {"MIN_PROFIT_GBP": "lots"}):
            with pytest.raises(ValueError):
                Settings(_env_file=None)

    @pytest.mark.parametrize("value", ["0", "-3"])
    def test_concurrency_must_be_positive(self, clean_env, value):
        with patch.dict(os.environ, {"SCAN_CONCURRENCY": value}):
            with pytest.raises(ValueError):
                Settings(_env_file=None)


class TestConfigurationIntegration:
    """Test configuration integration scenarios."""

    def test_configuration_with_env_file(self, clean_env, tmp_path):
        """Test configuration loading from .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "LOG_LEVEL=DEBUG\n"
            "CATALOG_API_KEY=env_file_key\n"
            "CATALOG_BASE_URL=https://catalog.test/\n"
            "UNRELATED_SETTING=ignored\n"
        )

        settings = Settings(_env_file=str(env_file))

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.CATALOG_API_KEY == "env_file_key"
        assert settings.CATALOG_BASE_URL == "https://catalog.test"

    def test_configuration_priority_order(self, clean_env, tmp_path):
        """Test that environment variables take priority over .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("LOG_LEVEL=DEBUG\n")

        with patch.dict(os.environ, {"LOG_LEVEL": "ERROR"}):
            settings = Settings(_env_file=str(env_file))

            assert settings.LOG_LEVEL == "ERROR"


class TestEdgeCases:
    """Test edge cases and error conditions."""

    def test_empty_environment_variables(self, clean_env):
        """Test handling of empty environment variables."""
        with patch.dict(os.environ, {
            "LOG_LEVEL": "",
            "CATALOG_API_KEY": "",
            "CATALOG_BASE_URL": "",
        }):
            settings = Settings(_env_file=None)

            # Empty strings should be treated as None for optional fields
            assert settings.CATALOG_API_KEY is None
            # Required fields should use defaults
            assert settings.LOG_LEVEL == "INFO"
            assert settings.CATALOG_BASE_URL == CATALOG_BASE_URL

    def test_whitespace_environment_variables(self, clean_env):
        """Test handling of whitespace-only environment variables."""
        with patch.dict(os.environ, {
            "LOG_LEVEL": "   ",
            "CATALOG_TEAM_ID": "  \t  ",
            "EBAY_CAMPAIGN_ID": "  ",
        }):
            settings = Settings(_env_file=None)

            assert settings.CATALOG_TEAM_ID is None
            assert settings.EBAY_CAMPAIGN_ID is None
            assert settings.LOG_LEVEL == "INFO"
