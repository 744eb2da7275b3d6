"""Tests for ClaimTrieConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from claimtrie import ClaimTrieConfig, ConfigurationError, LogLevel, load_config_from_env


class TestClaimTrieConfig:
    """Tests for ClaimTrieConfig model."""

    def test_create_default_config(self) -> None:
        config = ClaimTrieConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.parse_cache_size == 1024
        assert config.service_name is None

    def test_log_level_from_string(self) -> None:
        """Log levels are accepted case-insensitively."""
        assert ClaimTrieConfig(log_level="debug").log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            ClaimTrieConfig(log_level="LOUD")

    def test_negative_cache_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            ClaimTrieConfig(parse_cache_size=-1)

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValueError):
            ClaimTrieConfig(redis_url="redis://localhost")  # type: ignore[call-arg]


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_load_defaults(self) -> None:
        config = load_config_from_env()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.parse_cache_size == 1024

    @patch.dict(
        os.environ,
        {
            "CLAIMTRIE_LOG_LEVEL": "WARNING",
            "CLAIMTRIE_LOG_JSON": "yes",
            "CLAIMTRIE_PARSE_CACHE_SIZE": "0",
            "CLAIMTRIE_SERVICE_NAME": "gateway.authz",
        },
        clear=True,
    )
    def test_load_from_env(self) -> None:
        config = load_config_from_env()
        assert config.log_level == LogLevel.WARNING
        assert config.log_json is True
        assert config.parse_cache_size == 0
        assert config.service_name == "gateway.authz"

    @patch.dict(os.environ, {"CLAIMTRIE_PARSE_CACHE_SIZE": "lots"}, clear=True)
    def test_unparsable_cache_size(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_env()
        assert exc_info.value.code == "CONFIGURATION_ERROR"
        assert exc_info.value.details["variable"] == "CLAIMTRIE_PARSE_CACHE_SIZE"

    @patch.dict(os.environ, {"CLAIMTRIE_LOG_LEVEL": "LOUD"}, clear=True)
    def test_invalid_level_wrapped(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid claimtrie configuration"):
            load_config_from_env()
