"""Tests for application settings."""

import os
import sys
from unittest.mock import patch

import pytest
from pydantic import ValidationError

sys.path.append("src")

from flit.config.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.api_base_url == "http://localhost:3000/api"
        assert settings.draft_poll_interval_seconds == 3
        assert settings.trade_expiry_hours == 24
        assert settings.total_value_mode == "recompute"
        assert settings.is_development()

    def test_environment_overrides(self):
        env = {
            "FLIT_API_BASE_URL": "https://fantasy.example.com/api/",
            "FLIT_ENVIRONMENT": "Testing",
            "FLIT_TOTAL_VALUE_MODE": "INCREMENT",
            "FLIT_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env):
            settings = Settings()

        assert settings.api_base_url == "https://fantasy.example.com/api"
        assert settings.is_testing()
        assert not settings.is_production()
        assert settings.total_value_mode == "increment"
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "key, value",
        [
            ("FLIT_ENVIRONMENT", "staging"),
            ("FLIT_API_BASE_URL", "localhost:3000"),
            ("FLIT_API_TIMEOUT_SECONDS", "0"),
            ("FLIT_DRAFT_POLL_INTERVAL_SECONDS", "0"),
            ("FLIT_MOCK_API_PORT", "70000"),
            ("FLIT_DEFAULT_LIQUID_FUNDS", "-1"),
            ("FLIT_TOTAL_VALUE_MODE", "average"),
            ("FLIT_LOG_FORMAT", "xml"),
        ],
    )
    def test_invalid_values_are_rejected(self, key, value):
        with patch.dict(os.environ, {key: value}):
            with pytest.raises(ValidationError):
                Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
