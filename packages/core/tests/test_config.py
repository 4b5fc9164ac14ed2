"""Tests for engine settings."""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from deductly_core.config import EngineSettings, get_settings


@pytest.fixture(autouse=True)
def clean_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestEngineSettings:
    """Test suite for EngineSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DEDUCTLY_ESTIMATED_MARGINAL_RATE", raising=False)
        monkeypatch.delenv("DEDUCTLY_ANNUAL_DEDUCTION_GOAL", raising=False)
        settings = EngineSettings(_env_file=None)

        assert settings.estimated_marginal_rate == Decimal("0.30")
        assert settings.annual_deduction_goal == Decimal("10000")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DEDUCTLY_ESTIMATED_MARGINAL_RATE", "0.25")
        monkeypatch.setenv("DEDUCTLY_ENV", "Production")
        monkeypatch.setenv("DEDUCTLY_LOG_LEVEL", "debug")
        settings = EngineSettings(_env_file=None)

        assert settings.estimated_marginal_rate == Decimal("0.25")
        assert settings.env == "production"
        assert settings.log_level == "DEBUG"
        assert settings.is_production

    def test_rate_must_be_a_fraction(self):
        with pytest.raises(PydanticValidationError):
            EngineSettings(_env_file=None, estimated_marginal_rate=Decimal("30"))

    def test_invalid_env(self):
        with pytest.raises(PydanticValidationError):
            EngineSettings(_env_file=None, env="qa")

    @pytest.mark.parametrize(
        "env, log_format, use_json",
        [
            ("development", None, False),
            ("production", None, True),
            ("production", "console", False),
            ("development", "JSON", True),
        ],
    )
    def test_log_format_selection(self, env, log_format, use_json):
        settings = EngineSettings(_env_file=None, env=env, log_format=log_format)

        assert settings.use_json_logs is use_json


class TestGetSettings:
    """Test suite for get_settings."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("DEDUCTLY_DEFAULT_TAX_YEAR", "2023")
        get_settings.cache_clear()

        assert get_settings() is not first
        assert get_settings().default_tax_year == 2023
