"""Runtime configuration for deductly-core.

Pydantic Settings-based configuration read from environment variables and
an optional ``.env`` file. Statutory figures are not settings: they live in
``deductly_core.tax_year`` so that a tax year is never configured by
accident.

Usage:
    from deductly_core.config import get_settings

    settings = get_settings()
    print(settings.estimated_marginal_rate)
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine configuration.

    Environment Variables:
        DEDUCTLY_ENV: Environment name (development, staging, production, test)
        DEDUCTLY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        DEDUCTLY_LOG_FORMAT: console or json. Unset means json outside development
        DEDUCTLY_DEFAULT_TAX_YEAR: Tax year used when a caller does not pass one
        DEDUCTLY_ESTIMATED_MARGINAL_RATE: Rate used to estimate tax savings (0-1)
        DEDUCTLY_ANNUAL_DEDUCTION_GOAL: Annual deduction target for progress tracking
    """

    model_config = SettingsConfigDict(
        env_prefix="DEDUCTLY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Optional[str] = Field(
        default=None,
        description="Log renderer: console or json",
    )
    default_tax_year: int = Field(
        default=2024,
        description="Tax year used when a caller does not pass one",
    )
    estimated_marginal_rate: Decimal = Field(
        default=Decimal("0.30"),
        ge=0,
        le=1,
        description="Combined marginal rate used to estimate savings",
    )
    annual_deduction_goal: Decimal = Field(
        default=Decimal("10000"),
        ge=0,
        description="Annual deduction target for progress tracking",
    )

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v_lower = v.lower().strip()
        if v_lower not in {"console", "json"}:
            raise ValueError(f"Invalid log format: {v}. Must be console or json")
        return v_lower

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.env == "development"

    @property
    def use_json_logs(self) -> bool:
        """JSON logs unless console is requested or the env is development."""
        if self.log_format is not None:
            return self.log_format == "json"
        return not self.is_development


@lru_cache
def get_settings() -> EngineSettings:
    """Return the process-wide settings, loaded once."""
    return EngineSettings()


__all__ = [
    "EngineSettings",
    "get_settings",
]
