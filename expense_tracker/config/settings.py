"""
Configuration Management for the Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The formatting core never reads settings; only the orchestrator and the
storage factory do, and they pass explicit values down.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expense_tracker.currency.registry import CurrencyNotFoundError, find_currency


class StorageSettings(BaseSettings):
    """Key-value store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="memory",
        pattern="^(memory|json)$",
        description="Which key-value store to use"
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the JSON store file"
    )
    filename: str = Field(
        default="expense_tracker.json",
        min_length=1,
        description="Name of the JSON store file"
    )

    @property
    def file_path(self) -> Path:
        """Full path of the JSON store file."""
        return self.data_dir / self.filename


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables (APP_ prefix) and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    default_currency_code: str = Field(
        default="USD",
        description="Currency used until the user selects one"
    )
    daily_trend_days: int = Field(
        default=30,
        ge=1,
        le=366,
        description="Number of days in the daily spending series"
    )
    audit_log_max_events: int = Field(
        default=500,
        ge=0,
        le=10000,
        description="How many audit events to keep in the store (0 disables persistence)"
    )

    @field_validator("default_currency_code")
    @classmethod
    def validate_default_currency(cls, v: str) -> str:
        """The default currency must be one the registry knows."""
        try:
            return find_currency(v.strip()).code
        except CurrencyNotFoundError as e:
            raise ValueError(str(e)) from e


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    return results
