"""
Configuration Management for OnlyTime

Uses pydantic-settings for type-safe configuration from environment variables
(prefix ONLYTIME_) and an optional .env file.

This is *application* configuration (where data lives, log level, warning
thresholds). The user's income/working-time record is a different thing:
see onlytime.models.settings.Settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from onlytime.numeric.money import Currency


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="ONLYTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    storage_backend: str = Field(
        default="json",
        description="Key-value backend: 'json' (file on disk) or 'memory'",
    )
    data_path: Path = Field(
        default=Path.home() / ".onlytime" / "storage.json",
        description="JSON file used by the 'json' backend",
    )
    key_prefix: str = Field(
        default="onlytime:v1",
        description="Namespace for every persisted key",
    )
    clear_prefix: str = Field(
        default="onlytime:",
        description="Every key starting with this is removed by 'clear all data'",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="stdlib log level name",
    )

    # Budget thresholds (percent of budget)
    budget_warning_percent: float = Field(
        default=80.0,
        ge=0,
        description="A category is at risk from this percentage on",
    )
    budget_exceeded_percent: float = Field(
        default=100.0,
        ge=0,
        description="A category is over budget from this percentage on",
    )

    default_currency: Currency = Field(
        default=Currency.CHF,
        description="Currency used for formatting before the user picks one",
    )

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        backend = v.strip().lower()
        if backend not in {"json", "memory"}:
            raise ValueError(f"Unsupported storage backend: {v}. Allowed: json, memory")
        return backend

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_thresholds(self) -> "AppSettings":
        if self.budget_exceeded_percent < self.budget_warning_percent:
            raise ValueError("budget_exceeded_percent cannot be below budget_warning_percent")
        if not self.key_prefix.startswith(self.clear_prefix):
            raise ValueError("key_prefix must start with clear_prefix")
        return self


@lru_cache()
def get_app_settings() -> AppSettings:
    """
    Get application settings (cached).

    Call get_app_settings.cache_clear() to reload if needed.
    """
    return AppSettings()
