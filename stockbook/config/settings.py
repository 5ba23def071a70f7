"""
Stockbook settings, read from the environment (and an optional ``.env``).

Each concern has its own prefix: ``STORAGE_``, ``ANALYTICS_`` and ``API_``.
Bad values fail at startup instead of on the first request that needs them.
"""

from datetime import tzinfo
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where the SQLite file lives and how the pool talks to it."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stockbook.db"
    pool_size: int = Field(default=5, gt=0)
    busy_timeout: int = Field(default=30000, ge=0)  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class AnalyticsSettings(BaseSettings):
    """Dashboard sizes and the zone weeks are bucketed in."""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_")

    trend_weeks: int = Field(default=6, gt=0)
    top_products_limit: int = Field(default=5, gt=0)
    recent_products_limit: int = Field(default=5, gt=0)

    # IANA zone for week bucketing; host local time when unset
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, v: str | None) -> str | None:
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v}") from e
        return v

    @property
    def zone(self) -> tzinfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stockbook"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    api: APISettings = Field(default_factory=APISettings)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the loaded settings so the next call re-reads the environment."""
    global _settings
    _settings = None
