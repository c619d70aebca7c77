"""
Configuration management for the Standings Dashboard.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables prefixed with STANDINGS_,
e.g. STANDINGS_CACHE_EXPIRY_DAYS=7.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="STANDINGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Application Metadata
    # ==========================================================================
    app_name: str = "Standings Dashboard"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", description="development, staging, production")
    log_level: str = Field(default="INFO", description="Root log level for CLI and API")

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_prefix: str = "/api/v1"
    cors_allow_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Allowed CORS origins for the dashboard front end",
    )

    # ==========================================================================
    # Standings Source
    # ==========================================================================
    mlb_api_base_url: str = "https://statsapi.mlb.com/api/v1"
    standings_type: str = "regularSeason"
    current_season: int = Field(default=2025, ge=1901)
    http_timeout: float = Field(default=30.0, gt=0)
    http_max_retries: int = Field(default=1, ge=1, le=5, description="1 = a single request, no retries")
    requests_per_minute: int = Field(default=600, ge=1)

    # ==========================================================================
    # Year Range Defaults
    # ==========================================================================
    default_start_year: int = 2000
    default_end_year: int = 2024
    shortened_seasons: list[int] = Field(
        default=[2020],
        description="Seasons dropped when the exclude toggle is on (pandemic-shortened 2020)",
    )

    # ==========================================================================
    # Caching Configuration
    # ==========================================================================
    cache_expiry_days: float = Field(default=30, gt=0)
    cache_dir: Optional[Path] = Field(
        default=None,
        description="Directory for persisted cache tiers; memory only when unset",
    )
    cookie_max_bytes: int = Field(default=4096, ge=64, description="Primary tier size ceiling")
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for the secondary tier (redis://host:port/db)",
    )
    cache_key_prefix: str = "mlb_standings"

    @computed_field
    @property
    def cookie_jar_path(self) -> Optional[Path]:
        """File backing the size-limited primary tier."""
        return self.cache_dir / "cookies.json" if self.cache_dir else None

    @computed_field
    @property
    def local_storage_path(self) -> Optional[Path]:
        """File backing the unlimited secondary tier."""
        return self.cache_dir / "local_storage.json" if self.cache_dir else None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for CLI and API entry points."""
    level = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
