# src/tufinanza/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables (or a .env file) with validation.

Files that USE this module:
- tufinanza.app (data file)
- tufinanza.shared.logging_conf (LOG_* settings)
- tufinanza.application.quote_service (cache TTL and simulation parameters)
- tufinanza.shared.language (default language)

Files that this module USES:
- None
"""
from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_LANGUAGES = ("en", "es")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Persistence ---
    data_file: Path = Field(default=Path("./data/tufinanza.json"), alias="TUFINANZA_DATA_FILE")

    # --- Quote cache (in minutes) ---
    quote_cache_minutes: int = Field(default=60, alias="QUOTE_CACHE_MINUTES", ge=1, le=1440)

    # --- Simulated market feed ---
    usdt_base_price: float = Field(default=1200.0, alias="USDT_BASE_PRICE", gt=0)
    usdt_fluctuation: float = Field(default=20.0, alias="USDT_FLUCTUATION", ge=0)
    rate_fluctuation_pct: float = Field(default=1.0, alias="RATE_FLUCTUATION_PCT", ge=0, lt=100)

    # --- Language ---
    default_language: str = Field(default="en", alias="DEFAULT_LANGUAGE")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="TUFINANZA_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def quote_cache_duration(self) -> timedelta:
        """Time after which a cached quote or rate snapshot is stale."""
        return timedelta(minutes=self.quote_cache_minutes)

    @field_validator("usdt_fluctuation")
    @classmethod
    def validate_usdt_fluctuation(cls, v: float, info) -> float:
        """Fluctuation must keep the simulated price positive."""
        base = info.data.get("usdt_base_price")
        if base is not None and v >= base:
            raise ValueError("USDT_FLUCTUATION must be smaller than USDT_BASE_PRICE")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level name."""
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate language code."""
        v = v.lower()
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError("DEFAULT_LANGUAGE must be 'en' or 'es'")
        return v


# Global settings instance
settings = Settings()
