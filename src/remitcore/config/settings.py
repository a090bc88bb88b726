# src/remitcore/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables (or a .env file) and are validated
on load.

Files that USE this module:
- remitcore.app (loads settings for logging and service wiring)
- remitcore.adapters.providers.exchangerate_api (upstream URL and HTTP timeout)
- remitcore.application.* (services read limits, fee schedule and cache TTLs)

Files that this module USES:
- remitcore.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from decimal import Decimal  # Exact decimal arithmetic for money settings
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator, model_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from remitcore.shared.validators import validate_http_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Upstream exchange rates ---
    fx_api_url: str = Field(
        default="https://api.exchangerate-api.com/v4/latest/USD", alias="FX_API_URL"
    )

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Cache Settings (in minutes) ---
    rate_cache_minutes: int = Field(default=60, alias="RATE_CACHE_MINUTES", ge=1, le=1440)

    # --- Fee schedule ---
    fee_rate: Decimal = Field(default=Decimal("0.015"), alias="FEE_RATE", ge=0, lt=1)
    fee_min: Decimal = Field(default=Decimal("2.99"), alias="FEE_MIN", ge=0)
    fee_max: Decimal = Field(default=Decimal("50"), alias="FEE_MAX", ge=0)

    # --- Transfer limits (USD) ---
    per_transaction_limit: Decimal = Field(default=Decimal("5000"), alias="PER_TRANSACTION_LIMIT", gt=0)
    daily_limit: Decimal = Field(default=Decimal("10000"), alias="DAILY_LIMIT", gt=0)
    monthly_limit: Decimal = Field(default=Decimal("50000"), alias="MONTHLY_LIMIT", gt=0)

    # --- Transfers ---
    history_default_limit: int = Field(default=10, alias="HISTORY_DEFAULT_LIMIT", ge=1, le=1000)
    estimated_delivery_minutes: int = Field(default=35, alias="ESTIMATED_DELIVERY_MINUTES", ge=0)

    # --- Recipient vault ---
    vault_max_sessions: int = Field(default=1000, alias="VAULT_MAX_SESSIONS", ge=1)
    vault_session_ttl_minutes: int = Field(default=30, alias="VAULT_SESSION_TTL_MINUTES", ge=1)

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="REMIT_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def rate_cache_seconds(self) -> int:
        """Rate cache TTL in seconds."""
        return self.rate_cache_minutes * 60

    @property
    def vault_session_ttl_seconds(self) -> int:
        return self.vault_session_ttl_minutes * 60

    @field_validator("fx_api_url")
    @classmethod
    def validate_fx_api_url(cls, v: str) -> str:
        """Validate upstream URL format."""
        if not validate_http_url(v):
            raise ValueError("FX_API_URL must be an http(s) URL")
        return v

    @model_validator(mode="after")
    def validate_fee_bounds(self) -> "Settings":
        """Fee floor must not exceed the fee ceiling."""
        if self.fee_min > self.fee_max:
            raise ValueError("FEE_MIN must be less than or equal to FEE_MAX")
        return self


# Global settings instance
settings = Settings()
