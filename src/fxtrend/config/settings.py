# src/fxtrend/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables (or a ``.env`` file) and are
validated here, at the boundary, before anything reaches the core.

Settings are built once by the application entry point and handed to the
AppContext; there is no module-level instance.

Files that USE this module:
- fxtrend.app (builds Settings for the bot)
- fxtrend.application.context (wires components from Settings)

Files that this module USES:
- fxtrend.shared.validators (validation functions for settings)
- fxtrend.domain.models (PreviousBaseline)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from datetime import date  # Provider's earliest available date
from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from platformdirs import user_cache_dir  # Per-user cache directory (XDG aware)
from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from fxtrend.domain.models import PreviousBaseline
from fxtrend.shared.validators import (
    validate_bot_token,  # Validate Telegram bot token format
    validate_chat_id,  # Validate Telegram chat ID format
    validate_currency_code,  # Validate currency identifiers
    validate_url_template,  # Validate provider URL templates
)

APP_NAME = "fxtrend"

CDN_URL_TEMPLATE = (
    "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@{date}"
    "/v1/currencies/{base}.min.json"
)
FALLBACK_URL_TEMPLATE = "https://{date}.currency-api.pages.dev/v1/currencies/{base}.min.json"
CURRENCY_LIST_URL = (
    "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies.min.json"
)
CURRENCY_LIST_FALLBACK_URL = "https://latest.currency-api.pages.dev/v1/currencies.min.json"

# First day published by the v1 currency-api; older dates 404 on both hosts
PROVIDER_EARLIEST_DATE = date(2024, 3, 2)


def _default_cache_dir() -> Path:
    return Path(user_cache_dir(appname=APP_NAME))


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Telegram ---
    bot_token: str = Field(default="", alias="BOT_TOKEN")
    chat_id: str = Field(default="", alias="CHAT_ID")  # receives list-refresh notices

    # --- Currency pair (initial value; /pair changes it at runtime) ---
    base_currency: str = Field(default="usd", alias="BASE_CURRENCY")
    target_currency: str = Field(default="zar", alias="TARGET_CURRENCY")

    # --- Provider ---
    primary_url_template: str = Field(default=CDN_URL_TEMPLATE, alias="PRIMARY_URL_TEMPLATE")
    fallback_url_template: str = Field(default=FALLBACK_URL_TEMPLATE, alias="FALLBACK_URL_TEMPLATE")
    currency_list_url: str = Field(default=CURRENCY_LIST_URL, alias="CURRENCY_LIST_URL")
    currency_list_fallback_url: str = Field(
        default=CURRENCY_LIST_FALLBACK_URL, alias="CURRENCY_LIST_FALLBACK_URL"
    )
    history_start: date = Field(default=PROVIDER_EARLIEST_DATE, alias="HISTORY_START")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)
    fetch_batch_size: int = Field(default=8, alias="FETCH_BATCH_SIZE", ge=1, le=32)

    # --- Scheduling / cache TTLs (seconds) ---
    refresh_interval_seconds: int = Field(
        default=60 * 60, alias="REFRESH_INTERVAL_SECONDS", ge=60, le=24 * 60 * 60
    )
    currency_list_ttl_seconds: int = Field(
        default=24 * 60 * 60, alias="CURRENCY_LIST_TTL_SECONDS", ge=60
    )

    # --- Direction indicator baseline ---
    previous_baseline: PreviousBaseline = Field(
        default=PreviousBaseline.DAILY_SLOT, alias="PREVIOUS_BASELINE"
    )

    # --- Chart ---
    chart_width: int = Field(default=500, alias="CHART_WIDTH", ge=200, le=4000)
    chart_height: int = Field(default=250, alias="CHART_HEIGHT", ge=120, le=4000)

    # --- Persistence ---
    cache_dir: Path = Field(default_factory=_default_cache_dir, alias="FXTREND_CACHE_DIR")

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="FXTREND_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate bot token format (empty is allowed until the bot starts)."""
        if v and not validate_bot_token(v):
            raise ValueError("Invalid BOT_TOKEN format")
        return v

    @field_validator("chat_id")
    @classmethod
    def validate_chat_id(cls, v: str) -> str:
        """Validate chat ID format."""
        if v and not validate_chat_id(v):
            raise ValueError("Invalid CHAT_ID format")
        return v

    @field_validator("base_currency", "target_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Normalise and validate currency identifiers."""
        if not validate_currency_code(v):
            raise ValueError(f"Invalid currency identifier: {v!r}")
        return v.strip().lower()

    @field_validator("primary_url_template", "fallback_url_template")
    @classmethod
    def validate_rate_template(cls, v: str) -> str:
        """Rate URL templates need both the date and the base placeholder."""
        if not validate_url_template(v, "date", "base"):
            raise ValueError("URL template must be https and contain {date} and {base}")
        return v

    @field_validator("currency_list_url", "currency_list_fallback_url")
    @classmethod
    def validate_list_url(cls, v: str) -> str:
        if not validate_url_template(v):
            raise ValueError("Currency list URL must be https")
        return v
