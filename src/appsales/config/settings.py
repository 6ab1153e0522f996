# src/appsales/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables, optionally from a .env file.

Files that USE this module:
- appsales.app (loads settings and wires adapters)
- appsales.adapters.providers.* (providers use settings for credentials and URLs)
- appsales.adapters.slack.* and appsales.adapters.telegram.* (delivery targets)
- appsales.adapters.persistence.cursor_store (cursor file location)

Files that this module USES:
- appsales.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from appsales.shared.validators import (
    validate_api_key,  # Validate API key format
    validate_bot_token,  # Validate Telegram bot token format
    validate_channel_id,  # Validate Telegram channel ID format
    validate_vendor_number,  # Validate App Store Connect vendor number
    validate_webhook_url,  # Validate Slack webhook URL
)

DELIVERY_SLACK = "slack"
DELIVERY_TELEGRAM = "telegram"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Apple Reporter ---
    apple_user_id: str = Field(default="", alias="APPLE_USER_ID")
    apple_access_token: str = Field(default="", alias="APPLE_ACCESS_TOKEN")
    apple_vendor_number: str = Field(default="", alias="APPLE_VENDOR_NUMBER")
    reporter_url: str = Field(
        default="https://reportingitc-reporter.apple.com/reportservice/sales/v1",
        alias="REPORTER_URL",
    )
    reporter_version: str = Field(default="2.2", alias="REPORTER_VERSION")

    # --- Exchange rates / app metadata ---
    open_exchange_rates_app_id: str = Field(default="", alias="OPEN_EXCHANGE_RATES_APP_ID")
    open_exchange_rates_url: str = Field(
        default="https://openexchangerates.org/api/latest.json",
        alias="OPEN_EXCHANGE_RATES_URL",
    )
    itunes_lookup_url: str = Field(default="https://itunes.apple.com/lookup", alias="ITUNES_LOOKUP_URL")
    icon_lookup_workers: int = Field(default=8, alias="ICON_LOOKUP_WORKERS", ge=1, le=32)

    # --- Delivery ---
    delivery_channel: str = Field(default=DELIVERY_SLACK, alias="DELIVERY_CHANNEL")
    slack_webhook: str = Field(default="", alias="SLACK_WEBHOOK")
    bot_token: str = Field(default="", alias="BOT_TOKEN")
    channel_id: str = Field(default="", alias="CHANNEL_ID")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=30, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=120)

    # --- Persistence ---
    last_date_file: Path = Field(default=Path("./data/last_date.json"), alias="LAST_DATE_FILE")

    # --- Logging (for server deployment) ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("apple_vendor_number")
    @classmethod
    def validate_vendor_number(cls, v: str) -> str:
        """Validate vendor number format."""
        if v and not validate_vendor_number(v):
            raise ValueError("Invalid APPLE_VENDOR_NUMBER format")
        return v

    @field_validator("open_exchange_rates_app_id")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate API key format."""
        if v and not validate_api_key(v):
            raise ValueError("Invalid OPEN_EXCHANGE_RATES_APP_ID format")
        return v

    @field_validator("slack_webhook")
    @classmethod
    def validate_slack_webhook(cls, v: str) -> str:
        if v and not validate_webhook_url(v):
            raise ValueError("SLACK_WEBHOOK must be an https URL")
        return v

    @field_validator("bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate bot token format."""
        if v and not validate_bot_token(v):
            raise ValueError("Invalid BOT_TOKEN format")
        return v

    @field_validator("channel_id")
    @classmethod
    def validate_channel_id(cls, v: str) -> str:
        """Validate channel ID format."""
        if v and not validate_channel_id(v):
            raise ValueError("Invalid channel ID format")
        return v

    @field_validator("delivery_channel")
    @classmethod
    def validate_delivery_channel(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in (DELIVERY_SLACK, DELIVERY_TELEGRAM):
            raise ValueError("DELIVERY_CHANNEL must be 'slack' or 'telegram'")
        return v

    def missing_required(self) -> list[str]:
        """
        List required environment variables that are not set.

        Delivery credentials are only required for the selected channel.

        Returns:
            Environment variable names, in the order they are checked
        """
        required = [
            ("APPLE_USER_ID", self.apple_user_id),
            ("APPLE_ACCESS_TOKEN", self.apple_access_token),
            ("APPLE_VENDOR_NUMBER", self.apple_vendor_number),
            ("OPEN_EXCHANGE_RATES_APP_ID", self.open_exchange_rates_app_id),
        ]
        if self.delivery_channel == DELIVERY_TELEGRAM:
            required += [("BOT_TOKEN", self.bot_token), ("CHANNEL_ID", self.channel_id)]
        else:
            required.append(("SLACK_WEBHOOK", self.slack_webhook))
        return [name for name, value in required if not value]


# Global settings instance
settings = Settings()
