# src/appsales/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from appsales.shared.validators import (
    parse_iso_date,
    validate_api_key,
    validate_bot_token,
    validate_channel_id,
    validate_vendor_number,
    validate_webhook_url,
)

__all__ = [
    "parse_iso_date",
    "validate_api_key",
    "validate_bot_token",
    "validate_channel_id",
    "validate_vendor_number",
    "validate_webhook_url",
]
