# src/appsales/shared/validators.py
"""
Input Validation Utilities - Configuration Validation

This module provides validation functions for the values the reporter is
configured with: Apple vendor numbers, API keys, webhook URLs and Telegram
identifiers. Invalid configuration is rejected at startup instead of
failing halfway through a run.

Files that USE this module:
- appsales.config.settings (uses validation functions in Settings field validators)

Files that this module USES:
- None (pure utility functions)
"""
import re
from datetime import date, datetime
from typing import Optional
from urllib.parse import urlparse


def validate_vendor_number(vendor: str) -> bool:
    """
    Validate an App Store Connect vendor number.

    Args:
        vendor: Vendor number to validate (e.g. '85012345')

    Returns:
        True if valid, False otherwise
    """
    if not vendor:
        return False
    return bool(re.match(r'^\d{6,10}$', vendor))


def validate_api_key(api_key: str, min_length: int = 10) -> bool:
    """
    Validate API key format.

    Args:
        api_key: API key to validate
        min_length: Minimum length requirement

    Returns:
        True if valid, False otherwise
    """
    if not api_key:
        return False

    return len(api_key) >= min_length and not api_key.isspace()


def validate_webhook_url(url: str) -> bool:
    """
    Validate an incoming-webhook URL.

    Only https URLs with a host are accepted.
    """
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme == "https" and bool(parsed.netloc)


def validate_channel_id(channel_id: str) -> bool:
    """
    Validate Telegram channel/chat ID format.

    Args:
        channel_id: Channel ID to validate

    Returns:
        True if valid, False otherwise
    """
    if not channel_id:
        return False

    # Channel IDs can be:
    # - @channelname (public channels)
    # - -1001234567890 (private channels/chats)
    # - 123456789 (user IDs)
    if channel_id.startswith('@'):
        return bool(re.match(r'^@[a-zA-Z0-9_]+$', channel_id))
    elif channel_id.startswith('-100'):
        return bool(re.match(r'^-100\d+$', channel_id))
    else:
        return bool(re.match(r'^\d+$', channel_id))


def validate_bot_token(token: str) -> bool:
    """
    Validate Telegram bot token format.

    Args:
        token: Bot token to validate

    Returns:
        True if valid, False otherwise
    """
    if not token:
        return False

    # Bot tokens should be in format: 123456789:ABCDEFghijklmnopQRSTUVwxyz
    pattern = r'^\d{8,10}:[A-Za-z0-9_-]{35}$'
    return bool(re.match(pattern, token))


def parse_iso_date(value: str) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string.

    Returns:
        The parsed date, or None if the value is not a valid date
    """
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None
