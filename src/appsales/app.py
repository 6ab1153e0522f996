# src/appsales/app.py
"""
Application Entry Point - Reporter Wiring and Startup

This module is the composition root for the daily sales reporter. It is
meant to be invoked once per day by cron, a systemd timer or a serverless
scheduler; each invocation reports at most one date.

Files that USE this module:
- appsales console script and `python -m appsales`

Files that this module USES:
- appsales.shared.logging_conf (setup_logging for logging configuration)
- appsales.config (settings for configuration management)
- appsales.adapters.* (report, rate, metadata, cursor and delivery adapters)
- appsales.application.run_coordinator (RunCoordinator)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
import sys  # System-specific parameters and functions for exit codes

from appsales.shared.logging_conf import setup_logging  # Configure logging with file rotation
from appsales.config import DELIVERY_TELEGRAM, Settings, settings as default_settings
from appsales.adapters.persistence.cursor_store import FileCursorStore  # Last processed date
from appsales.adapters.providers.apple_reporter import AppleReporterClient  # Sales reports
from appsales.adapters.providers.itunes_lookup import ITunesLookupProvider  # App icons
from appsales.adapters.providers.openexchangerates import OpenExchangeRatesProvider  # USD rates
from appsales.adapters.slack.webhook import SlackWebhookNotifier  # Slack delivery
from appsales.application.run_coordinator import RunCoordinator  # One reporting run
from appsales.domain.errors import AppSalesError, ConfigurationError
from appsales.domain.models import RunResult


def build_notifier(settings: Settings):
    """Create the delivery adapter selected by DELIVERY_CHANNEL."""
    if settings.delivery_channel == DELIVERY_TELEGRAM:
        # Lazy import: python-telegram-bot is only needed for Telegram delivery
        from appsales.adapters.telegram.notifier import TelegramNotifier
        return TelegramNotifier(settings.bot_token, settings.channel_id)
    return SlackWebhookNotifier(settings.slack_webhook, settings.http_timeout_seconds)


def build_coordinator(settings: Settings) -> RunCoordinator:
    """
    Wire all adapters into a RunCoordinator.

    Raises:
        ConfigurationError: If a required setting is not set
    """
    missing = settings.missing_required()
    if missing:
        raise ConfigurationError(f"{missing[0]} is not set")

    timeout = settings.http_timeout_seconds
    return RunCoordinator(
        reports=AppleReporterClient(
            user_id=settings.apple_user_id,
            access_token=settings.apple_access_token,
            base_url=settings.reporter_url,
            timeout=timeout,
            version=settings.reporter_version,
        ),
        rates=OpenExchangeRatesProvider(
            app_id=settings.open_exchange_rates_app_id,
            base_url=settings.open_exchange_rates_url,
            timeout=timeout,
        ),
        metadata=ITunesLookupProvider(base_url=settings.itunes_lookup_url, timeout=timeout),
        cursor=FileCursorStore(settings.last_date_file),
        notifier=build_notifier(settings),
        vendor=settings.apple_vendor_number,
        max_lookup_workers=settings.icon_lookup_workers,
    )


def run_once(settings: Settings = default_settings) -> RunResult:
    """Build a coordinator from settings and run a single report cycle."""
    return build_coordinator(settings).run()


def main() -> None:
    """
    Run one reporting cycle and exit.

    Exit status is 0 for a delivered report or a "no new report" no-op,
    1 for any failure. Failures never advance the cursor.
    """
    settings = default_settings
    setup_logging(
        level=logging.INFO,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger = logging.getLogger(__name__)

    try:
        result = run_once(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    except (AppSalesError, RuntimeError) as e:
        logger.error("Reporting run failed: %s (type: %s)", e, type(e).__name__, exc_info=True)
        sys.exit(1)

    logger.info("%s", result)


if __name__ == "__main__":
    main()
