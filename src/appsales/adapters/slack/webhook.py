# src/appsales/adapters/slack/webhook.py
"""
Slack Webhook Notifier - Daily Summary Delivery

Posts the daily summary to a Slack incoming webhook. Sections are sent as
legacy attachments so each app gets its own colored block with its icon.

Files that USE this module:
- appsales.app (SlackWebhookNotifier is the default delivery channel)
- tests.test_notifiers (unit tests)

Files that this module USES:
- appsales.config (settings for the webhook URL and timeout)
- appsales.domain.models (DisplayMessage.to_slack_payload)
"""
import logging
from typing import Optional

import requests

from appsales.config import settings
from appsales.domain.errors import TransportError
from appsales.domain.models import DisplayMessage

log = logging.getLogger(__name__)


class SlackWebhookNotifier:
    def __init__(self, webhook_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Args:
            webhook_url: Incoming webhook URL (defaults to settings.slack_webhook)
            timeout: HTTP timeout in seconds (defaults to settings.http_timeout_seconds)

        Raises:
            ValueError: If no webhook URL is configured
        """
        self.webhook_url = webhook_url or settings.slack_webhook
        if not self.webhook_url:
            raise ValueError("Slack webhook not configured (SLACK_WEBHOOK)")
        self.timeout = timeout or settings.http_timeout_seconds

    def send(self, message: DisplayMessage) -> None:
        """
        Post a message to the webhook.

        Raises:
            TransportError: If the request fails or Slack rejects the payload
        """
        log.info("POST %s", self.webhook_url)
        try:
            resp = requests.post(self.webhook_url, json=message.to_slack_payload(), timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout:
            log.error("Slack webhook timeout after %d seconds", self.timeout)
            raise TransportError(f"Slack webhook timeout after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            log.error("Slack webhook request failed: %s", e)
            raise TransportError(f"Slack webhook request failed: {e}") from e
