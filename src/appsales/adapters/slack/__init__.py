# src/appsales/adapters/slack/__init__.py
"""
Slack Adapters - Webhook Delivery
"""

from appsales.adapters.slack.webhook import SlackWebhookNotifier

__all__ = ["SlackWebhookNotifier"]
