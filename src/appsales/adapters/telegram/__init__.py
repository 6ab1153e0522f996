# src/appsales/adapters/telegram/__init__.py
"""
Telegram Adapters - Channel Delivery

This package posts the daily summary to a Telegram channel as plain text.
"""

from appsales.adapters.telegram.notifier import TelegramNotifier, split_message

__all__ = ["TelegramNotifier", "split_message"]
