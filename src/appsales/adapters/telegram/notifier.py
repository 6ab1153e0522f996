# src/appsales/adapters/telegram/notifier.py
"""
Telegram Notifier - Daily Summary Delivery

Sends the daily summary to a Telegram channel. Telegram has no attachment
blocks, so the message is rendered as plain text and split into chunks
that fit Telegram's message size limit.

Files that USE this module:
- appsales.app (TelegramNotifier when DELIVERY_CHANNEL=telegram)
- tests.test_notifiers (unit tests)

Files that this module USES:
- appsales.adapters.formatting.formatter (render_plain_text)
- appsales.config (settings for bot token and channel)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import asyncio  # Run the async Bot API from a synchronous run
import logging  # Standard library for logging messages
from typing import Optional  # Type hints for optional values

from telegram import Bot  # Telegram Bot API client
from telegram.error import RetryAfter, TelegramError  # Telegram API rate limit and base exceptions

from appsales.adapters.formatting.formatter import render_plain_text  # DisplayMessage -> text
from appsales.config import settings  # Application configuration and settings
from appsales.domain.errors import TransportError
from appsales.domain.models import DisplayMessage

log = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 4096


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """
    Split text into chunks of at most `limit` characters.

    Splits on line boundaries where possible; a single line longer than
    the limit is cut hard.
    """
    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


class TelegramNotifier:
    def __init__(self, bot_token: Optional[str] = None, channel_id: Optional[str] = None):
        """
        Args:
            bot_token: Bot API token (defaults to settings.bot_token)
            channel_id: Target chat or channel (defaults to settings.channel_id)

        Raises:
            ValueError: If the token or channel is not configured
        """
        self.bot_token = bot_token or settings.bot_token
        self.channel_id = channel_id or settings.channel_id
        if not self.bot_token or not self.channel_id:
            raise ValueError("Telegram delivery needs BOT_TOKEN and CHANNEL_ID")

    async def _send_chunk(self, bot: Bot, text: str) -> None:
        try:
            await bot.send_message(chat_id=self.channel_id, text=text)
        except RetryAfter as e:
            log.warning("Telegram rate limit (429): retry after %s seconds", e.retry_after)
            wait_time = e.retry_after.total_seconds() if hasattr(e.retry_after, "total_seconds") else float(e.retry_after)
            await asyncio.sleep(wait_time + 1)
            await bot.send_message(chat_id=self.channel_id, text=text)

    async def send_async(self, message: DisplayMessage) -> None:
        """
        Send a message to the configured channel.

        Raises:
            TransportError: If the Bot API rejects the message or is unreachable
        """
        chunks = split_message(render_plain_text(message))
        log.info("Sending %d message(s) to Telegram channel %s", len(chunks), self.channel_id)
        try:
            async with Bot(token=self.bot_token) as bot:
                for chunk in chunks:
                    await self._send_chunk(bot, chunk)
        except TelegramError as e:
            log.error("Telegram delivery failed: %s (type: %s)", e, type(e).__name__)
            raise TransportError(f"Telegram delivery failed: {e}") from e

    def send(self, message: DisplayMessage) -> None:
        asyncio.run(self.send_async(message))
