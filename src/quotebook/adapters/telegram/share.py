# src/quotebook/adapters/telegram/share.py
"""
Telegram Share Sink - Send Budget Summaries to a Chat

This module shares the plain-text budget summary by posting it to a
Telegram chat or channel. Messages longer than Telegram's limit are split
on line boundaries.

Files that USE this module:
- quotebook.app (share sink when a bot token and chat ID are configured)
- tests.test_telegram_share (unit tests)

Files that this module USES:
- telegram (Bot, RetryAfter, TelegramError)
- quotebook.domain.models (ExportOutcome)
"""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import List

from telegram import Bot
from telegram.error import RetryAfter, TelegramError

from quotebook.domain.models import ExportOutcome

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 4096


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """
    Split text into chunks no longer than `limit`, preferring line breaks.

    Lines longer than the limit are cut hard.
    """
    chunks: List[str] = []
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
            candidate = line
        current = candidate
    if current:
        chunks.append(current)
    return chunks


def _retry_delay(error: RetryAfter) -> float:
    retry_after = error.retry_after
    if isinstance(retry_after, timedelta):
        return retry_after.total_seconds()
    return float(retry_after)


class TelegramShareSink:
    """Share sink posting text to a Telegram chat."""

    def __init__(self, bot_token: str, chat_id: str):
        """
        Initialize Telegram share sink.

        Args:
            bot_token: Bot API token
            chat_id: Target chat ID or @channel name
        """
        self.bot_token = bot_token
        self.chat_id = chat_id

    async def share_text(self, title: str, text: str) -> ExportOutcome:
        """
        Post a titled text to the chat.

        Returns:
            Successful outcome, or a failed one with the Telegram error
        """
        try:
            async with Bot(self.bot_token) as bot:
                for chunk in split_message(f"{title}\n\n{text}"):
                    await self._send(bot, chunk)
        except TelegramError as e:
            logger.error("Failed to share to Telegram chat %s: %s", self.chat_id, e)
            return ExportOutcome(success=False, error=str(e))

        logger.info("Shared '%s' to Telegram chat %s", title, self.chat_id)
        return ExportOutcome(success=True)

    async def _send(self, bot: Bot, text: str) -> None:
        try:
            await bot.send_message(chat_id=self.chat_id, text=text)
        except RetryAfter as e:
            delay = _retry_delay(e)
            logger.warning("Telegram rate limit (429): retry after %s seconds", delay)
            # Wait and retry once
            await asyncio.sleep(delay + 1)
            await bot.send_message(chat_id=self.chat_id, text=text)
