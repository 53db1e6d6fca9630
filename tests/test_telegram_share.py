# tests/test_telegram_share.py
"""
Telegram Share Tests - Unit Tests for the Telegram Share Sink

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- quotebook.adapters.telegram.share (TelegramShareSink, split_message)
- telegram.error (RetryAfter, TelegramError for simulated failures)
- unittest.mock (patch for the Bot class, AsyncMock for its methods)
"""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from telegram.error import RetryAfter, TelegramError

from quotebook.adapters.telegram.share import MAX_MESSAGE_LENGTH, TelegramShareSink, split_message

TOKEN = "123456789:" + "A" * 35


@pytest.fixture
def bot():
    with patch("quotebook.adapters.telegram.share.Bot") as bot_cls:
        instance = AsyncMock()
        bot_cls.return_value.__aenter__.return_value = instance
        bot_cls.return_value.__aexit__.return_value = False
        yield instance


class TestSplitMessage:
    def test_short_text_is_one_chunk(self):
        assert split_message("hola\nmundo") == ["hola\nmundo"]

    def test_splits_on_line_boundaries(self):
        text = "\n".join(["a" * 100] * 100)
        chunks = split_message(text)
        assert len(chunks) > 1
        assert all(len(chunk) <= MAX_MESSAGE_LENGTH for chunk in chunks)
        assert "\n".join(chunks) == text

    def test_hard_cuts_long_lines(self):
        chunks = split_message("x" * 5000)
        assert [len(c) for c in chunks] == [4096, 904]


class TestTelegramShareSink:
    def test_sends_title_and_text(self, bot):
        sink = TelegramShareSink(TOKEN, "@canal")

        outcome = asyncio.run(sink.share_text("PRESUPUESTO 0001", "Cliente: Acme"))

        assert outcome.success
        bot.send_message.assert_awaited_once_with(chat_id="@canal", text="PRESUPUESTO 0001\n\nCliente: Acme")

    def test_retries_once_after_rate_limit(self, bot):
        bot.send_message.side_effect = [RetryAfter(1), None]
        sink = TelegramShareSink(TOKEN, "@canal")

        with patch("quotebook.adapters.telegram.share.asyncio.sleep", new_callable=AsyncMock) as sleep:
            outcome = asyncio.run(sink.share_text("t", "x"))

        assert outcome.success
        assert bot.send_message.await_count == 2
        sleep.assert_awaited_once_with(2.0)

    def test_telegram_error_becomes_failure(self, bot):
        bot.send_message.side_effect = TelegramError("chat not found")
        sink = TelegramShareSink(TOKEN, "@canal")

        outcome = asyncio.run(sink.share_text("t", "x"))

        assert not outcome.success
        assert "chat not found" in outcome.error

    def test_long_text_is_sent_in_chunks(self, bot):
        sink = TelegramShareSink(TOKEN, "-1001234567890")
        asyncio.run(sink.share_text("t", "\n".join(["b" * 1000] * 10)))
        assert bot.send_message.await_count == 3
        assert all(c.kwargs["chat_id"] == "-1001234567890" for c in bot.send_message.await_args_list)
