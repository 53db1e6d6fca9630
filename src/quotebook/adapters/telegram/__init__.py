# src/quotebook/adapters/telegram/__init__.py
"""
Telegram Adapters - Budget Sharing

This package contains the Telegram share sink.
"""

from quotebook.adapters.telegram.share import TelegramShareSink, split_message

__all__ = ["TelegramShareSink", "split_message"]
