# src/quotebook/shared/validators.py
"""
Input Validation Utilities - Configuration and Form Input Validation

This module provides validation and parsing helpers for operator input
(form fields typed as text) and for optional integration settings.

Files that USE this module:
- quotebook.config.settings (Telegram token and chat ID validators)
- quotebook.application.pricing (numeric form fields of line items)
- quotebook.application.cost_analysis (numeric fields of materials)
- quotebook.application.currency_service (exchange rate input)

Files that this module USES:
- None (pure utility functions)
"""
import math
import re
from typing import Optional, Union

NumberInput = Union[str, int, float, None]


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

    # Chat IDs can be:
    # - @channelname (public channels)
    # - -1001234567890 (private channels/supergroups)
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


def parse_number(value: NumberInput) -> Optional[float]:
    """
    Parse a numeric form field.

    Accepts numbers and numeric strings; a comma is accepted as the decimal
    separator when no dot is present ("2,5" -> 2.5).

    Args:
        value: Raw field value

    Returns:
        The parsed float, or None if missing, blank, non-numeric or not finite
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def parse_positive_int(value: NumberInput) -> Optional[int]:
    """
    Parse a positive whole number (e.g. a quantity).

    Returns:
        The integer, or None if missing, non-numeric, fractional or <= 0
    """
    number = parse_number(value)
    if number is None or number <= 0 or not number.is_integer():
        return None
    return int(number)
