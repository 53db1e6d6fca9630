# src/quotebook/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Language labels
- Logging configuration
"""

from quotebook.shared.validators import (
    parse_number,
    parse_positive_int,
    validate_bot_token,
    validate_channel_id,
)
from quotebook.shared.language import (
    get_language,
    set_language,
    translate,
    LANG_ENGLISH,
    LANG_SPANISH,
)

__all__ = [
    "parse_number",
    "parse_positive_int",
    "validate_bot_token",
    "validate_channel_id",
    "get_language",
    "set_language",
    "translate",
    "LANG_ENGLISH",
    "LANG_SPANISH",
]
