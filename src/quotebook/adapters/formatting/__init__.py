# src/quotebook/adapters/formatting/__init__.py
"""
Formatting Adapters - Amounts and Documents

This package contains formatting adapters for display strings, share text
and document layouts.
"""

from quotebook.adapters.formatting.formatter import (
    budget_lines,
    cost_analysis_lines,
    delivery_note_lines,
    format_amount,
    format_budget_share_text,
)

__all__ = [
    "budget_lines",
    "cost_analysis_lines",
    "delivery_note_lines",
    "format_amount",
    "format_budget_share_text",
]
