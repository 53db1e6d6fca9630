# src/quotebook/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic:
currency context, line-item pricing, budget assembly, cost analysis and
export/share orchestration.
"""

from quotebook.application.budget_service import BudgetService, assemble_budget, next_sequence_number
from quotebook.application.cost_analysis import CostAnalysisService, estimate_margin, summarize
from quotebook.application.currency_service import CurrencyContext
from quotebook.application.export_service import ExportService, ExportSink, ShareSink
from quotebook.application.notifier import Notifier, NullNotifier
from quotebook.application.pricing import Cart, compute_totals, create_line_item, line_total

__all__ = [
    "BudgetService",
    "assemble_budget",
    "next_sequence_number",
    "CostAnalysisService",
    "estimate_margin",
    "summarize",
    "CurrencyContext",
    "ExportService",
    "ExportSink",
    "ShareSink",
    "Notifier",
    "NullNotifier",
    "Cart",
    "compute_totals",
    "create_line_item",
    "line_total",
]
