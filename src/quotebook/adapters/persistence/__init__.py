# src/quotebook/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data as JSON files:
- Budget archive
- Currency settings
- Cost analysis worksheet
"""

from quotebook.adapters.persistence.budget_archive import BudgetArchive
from quotebook.adapters.persistence.cost_store import CostAnalysisStore
from quotebook.adapters.persistence.currency_store import CurrencyStore
from quotebook.adapters.persistence.file_store import read_json, write_json_atomic

__all__ = [
    "BudgetArchive",
    "CostAnalysisStore",
    "CurrencyStore",
    "read_json",
    "write_json_atomic",
]
