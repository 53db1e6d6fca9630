# src/quotebook/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from quotebook.domain.models import (
    PRIMARY_CURRENCY,
    SECONDARY_CURRENCY,
    Budget,
    BudgetDraft,
    BudgetTotals,
    CostAnalysis,
    CostSummary,
    CreateBudget,
    Currency,
    CurrencyState,
    ExportOutcome,
    LineItem,
    MarginEstimate,
    Material,
    RenderedView,
    SaveIntent,
    Severity,
    TransportDetails,
    UnitMode,
    UpdateBudget,
)
from quotebook.domain.errors import (
    BudgetNotFoundError,
    DomainError,
    ExportFailure,
    InvalidRateError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)

__all__ = [
    "PRIMARY_CURRENCY",
    "SECONDARY_CURRENCY",
    "Budget",
    "BudgetDraft",
    "BudgetTotals",
    "CostAnalysis",
    "CostSummary",
    "CreateBudget",
    "Currency",
    "CurrencyState",
    "ExportOutcome",
    "LineItem",
    "MarginEstimate",
    "Material",
    "RenderedView",
    "SaveIntent",
    "Severity",
    "TransportDetails",
    "UnitMode",
    "UpdateBudget",
    "BudgetNotFoundError",
    "DomainError",
    "ExportFailure",
    "InvalidRateError",
    "StorageReadError",
    "StorageWriteError",
    "ValidationError",
]
