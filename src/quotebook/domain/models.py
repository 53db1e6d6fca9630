# src/quotebook/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Currencies and the live exchange-rate snapshot
- Priced line items
- Saved budgets (client quotes) and their save intents
- The internal cost analysis worksheet

Files that USE this module:
- quotebook.application.* (all services use domain models)
- quotebook.adapters.* (adapters serialize and render domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from enum import Enum  # Enumerations for currencies, unit modes and severities
from pathlib import Path  # Paths of exported artifacts
from typing import Optional, Tuple, Union  # Type hints


class Currency(str, Enum):
    """Supported display currencies. USD is the primary currency."""
    USD = "USD"
    BS = "Bs."


PRIMARY_CURRENCY = Currency.USD
SECONDARY_CURRENCY = Currency.BS


class UnitMode(str, Enum):
    """How a line item is priced: by surface area or by piece."""
    AREA = "area"
    PIECE = "piece"


class Severity(str, Enum):
    """Severity of an operator notification."""
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class CurrencyState:
    """
    Snapshot of the active display currency and exchange rate.

    Attributes:
        currency: Currency all aggregated amounts are shown in
        rate: Units of secondary currency per one unit of primary currency
    """
    currency: Currency = PRIMARY_CURRENCY
    rate: float = 36.5

    def convert(self, amount: float, from_currency: Currency = PRIMARY_CURRENCY) -> float:
        """
        Convert an amount into the active currency.

        Args:
            amount: Amount denominated in from_currency
            from_currency: Currency the amount is expressed in (default: primary)

        Returns:
            Amount in the active currency (identity when currencies match)
        """
        if from_currency == self.currency:
            return amount
        if from_currency == PRIMARY_CURRENCY:
            return amount * self.rate
        return amount / self.rate


@dataclass(frozen=True)
class LineItem:
    """
    A priced material/product entry of the quote cart.

    Attributes:
        id: Opaque unique identifier assigned at creation
        name: Display label
        width: Width in meters (meaningful for area pricing)
        height: Height in meters (meaningful for area pricing)
        unit_price: Price per m² or per piece, in the currency active at entry
        unit_mode: Area or piece pricing
        quantity: Positive number of units
        total: Frozen total computed at creation
    """
    id: str
    name: str
    width: float
    height: float
    unit_price: float
    unit_mode: UnitMode
    quantity: int
    total: float

    @property
    def area(self) -> float:
        """Surface in m² of a single unit."""
        return self.width * self.height


@dataclass(frozen=True)
class BudgetTotals:
    """Subtotal, tax and grand total of a set of line items."""
    subtotal: float
    tax: float
    total: float


@dataclass(frozen=True)
class Budget:
    """
    A saved, numbered client quotation snapshot.

    All monetary fields are denominated in `currency`, the display currency
    active when the budget was saved.
    """
    id: str
    sequence_number: str
    client_name: str
    date: str
    line_items: Tuple[LineItem, ...]
    tax_enabled: bool
    subtotal: float
    tax: float
    total: float
    currency: Currency
    exchange_rate: float
    client_rif: str = ""
    client_address: str = ""
    company_name: str = ""
    company_rif: str = ""
    notes: str = ""


@dataclass(frozen=True)
class CreateBudget:
    """Save intent: store the draft as a new, freshly numbered budget."""


@dataclass(frozen=True)
class UpdateBudget:
    """Save intent: overwrite an existing budget, keeping its identity."""
    budget_id: str
    sequence_number: str
    date: str


SaveIntent = Union[CreateBudget, UpdateBudget]


@dataclass
class BudgetDraft:
    """Mutable form state that becomes a Budget when saved."""
    client_name: str = ""
    client_rif: str = ""
    client_address: str = ""
    company_name: str = ""
    company_rif: str = ""
    notes: str = ""
    tax_enabled: bool = True
    intent: SaveIntent = field(default_factory=CreateBudget)

    @property
    def is_editing(self) -> bool:
        return isinstance(self.intent, UpdateBudget)


@dataclass(frozen=True)
class Material:
    """
    A material consumed to produce the quoted goods.

    Attributes:
        id: Opaque unique identifier
        name: Material name (e.g. galvanized tube, wire)
        unit_cost: Cost of one unit
        unit: Unit label (e.g. "unidad", "kg")
        quantity_needed: Units required
        total_cost: unit_cost * quantity_needed
    """
    id: str
    name: str
    unit_cost: float
    unit: str
    quantity_needed: float
    total_cost: float


@dataclass(frozen=True)
class CostAnalysis:
    """Internal costing worksheet, independent of any budget."""
    materials: Tuple[Material, ...] = ()
    labor_cost: float = 0.0
    overhead: float = 0.0
    notes: str = ""


@dataclass(frozen=True)
class CostSummary:
    """Aggregates of a cost analysis against the current cart value."""
    total_product_value: float
    total_material_cost: float
    total_cost: float
    profit: float
    profit_margin: float


@dataclass(frozen=True)
class MarginEstimate:
    """Quick estimate where material cost is a percentage of the subtotal."""
    subtotal: float
    material_cost: float
    additional_costs: float
    total_cost: float
    profit: float
    profit_margin: float


@dataclass(frozen=True)
class TransportDetails:
    """Carrier data printed on a delivery note."""
    transported_by: str = ""
    id_number: str = ""
    plate: str = ""
    vehicle_model: str = ""


@dataclass(frozen=True)
class RenderedView:
    """A fully resolved, formatted document ready for rasterization."""
    view_id: str
    title: str
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class ExportOutcome:
    """Result of an export or share action."""
    success: bool
    path: Optional[Path] = None
    error: Optional[str] = None
