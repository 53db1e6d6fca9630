# src/quotebook/application/cost_analysis.py
"""
Cost Analysis - Internal Costing and Margin Estimates

This module maintains the cost analysis worksheet (materials, labor and
overhead) and computes cost, profit and margin against the current cart.
It is independent of any saved budget.

Files that USE this module:
- quotebook.app (wires CostAnalysisService into the workbench)
- quotebook.application.export_service (renders the worksheet)
- tests.test_cost_analysis (unit tests)

Files that this module USES:
- quotebook.adapters.persistence.cost_store (CostAnalysisStore)
- quotebook.application.notifier (Notifier for failed saves)
- quotebook.domain.models (CostAnalysis, CostSummary, MarginEstimate, Material, Severity)
- quotebook.shared.validators (parse_number)
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Iterable, Optional

from quotebook.adapters.persistence.cost_store import CostAnalysisStore
from quotebook.application.notifier import Notifier, NullNotifier
from quotebook.domain.errors import StorageWriteError, ValidationError
from quotebook.domain.models import (
    CostAnalysis,
    CostSummary,
    CurrencyState,
    LineItem,
    MarginEstimate,
    Material,
    Severity,
)
from quotebook.shared.language import translate
from quotebook.shared.validators import NumberInput, parse_number

logger = logging.getLogger(__name__)

DEFAULT_COST_PERCENTAGE = 70.0


def _margin(profit: float, value: float) -> float:
    return profit / value * 100 if value > 0 else 0.0


def summarize(analysis: CostAnalysis, items: Iterable[LineItem], state: CurrencyState) -> CostSummary:
    """
    Compare the worksheet's costs with the value of the current cart.

    Args:
        analysis: Cost worksheet
        items: Line items of the current cart
        state: Currency snapshot used to convert item totals

    Returns:
        CostSummary (margin is 0 when the product value is not positive)
    """
    product_value = sum(state.convert(item.total) for item in items)
    material_cost = sum(m.total_cost for m in analysis.materials)
    total_cost = material_cost + analysis.labor_cost + analysis.overhead
    profit = product_value - total_cost
    return CostSummary(
        total_product_value=product_value,
        total_material_cost=material_cost,
        total_cost=total_cost,
        profit=profit,
        profit_margin=_margin(profit, product_value),
    )


def estimate_margin(subtotal: float, cost_percentage: float = DEFAULT_COST_PERCENTAGE,
                    additional_costs: float = 0.0) -> MarginEstimate:
    """
    Quick estimate treating material cost as a percentage of the subtotal.

    Args:
        subtotal: Sale value
        cost_percentage: Material cost as a percentage of subtotal (default 70)
        additional_costs: Fixed extra costs (transport, labor)
    """
    material_cost = subtotal * cost_percentage / 100
    total_cost = material_cost + additional_costs
    profit = subtotal - total_cost
    return MarginEstimate(
        subtotal=subtotal,
        material_cost=material_cost,
        additional_costs=additional_costs,
        total_cost=total_cost,
        profit=profit,
        profit_margin=_margin(profit, subtotal),
    )


def _non_negative(value: NumberInput, field: str) -> float:
    number = parse_number(value)
    if number is None or number < 0:
        raise ValidationError(translate("invalid_field", field=translate(f"field_{field}")), field=field)
    return number


class CostAnalysisService:
    """Edits and persists the cost analysis singleton."""

    def __init__(self, store: CostAnalysisStore, notifier: Optional[Notifier] = None):
        self.store = store
        self.notifier = notifier or NullNotifier()
        self.analysis = store.load()

    def add_material(self, name: str, unit_cost: NumberInput, unit: str = "unidad",
                     quantity_needed: NumberInput = 1) -> Material:
        """
        Append a material to the worksheet.

        Raises:
            ValidationError: If the name is blank or a number is missing,
                non-numeric or negative
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError(translate("invalid_field", field=translate("field_name")), field="name")
        cost = _non_negative(unit_cost, "unit_cost")
        quantity = _non_negative(quantity_needed, "quantity_needed")
        material = Material(
            id=uuid.uuid4().hex,
            name=name,
            unit_cost=cost,
            unit=(unit or "").strip(),
            quantity_needed=quantity,
            total_cost=cost * quantity,
        )
        self._commit(replace(self.analysis, materials=self.analysis.materials + (material,)))
        return material

    def update_material(self, material_id: str, **fields) -> Optional[Material]:
        """
        Change fields of a material, recomputing its total cost.

        Args:
            material_id: Material to update
            **fields: Any of name, unit_cost, unit, quantity_needed

        Returns:
            The updated material, or None if the id is unknown

        Raises:
            ValidationError: If a number is non-numeric or negative
        """
        unknown = set(fields) - {"name", "unit_cost", "unit", "quantity_needed"}
        if unknown:
            raise ValidationError(f"Unknown material fields: {sorted(unknown)}")

        updated = None
        materials = []
        for material in self.analysis.materials:
            if material.id == material_id:
                cost = _non_negative(fields.get("unit_cost", material.unit_cost), "unit_cost")
                quantity = _non_negative(fields.get("quantity_needed", material.quantity_needed), "quantity_needed")
                updated = replace(
                    material,
                    name=str(fields.get("name", material.name)),
                    unit=str(fields.get("unit", material.unit)),
                    unit_cost=cost,
                    quantity_needed=quantity,
                    total_cost=cost * quantity,
                )
                material = updated
            materials.append(material)

        if updated is None:
            logger.debug("Material %s not found", material_id)
            return None
        self._commit(replace(self.analysis, materials=tuple(materials)))
        return updated

    def remove_material(self, material_id: str) -> bool:
        materials = tuple(m for m in self.analysis.materials if m.id != material_id)
        if len(materials) == len(self.analysis.materials):
            return False
        self._commit(replace(self.analysis, materials=materials))
        return True

    def set_labor_cost(self, value: NumberInput) -> None:
        self._commit(replace(self.analysis, labor_cost=_non_negative(value, "labor_cost")))

    def set_overhead(self, value: NumberInput) -> None:
        self._commit(replace(self.analysis, overhead=_non_negative(value, "overhead")))

    def set_notes(self, notes: str) -> None:
        self._commit(replace(self.analysis, notes=notes or ""))

    def summary(self, items: Iterable[LineItem], state: CurrencyState) -> CostSummary:
        return summarize(self.analysis, items, state)

    def _commit(self, analysis: CostAnalysis) -> None:
        """
        The in-memory worksheet keeps the edit even when the write fails.

        Raises:
            StorageWriteError: If the worksheet cannot be written
        """
        self.analysis = analysis
        try:
            self.store.save(analysis)
        except StorageWriteError as e:
            logger.error("Failed to save cost analysis: %s", e)
            self.notifier.notify(translate("error_title"), translate("cost_save_failed", error=e), Severity.ERROR)
            raise
        logger.debug("Cost analysis saved (%d materials)", len(analysis.materials))
