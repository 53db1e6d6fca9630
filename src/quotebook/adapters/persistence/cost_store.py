# src/quotebook/adapters/persistence/cost_store.py
"""
Cost Store - Persist the Cost Analysis Worksheet

This module stores the single, process-wide cost analysis record. It is not
versioned and is reloaded verbatim at startup.

Files that USE this module:
- quotebook.application.cost_analysis (CostAnalysisService loads/saves here)

Files that this module USES:
- quotebook.adapters.persistence.file_store (atomic JSON read/write)
- quotebook.domain.models (CostAnalysis, Material)
"""
from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

from quotebook.adapters.persistence.file_store import read_json, write_json_atomic
from quotebook.domain.errors import StorageReadError
from quotebook.domain.models import CostAnalysis, Material

logger = logging.getLogger(__name__)


def material_from_json(data: dict) -> Material:
    unit_cost = float(data["unit_cost"])
    quantity_needed = float(data["quantity_needed"])
    return Material(
        id=str(data["id"]),
        name=str(data.get("name", "")),
        unit_cost=unit_cost,
        unit=str(data.get("unit", "")),
        quantity_needed=quantity_needed,
        total_cost=float(data.get("total_cost", unit_cost * quantity_needed)),
    )


def cost_analysis_to_json(analysis: CostAnalysis) -> dict:
    return {
        "materials": [asdict(m) for m in analysis.materials],
        "labor_cost": analysis.labor_cost,
        "overhead": analysis.overhead,
        "notes": analysis.notes,
    }


def cost_analysis_from_json(data: dict) -> CostAnalysis:
    """
    Create CostAnalysis from JSON dictionary.

    Raises:
        KeyError, ValueError, TypeError: If the record is malformed
    """
    return CostAnalysis(
        materials=tuple(material_from_json(m) for m in data.get("materials") or []),
        labor_cost=float(data.get("labor_cost") or 0.0),
        overhead=float(data.get("overhead") or 0.0),
        notes=str(data.get("notes") or ""),
    )


class CostAnalysisStore:
    """Store and retrieve the cost analysis singleton."""

    def __init__(self, store_file: Path):
        self.store_file = Path(store_file)

    def load(self) -> CostAnalysis:
        """Load the worksheet; an absent or unreadable file yields an empty one."""
        try:
            data = read_json(self.store_file)
        except StorageReadError as e:
            logger.info("Starting with an empty cost analysis: %s", e)
            return CostAnalysis()

        try:
            analysis = cost_analysis_from_json(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Cost analysis record is malformed, starting empty: %s", e)
            return CostAnalysis()

        logger.info("Loaded cost analysis with %d materials", len(analysis.materials))
        return analysis

    def save(self, analysis: CostAnalysis) -> None:
        """
        Save the worksheet.

        Raises:
            StorageWriteError: If the file cannot be written
        """
        write_json_atomic(self.store_file, cost_analysis_to_json(analysis))
