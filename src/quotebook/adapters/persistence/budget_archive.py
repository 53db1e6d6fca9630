# src/quotebook/adapters/persistence/budget_archive.py
"""
Budget Archive - Persistent Store of Saved Budgets

This module keeps the full list of saved budgets in a single JSON file,
newest first. Every mutation rewrites the whole list atomically, so the
archive is always either the old list or the new one, never a mix.

Files that USE this module:
- quotebook.application.budget_service (BudgetService persists budgets here)
- quotebook.app (wires the archive into the workbench)
- tests.test_budget_archive (unit tests)

Files that this module USES:
- quotebook.adapters.persistence.file_store (atomic JSON read/write, corrupt backups)
- quotebook.domain.models (Budget, LineItem)
"""
from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, List, Optional, Union

from quotebook.adapters.persistence.file_store import backup_file, read_json, write_json_atomic
from quotebook.domain.errors import StorageReadError
from quotebook.domain.models import Budget, Currency, LineItem, UnitMode

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("client_name", "client_rif", "company_name", "company_rif", "date")


def line_item_to_json(item: LineItem) -> dict:
    d = asdict(item)
    d["unit_mode"] = item.unit_mode.value
    return d


def line_item_from_json(data: dict) -> LineItem:
    """
    Create LineItem from JSON dictionary.

    Raises:
        KeyError, ValueError, TypeError: If the record is malformed
    """
    return LineItem(
        id=str(data["id"]),
        name=str(data.get("name", "")),
        width=float(data.get("width", 0.0)),
        height=float(data.get("height", 0.0)),
        unit_price=float(data["unit_price"]),
        unit_mode=UnitMode(data["unit_mode"]),
        quantity=int(data["quantity"]),
        total=float(data["total"]),
    )


def budget_to_json(budget: Budget) -> dict:
    """
    Convert Budget to JSON-serializable dictionary.

    Returns:
        Dictionary with line items as a list and enums as their values
    """
    d = asdict(budget)
    d["line_items"] = [line_item_to_json(item) for item in budget.line_items]
    d["currency"] = budget.currency.value
    return d


def budget_from_json(data: dict) -> Budget:
    """
    Create Budget from JSON dictionary.

    Optional text fields default to empty strings so older records written
    without company metadata still load.

    Raises:
        KeyError, ValueError, TypeError: If the record is malformed
    """
    return Budget(
        id=str(data["id"]),
        sequence_number=str(data.get("sequence_number", "")),
        client_name=str(data["client_name"]),
        date=str(data.get("date", "")),
        line_items=tuple(line_item_from_json(item) for item in data.get("line_items", [])),
        tax_enabled=bool(data.get("tax_enabled", False)),
        subtotal=float(data["subtotal"]),
        tax=float(data.get("tax", 0.0)),
        total=float(data["total"]),
        currency=Currency(data.get("currency", Currency.USD.value)),
        exchange_rate=float(data.get("exchange_rate", 0.0)),
        client_rif=str(data.get("client_rif") or ""),
        client_address=str(data.get("client_address") or ""),
        company_name=str(data.get("company_name") or ""),
        company_rif=str(data.get("company_rif") or ""),
        notes=str(data.get("notes") or ""),
    )


def matches(budget: Budget, term: str) -> bool:
    """Case-insensitive substring match over the searchable fields."""
    needle = term.lower()
    return any(needle in str(getattr(budget, name) or "").lower() for name in SEARCH_FIELDS)


class BudgetArchive:
    """
    Durable, ordered (newest-first) collection of saved budgets.

    Records that cannot be decoded are hidden from readers but kept: every
    rewrite puts them back unchanged, and their sequence numbers still count
    when the next number is computed.
    """

    def __init__(self, store_file: Path):
        """
        Initialize budget archive.

        Args:
            store_file: Path to JSON file holding the budget list
        """
        self.store_file = Path(store_file)

    def load_all(self) -> List[Budget]:
        """
        Load every saved budget, newest first.

        An absent or unparsable file yields an empty list; individual
        malformed records are left out (they stay on disk).

        Returns:
            List of budgets in archive order
        """
        return [entry for entry in self._entries() if isinstance(entry, Budget)]

    def sequence_numbers(self) -> List[str]:
        """Sequence numbers of every stored record, including undecodable ones."""
        numbers = []
        for entry in self._entries():
            if isinstance(entry, Budget):
                numbers.append(entry.sequence_number)
            elif isinstance(entry, dict):
                numbers.append(str(entry.get("sequence_number") or ""))
        return numbers

    def get(self, budget_id: str) -> Optional[Budget]:
        """Return the budget with the given id, or None."""
        for budget in self.load_all():
            if budget.id == budget_id:
                return budget
        return None

    def save(self, budget: Budget) -> None:
        """
        Persist a budget.

        Replaces the record with the same id in place (keeping its position),
        otherwise prepends it as the newest entry.

        Raises:
            StorageWriteError: If the archive cannot be written
        """
        entries = self._entries()
        for index, existing in enumerate(entries):
            if isinstance(existing, Budget) and existing.id == budget.id:
                entries[index] = budget
                logger.info("Budget %s (N° %s) updated in place", budget.id, budget.sequence_number)
                break
        else:
            entries.insert(0, budget)
            logger.info("Budget %s (N° %s) added to archive", budget.id, budget.sequence_number)
        self._write(entries)

    def delete(self, budget_id: str) -> bool:
        """
        Remove a budget. Deleting an unknown id is a no-op.

        Returns:
            True if a record was removed, False otherwise

        Raises:
            StorageWriteError: If the archive cannot be written
        """
        entries = self._entries()
        remaining = [e for e in entries if not (isinstance(e, Budget) and e.id == budget_id)]
        if len(remaining) == len(entries):
            logger.debug("Budget %s not in archive, nothing to delete", budget_id)
            return False
        self._write(remaining)
        logger.info("Budget %s deleted", budget_id)
        return True

    def search(self, term: str) -> List[Budget]:
        """
        Filter budgets by client/company name, tax ids or date.

        Args:
            term: Case-insensitive substring; a blank term returns everything

        Returns:
            Matching budgets in archive order
        """
        budgets = self.load_all()
        if not term or not term.strip():
            return budgets
        return [b for b in budgets if matches(b, term)]

    def _entries(self) -> List[Union[Budget, Any]]:
        """Decoded budgets, with undecodable records left as raw JSON values."""
        try:
            data = read_json(self.store_file)
        except StorageReadError as e:
            if self.store_file.exists():
                logger.warning("Budget archive unreadable, treating as empty: %s", e)
            else:
                logger.debug("No budget archive at %s", self.store_file)
            return []

        if not isinstance(data, list):
            backup = backup_file(self.store_file)
            logger.warning("Budget archive %s is not a list, treating as empty (backup: %s)",
                           self.store_file, backup)
            return []

        entries: List[Union[Budget, Any]] = []
        for index, record in enumerate(data):
            try:
                entries.append(budget_from_json(record))
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.warning("Keeping malformed budget record #%d as is: %s", index, e)
                entries.append(record)
        return entries

    def _write(self, entries: List[Union[Budget, Any]]) -> None:
        payload = [budget_to_json(e) if isinstance(e, Budget) else e for e in entries]
        write_json_atomic(self.store_file, payload)
