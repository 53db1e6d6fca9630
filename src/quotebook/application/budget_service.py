# src/quotebook/application/budget_service.py
"""
Budget Service - Budget Assembly, Numbering and Edit Lifecycle

This module composes client budgets from the cart and the draft form state,
assigns sequence numbers, and drives the create/edit/delete lifecycle over
the budget archive.

Files that USE this module:
- quotebook.app (wires BudgetService into the workbench)
- tests.test_budget_service (unit tests)

Files that this module USES:
- quotebook.adapters.persistence.budget_archive (BudgetArchive)
- quotebook.application.currency_service (CurrencyContext snapshot)
- quotebook.application.pricing (Cart, compute_totals, create_line_item)
- quotebook.domain.models (Budget, BudgetDraft, SaveIntent)
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from quotebook.adapters.persistence.budget_archive import BudgetArchive
from quotebook.application.currency_service import CurrencyContext
from quotebook.application.notifier import Notifier, NullNotifier
from quotebook.application.pricing import DEFAULT_TAX_RATE, Cart, compute_totals, create_line_item
from quotebook.domain.errors import BudgetNotFoundError, StorageWriteError, ValidationError
from quotebook.domain.models import (
    Budget,
    BudgetDraft,
    BudgetTotals,
    CreateBudget,
    CurrencyState,
    LineItem,
    SaveIntent,
    Severity,
    UpdateBudget,
)
from quotebook.shared.language import translate

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"


def _sequence_value(number: str) -> int:
    try:
        return int(str(number).strip())
    except (TypeError, ValueError):
        return 0


def next_sequence_number(numbers: Iterable[str], width: int = 4) -> str:
    """
    Compute the next budget number from the numbers already in the archive.

    Non-numeric or missing numbers count as 0.

    Args:
        numbers: Sequence numbers of every stored record
        width: Zero-padding width

    Returns:
        max(existing) + 1, zero-padded (e.g. "0001" for an empty archive)
    """
    highest = max((_sequence_value(n) for n in numbers), default=0)
    return str(highest + 1).zfill(width)


def validate_draft(draft: BudgetDraft, items: Sequence[LineItem]) -> None:
    """
    Raises:
        ValidationError: If the client name is blank or there are no items
    """
    if not draft.client_name.strip():
        raise ValidationError(translate("client_required"), field="client_name")
    if not items:
        raise ValidationError(translate("cart_empty"), field="line_items")


def assemble_budget(
    draft: BudgetDraft,
    items: Sequence[LineItem],
    state: CurrencyState,
    sequence_number: str,
    date: str,
    budget_id: str,
    tax_rate: float = DEFAULT_TAX_RATE,
) -> Budget:
    """
    Build a Budget snapshot from the draft and the cart.

    Amounts are converted into the active currency of `state`, whose rate is
    stored on the budget.

    Raises:
        ValidationError: If the draft is not saveable
    """
    validate_draft(draft, items)
    totals = compute_totals(items, state, draft.tax_enabled, tax_rate)
    return Budget(
        id=budget_id,
        sequence_number=sequence_number,
        client_name=draft.client_name.strip(),
        date=date,
        line_items=tuple(items),
        tax_enabled=draft.tax_enabled,
        subtotal=totals.subtotal,
        tax=totals.tax,
        total=totals.total,
        currency=state.currency,
        exchange_rate=state.rate,
        client_rif=draft.client_rif.strip(),
        client_address=draft.client_address.strip(),
        company_name=draft.company_name.strip(),
        company_rif=draft.company_rif.strip(),
        notes=draft.notes.strip(),
    )


class BudgetService:
    """Cart, draft and archive orchestration for the quoting workflow."""

    def __init__(
        self,
        archive: BudgetArchive,
        currency: CurrencyContext,
        notifier: Optional[Notifier] = None,
        tax_rate: float = DEFAULT_TAX_RATE,
        sequence_digits: int = 4,
        clock: Callable[[], datetime] = datetime.now,
        default_product_name: str = "Malla Viford Pro",
    ):
        """
        Initialize budget service.

        Args:
            archive: Budget archive
            currency: Currency context supplying the live snapshot
            notifier: Operator notifier
            tax_rate: Tax rate as a fraction
            sequence_digits: Zero-padding width of budget numbers
            clock: Source of the save date
            default_product_name: Name used when an item is added without one
        """
        self.archive = archive
        self.currency = currency
        self.notifier = notifier or NullNotifier()
        self.tax_rate = tax_rate
        self.sequence_digits = sequence_digits
        self.clock = clock
        self.default_product_name = default_product_name
        self.cart = Cart()
        self.draft = BudgetDraft()
        self.next_number = ""
        self.refresh_next_number()

    def refresh_next_number(self) -> str:
        """Recompute the next budget number from the archive."""
        self.next_number = next_sequence_number(self.archive.sequence_numbers(), self.sequence_digits)
        return self.next_number

    def add_item(self, name: str, width, height, unit_price, unit_mode, quantity) -> LineItem:
        """
        Price form input and append it to the cart.

        A blank name falls back to the default product name.

        Raises:
            ValidationError: If the input is invalid (the cart is unchanged)
        """
        try:
            item = create_line_item(
                (name or "").strip() or self.default_product_name,
                width, height, unit_price, unit_mode, quantity,
            )
        except ValidationError as e:
            self.notifier.notify(translate("error_title"), str(e), Severity.ERROR)
            raise
        self.cart.add(item)
        self.notifier.notify(translate("product_added_title"), translate("product_added", name=item.name))
        return item

    def preview_totals(self) -> BudgetTotals:
        return compute_totals(self.cart.items, self.currency.state, self.draft.tax_enabled, self.tax_rate)

    def save(self) -> Budget:
        """
        Save the current draft and cart according to the draft's intent.

        Create: assigns the next number from an archive scan, a new id and
        today's date. Update: keeps the id, number and date of the budget
        being edited.

        Returns:
            The persisted budget

        Raises:
            ValidationError: If the draft is not saveable (nothing changes)
            StorageWriteError: If the archive cannot be written (draft and cart are kept)
        """
        intent = self.draft.intent
        items = self.cart.items
        state = self.currency.state
        try:
            validate_draft(self.draft, items)
            if isinstance(intent, UpdateBudget):
                budget = assemble_budget(
                    self.draft, items, state,
                    sequence_number=intent.sequence_number,
                    date=intent.date,
                    budget_id=intent.budget_id,
                    tax_rate=self.tax_rate,
                )
            else:
                budget = assemble_budget(
                    self.draft, items, state,
                    sequence_number=next_sequence_number(self.archive.sequence_numbers(), self.sequence_digits),
                    date=self.clock().strftime(DATE_FORMAT),
                    budget_id=uuid.uuid4().hex,
                    tax_rate=self.tax_rate,
                )
        except ValidationError as e:
            logger.info("Budget not saved: %s", e)
            self.notifier.notify(translate("error_title"), str(e), Severity.ERROR)
            raise
        return self.persist(budget, intent)

    def persist(self, budget: Budget, intent: SaveIntent) -> Budget:
        """
        Write an assembled budget and reset the form on success.

        Raises:
            StorageWriteError: If the archive cannot be written
        """
        try:
            self.archive.save(budget)
        except StorageWriteError as e:
            logger.error("Failed to save budget N° %s: %s", budget.sequence_number, e)
            self.notifier.notify(
                translate("error_title"), translate("budget_save_failed", error=e), Severity.ERROR
            )
            raise

        if isinstance(intent, UpdateBudget):
            message = translate("budget_updated", number=budget.sequence_number)
        else:
            message = translate("budget_saved", number=budget.sequence_number, client=budget.client_name)
            self.next_number = str(_sequence_value(budget.sequence_number) + 1).zfill(self.sequence_digits)
        self._reset_form()
        self.notifier.notify(translate("budget_saved_title"), message)
        return budget

    def begin_edit(self, budget_id: str) -> Budget:
        """
        Load a saved budget into the draft and cart for editing.

        Raises:
            BudgetNotFoundError: If the budget is not in the archive
        """
        budget = self.archive.get(budget_id)
        if budget is None:
            self.notifier.notify(
                translate("error_title"), translate("budget_not_found", budget_id=budget_id), Severity.ERROR
            )
            raise BudgetNotFoundError(f"Budget {budget_id} not found")

        self.draft = BudgetDraft(
            client_name=budget.client_name,
            client_rif=budget.client_rif,
            client_address=budget.client_address,
            company_name=budget.company_name,
            company_rif=budget.company_rif,
            notes=budget.notes,
            tax_enabled=budget.tax_enabled,
            intent=UpdateBudget(
                budget_id=budget.id,
                sequence_number=budget.sequence_number,
                date=budget.date,
            ),
        )
        self.cart.replace(budget.line_items)
        logger.info("Editing budget N° %s", budget.sequence_number)
        return budget

    def cancel_edit(self) -> None:
        """Leave edit mode, clearing the cart and client fields."""
        self._reset_form()

    def delete(self, budget_id: str) -> bool:
        """
        Delete a budget from the archive. Unknown ids are a no-op.

        Returns:
            True if a budget was removed

        Raises:
            StorageWriteError: If the archive cannot be written
        """
        try:
            removed = self.archive.delete(budget_id)
        except StorageWriteError as e:
            logger.error("Failed to delete budget %s: %s", budget_id, e)
            self.notifier.notify(
                translate("error_title"), translate("budget_save_failed", error=e), Severity.ERROR
            )
            raise

        if removed:
            intent = self.draft.intent
            if isinstance(intent, UpdateBudget) and intent.budget_id == budget_id:
                # Budget being edited is gone; a later save creates a new one
                self.draft.intent = CreateBudget()
            self.notifier.notify(translate("budget_deleted_title"), translate("budget_deleted"))
        self.refresh_next_number()
        return removed

    def history(self, term: str = "") -> List[Budget]:
        """Saved budgets, newest first, optionally filtered by a search term."""
        if term and term.strip():
            return self.archive.search(term)
        return self.archive.load_all()

    def _reset_form(self) -> None:
        # Company metadata and the tax toggle carry over to the next budget
        self.cart.clear()
        self.draft = BudgetDraft(
            company_name=self.draft.company_name,
            company_rif=self.draft.company_rif,
            tax_enabled=self.draft.tax_enabled,
        )
