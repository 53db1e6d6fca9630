# src/quotebook/application/pricing.py
"""
Line-Item Pricing - Totals of Line Items and Carts

This module turns raw form input into priced LineItems, keeps the live cart,
and aggregates subtotal/tax/total for a set of items against an explicit
CurrencyState snapshot.

Files that USE this module:
- quotebook.application.budget_service (Cart, compute_totals)
- quotebook.application.cost_analysis (product value of the cart)
- tests.test_pricing (unit tests)

Files that this module USES:
- quotebook.domain.models (LineItem, UnitMode, CurrencyState, BudgetTotals)
- quotebook.shared.validators (parse_number, parse_positive_int)
"""
from __future__ import annotations

import logging
import uuid
from typing import Iterable, List, Optional, Tuple, Union

from quotebook.domain.errors import ValidationError
from quotebook.domain.models import BudgetTotals, CurrencyState, LineItem, UnitMode
from quotebook.shared.language import translate
from quotebook.shared.validators import NumberInput, parse_number, parse_positive_int

logger = logging.getLogger(__name__)

DEFAULT_TAX_RATE = 0.16


def line_total(width: float, height: float, unit_price: float, unit_mode: UnitMode, quantity: int) -> float:
    """
    Compute the total of one line item (no rounding).

    Area pricing: width * height * unit_price * quantity.
    Piece pricing: unit_price * quantity (dimensions ignored).
    """
    if unit_mode == UnitMode.PIECE:
        return unit_price * quantity
    return width * height * unit_price * quantity


def _invalid(field: str) -> ValidationError:
    return ValidationError(translate("invalid_field", field=translate(f"field_{field}")), field=field)


def _positive(value: NumberInput, field: str) -> float:
    number = parse_number(value)
    if number is None or number <= 0:
        raise _invalid(field)
    return number


def create_line_item(
    name: str,
    width: NumberInput,
    height: NumberInput,
    unit_price: NumberInput,
    unit_mode: Union[UnitMode, str],
    quantity: NumberInput,
    item_id: Optional[str] = None,
) -> LineItem:
    """
    Build a priced LineItem from raw form input.

    Width and height are required for area pricing. For piece pricing they are
    optional and default to 0.

    Args:
        name: Product label
        width: Width in meters
        height: Height in meters
        unit_price: Price per m² or per piece
        unit_mode: "area" or "piece"
        quantity: Positive whole number of units
        item_id: Identifier to use (a new one is generated by default)

    Returns:
        The new LineItem with its total frozen

    Raises:
        ValidationError: If a required field is missing, non-numeric or not positive
    """
    name = (name or "").strip()
    if not name:
        raise _invalid("name")
    try:
        mode = UnitMode(unit_mode)
    except ValueError:
        raise ValidationError(f"Unknown unit mode: {unit_mode!r}", field="unit_mode")

    if mode == UnitMode.AREA:
        w = _positive(width, "width")
        h = _positive(height, "height")
    else:
        w = parse_number(width) or 0.0
        h = parse_number(height) or 0.0
        if w < 0:
            raise _invalid("width")
        if h < 0:
            raise _invalid("height")

    price = _positive(unit_price, "unit_price")
    qty = parse_positive_int(quantity)
    if qty is None:
        raise _invalid("quantity")

    return LineItem(
        id=item_id or uuid.uuid4().hex,
        name=name,
        width=w,
        height=h,
        unit_price=price,
        unit_mode=mode,
        quantity=qty,
        total=line_total(w, h, price, mode, qty),
    )


def compute_totals(items: Iterable[LineItem], state: CurrencyState, tax_enabled: bool,
                   tax_rate: float = DEFAULT_TAX_RATE) -> BudgetTotals:
    """
    Aggregate a set of line items in the active currency.

    Each item total is converted from the primary currency, summed, then
    taxed when enabled.

    Args:
        items: Line items to aggregate
        state: Currency snapshot used for conversion
        tax_enabled: Whether tax applies
        tax_rate: Tax rate as a fraction (default 16%)

    Returns:
        BudgetTotals with total = subtotal + tax
    """
    subtotal = sum(state.convert(item.total) for item in items)
    tax = subtotal * tax_rate if tax_enabled else 0.0
    return BudgetTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)


class Cart:
    """Ordered list of line items being quoted."""

    def __init__(self, items: Iterable[LineItem] = ()):
        self._items: List[LineItem] = list(items)

    def add(self, item: LineItem) -> None:
        self._items.append(item)
        logger.debug("Added %s (%s) to cart", item.name, item.id)

    def remove(self, item_id: str) -> bool:
        """
        Remove an item by id.

        Returns:
            True if an item was removed, False if the id is unknown
        """
        before = len(self._items)
        self._items = [item for item in self._items if item.id != item_id]
        return len(self._items) != before

    def clear(self) -> None:
        self._items = []

    def replace(self, items: Iterable[LineItem]) -> None:
        self._items = list(items)

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return tuple(self._items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self._items)

    def __len__(self) -> int:
        return len(self._items)
