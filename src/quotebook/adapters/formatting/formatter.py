# src/quotebook/adapters/formatting/formatter.py
"""
Formatter - Amounts, Share Text and Document Lines

This module handles all text formatting: money amounts in the two supported
currencies, the plain-text budget summary handed to share sinks, and the
line layouts of the budget, delivery note and cost analysis documents that
export sinks rasterize.

Files that USE this module:
- quotebook.application.currency_service (format_amount)
- quotebook.application.export_service (document lines and share text)
- tests.test_formatter (unit tests)

Files that this module USES:
- quotebook.domain.models (Budget, CostAnalysis, CostSummary, TransportDetails)
- quotebook.shared.language (translate for labels)
"""
from __future__ import annotations

from typing import List, Optional

from quotebook.domain.models import (
    Budget,
    CostAnalysis,
    CostSummary,
    Currency,
    CurrencyState,
    LineItem,
    TransportDetails,
    UnitMode,
)
from quotebook.shared.language import translate

BLANK_FIELD = "________________________________"


def format_amount(amount: float, currency: Currency) -> str:
    """
    Format a money amount for display.

    USD uses en-US currency style ("$1,234.56", "-$1,234.56").
    Bs. uses a literal prefix with es-VE grouping ("Bs. 1.234,56").

    Args:
        amount: Amount to format (rounded to 2 decimals for display only)
        currency: Currency the amount is denominated in

    Returns:
        Display string
    """
    grouped = f"{abs(amount):,.2f}"
    negative = round(amount, 2) < 0
    if currency == Currency.USD:
        return f"-${grouped}" if negative else f"${grouped}"
    # es-VE: "." groups thousands, "," separates decimals
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"Bs. -{grouped}" if negative else f"Bs. {grouped}"


def _fmt_measure(value: float) -> str:
    """Format a dimension or area without trailing zeros ('2', '1.5')."""
    return f"{value:g}"


def _fmt_pct(rate: float) -> str:
    """Format a tax rate as a percentage number ('16')."""
    return f"{rate * 100:g}"


def _budget_state(budget: Budget) -> CurrencyState:
    return CurrencyState(currency=budget.currency, rate=budget.exchange_rate or 1.0)


def _header_lines(budget: Budget, fallback_company: str) -> List[str]:
    lines = [budget.company_name or fallback_company]
    if budget.company_rif:
        lines.append(translate("company_rif", rif=budget.company_rif))
    return lines


def _client_lines(budget: Budget) -> List[str]:
    lines = [translate("client", name=budget.client_name)]
    if budget.client_address:
        lines.append(translate("client_address", address=budget.client_address))
    if budget.client_rif:
        lines.append(translate("client_rif", rif=budget.client_rif))
    lines.append(translate("date", date=budget.date))
    return lines


def _quantity_line(item: LineItem) -> str:
    if item.unit_mode == UnitMode.PIECE:
        return translate("item_quantity_piece", quantity=item.quantity)
    return translate("item_quantity_area", quantity=item.quantity, area=_fmt_measure(item.area))


def line_item_lines(index: int, item: LineItem, state: CurrencyState, with_prices: bool = True) -> List[str]:
    """
    Format one line item as a block of document lines.

    Prices are converted with the given state (for saved budgets, the
    currency and rate baked in at save time).

    Args:
        index: 1-based position in the document
        item: Line item to format
        state: Currency snapshot used for conversion and labels
        with_prices: Include price and subtotal lines (False for delivery notes)

    Returns:
        List of lines for this item
    """
    lines = [
        translate("item_name", index=index, name=item.name.upper()),
        translate("item_size", width=_fmt_measure(item.width), height=_fmt_measure(item.height)),
    ]
    if with_prices:
        price = format_amount(state.convert(item.unit_price), state.currency)
        key = "item_price_piece" if item.unit_mode == UnitMode.PIECE else "item_price_area"
        lines.append(translate(key, price=price))
    lines.append(_quantity_line(item))
    if with_prices:
        amount = format_amount(state.convert(item.total), state.currency)
        lines.append(translate("item_subtotal", amount=amount))
    return lines


def budget_lines(budget: Budget, fallback_company: str = "", tax_rate: float = 0.16) -> List[str]:
    """
    Lay out a saved budget as document lines.

    Args:
        budget: Budget to format
        fallback_company: Issuer name used when the budget has none
        tax_rate: Tax rate shown next to the tax line

    Returns:
        List of lines (empty strings are blank lines)
    """
    state = _budget_state(budget)
    lines = _header_lines(budget, fallback_company)
    lines.append(translate("budget_number", number=budget.sequence_number))
    lines.append("")
    lines.extend(_client_lines(budget))
    lines.append("")
    lines.append(translate("materials_header"))
    for index, item in enumerate(budget.line_items, start=1):
        lines.extend(line_item_lines(index, item, state))
        lines.append("")

    lines.append(translate("subtotal", amount=format_amount(budget.subtotal, budget.currency)))
    if budget.tax_enabled:
        lines.append(translate("tax", pct=_fmt_pct(tax_rate), amount=format_amount(budget.tax, budget.currency)))
    lines.append(translate("total", amount=format_amount(budget.total, budget.currency)))
    if budget.currency != Currency.USD:
        lines.append(translate("exchange_rate", rate=f"{budget.exchange_rate:,.2f}"))
    if budget.notes:
        lines.append("")
        lines.append(translate("notes", notes=budget.notes))
    return lines


def format_budget_share_text(budget: Budget, fallback_company: str = "", tax_rate: float = 0.16) -> str:
    """
    Format a budget as the plain-text summary handed to share sinks.

    Returns:
        Multi-line string
    """
    return "\n".join(budget_lines(budget, fallback_company, tax_rate)).rstrip()


def delivery_note_lines(budget: Budget, transport: Optional[TransportDetails] = None,
                        fallback_company: str = "") -> List[str]:
    """
    Lay out a delivery note for a budget: materials without prices, carrier
    details (blank lines to fill by hand when missing) and signature lines.

    Returns:
        List of lines
    """
    transport = transport or TransportDetails()
    state = _budget_state(budget)
    lines = _header_lines(budget, fallback_company)
    lines.append(translate("delivery_note_title"))
    lines.append(translate("budget_number", number=budget.sequence_number))
    lines.append("")
    lines.extend(_client_lines(budget))
    lines.append("")
    lines.append(translate("delivered_materials"))
    for index, item in enumerate(budget.line_items, start=1):
        lines.extend(line_item_lines(index, item, state, with_prices=False))
    lines.append("")
    lines.append(translate("transport_header"))
    lines.append(translate("transported_by", value=transport.transported_by or BLANK_FIELD))
    lines.append(translate("id_number", value=transport.id_number or BLANK_FIELD))
    lines.append(translate("plate", value=transport.plate or BLANK_FIELD))
    lines.append(translate("vehicle_model", value=transport.vehicle_model or BLANK_FIELD))
    lines.append("")
    lines.append(translate("delivered_signature"))
    lines.append(translate("received_signature"))
    if budget.notes:
        lines.append("")
        lines.append(translate("notes", notes=budget.notes))
    return lines


def cost_analysis_lines(analysis: CostAnalysis, summary: CostSummary, currency: Currency) -> List[str]:
    """
    Lay out the cost analysis worksheet.

    Args:
        analysis: Worksheet with materials and fixed costs
        summary: Aggregates computed against the current cart
        currency: Currency all amounts are shown in

    Returns:
        List of lines
    """
    lines = [translate("cost_title"), "", translate("cost_materials_header")]
    for index, material in enumerate(analysis.materials, start=1):
        lines.append(translate(
            "material_line",
            index=index,
            name=material.name,
            quantity=_fmt_measure(material.quantity_needed),
            unit=material.unit,
            unit_cost=format_amount(material.unit_cost, currency),
            total=format_amount(material.total_cost, currency),
        ))
    lines.append("")
    lines.append(translate("material_cost_total", amount=format_amount(summary.total_material_cost, currency)))
    lines.append(translate("labor_cost", amount=format_amount(analysis.labor_cost, currency)))
    lines.append(translate("overhead", amount=format_amount(analysis.overhead, currency)))
    lines.append(translate("total_cost", amount=format_amount(summary.total_cost, currency)))
    lines.append("")
    lines.append(translate("product_value", amount=format_amount(summary.total_product_value, currency)))
    lines.append(translate("profit", amount=format_amount(summary.profit, currency)))
    lines.append(translate("profit_margin", margin=f"{summary.profit_margin:.1f}"))
    if analysis.notes:
        lines.append("")
        lines.append(translate("notes", notes=analysis.notes))
    return lines
