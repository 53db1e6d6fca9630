# src/quotebook/application/currency_service.py
"""
Currency Context - Active Display Currency and Exchange Rate

This module holds the single live CurrencyState of the process. Pricing and
assembly code never read it implicitly: they receive the snapshot returned by
`CurrencyContext.state`.

Files that USE this module:
- quotebook.application.budget_service (snapshot for totals and saves)
- quotebook.app (wires the context into the workbench)
- tests.test_currency (unit tests)

Files that this module USES:
- quotebook.adapters.persistence.currency_store (CurrencyStore)
- quotebook.adapters.formatting.formatter (format_amount)
- quotebook.shared.validators (parse_number for rate input)
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from quotebook.adapters.formatting.formatter import format_amount
from quotebook.adapters.persistence.currency_store import CurrencyStore
from quotebook.application.notifier import Notifier, NullNotifier
from quotebook.domain.errors import InvalidRateError, StorageWriteError
from quotebook.domain.models import PRIMARY_CURRENCY, Currency, CurrencyState, Severity
from quotebook.shared.language import translate
from quotebook.shared.validators import parse_number

logger = logging.getLogger(__name__)


class CurrencyContext:
    """Owns the live currency state and persists every change."""

    def __init__(self, store: CurrencyStore, notifier: Optional[Notifier] = None):
        """
        Initialize currency context and load persisted state.

        Args:
            store: Currency settings store
            notifier: Operator notifier for persistence failures
        """
        self.store = store
        self.notifier = notifier or NullNotifier()
        self._state = store.load()

    @property
    def state(self) -> CurrencyState:
        """Immutable snapshot to pass into pricing and assembly functions."""
        return self._state

    def convert(self, amount: float, from_currency: Currency = PRIMARY_CURRENCY) -> float:
        return self._state.convert(amount, from_currency)

    def format(self, amount: float) -> str:
        """Format an amount already denominated in the active currency."""
        return format_amount(amount, self._state.currency)

    def set_currency(self, currency: Union[Currency, str]) -> CurrencyState:
        """
        Switch the display currency.

        Args:
            currency: Currency or its value ("USD", "Bs.")

        Returns:
            The new state

        Raises:
            ValueError: If the currency is not supported
        """
        self._update(CurrencyState(currency=Currency(currency), rate=self._state.rate))
        logger.info("Display currency set to %s", self._state.currency.value)
        return self._state

    def set_rate(self, rate: Union[str, float, None]) -> CurrencyState:
        """
        Set the exchange rate (units of secondary per one unit of primary).

        Args:
            rate: Raw rate input; must parse to a positive number

        Returns:
            The new state

        Raises:
            InvalidRateError: If the rate is missing, non-numeric or <= 0
        """
        value = parse_number(rate)
        if value is None or value <= 0:
            raise InvalidRateError(translate("invalid_field", field=translate("field_rate")))
        self._update(CurrencyState(currency=self._state.currency, rate=value))
        logger.info("Exchange rate set to %s", value)
        return self._state

    def _update(self, new_state: CurrencyState) -> None:
        # In-memory state always changes, even if the disk write fails
        self._state = new_state
        try:
            self.store.save(new_state)
        except StorageWriteError as e:
            logger.error("Failed to persist currency settings: %s", e)
            self.notifier.notify(
                translate("error_title"),
                translate("settings_save_failed", error=e),
                Severity.ERROR,
            )
