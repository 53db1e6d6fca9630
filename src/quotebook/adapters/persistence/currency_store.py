# src/quotebook/adapters/persistence/currency_store.py
"""
Currency Store - Persist Active Currency and Exchange Rate

This module stores the operator's display currency and exchange rate so
they survive restarts.

Files that USE this module:
- quotebook.application.currency_service (CurrencyContext loads/saves state)

Files that this module USES:
- quotebook.adapters.persistence.file_store (atomic JSON read/write)
- quotebook.domain.models (CurrencyState)
- quotebook.shared.validators (parse_number for the stored rate)
"""
from __future__ import annotations

import logging
from pathlib import Path

from quotebook.adapters.persistence.file_store import read_json, write_json_atomic
from quotebook.domain.errors import StorageReadError
from quotebook.domain.models import Currency, CurrencyState
from quotebook.shared.validators import parse_number

logger = logging.getLogger(__name__)


class CurrencyStore:
    """Store and retrieve the currency settings."""

    def __init__(self, store_file: Path, default_rate: float = 36.5):
        """
        Initialize currency store.

        Args:
            store_file: Path to JSON file for storing currency settings
            default_rate: Rate used when nothing valid is stored
        """
        self.store_file = Path(store_file)
        self.default_rate = default_rate

    def load(self) -> CurrencyState:
        """
        Load currency settings from disk.

        Falls back to the primary currency and the default rate for any
        value that is missing or invalid.
        """
        default = CurrencyState(currency=Currency.USD, rate=self.default_rate)
        try:
            data = read_json(self.store_file)
        except StorageReadError as e:
            logger.info("Using default currency settings: %s", e)
            return default

        if not isinstance(data, dict):
            logger.warning("Currency settings %s are not an object, using defaults", self.store_file)
            return default

        try:
            currency = Currency(data.get("currency", Currency.USD.value))
        except ValueError:
            logger.warning("Unknown stored currency %r, using USD", data.get("currency"))
            currency = Currency.USD

        rate = parse_number(data.get("rate", self.default_rate))
        if rate is None or rate <= 0:
            logger.warning("Stored exchange rate %r is not a positive number, using default", data.get("rate"))
            rate = self.default_rate

        state = CurrencyState(currency=currency, rate=rate)
        logger.info("Loaded currency settings: %s @ %s", state.currency.value, state.rate)
        return state

    def save(self, state: CurrencyState) -> None:
        """
        Save currency settings to disk.

        Raises:
            StorageWriteError: If the file cannot be written
        """
        write_json_atomic(self.store_file, {"currency": state.currency.value, "rate": state.rate})
        logger.debug("Saved currency settings: %s @ %s", state.currency.value, state.rate)
