# tests/test_currency.py
"""
Currency Tests - Unit Tests for Conversion and the Currency Context

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- quotebook.application.currency_service (CurrencyContext)
- quotebook.adapters.persistence.currency_store (CurrencyStore, stored rate fallbacks)
- quotebook.domain.models (CurrencyState, Currency)
- unittest.mock (Mock for a failing store)
"""
import json
from unittest.mock import Mock

import pytest

from quotebook.adapters.persistence.currency_store import CurrencyStore
from quotebook.application.currency_service import CurrencyContext
from quotebook.domain.errors import InvalidRateError, StorageWriteError, ValidationError
from quotebook.domain.models import Currency, CurrencyState, Severity


class TestCurrencyState:
    def test_identity_when_currencies_match(self):
        assert CurrencyState(Currency.USD, 40).convert(12.5) == 12.5
        assert CurrencyState(Currency.BS, 40).convert(12.5, Currency.BS) == 12.5

    def test_primary_to_secondary_multiplies(self):
        assert CurrencyState(Currency.BS, 40).convert(10) == pytest.approx(400.0)
        assert CurrencyState(Currency.BS, 36.5).convert(100) == pytest.approx(3650.0)

    def test_secondary_to_primary_divides(self):
        assert CurrencyState(Currency.USD, 40).convert(400, Currency.BS) == pytest.approx(10.0)

    @pytest.mark.parametrize("rate", [0.5, 36.5, 1234.5678])
    def test_round_trip(self, rate):
        to_bs = CurrencyState(Currency.BS, rate)
        to_usd = CurrencyState(Currency.USD, rate)
        assert to_usd.convert(to_bs.convert(123.45), Currency.BS) == pytest.approx(123.45)


class TestCurrencyStore:
    def test_defaults_when_missing(self, tmp_path):
        state = CurrencyStore(tmp_path / "none.json", default_rate=36.5).load()
        assert state == CurrencyState(Currency.USD, 36.5)

    def test_invalid_values_fall_back(self, tmp_path):
        path = tmp_path / "currency.json"
        path.write_text(json.dumps({"currency": "EUR", "rate": -3}), encoding="utf-8")
        state = CurrencyStore(path, default_rate=36.5).load()
        assert state == CurrencyState(Currency.USD, 36.5)

    @pytest.mark.parametrize("raw", ['"NaN"', '"Infinity"', "NaN", "Infinity", '"abc"', "null"])
    def test_non_finite_rate_falls_back(self, tmp_path, raw):
        path = tmp_path / "currency.json"
        path.write_text('{"currency": "Bs.", "rate": %s}' % raw, encoding="utf-8")
        state = CurrencyStore(path, default_rate=36.5).load()
        assert state == CurrencyState(Currency.BS, 36.5)

    def test_stored_rate_string_is_parsed(self, tmp_path):
        path = tmp_path / "currency.json"
        path.write_text(json.dumps({"currency": "Bs.", "rate": "40,5"}), encoding="utf-8")
        assert CurrencyStore(path).load().rate == 40.5

    def test_save_and_load(self, tmp_path):
        store = CurrencyStore(tmp_path / "currency.json")
        store.save(CurrencyState(Currency.BS, 41.25))
        assert json.loads((tmp_path / "currency.json").read_text(encoding="utf-8")) == {
            "currency": "Bs.",
            "rate": 41.25,
        }
        assert store.load() == CurrencyState(Currency.BS, 41.25)


class TestCurrencyContext:
    def test_initial_state_is_loaded(self, currency):
        assert currency.state == CurrencyState(Currency.USD, 36.5)

    def test_set_rate_persists(self, currency, currency_store):
        currency.set_rate("40,5")
        assert currency.state.rate == 40.5
        assert currency_store.load().rate == 40.5

    @pytest.mark.parametrize("rate", [0, -1, "abc", "", None])
    def test_invalid_rate_keeps_state(self, currency, rate):
        before = currency.state
        with pytest.raises(InvalidRateError) as exc:
            currency.set_rate(rate)
        assert isinstance(exc.value, ValidationError)
        assert exc.value.field == "rate"
        assert currency.state == before

    def test_set_currency_persists(self, currency, currency_store):
        currency.set_currency("Bs.")
        assert currency.state.currency == Currency.BS
        assert currency_store.load().currency == Currency.BS

    def test_convert_and_format_follow_state(self, currency):
        currency.set_rate(40)
        currency.set_currency(Currency.BS)
        assert currency.convert(10) == pytest.approx(400.0)
        assert currency.format(1234.5) == "Bs. 1.234,50"

    def test_persistence_failure_keeps_memory_state(self):
        store = Mock()
        store.load.return_value = CurrencyState()
        store.save.side_effect = StorageWriteError("disk full")
        notifier = Mock()

        context = CurrencyContext(store, notifier=notifier)
        context.set_rate(50)

        assert context.state.rate == 50
        notifier.notify.assert_called_once()
        assert notifier.notify.call_args[0][2] == Severity.ERROR
