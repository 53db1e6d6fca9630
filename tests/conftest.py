# tests/conftest.py
"""
Shared Test Fixtures

Files that USE this module:
- pytest (fixtures are injected into every test module)

Files that this module USES:
- quotebook.adapters.persistence (stores backed by tmp_path)
- quotebook.application (services under test)
- quotebook.domain.models (factories for test data)
"""
from datetime import datetime
from unittest.mock import Mock

import pytest

from quotebook.adapters.persistence import BudgetArchive, CostAnalysisStore, CurrencyStore
from quotebook.application.budget_service import BudgetService
from quotebook.application.currency_service import CurrencyContext
from quotebook.domain.models import Budget, Currency, LineItem, UnitMode
from quotebook.shared.language import set_language


@pytest.fixture(autouse=True)
def spanish_labels():
    set_language("es")
    yield
    set_language("es")


@pytest.fixture
def notifier():
    return Mock()


@pytest.fixture
def archive(tmp_path):
    return BudgetArchive(tmp_path / "budgets.json")


@pytest.fixture
def currency_store(tmp_path):
    return CurrencyStore(tmp_path / "currency.json")


@pytest.fixture
def cost_store(tmp_path):
    return CostAnalysisStore(tmp_path / "costs.json")


@pytest.fixture
def currency(currency_store, notifier):
    return CurrencyContext(currency_store, notifier=notifier)


@pytest.fixture
def service(archive, currency, notifier):
    return BudgetService(archive, currency, notifier=notifier, clock=lambda: datetime(2026, 3, 5, 10, 30))


def make_item(item_id="item-1", total=300.0, mode=UnitMode.AREA, **overrides):
    data = dict(
        id=item_id,
        name="Malla Viford Pro",
        width=2.0,
        height=1.5,
        unit_price=10.0,
        unit_mode=mode,
        quantity=10,
        total=total,
    )
    data.update(overrides)
    return LineItem(**data)


def make_budget(budget_id="b-1", sequence_number="0001", client_name="Acme", **overrides):
    data = dict(
        id=budget_id,
        sequence_number=sequence_number,
        client_name=client_name,
        date="05/03/2026",
        line_items=(make_item(),),
        tax_enabled=True,
        subtotal=300.0,
        tax=48.0,
        total=348.0,
        currency=Currency.USD,
        exchange_rate=36.5,
    )
    data.update(overrides)
    return Budget(**data)
