# tests/test_budget_service.py
"""
Budget Service Tests - Unit Tests for Assembly, Numbering and Editing

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- quotebook.application.budget_service (BudgetService, assemble_budget, next_sequence_number)
- quotebook.domain.models (BudgetDraft, CurrencyState, intents)
- unittest.mock (patch for simulated storage failures)
"""
import json
from unittest.mock import patch

import pytest

from quotebook.application.budget_service import BudgetService, assemble_budget, next_sequence_number
from quotebook.domain.errors import BudgetNotFoundError, StorageWriteError, ValidationError
from quotebook.domain.models import (
    BudgetDraft,
    CreateBudget,
    Currency,
    CurrencyState,
    Severity,
    UpdateBudget,
)

from conftest import make_budget, make_item


def _fill(service, client="Acme"):
    service.add_item("Malla Viford Pro", "2", "1.5", "10", "area", "10")
    service.draft.client_name = client


class TestNextSequenceNumber:
    def test_empty_archive(self):
        assert next_sequence_number([]) == "0001"

    def test_max_plus_one(self):
        assert next_sequence_number(["0003", "0010", "0002"]) == "0011"

    def test_non_numeric_counts_as_zero(self):
        assert next_sequence_number(["abc", ""]) == "0001"
        assert next_sequence_number(["abc", "0005"]) == "0006"

    def test_width(self):
        assert next_sequence_number(["41"], width=6) == "000042"


class TestAssembleBudget:
    def test_builds_snapshot(self):
        draft = BudgetDraft(client_name="  Acme ", company_name="Viford")
        budget = assemble_budget(
            draft, [make_item(total=300.0)], CurrencyState(Currency.BS, 40.0),
            sequence_number="0007", date="05/03/2026", budget_id="b-7",
        )
        assert budget.client_name == "Acme"
        assert budget.currency == Currency.BS
        assert budget.exchange_rate == 40.0
        assert budget.subtotal == pytest.approx(12000.0)
        assert budget.tax == pytest.approx(1920.0)
        assert budget.total == pytest.approx(budget.subtotal + budget.tax)

    def test_requires_client_name(self):
        with pytest.raises(ValidationError) as exc:
            assemble_budget(BudgetDraft(client_name=" "), [make_item()], CurrencyState(), "0001", "d", "id")
        assert exc.value.field == "client_name"

    def test_requires_items(self):
        with pytest.raises(ValidationError) as exc:
            assemble_budget(BudgetDraft(client_name="Acme"), [], CurrencyState(), "0001", "d", "id")
        assert exc.value.field == "line_items"


class TestSave:
    def test_first_budget_is_numbered_0001(self, service, archive):
        assert service.next_number == "0001"
        _fill(service)
        budget = service.save()

        assert budget.sequence_number == "0001"
        assert budget.date == "05/03/2026"
        assert service.next_number == "0002"
        assert archive.load_all() == [budget]

    def test_numbers_increase(self, service):
        _fill(service, "Uno")
        first = service.save()
        _fill(service, "Dos")
        second = service.save()
        assert (first.sequence_number, second.sequence_number) == ("0001", "0002")
        assert [b.id for b in service.history()] == [second.id, first.id]

    def test_numbering_continues_from_archive(self, archive, currency, notifier):
        archive.save(make_budget("old-1", "abc"))
        archive.save(make_budget("old-2", "0005"))
        service = BudgetService(archive, currency, notifier=notifier)
        assert service.next_number == "0006"
        _fill(service)
        assert service.save().sequence_number == "0006"

    def test_numbering_counts_undecodable_records(self, archive, currency, notifier):
        archive.save(make_budget("b-1", "0001"))
        records = json.loads(archive.store_file.read_text(encoding="utf-8"))
        records.insert(0, {"id": "b-2", "sequence_number": "0002", "client_name": "Roto"})
        archive.store_file.write_text(json.dumps(records), encoding="utf-8")

        service = BudgetService(archive, currency, notifier=notifier)
        assert service.next_number == "0003"
        _fill(service)
        assert service.save().sequence_number == "0003"

        stored = json.loads(archive.store_file.read_text(encoding="utf-8"))
        assert {"id": "b-2", "sequence_number": "0002", "client_name": "Roto"} in stored
        assert len(stored) == 3

    def test_blank_name_uses_default_product(self, archive, currency, notifier):
        service = BudgetService(archive, currency, notifier=notifier, default_product_name="Cerca Eslabonada")
        item = service.add_item("   ", "2", "1.5", "10", "area", "1")
        assert item.name == "Cerca Eslabonada"
        assert service.cart.items[0].name == "Cerca Eslabonada"

    def test_default_product_name_fallback(self, service):
        assert service.add_item(None, "", "", "25", "piece", "1").name == "Malla Viford Pro"

    def test_resets_form_keeping_company(self, service):
        _fill(service)
        service.draft.client_rif = "V-1"
        service.draft.notes = "urgente"
        service.draft.company_name = "Viford"
        service.save()

        assert len(service.cart) == 0
        assert service.draft.client_name == ""
        assert service.draft.client_rif == ""
        assert service.draft.notes == ""
        assert service.draft.company_name == "Viford"
        assert service.draft.intent == CreateBudget()

    def test_uses_active_currency(self, service, currency):
        currency.set_rate(40)
        currency.set_currency(Currency.BS)
        _fill(service)
        budget = service.save()
        assert budget.currency == Currency.BS
        assert budget.exchange_rate == 40
        assert budget.total == pytest.approx(12000.0 * 1.16)

    def test_missing_client_changes_nothing(self, service, archive, notifier):
        _fill(service, client="   ")
        notifier.reset_mock()

        with pytest.raises(ValidationError):
            service.save()

        assert len(service.cart) == 1
        assert archive.load_all() == []
        assert service.next_number == "0001"
        assert notifier.notify.call_args[0][2] == Severity.ERROR

    def test_empty_cart_is_rejected(self, service, archive):
        service.draft.client_name = "Acme"
        with pytest.raises(ValidationError):
            service.save()
        assert archive.load_all() == []

    def test_storage_failure_keeps_draft_and_cart(self, service, archive, notifier):
        _fill(service)
        with patch.object(archive, "save", side_effect=StorageWriteError("disk full")):
            with pytest.raises(StorageWriteError):
                service.save()

        assert len(service.cart) == 1
        assert service.draft.client_name == "Acme"
        assert service.next_number == "0001"
        assert notifier.notify.call_args[0][2] == Severity.ERROR

    def test_invalid_item_is_not_added(self, service, notifier):
        with pytest.raises(ValidationError):
            service.add_item("Malla", "", "1", "10", "area", "1")
        assert len(service.cart) == 0
        assert notifier.notify.call_args[0][2] == Severity.ERROR


class TestEditLifecycle:
    def test_end_to_end_create_then_edit(self, service, archive):
        _fill(service)
        service.draft.tax_enabled = True
        preview = service.preview_totals()
        assert (preview.subtotal, preview.tax, preview.total) == pytest.approx((300.0, 48.0, 348.0))

        created = service.save()
        assert created.sequence_number == "0001"
        assert created.total == pytest.approx(348.0)

        service.begin_edit(created.id)
        assert service.draft.intent == UpdateBudget(created.id, "0001", created.date)
        assert [i.id for i in service.cart.items] == [i.id for i in created.line_items]

        service.draft.client_name = "Acme Corp"
        updated = service.save()

        assert updated.id == created.id
        assert updated.sequence_number == "0001"
        assert updated.date == created.date
        budgets = archive.load_all()
        assert len(budgets) == 1
        assert budgets[0].client_name == "Acme Corp"
        assert service.next_number == "0002"

    def test_edit_keeps_position(self, service, archive):
        _fill(service, "Uno")
        first = service.save()
        _fill(service, "Dos")
        second = service.save()

        service.begin_edit(first.id)
        service.draft.client_name = "Uno Editado"
        service.save()

        assert [b.id for b in archive.load_all()] == [second.id, first.id]

    def test_repeated_edits_keep_number(self, service, archive):
        _fill(service)
        created = service.save()

        for client in ("Acme Uno", "Acme Dos", "Acme Tres"):
            service.begin_edit(created.id)
            service.draft.client_name = client
            updated = service.save()
            assert updated.sequence_number == "0001"
            assert updated.id == created.id
            assert len(archive.load_all()) == 1

        assert archive.load_all()[0].client_name == "Acme Tres"
        assert service.next_number == "0002"

    def test_edit_can_change_items(self, service, archive):
        _fill(service)
        created = service.save()
        service.begin_edit(created.id)
        service.add_item("Poste", "", "", "25", "piece", "4")
        updated = service.save()
        assert len(updated.line_items) == 2
        assert updated.subtotal == pytest.approx(400.0)

    def test_unknown_budget(self, service):
        with pytest.raises(BudgetNotFoundError):
            service.begin_edit("missing")

    def test_cancel_edit(self, service):
        _fill(service)
        created = service.save()
        service.begin_edit(created.id)
        service.cancel_edit()
        assert service.draft.intent == CreateBudget()
        assert len(service.cart) == 0


class TestDelete:
    def test_delete_refreshes_counter(self, service, archive):
        _fill(service, "Uno")
        service.save()
        _fill(service, "Dos")
        second = service.save()

        assert service.delete(second.id) is True
        assert service.next_number == "0002"
        assert len(archive.load_all()) == 1

    def test_deleting_middle_keeps_other_numbers(self, service, archive):
        saved = []
        for client in ("Uno", "Dos", "Tres"):
            _fill(service, client)
            saved.append(service.save())
        assert [b.sequence_number for b in saved] == ["0001", "0002", "0003"]

        assert service.delete(saved[1].id) is True

        assert sorted(b.sequence_number for b in archive.load_all()) == ["0001", "0003"]
        assert service.next_number == "0004"
        _fill(service, "Cuatro")
        assert service.save().sequence_number == "0004"

    def test_delete_unknown(self, service):
        assert service.delete("missing") is False

    def test_deleting_edited_budget_resets_intent(self, service):
        _fill(service)
        created = service.save()
        service.begin_edit(created.id)
        service.delete(created.id)
        assert service.draft.intent == CreateBudget()


class TestHistory:
    def test_filters(self, service):
        _fill(service, "Acme")
        service.save()
        _fill(service, "Beta")
        service.save()
        assert [b.client_name for b in service.history("acm")] == ["Acme"]
        assert len(service.history()) == 2
