# tests/test_budget_archive.py
"""
Budget Archive Tests - Unit Tests for Budget Persistence and Search

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- quotebook.adapters.persistence.budget_archive (BudgetArchive)
- quotebook.adapters.persistence.file_store (write_json_atomic)
- unittest.mock (patch for simulated write failures)
"""
import json
from unittest.mock import patch

import pytest

from quotebook.adapters.persistence.budget_archive import BudgetArchive, budget_from_json, budget_to_json
from quotebook.adapters.persistence.file_store import write_json_atomic
from quotebook.domain.errors import StorageWriteError
from quotebook.domain.models import Currency, UnitMode

from conftest import make_budget


class TestSerialization:
    def test_round_trip(self):
        budget = make_budget(currency=Currency.BS, notes="Entrega en obra", client_rif="J-123")
        data = budget_to_json(budget)
        assert data["currency"] == "Bs."
        assert data["line_items"][0]["unit_mode"] == "area"
        assert budget_from_json(json.loads(json.dumps(data))) == budget

    def test_old_records_without_optional_fields(self):
        data = budget_to_json(make_budget())
        for key in ("client_rif", "client_address", "company_name", "company_rif", "notes"):
            del data[key]
        budget = budget_from_json(data)
        assert budget.company_name == ""
        assert budget.line_items[0].unit_mode == UnitMode.AREA


class TestBudgetArchive:
    def test_missing_file_is_empty(self, archive):
        assert archive.load_all() == []

    def test_save_prepends_newest_first(self, archive):
        archive.save(make_budget("b-1", "0001"))
        archive.save(make_budget("b-2", "0002"))
        assert [b.id for b in archive.load_all()] == ["b-2", "b-1"]

    def test_save_replaces_in_place(self, archive):
        archive.save(make_budget("b-1", "0001"))
        archive.save(make_budget("b-2", "0002"))
        archive.save(make_budget("b-1", "0001", client_name="Acme Corp"))

        budgets = archive.load_all()
        assert [b.id for b in budgets] == ["b-2", "b-1"]
        assert budgets[1].client_name == "Acme Corp"

    def test_get(self, archive):
        archive.save(make_budget("b-1"))
        assert archive.get("b-1").client_name == "Acme"
        assert archive.get("nope") is None

    def test_delete_is_idempotent(self, archive):
        archive.save(make_budget("b-1"))
        assert archive.delete("b-1") is True
        assert archive.delete("b-1") is False
        assert archive.load_all() == []

    def test_delete_unknown_does_not_write(self, archive):
        assert archive.delete("nope") is False
        assert not archive.store_file.exists()

    def test_corrupt_file_is_backed_up(self, archive):
        archive.store_file.write_text("{not json", encoding="utf-8")
        assert archive.load_all() == []
        backup = archive.store_file.with_suffix(".json.corrupt")
        assert backup.read_text(encoding="utf-8") == "{not json"

    def test_non_list_is_empty_and_backed_up(self, archive):
        archive.store_file.write_text('{"budgets": []}', encoding="utf-8")
        assert archive.load_all() == []
        backup = archive.store_file.with_suffix(".json.corrupt")
        assert backup.read_text(encoding="utf-8") == '{"budgets": []}'

    def test_malformed_records_are_skipped(self, archive):
        good = budget_to_json(make_budget("b-1"))
        archive.store_file.write_text(json.dumps([{"id": "broken"}, good]), encoding="utf-8")
        assert [b.id for b in archive.load_all()] == ["b-1"]

    def test_malformed_records_survive_save_and_delete(self, archive):
        bad = {"id": "b-2", "sequence_number": "0002", "client_name": "Roto"}
        good = budget_to_json(make_budget("b-1", "0001"))
        archive.store_file.write_text(json.dumps([bad, good]), encoding="utf-8")

        archive.save(make_budget("b-3", "0003"))
        stored = json.loads(archive.store_file.read_text(encoding="utf-8"))
        assert [r["id"] for r in stored] == ["b-3", "b-2", "b-1"]
        assert stored[1] == bad

        assert archive.delete("b-1") is True
        stored = json.loads(archive.store_file.read_text(encoding="utf-8"))
        assert stored == [budget_to_json(make_budget("b-3", "0003")), bad]

    def test_malformed_record_ids_are_not_deletable(self, archive):
        archive.store_file.write_text(json.dumps([{"id": "broken"}]), encoding="utf-8")
        assert archive.delete("broken") is False
        assert json.loads(archive.store_file.read_text(encoding="utf-8")) == [{"id": "broken"}]

    def test_sequence_numbers_include_malformed_records(self, archive):
        good = budget_to_json(make_budget("b-1", "0001"))
        records = [{"id": "b-2", "sequence_number": "0002"}, good, {"id": "b-9"}, 7]
        archive.store_file.write_text(json.dumps(records), encoding="utf-8")
        assert archive.sequence_numbers() == ["0002", "0001", ""]

    def test_write_failure_leaves_file_intact(self, archive):
        archive.save(make_budget("b-1"))
        before = archive.store_file.read_text(encoding="utf-8")

        with patch("quotebook.adapters.persistence.file_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageWriteError):
                archive.save(make_budget("b-2", "0002"))

        assert archive.store_file.read_text(encoding="utf-8") == before
        assert list(archive.store_file.parent.glob("*.tmp")) == []


class TestSearch:
    @pytest.fixture
    def populated(self, archive):
        archive.save(make_budget("b-1", "0001", client_name="Acme", date="01/02/2026"))
        archive.save(make_budget("b-2", "0002", client_name="Herrería López", client_rif="V-5555"))
        archive.save(make_budget("b-3", "0003", client_name="Beta", company_rif="J-999"))
        return archive

    def test_case_insensitive(self, populated):
        assert [b.id for b in populated.search("acme")] == ["b-1"]
        assert [b.id for b in populated.search("LÓPEZ")] == ["b-2"]

    def test_searches_tax_ids_and_date(self, populated):
        assert [b.id for b in populated.search("v-55")] == ["b-2"]
        assert [b.id for b in populated.search("J-999")] == ["b-3"]
        assert [b.id for b in populated.search("01/02")] == ["b-1"]

    def test_blank_term_returns_all_in_order(self, populated):
        assert [b.id for b in populated.search("")] == ["b-3", "b-2", "b-1"]
        assert [b.id for b in populated.search("   ")] == ["b-3", "b-2", "b-1"]

    def test_every_result_contains_term(self, populated):
        for budget in populated.search("e"):
            fields = [budget.client_name, budget.client_rif, budget.company_name, budget.company_rif, budget.date]
            assert any("e" in f.lower() for f in fields)


class TestWriteJsonAtomic:
    def test_creates_parent_dirs(self, tmp_path):
        target = tmp_path / "nested" / "dir" / "data.json"
        write_json_atomic(target, {"a": 1})
        assert json.loads(target.read_text(encoding="utf-8")) == {"a": 1}
