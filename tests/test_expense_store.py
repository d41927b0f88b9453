"""Tests for the expense ledger."""

import json
from decimal import Decimal

import pytest

from anthaathi.models.audit import AuditEventType
from anthaathi.models.expense import ExpenseCategory
from anthaathi.services.storage import InMemoryStorage, StorageWriteError
from anthaathi.stores import ExpenseStore
from anthaathi.validation import InputValidationError

from conftest import run


class TestAddExpense:

    def test_add_prepends_and_persists(self, storage, expense_store):
        run(expense_store.load())
        first = run(expense_store.add_expense("Urea", "450", ExpenseCategory.FERTILIZER))
        second = run(expense_store.add_expense("Diesel", "800", "transport"))

        assert [e.id for e in expense_store.expenses] == [second.id, first.id]

        stored = json.loads(run(storage.get_item("expenses")))
        assert [item["title"] for item in stored] == ["Diesel", "Urea"]
        assert stored[0]["amount"] == "800"

    def test_add_trims_title_and_parses_amount(self, expense_store):
        expense = run(expense_store.add_expense("  Seeds  ", " 1,250.50 "))
        assert expense.title == "Seeds"
        assert expense.amount == Decimal("1250.50")
        assert expense.category == ExpenseCategory.SEEDS

    @pytest.mark.parametrize("title,amount,message", [
        ("", "100", "Please fill in all fields"),
        ("   ", "100", "Please fill in all fields"),
        ("Seeds", "", "Please fill in all fields"),
        ("Seeds", "abc", "Amount must be a number"),
        ("Seeds", "0", "Amount must be greater than zero"),
        ("Seeds", "-5", "Amount must be greater than zero"),
    ])
    def test_invalid_input_is_rejected(self, storage, expense_store, title, amount, message):
        """Nothing is stored when the form is invalid."""
        with pytest.raises(InputValidationError) as exc_info:
            run(expense_store.add_expense(title, amount))

        assert str(exc_info.value) == message
        assert expense_store.expenses == []
        assert run(storage.get_item("expenses")) is None

    def test_too_long_title_is_rejected(self, storage, expense_store):
        with pytest.raises(InputValidationError) as exc_info:
            run(expense_store.add_expense("x" * 201, "10", "seeds"))

        assert exc_info.value.issues[0].field == "title"
        assert expense_store.expenses == []
        assert run(storage.get_item("expenses")) is None

    def test_unknown_category_is_rejected(self, expense_store):
        with pytest.raises(InputValidationError) as exc_info:
            run(expense_store.add_expense("Seeds", "100", "fuel"))
        assert exc_info.value.issues[0].field == "category"

    def test_rejection_is_audited(self, expense_store, audit_logger):
        with pytest.raises(InputValidationError):
            run(expense_store.add_expense("", ""))
        event = audit_logger.recent_events[0]
        assert event.event_type == AuditEventType.VALIDATION_FAILED
        assert event.entity_id == "expense"

    def test_failed_write_leaves_list_unchanged(self):
        class ReadOnlyStorage(InMemoryStorage):
            async def set_item(self, key, value):
                raise StorageWriteError("read-only", key=key)

        store = ExpenseStore(ReadOnlyStorage(), key="expenses")
        with pytest.raises(StorageWriteError):
            run(store.add_expense("Seeds", "100"))
        assert store.expenses == []

    def test_failed_write_is_audited(self, audit_logger):
        class ReadOnlyStorage(InMemoryStorage):
            async def set_item(self, key, value):
                raise StorageWriteError("read-only", key=key)

        store = ExpenseStore(ReadOnlyStorage(), key="expenses", audit_logger=audit_logger)
        with pytest.raises(StorageWriteError):
            run(store.add_expense("Seeds", "100"))

        event = audit_logger.recent_events[0]
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.details == {"key": "expenses"}


class TestDeleteExpense:

    def test_delete_removes_entry(self, storage, expense_store):
        keep = run(expense_store.add_expense("Urea", "450", "fertilizer"))
        drop = run(expense_store.add_expense("Diesel", "800", "transport"))

        assert run(expense_store.delete_expense(drop.id)) is True
        assert [e.id for e in expense_store.expenses] == [keep.id]
        assert len(json.loads(run(storage.get_item("expenses")))) == 1

    def test_delete_unknown_id_changes_nothing(self, storage, expense_store):
        run(expense_store.add_expense("Urea", "450", "fertilizer"))
        before = run(storage.get_item("expenses"))

        assert run(expense_store.delete_expense("missing")) is False
        assert len(expense_store.expenses) == 1
        assert run(storage.get_item("expenses")) == before


class TestLoadAndTotals:

    def test_empty_ledger(self, expense_store):
        assert run(expense_store.load()) == []
        assert expense_store.total() == Decimal("0")
        assert expense_store.totals_by_category() == {}

    def test_reload_keeps_order(self, storage, expense_store):
        run(expense_store.add_expense("Urea", "450", "fertilizer"))
        run(expense_store.add_expense("Diesel", "800", "transport"))

        fresh = ExpenseStore(storage, key="expenses")
        titles = [e.title for e in run(fresh.load())]
        assert titles == ["Diesel", "Urea"]

    def test_bad_entries_are_skipped(self, storage, expense_store):
        """One broken record does not hide the rest of the ledger."""
        run(storage.set_item("expenses", json.dumps([
            {"id": "1", "title": "Urea", "amount": 450, "category": "fertilizer", "date": "2024-06-01"},
            {"id": "2", "title": "", "amount": 10},
            {"id": "3", "title": "Seeds", "amount": "-1"},
            "garbage",
        ])))
        expenses = run(expense_store.load())
        assert [e.id for e in expenses] == ["1"]

    def test_non_list_document_is_empty(self, storage, expense_store):
        run(storage.set_item("expenses", '{"id": "1"}'))
        assert run(expense_store.load()) == []

    def test_corrupt_document_is_empty(self, storage, expense_store):
        run(storage.set_item("expenses", "[{"))
        assert run(expense_store.load()) == []

    def test_totals(self, expense_store):
        run(expense_store.add_expense("Urea", "450.50", "fertilizer"))
        run(expense_store.add_expense("DAP", "1200", "fertilizer"))
        run(expense_store.add_expense("Harvest crew", "3000", "labour"))

        assert expense_store.total() == Decimal("4650.50")
        assert expense_store.totals_by_category() == {
            ExpenseCategory.FERTILIZER: Decimal("1650.50"),
            ExpenseCategory.LABOUR: Decimal("3000"),
        }

    def test_total_after_delete(self, expense_store):
        run(expense_store.add_expense("Urea", "450.50", "fertilizer"))
        diesel = run(expense_store.add_expense("Diesel", "800", "transport"))
        run(expense_store.add_expense("Seeds", "1200", "seeds"))

        run(expense_store.delete_expense(diesel.id))

        assert expense_store.total() == Decimal("450.50") + Decimal("1200")
        assert ExpenseCategory.TRANSPORT not in expense_store.totals_by_category()
