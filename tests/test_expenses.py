"""
Tests for the month-partitioned ExpenseStore.
"""

import json

import pytest
from pydantic import ValidationError

from onlytime.models.expense import Expense, NewExpense
from onlytime.models.notification import NotificationType
from onlytime.services.expenses import ExpenseStore, partition_key_for, sort_newest_first


def _expense(**overrides) -> NewExpense:
    values = {"date": "2024-01-05", "amount": 10.0, "title": "Coffee", "category_id": "Food"}
    values.update(overrides)
    return NewExpense(**values)


class TestPartitioning:
    """Tests for partition keys and ordering."""

    def test_partition_key(self):
        assert partition_key_for("2026-01-15") == "2026-01"

    def test_sort_newest_first_uses_created_at_for_ties(self):
        older = Expense(id="a", date="2024-01-05", amount=1, created_at=1)
        newer = Expense(id="b", date="2024-01-05", amount=1, created_at=2)
        assert [e.id for e in sort_newest_first([older, newer])] == ["b", "a"]


class TestAddAndList:
    """Tests for add / list_for_period."""

    @pytest.mark.parametrize("dates", [
        ("2024-01-05", "2024-01-20"),
        ("2024-01-20", "2024-01-05"),
    ])
    def test_newest_date_first(self, expense_store, dates):
        """Insertion order doesn't matter, the later date comes first."""
        for day in dates:
            expense_store.add("2024-01", _expense(date=day))
        listed = expense_store.list_for_period("2024-01")
        assert [e.date for e in listed] == ["2024-01-20", "2024-01-05"]

    def test_add_assigns_id_and_timestamp(self, expense_store, frozen_ms):
        updated = expense_store.add("2024-01", _expense())
        assert len(updated) == 1
        assert updated[0].id
        assert updated[0].created_at == frozen_ms

    def test_add_accepts_camel_case_mapping(self, expense_store):
        updated = expense_store.add(
            "2024-01",
            {"date": "2024-01-09", "amount": 4.5, "title": "Tram", "categoryId": "Transport"},
        )
        assert updated[0].category_id == "Transport"

    def test_add_clamps_negative_amount(self, expense_store):
        """Negative or unreadable amounts are stored as 0 instead of failing."""
        updated = expense_store.add("2024-01", {"date": "2024-01-09", "amount": -5})
        assert updated[0].amount == 0.0
        updated = expense_store.add("2024-01", {"date": "2024-01-10", "amount": float("nan")})
        assert updated[0].amount == 0.0
        assert [e.amount for e in expense_store.list_for_period("2024-01")] == [0.0, 0.0]

    def test_strict_new_expense_still_rejects_negative(self):
        with pytest.raises(ValidationError):
            NewExpense(date="2024-01-09", amount=-1)

    def test_add_uses_partition_of_the_date(self, expense_store):
        """An expense dated in February lands in February whatever key is passed."""
        expense_store.add("2024-01", _expense(date="2024-02-03"))
        assert expense_store.list_for_period("2024-01") == []
        assert len(expense_store.list_for_period("2024-02")) == 1

    def test_persisted_shape_is_camel_case(self, expense_store, storage, keys):
        expense_store.add("2024-01", _expense())
        stored = json.loads(storage.get_raw(keys.expenses("2024-01")))
        assert set(stored[0]) == {"id", "date", "amount", "title", "categoryId", "createdAt"}

    def test_add_publishes_notification(self, storage, keys, frozen_clock, channel, received):
        store = ExpenseStore(storage, keys, clock=frozen_clock, notifications=channel)
        store.add("2024-01", _expense())
        store.add("2024-01", _expense(), notify=False)
        assert [n.notification_type for n in received] == [NotificationType.EXPENSE_ADDED]


class TestMalformedData:
    """Reading never fails on bad persisted data."""

    def test_corrupt_json_is_empty(self, expense_store, storage, keys):
        storage.set_raw(keys.expenses("2024-01"), "[{not json")
        assert expense_store.list_for_period("2024-01") == []

    def test_non_list_is_empty(self, expense_store, storage, keys):
        storage.set_raw(keys.expenses("2024-01"), json.dumps({"id": "x"}))
        assert expense_store.list_for_period("2024-01") == []

    def test_bad_records_dropped_individually(self, expense_store, storage, keys):
        """Only the malformed records go, the rest survive."""
        storage.set_raw(keys.expenses("2024-01"), json.dumps([
            {"id": "a", "date": "2024-01-05", "amount": "12,5", "title": "ok"},
            {"date": "2024-01-06", "amount": 3},
            "junk",
            {"id": "b", "date": "2024-01-07", "amount": "abc"},
            {"id": "c", "date": "2024-01-08", "amount": -4},
        ]))
        listed = expense_store.list_for_period("2024-01")
        assert [e.id for e in listed] == ["c", "a"]
        assert listed[0].amount == 0.0
        assert listed[1].amount == 12.5

    def test_missing_fields_get_defaults(self, expense_store, storage, keys, frozen_ms):
        storage.set_raw(keys.expenses("2024-01"), json.dumps([
            {"id": "a", "date": "2024-01-05", "amount": 2, "categoryId": "  "},
        ]))
        expense = expense_store.list_for_period("2024-01")[0]
        assert expense.category_id == "Other"
        assert expense.title == ""
        assert expense.created_at == frozen_ms

    def test_int_too_large_for_float_is_dropped(self, expense_store, storage, keys, frozen_ms):
        """An amount no float can hold drops the record; such a createdAt falls back to now."""
        storage.set_raw(keys.expenses("2024-01"), json.dumps([
            {"id": "a", "date": "2024-01-05", "amount": 10**400},
            {"id": "b", "date": "2024-01-06", "amount": 3, "createdAt": 10**400},
        ]))
        listed = expense_store.list_for_period("2024-01")
        assert [e.id for e in listed] == ["b"]
        assert listed[0].created_at == frozen_ms

    def test_duplicate_ids_keep_first(self, expense_store, storage, keys):
        storage.set_raw(keys.expenses("2024-01"), json.dumps([
            {"id": "a", "date": "2024-01-05", "amount": 1},
            {"id": "a", "date": "2024-01-06", "amount": 2},
        ]))
        listed = expense_store.list_for_period("2024-01")
        assert [(e.id, e.amount) for e in listed] == [("a", 1.0)]

    def test_stored_strings_kept_verbatim(self, expense_store, storage, keys):
        """A padded id survives loading, so it can still be deleted."""
        storage.set_raw(keys.expenses("2024-01"), json.dumps([
            {"id": " x", "date": "2024-01-05", "amount": 1, "title": " Tram "},
        ]))
        expense = expense_store.list_for_period("2024-01")[0]
        assert expense.id == " x"
        assert expense.title == " Tram "
        assert expense_store.delete("2024-01", " x") == []


class TestRangeAndDelete:
    """Tests for list_for_range and delete."""

    def test_list_for_range(self, expense_store):
        expense_store.add("2023-12", _expense(date="2023-12-31"))
        expense_store.add("2024-01", _expense(date="2024-01-15"))
        expense_store.add("2024-03", _expense(date="2024-03-01"))
        listed = expense_store.list_for_range("2023-12", "2024-02")
        assert [e.date for e in listed] == ["2024-01-15", "2023-12-31"]

    def test_delete(self, storage, keys, frozen_clock, channel, received):
        store = ExpenseStore(storage, keys, clock=frozen_clock, notifications=channel)
        added = store.add("2024-01", _expense())
        remaining = store.delete("2024-01", added[0].id)
        assert remaining == []
        assert received[-1].notification_type == NotificationType.EXPENSE_DELETED

    def test_delete_unknown_id_is_noop(self, expense_store):
        expense_store.add("2024-01", _expense())
        assert len(expense_store.delete("2024-01", "missing")) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
