"""
Expense Store

Expenses are partitioned by calendar month: one storage key per "YYYY-MM"
holding a JSON array of records.

GUARANTEES:
- Reading never fails. A corrupt partition is an empty list; individual
  malformed records are dropped, the rest survive.
- Lists are always sorted newest date first, ties by newest creation.
- An expense lives in the partition of its own date, whatever key the
  caller passes to add().
"""

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union
from uuid import uuid4

import structlog
from pydantic import ValidationError

from onlytime.models.expense import DEFAULT_CATEGORY_ID, Expense, NewExpense
from onlytime.models.notification import NotificationBuilder
from onlytime.notifications.channel import NotificationChannel
from onlytime.numeric.dates import iter_month_keys
from onlytime.numeric.money import finite_number, parse_locale_number
from onlytime.services.storage import KeyValueStorageInterface, StorageKeys


logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def partition_key_for(date: str) -> str:
    """Month partition of an ISO date, e.g. 2026-01-15 -> 2026-01."""
    return date[:7]


def sort_newest_first(expenses: list[Expense]) -> list[Expense]:
    return sorted(expenses, key=lambda e: (e.date, e.created_at), reverse=True)


class ExpenseStore:
    """
    Month-partitioned expense persistence on top of a key-value store.

    Every call reads from storage; nothing is cached in between.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        keys: Optional[StorageKeys] = None,
        clock: Optional[Clock] = None,
        notifications: Optional[NotificationChannel] = None,
    ):
        """
        Args:
            storage: Key-value backend
            keys: Key layout, defaults to the onlytime:v1 namespace
            clock: Source of "now" for createdAt, injectable for tests
            notifications: Optional channel told about adds and deletes
        """
        self._storage = storage
        self._keys = keys or StorageKeys()
        self._clock = clock or _utcnow
        self._notifications = notifications

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def _normalize_record(self, item: Any, now_ms: int) -> Optional[Expense]:
        """Validate one persisted record; None if it must be dropped."""
        if not isinstance(item, Mapping):
            return None

        expense_id = item.get("id")
        date = item.get("date")
        if not isinstance(expense_id, str) or not expense_id:
            return None
        if not isinstance(date, str) or not date:
            return None

        amount = parse_locale_number(item.get("amount"), math.nan)
        if not math.isfinite(amount):
            return None

        title = item.get("title")
        category_id = item.get("categoryId")
        created_at = finite_number(item.get("createdAt"))
        if created_at is None:
            created_at = now_ms

        try:
            return Expense(
                id=expense_id,
                date=date,
                amount=max(0.0, amount),
                title=title if isinstance(title, str) else "",
                category_id=(
                    category_id.strip()
                    if isinstance(category_id, str) and category_id.strip()
                    else DEFAULT_CATEGORY_ID
                ),
                created_at=int(created_at),
            )
        except ValidationError:
            return None

    def list_for_period(self, period_key: str) -> list[Expense]:
        """
        Load every valid expense of one month, newest first.

        Returns:
            Possibly empty list; never raises on bad data
        """
        raw = self._storage.get(self._keys.expenses(period_key))
        if not isinstance(raw, list):
            return []

        now_ms = self._now_ms()
        expenses = []
        seen: set[str] = set()
        for item in raw:
            expense = self._normalize_record(item, now_ms)
            if expense is None:
                logger.debug("expense_record_dropped", period_key=period_key)
                continue
            if expense.id in seen:
                logger.debug("expense_duplicate_dropped", period_key=period_key, expense_id=expense.id)
                continue
            seen.add(expense.id)
            expenses.append(expense)
        return sort_newest_first(expenses)

    def list_for_range(self, start_period: str, end_period: str) -> list[Expense]:
        """All expenses from start to end month (both inclusive), newest first."""
        expenses: list[Expense] = []
        for period_key in iter_month_keys(start_period, end_period):
            expenses.extend(self.list_for_period(period_key))
        return sort_newest_first(expenses)

    def save_for_period(self, period_key: str, expenses: list[Expense]) -> None:
        self._storage.set(
            self._keys.expenses(period_key),
            [expense.to_storage_dict() for expense in expenses],
        )

    def add(
        self,
        period_key: str,
        new_expense: Union[NewExpense, Mapping],
        notify: bool = True,
    ) -> list[Expense]:
        """
        Record a new expense.

        Assigns an id and a creation timestamp, prepends it to the
        month's list and persists the list (one write).

        Args:
            period_key: Month the caller believes the expense belongs to
            new_expense: Validated values from a form or import
            notify: Publish an expense_added notification (bulk callers
                report once themselves)

        Returns:
            The full updated list of the partition the expense landed in
        """
        if not isinstance(new_expense, NewExpense):
            values = dict(new_expense)
            # negative and unreadable amounts are stored as 0
            values["amount"] = max(0.0, parse_locale_number(values.get("amount"), 0.0))
            new_expense = NewExpense.model_validate(values)

        target_period = partition_key_for(new_expense.date)
        if target_period != period_key:
            logger.warning(
                "expense_partition_mismatch",
                requested=period_key,
                used=target_period,
            )

        expense = Expense(
            **new_expense.model_dump(),
            id=str(uuid4()),
            created_at=self._now_ms(),
        )
        updated = [expense, *self.list_for_period(target_period)]
        self.save_for_period(target_period, updated)

        logger.info(
            "expense_added",
            expense_id=expense.id,
            period_key=target_period,
            amount=expense.amount,
            category_id=expense.category_id,
        )
        if notify and self._notifications is not None:
            self._notifications.publish(
                NotificationBuilder.expense_added(expense.title, expense.amount, target_period)
            )
        return updated

    def delete(self, period_key: str, expense_id: str) -> list[Expense]:
        """
        Remove an expense by id. Persists even when the id wasn't there.

        Returns:
            The updated list for the period
        """
        existing = self.list_for_period(period_key)
        updated = [expense for expense in existing if expense.id != expense_id]
        self.save_for_period(period_key, updated)

        logger.info(
            "expense_deleted",
            expense_id=expense_id,
            period_key=period_key,
            found=len(updated) != len(existing),
        )
        if self._notifications is not None and len(updated) != len(existing):
            self._notifications.publish(
                NotificationBuilder.expense_deleted(expense_id, period_key)
            )
        return updated
