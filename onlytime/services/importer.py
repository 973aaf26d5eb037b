"""
Expense Import

Records already-parsed rows from a bank export (`{date, amount, title,
categoryId}`) as expenses. Reading the file and mapping its columns is
the caller's job.

Rows are added to the partition of their *own* date, so a statement
spanning several months lands in several partitions. Rows whose amount
isn't positive (unparsable, zero) are skipped and counted.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field

from onlytime.models.expense import DEFAULT_CATEGORY_ID, NewExpense
from onlytime.models.notification import NotificationBuilder
from onlytime.notifications.channel import NotificationChannel
from onlytime.numeric.dates import parse_import_date
from onlytime.numeric.money import parse_import_amount
from onlytime.services.expenses import ExpenseStore, partition_key_for


logger = structlog.get_logger(__name__)


# First matching keyword in the title decides the category
DEFAULT_CATEGORY_RULES: tuple[tuple[str, str], ...] = (
    ("coop", "Food"),
    ("migros", "Food"),
    ("lidl", "Food"),
    ("aldi", "Food"),
    ("restaurant", "Food"),
    ("kaffee", "Food"),
    ("coffee", "Food"),
    ("tankstelle", "Transport"),
    ("sbb", "Transport"),
    ("öv", "Transport"),
    ("uber", "Transport"),
    ("zara", "Shopping"),
    ("h&m", "Shopping"),
    ("amazon", "Shopping"),
    ("spotify", "Subscriptions"),
    ("netflix", "Subscriptions"),
    ("kino", "Leisure"),
)


class ImportResult(BaseModel):
    """Outcome of one import."""
    imported: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    periods: list[str] = Field(
        default_factory=list,
        description="Month partitions that received rows, sorted",
    )


def guess_category(
    title: str,
    rules: Iterable[tuple[str, str]] = DEFAULT_CATEGORY_RULES,
) -> str:
    lower = title.lower()
    for keyword, category_id in rules:
        if keyword.lower() in lower:
            return category_id
    return DEFAULT_CATEGORY_ID


class ExpenseImporter:
    """
    Records parsed rows as expenses.

    Usage:
        importer = ExpenseImporter(store, notifications=channel)
        result = importer.import_rows(rows, today=date.today())
    """

    def __init__(
        self,
        store: ExpenseStore,
        notifications: Optional[NotificationChannel] = None,
        category_rules: Iterable[tuple[str, str]] = DEFAULT_CATEGORY_RULES,
    ):
        self._store = store
        self._notifications = notifications
        self._category_rules = tuple(category_rules)

    def _to_new_expense(self, row: Mapping[str, Any], today: date) -> Optional[NewExpense]:
        amount = parse_import_amount(row.get("amount"))
        if amount <= 0:
            return None

        title = row.get("title")
        title = title.strip() if isinstance(title, str) else ""

        category = row.get("categoryId", row.get("category_id"))
        if isinstance(category, str) and category.strip():
            category_id = category.strip()
        else:
            category_id = guess_category(title, self._category_rules)

        raw_date = row.get("date")
        return NewExpense(
            date=parse_import_date(raw_date if isinstance(raw_date, str) else "", today),
            amount=amount,
            title=title,
            category_id=category_id,
        )

    def import_rows(self, rows: Iterable[Mapping[str, Any]], today: Optional[date] = None) -> ImportResult:
        """
        Add every usable row to its own month partition.

        Args:
            rows: Mappings with date, amount, title and (optionally) categoryId
            today: Date used for rows without a readable date

        Returns:
            ImportResult with counts and the partitions touched
        """
        today = today or date.today()
        imported = 0
        skipped = 0
        periods: set[str] = set()

        for row in rows:
            new_expense = self._to_new_expense(row, today)
            if new_expense is None:
                skipped += 1
                continue
            period_key = partition_key_for(new_expense.date)
            self._store.add(period_key, new_expense, notify=False)
            periods.add(period_key)
            imported += 1

        result = ImportResult(imported=imported, skipped=skipped, periods=sorted(periods))
        logger.info(
            "expenses_imported",
            imported=result.imported,
            skipped=result.skipped,
            periods=result.periods,
        )
        if self._notifications is not None:
            self._notifications.publish(
                NotificationBuilder.expenses_imported(result.imported, result.skipped)
            )
        return result
