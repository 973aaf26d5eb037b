"""
Main Orchestrator for OnlyTime

This module ties together all the components and defines the
end-to-end flows for:
1. Expense entry (validate -> persist -> notify -> budget check)
2. Reports (range -> monthly rollup -> totals, breakdown, chart, crossing)

DESIGN DECISION: Flows never cache. Settings and expenses are re-read
from storage on every call and the hourly rate is re-derived, so a
settings change is visible in the very next result.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union

import structlog

from onlytime.analytics import (
    budget_warnings,
    build_cumulative_series,
    build_monthly_data,
    category_breakdown,
    current_month_status,
    find_crossing_point,
    spending_by_category,
    summarize,
    top_category,
)
from onlytime.config import AppSettings, get_app_settings
from onlytime.models.analytics import BudgetStatus, MonthStatus, RangeReport, TimeRange
from onlytime.models.expense import Expense, NewExpense
from onlytime.notifications import NotificationChannel, configure_log_level
from onlytime.services import (
    ExpenseImporter,
    ExpenseStore,
    SettingsStore,
    clear_all_data,
    partition_key_for,
)
from onlytime.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    StorageKeys,
)
from onlytime.wage import hourly_rate


logger = structlog.get_logger(__name__)


class ExpenseFlow:
    """
    Orchestrates recording and removing expenses.

    Flow:
    1. Validate the entry (NewExpense)
    2. Persist it to the partition of its own date
    3. Notify subscribers
    4. Re-check the budgets of that month and warn at 80% / 100%
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        expense_store: ExpenseStore,
        notifications: Optional[NotificationChannel] = None,
        warning_percent: float = 80.0,
        exceeded_percent: float = 100.0,
    ):
        self._settings_store = settings_store
        self._expense_store = expense_store
        self._notifications = notifications
        self._warning_percent = warning_percent
        self._exceeded_percent = exceeded_percent

    def record_expense(
        self,
        new_expense: Union[NewExpense, Mapping[str, Any]],
    ) -> tuple[list[Expense], list[BudgetStatus]]:
        """
        Add an expense and check its month's budgets.

        Returns:
            (updated month list, budgets now at risk or exceeded)
        """
        if not isinstance(new_expense, NewExpense):
            new_expense = NewExpense.model_validate(new_expense)

        period_key = partition_key_for(new_expense.date)
        expenses = self._expense_store.add(period_key, new_expense)

        settings = self._settings_store.load()
        warnings = budget_warnings(
            settings,
            spending_by_category(expenses),
            hourly_rate(settings),
            notifications=self._notifications,
            warning_percent=self._warning_percent,
            exceeded_percent=self._exceeded_percent,
        )
        return expenses, warnings

    def delete_expense(self, period_key: str, expense_id: str) -> list[Expense]:
        return self._expense_store.delete(period_key, expense_id)


class ReportFlow:
    """
    Builds read-only views over settings and expenses.

    Every method takes the reference date explicitly.
    """

    def __init__(self, settings_store: SettingsStore, expense_store: ExpenseStore):
        self._settings_store = settings_store
        self._expense_store = expense_store

    def month_status(self, now: date) -> MonthStatus:
        return current_month_status(self._settings_store.load(), now, self._expense_store)

    def range_report(self, time_range: TimeRange, now: date) -> RangeReport:
        """
        Full report for a range: monthly rollup, totals, top category,
        category breakdown, cumulative chart series and crossing point.
        """
        settings = self._settings_store.load()
        rate = hourly_rate(settings)
        months = build_monthly_data(settings, TimeRange(time_range), now, self._expense_store)
        series = build_cumulative_series(months, rate)

        return RangeReport(
            time_range=TimeRange(time_range),
            hourly_rate=rate,
            months=months,
            totals=summarize(months, rate),
            top_category=top_category(months, rate),
            breakdown=category_breakdown(months, settings, rate),
            series=series,
            crossing=find_crossing_point(series),
        )


@dataclass
class AppComponents:
    """Everything a front end needs, wired to one storage backend."""

    app_settings: AppSettings
    storage: KeyValueStorageInterface
    keys: StorageKeys
    notifications: NotificationChannel
    settings_store: SettingsStore
    expense_store: ExpenseStore
    importer: ExpenseImporter
    expense_flow: ExpenseFlow
    report_flow: ReportFlow

    def clear_all_data(self) -> int:
        return clear_all_data(self.storage, self.keys, self.notifications)


def create_storage(app_settings: AppSettings) -> KeyValueStorageInterface:
    """Backend selected by configuration."""
    if app_settings.storage_backend == "memory":
        return InMemoryStorage()
    return JsonFileStorage(app_settings.data_path)


def create_app_components(
    app_settings: Optional[AppSettings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        app_settings: Configuration; defaults to get_app_settings()
        storage: Backend override, e.g. InMemoryStorage() in tests.
                 Defaults to the configured backend.

    Returns:
        AppComponents sharing one storage and one notification channel
    """
    app_settings = app_settings or get_app_settings()
    configure_log_level(app_settings.log_level)

    storage = storage if storage is not None else create_storage(app_settings)
    keys = StorageKeys(prefix=app_settings.key_prefix, clear_prefix=app_settings.clear_prefix)
    notifications = NotificationChannel()

    settings_store = SettingsStore(storage, keys, default_currency=app_settings.default_currency)
    expense_store = ExpenseStore(storage, keys, notifications=notifications)

    logger.info(
        "app_components_created",
        storage_backend=type(storage).__name__,
        key_prefix=keys.prefix,
    )

    return AppComponents(
        app_settings=app_settings,
        storage=storage,
        keys=keys,
        notifications=notifications,
        settings_store=settings_store,
        expense_store=expense_store,
        importer=ExpenseImporter(expense_store, notifications),
        expense_flow=ExpenseFlow(
            settings_store,
            expense_store,
            notifications,
            warning_percent=app_settings.budget_warning_percent,
            exceeded_percent=app_settings.budget_exceeded_percent,
        ),
        report_flow=ReportFlow(settings_store, expense_store),
    )
