"""
Budget Threshold Detection

For each configured budget:

    budget amount = monthly_budget_amount, or monthly_budget_hours * hourly rate
    percentage    = spent in category / budget amount * 100   (0 if budget <= 0)

A category is at risk from 80% and exceeded from 100% (both inclusive).
Budgets may name categories that don't exist; with no spending they simply
never warn.
"""

from collections.abc import Mapping
from datetime import date
from typing import Optional

import structlog

from onlytime.analytics.monthly import category_display, spending_by_category
from onlytime.models.analytics import BudgetStatus
from onlytime.models.notification import NotificationBuilder
from onlytime.models.settings import CategoryBudget, Settings
from onlytime.notifications.channel import NotificationChannel
from onlytime.numeric.dates import month_key_from_date
from onlytime.services.expenses import ExpenseStore
from onlytime.wage.derivations import hourly_rate


logger = structlog.get_logger(__name__)

DEFAULT_WARNING_PERCENT = 80.0
DEFAULT_EXCEEDED_PERCENT = 100.0


def budget_amount_for(budget: CategoryBudget, rate: float) -> float:
    """Monthly budget in money; an hours budget is converted at the rate."""
    if budget.monthly_budget_amount is not None:
        return budget.monthly_budget_amount
    if budget.monthly_budget_hours is not None and rate > 0:
        return budget.monthly_budget_hours * rate
    return 0.0


def evaluate_budgets(
    settings: Settings,
    spending: Mapping[str, float],
    rate: float,
    warning_percent: float = DEFAULT_WARNING_PERCENT,
    exceeded_percent: float = DEFAULT_EXCEEDED_PERCENT,
) -> list[BudgetStatus]:
    """
    Status of every configured budget, highest percentage first.

    Args:
        settings: Source of the budgets
        spending: category id -> amount spent this month
        rate: Current hourly rate, for hour-based budgets
    """
    statuses = []
    for budget in settings.category_budgets:
        amount = budget_amount_for(budget, rate)
        spent = spending.get(budget.category_id, 0.0)
        percentage = spent / amount * 100 if amount > 0 else 0.0
        statuses.append(BudgetStatus(
            category_id=budget.category_id,
            budget_amount=amount,
            spent=spent,
            percentage=percentage,
            is_at_risk=percentage >= warning_percent,
            is_exceeded=percentage >= exceeded_percent,
        ))
    statuses.sort(key=lambda status: status.percentage, reverse=True)
    return statuses


def budget_warnings(
    settings: Settings,
    spending: Mapping[str, float],
    rate: float,
    notifications: Optional[NotificationChannel] = None,
    warning_percent: float = DEFAULT_WARNING_PERCENT,
    exceeded_percent: float = DEFAULT_EXCEEDED_PERCENT,
) -> list[BudgetStatus]:
    """
    Only the budgets at risk or exceeded.

    Publishes one notification per returned status when a channel is given.
    """
    warnings = [
        status
        for status in evaluate_budgets(settings, spending, rate, warning_percent, exceeded_percent)
        if status.is_at_risk
    ]

    for status in warnings:
        logger.info(
            "budget_threshold_reached",
            category_id=status.category_id,
            percentage=status.percentage,
            exceeded=status.is_exceeded,
        )

    if notifications is not None:
        for status in warnings:
            name, _ = category_display(status.category_id, settings)
            build = (
                NotificationBuilder.budget_exceeded
                if status.is_exceeded
                else NotificationBuilder.budget_at_risk
            )
            notifications.publish(build(name, status.percentage, status.spent, status.budget_amount))
    return warnings


def month_budget_statuses(
    settings: Settings,
    now: date,
    store: ExpenseStore,
    warning_percent: float = DEFAULT_WARNING_PERCENT,
    exceeded_percent: float = DEFAULT_EXCEEDED_PERCENT,
) -> list[BudgetStatus]:
    """evaluate_budgets() for the spending of now's month."""
    expenses = store.list_for_period(month_key_from_date(now))
    return evaluate_budgets(
        settings,
        spending_by_category(expenses),
        hourly_rate(settings),
        warning_percent,
        exceeded_percent,
    )
