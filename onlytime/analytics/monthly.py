"""
Range Analytics

Per-month earned vs. spent for a reporting range, and everything derived
from it: totals, the top category and the category breakdown.

KNOWN SIMPLIFICATION: every past month is credited the *current* effective
monthly income, and all hours use the *current* hourly rate. Settings have
no history, so a raise today changes what last year "earned".
"""

from datetime import date
from typing import Optional

from onlytime.analytics.ranges import month_keys_for_range
from onlytime.models.analytics import (
    CategoryBreakdownItem,
    MonthlyData,
    MonthStatus,
    TimeRange,
    TopCategory,
    TotalStats,
)
from onlytime.models.expense import BUILTIN_CATEGORIES, Expense
from onlytime.models.settings import Settings
from onlytime.numeric.dates import (
    days_in_month,
    month_key_from_date,
    month_label,
    month_label_from_key,
)
from onlytime.numeric.money import amount_to_hours
from onlytime.services.expenses import ExpenseStore
from onlytime.wage.derivations import effective_monthly_income, hourly_rate


def earned_so_far(monthly_income: float, now: date) -> float:
    """Income accrued linearly across the days of now's month."""
    if monthly_income <= 0:
        return 0.0
    return monthly_income / days_in_month(now) * now.day


def spending_by_category(expenses: list[Expense]) -> dict[str, float]:
    """category id -> total amount, in first-seen order."""
    totals: dict[str, float] = {}
    for expense in expenses:
        totals[expense.category_id] = totals.get(expense.category_id, 0.0) + expense.amount
    return totals


def build_monthly_data(
    settings: Settings,
    time_range: TimeRange,
    now: date,
    store: ExpenseStore,
) -> list[MonthlyData]:
    """
    One MonthlyData per month of the range, oldest first.

    The current month's income is prorated to today; every other month
    gets the full current effective income.
    """
    rate = hourly_rate(settings)
    monthly_income = effective_monthly_income(settings)
    now_month_key = month_key_from_date(now)

    months = []
    for month_key in month_keys_for_range(time_range, now):
        expenses = store.list_for_period(month_key)
        spent = sum(expense.amount for expense in expenses)

        if month_key == now_month_key:
            earned = earned_so_far(monthly_income, now)
        else:
            earned = monthly_income

        months.append(MonthlyData(
            month_key=month_key,
            label=month_label_from_key(month_key),
            earned=earned,
            spent=spent,
            earned_hours=amount_to_hours(earned, rate),
            spent_hours=amount_to_hours(spent, rate),
            balance=earned - spent,
            balance_hours=amount_to_hours(earned - spent, rate),
            expense_count=len(expenses),
            category_spending=spending_by_category(expenses),
        ))
    return months


def summarize(monthly_data: list[MonthlyData], rate: float) -> TotalStats:
    """Sum a range; hours come from the totals at the given rate."""
    earned = sum(month.earned for month in monthly_data)
    spent = sum(month.spent for month in monthly_data)
    expense_count = sum(month.expense_count for month in monthly_data)

    return TotalStats(
        earned=earned,
        spent=spent,
        expense_count=expense_count,
        earned_hours=amount_to_hours(earned, rate),
        spent_hours=amount_to_hours(spent, rate),
        balance=earned - spent,
        balance_hours=amount_to_hours(earned - spent, rate),
    )


def merge_category_spending(monthly_data: list[MonthlyData]) -> dict[str, float]:
    totals: dict[str, float] = {}
    for month in monthly_data:
        for category_id, amount in month.category_spending.items():
            totals[category_id] = totals.get(category_id, 0.0) + amount
    return totals


def top_category(monthly_data: list[MonthlyData], rate: float) -> TopCategory:
    """
    The category with the most spending across the range.

    Ties go to the category seen first. No spending -> ("", 0, 0).
    """
    best_category = ""
    best_amount = 0.0
    for category_id, amount in merge_category_spending(monthly_data).items():
        if amount > best_amount:
            best_category = category_id
            best_amount = amount

    return TopCategory(
        category=best_category,
        amount=best_amount,
        hours=amount_to_hours(best_amount, rate),
    )


def category_display(category_id: str, settings: Settings) -> tuple[str, Optional[str]]:
    """
    Name and emoji for a category id.

    Custom categories first, then built-ins; unknown ids show as themselves.
    """
    custom = settings.custom_category(category_id)
    if custom is not None:
        return custom.name or category_id, custom.emoji
    if category_id in BUILTIN_CATEGORIES:
        return category_id, BUILTIN_CATEGORIES[category_id]
    return category_id, None


def category_breakdown(
    monthly_data: list[MonthlyData],
    settings: Settings,
    rate: float,
) -> list[CategoryBreakdownItem]:
    """Spending per category across the range, largest first."""
    totals = merge_category_spending(monthly_data)
    total_spent = sum(month.spent for month in monthly_data)

    items = []
    for category_id, amount in totals.items():
        name, emoji = category_display(category_id, settings)
        items.append(CategoryBreakdownItem(
            category_id=category_id,
            name=name,
            emoji=emoji,
            amount=amount,
            hours=amount_to_hours(amount, rate),
            percentage=amount / total_spent * 100 if total_spent > 0 else 0.0,
        ))
    items.sort(key=lambda item: item.amount, reverse=True)
    return items


def current_month_status(settings: Settings, now: date, store: ExpenseStore) -> MonthStatus:
    """Earned so far vs. spent so far in now's month."""
    rate = hourly_rate(settings)
    month_key = month_key_from_date(now)
    spent = sum(expense.amount for expense in store.list_for_period(month_key))
    earned = earned_so_far(effective_monthly_income(settings), now)

    return MonthStatus(
        month_key=month_key,
        label=month_label(now),
        day_of_month=now.day,
        days_in_month=days_in_month(now),
        earned=earned,
        spent=spent,
        balance=earned - spent,
        balance_hours=amount_to_hours(earned - spent, rate),
        hourly_rate=rate,
    )
