"""
Analytics Package

Range rollups, budget checks and chart series. Every function takes the
reference date explicitly; none reads the system clock.
"""

from onlytime.analytics.budgets import (
    budget_amount_for,
    budget_warnings,
    evaluate_budgets,
    month_budget_statuses,
)
from onlytime.analytics.charts import (
    build_cumulative_series,
    build_daily_series,
    find_crossing_point,
)
from onlytime.analytics.monthly import (
    build_monthly_data,
    category_breakdown,
    category_display,
    current_month_status,
    earned_so_far,
    merge_category_spending,
    spending_by_category,
    summarize,
    top_category,
)
from onlytime.analytics.ranges import month_keys_for_range

__all__ = [
    # Ranges
    "month_keys_for_range",
    # Monthly rollups
    "build_monthly_data",
    "category_breakdown",
    "category_display",
    "current_month_status",
    "earned_so_far",
    "merge_category_spending",
    "spending_by_category",
    "summarize",
    "top_category",
    # Budgets
    "budget_amount_for",
    "budget_warnings",
    "evaluate_budgets",
    "month_budget_statuses",
    # Charts
    "build_cumulative_series",
    "build_daily_series",
    "find_crossing_point",
]
