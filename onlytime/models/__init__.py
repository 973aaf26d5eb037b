"""
Data Models Package

All Pydantic models used by OnlyTime: the settings record, expenses,
analytics results and notifications.
"""

from onlytime.models.analytics import (
    BudgetStatus,
    CategoryBreakdownItem,
    ChartPoint,
    CrossingPoint,
    MonthlyData,
    MonthStatus,
    RangeReport,
    TimeRange,
    TopCategory,
    TotalStats,
)
from onlytime.models.expense import (
    BUILTIN_CATEGORIES,
    DEFAULT_CATEGORY_ID,
    Expense,
    NewExpense,
)
from onlytime.models.notification import (
    Notification,
    NotificationBuilder,
    NotificationKind,
    NotificationType,
)
from onlytime.models.settings import (
    CategoryBudget,
    CustomCategory,
    IncomeSource,
    QuickAddPreset,
    Settings,
)

__all__ = [
    # Settings models
    "CategoryBudget",
    "CustomCategory",
    "IncomeSource",
    "QuickAddPreset",
    "Settings",
    # Expense models
    "BUILTIN_CATEGORIES",
    "DEFAULT_CATEGORY_ID",
    "Expense",
    "NewExpense",
    # Analytics models
    "BudgetStatus",
    "CategoryBreakdownItem",
    "ChartPoint",
    "CrossingPoint",
    "MonthlyData",
    "MonthStatus",
    "RangeReport",
    "TimeRange",
    "TopCategory",
    "TotalStats",
    # Notification models
    "Notification",
    "NotificationBuilder",
    "NotificationKind",
    "NotificationType",
]
