"""
Analytics Result Models

Everything in here is derived on demand from Settings and stored expenses.
Nothing is persisted or cached between calls.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TimeRange(str, Enum):
    """Reporting windows. Every range ends with the current month."""
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    YEAR_TO_DATE = "YTD"
    ONE_YEAR = "1Y"
    THREE_YEARS = "3Y"
    FIVE_YEARS = "5Y"

    @property
    def label(self) -> str:
        return TIME_RANGE_LABELS[self]

    @property
    def month_count(self) -> Optional[int]:
        """Fixed number of months, None for year-to-date."""
        return TIME_RANGE_MONTHS.get(self)


TIME_RANGE_LABELS: dict[TimeRange, str] = {
    TimeRange.ONE_MONTH: "1M",
    TimeRange.THREE_MONTHS: "3M",
    TimeRange.SIX_MONTHS: "6M",
    TimeRange.YEAR_TO_DATE: "YTD",
    TimeRange.ONE_YEAR: "1Y",
    TimeRange.THREE_YEARS: "3Y",
    TimeRange.FIVE_YEARS: "5Y",
}

TIME_RANGE_MONTHS: dict[TimeRange, int] = {
    TimeRange.ONE_MONTH: 1,
    TimeRange.THREE_MONTHS: 3,
    TimeRange.SIX_MONTHS: 6,
    TimeRange.ONE_YEAR: 12,
    TimeRange.THREE_YEARS: 36,
    TimeRange.FIVE_YEARS: 60,
}


class MonthlyData(BaseModel):
    """One month of earned vs. spent, in money and in hours."""

    month_key: str
    label: str
    earned: float
    spent: float
    earned_hours: float
    spent_hours: float
    balance: float
    balance_hours: float
    expense_count: int = Field(ge=0)
    category_spending: dict[str, float] = Field(
        default_factory=dict,
        description="category id -> amount spent, in first-seen order",
    )


class TotalStats(BaseModel):
    """Totals across a list of months, hours at the current rate."""

    earned: float = 0.0
    spent: float = 0.0
    expense_count: int = 0
    earned_hours: float = 0.0
    spent_hours: float = 0.0
    balance: float = 0.0
    balance_hours: float = 0.0


class TopCategory(BaseModel):
    category: str = ""
    amount: float = 0.0
    hours: float = 0.0


class CategoryBreakdownItem(BaseModel):
    category_id: str
    name: str
    emoji: Optional[str] = None
    amount: float
    hours: float
    percentage: float = Field(
        ...,
        description="Share of total spending in the range, 0-100",
    )


class BudgetStatus(BaseModel):
    """Spending against one category budget for one month."""

    category_id: str
    budget_amount: float
    spent: float
    percentage: float
    is_at_risk: bool
    is_exceeded: bool

    @property
    def remaining(self) -> float:
        return self.budget_amount - self.spent


class MonthStatus(BaseModel):
    """The "am I ahead or behind?" numbers for the current month."""

    month_key: str
    label: str
    day_of_month: int
    days_in_month: int
    earned: float
    spent: float
    balance: float
    balance_hours: float
    hourly_rate: float

    @property
    def is_ahead(self) -> bool:
        return self.balance >= 0


class ChartPoint(BaseModel):
    """
    One x-position of the earned vs. spent chart, values cumulative.

    `period` is the day of month for daily series and the 1-based month
    index for range series.
    """

    period: int
    label: str = ""
    earned: float
    spent: float
    earned_hours: float = 0.0
    spent_hours: float = 0.0


class CrossingPoint(BaseModel):
    """Estimated moment where cumulative spending overtook earning."""

    position: float = Field(
        ...,
        description="Fractional period between two chart points",
    )
    earned: float = Field(
        ...,
        description="Interpolated earned value at the crossing",
    )
    index: int = Field(
        ...,
        ge=1,
        description="Index of the first point after the crossing",
    )


class RangeReport(BaseModel):
    """Everything the reports screen shows for one range."""

    time_range: TimeRange
    hourly_rate: float
    months: list[MonthlyData] = Field(default_factory=list)
    totals: TotalStats
    top_category: TopCategory
    breakdown: list[CategoryBreakdownItem] = Field(default_factory=list)
    series: list[ChartPoint] = Field(default_factory=list)
    crossing: Optional[CrossingPoint] = None
