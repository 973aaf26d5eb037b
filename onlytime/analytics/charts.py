"""
Chart Series Builder

Produces the cumulative earned vs. spent series behind the line chart and
the estimated point where spending overtakes earning. Geometry (axes,
scaling, paths) is the renderer's job; everything here is in data units.
"""

from datetime import date
from typing import Optional

from onlytime.models.analytics import ChartPoint, CrossingPoint, MonthlyData
from onlytime.models.expense import Expense
from onlytime.models.settings import Settings
from onlytime.numeric.dates import days_in_month, month_key_from_date
from onlytime.numeric.interpolation import clamp01, lerp
from onlytime.numeric.money import amount_to_hours
from onlytime.wage.derivations import effective_monthly_income, hourly_rate


def build_daily_series(
    settings: Settings,
    expenses: list[Expense],
    now: date,
) -> list[ChartPoint]:
    """
    One point per day of now's month.

    Earned accrues linearly over the month; spent accumulates by expense
    day. Expenses from other months are ignored.
    """
    rate = hourly_rate(settings)
    dim = days_in_month(now)
    monthly_income = effective_monthly_income(settings)
    earned_per_day = monthly_income / dim if dim > 0 else 0.0
    month_key = month_key_from_date(now)

    spent_by_day: dict[int, float] = {}
    for expense in expenses:
        if expense.period_key != month_key:
            continue
        # a stored day past the month's end (2024-02-30) counts on the last day
        day = min(expense.day, dim)
        spent_by_day[day] = spent_by_day.get(day, 0.0) + expense.amount

    points = []
    spent_cumulative = 0.0
    for day in range(1, dim + 1):
        spent_cumulative += spent_by_day.get(day, 0.0)
        earned_cumulative = earned_per_day * day
        points.append(ChartPoint(
            period=day,
            label=str(day),
            earned=earned_cumulative,
            spent=spent_cumulative,
            earned_hours=amount_to_hours(earned_cumulative, rate),
            spent_hours=amount_to_hours(spent_cumulative, rate),
        ))
    return points


def build_cumulative_series(monthly_data: list[MonthlyData], rate: float) -> list[ChartPoint]:
    """Running totals over the months of a range, period = 1-based month index."""
    points = []
    earned_cumulative = 0.0
    spent_cumulative = 0.0
    for index, month in enumerate(monthly_data, start=1):
        earned_cumulative += month.earned
        spent_cumulative += month.spent
        points.append(ChartPoint(
            period=index,
            label=month.label,
            earned=earned_cumulative,
            spent=spent_cumulative,
            earned_hours=amount_to_hours(earned_cumulative, rate),
            spent_hours=amount_to_hours(spent_cumulative, rate),
        ))
    return points


def find_crossing_point(points: list[ChartPoint]) -> Optional[CrossingPoint]:
    """
    First place where cumulative spent moves above cumulative earned.

    Scans consecutive pairs for diff = spent - earned going from <= 0 to
    > 0 and interpolates linearly inside that step. Returns None when
    spending never overtakes earning.
    """
    for index in range(1, len(points)):
        prev = points[index - 1]
        cur = points[index]
        prev_diff = prev.spent - prev.earned
        cur_diff = cur.spent - cur.earned

        if prev_diff <= 0 and cur_diff > 0:
            t = clamp01(prev_diff / (prev_diff - cur_diff))
            return CrossingPoint(
                position=lerp(prev.period, cur.period, t),
                earned=lerp(prev.earned, cur.earned, t),
                index=index,
            )
    return None
