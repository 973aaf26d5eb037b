"""
Hourly Wage Derivation

    effective income   = primary income (net, or gross after tax)
                         + sum(additional income amounts)
    effective hours    = (weekly hours + unpaid overtime + weekly commute)
                         * weeks per month
                         + sum(additional income hours)
    hourly rate        = effective income / effective hours   (0 if hours <= 0)

The hourly rate is the single conversion factor between money and time.
It is recomputed from the current Settings on every call and never cached.
"""

from pydantic import BaseModel

from onlytime.models.settings import Settings


def effective_monthly_income(settings: Settings) -> float:
    """Net monthly income plus every additional income source."""
    if settings.use_gross_income and settings.gross_monthly_income > 0:
        primary = settings.gross_monthly_income * (1 - settings.tax_rate_percent / 100)
    else:
        primary = settings.net_monthly_income
    return primary + sum(source.amount for source in settings.additional_income_sources)


def weekly_commute_hours(settings: Settings) -> float:
    return settings.commute_minutes_per_day * settings.working_days_per_week / 60


def effective_monthly_working_hours(settings: Settings) -> float:
    """All hours a month of income costs, including commute and side jobs."""
    weekly_total = (
        settings.weekly_working_hours
        + settings.overtime_hours_per_week
        + weekly_commute_hours(settings)
    )
    extra_hours = sum(source.hours_per_month for source in settings.additional_income_sources)
    return weekly_total * settings.weeks_per_month + extra_hours


def hourly_rate(settings: Settings) -> float:
    """
    Effective hourly wage.

    0 means "not set up yet"; callers should hide time-based values
    rather than display 0h.
    """
    monthly_hours = effective_monthly_working_hours(settings)
    if monthly_hours <= 0:
        return 0.0
    return effective_monthly_income(settings) / monthly_hours


class RateBreakdown(BaseModel):
    """The four derived values together, for the settings summary card."""

    monthly_income: float
    weekly_commute_hours: float
    monthly_working_hours: float
    hourly_rate: float

    @property
    def is_configured(self) -> bool:
        return self.hourly_rate > 0


def describe_rate(settings: Settings) -> RateBreakdown:
    return RateBreakdown(
        monthly_income=effective_monthly_income(settings),
        weekly_commute_hours=weekly_commute_hours(settings),
        monthly_working_hours=effective_monthly_working_hours(settings),
        hourly_rate=hourly_rate(settings),
    )
