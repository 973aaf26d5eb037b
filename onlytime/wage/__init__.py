"""Settings normalization and the hourly wage formulas."""

from onlytime.wage.derivations import (
    RateBreakdown,
    describe_rate,
    effective_monthly_income,
    effective_monthly_working_hours,
    hourly_rate,
    weekly_commute_hours,
)
from onlytime.wage.normalize import normalize_settings

__all__ = [
    "RateBreakdown",
    "describe_rate",
    "effective_monthly_income",
    "effective_monthly_working_hours",
    "hourly_rate",
    "normalize_settings",
    "weekly_commute_hours",
]
