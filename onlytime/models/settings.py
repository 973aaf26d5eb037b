"""
Settings Models for OnlyTime

The single Settings record holds everything needed to derive the user's
effective hourly wage, plus categories, budgets, quick-add presets and
display preferences.

DESIGN DECISION: These models describe the *validated* shape only.
Untrusted input (persisted JSON, raw form values) never goes through the
constructor directly; it goes through `onlytime.wage.normalize_settings`,
which coerces every field to a value these constraints accept.

Persisted JSON uses camelCase keys; Python code uses snake_case attributes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from onlytime.numeric.money import Currency


DEFAULT_WEEKLY_WORKING_HOURS = 40.0
DEFAULT_WEEKS_PER_MONTH = 4.33
DEFAULT_WORKING_DAYS_PER_WEEK = 5.0
MIN_WEEKS_PER_MONTH = 0.01


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class IncomeSource(_CamelModel):
    """
    A secondary income (side job, rent, freelance work).

    `hours_per_month` is the extra work it costs; passive income has 0.
    """
    id: str = Field(..., min_length=1)
    name: str = ""
    amount: float = Field(default=0.0, ge=0)
    hours_per_month: float = Field(default=0.0, ge=0)


class QuickAddPreset(_CamelModel):
    """A frequent expense that can be recorded with one tap."""
    id: str = Field(..., min_length=1)
    title: str = ""
    amount: float = Field(default=0.0, ge=0)
    category_id: str = "Other"
    emoji: Optional[str] = None


class CustomCategory(_CamelModel):
    """User-defined category, referenced from expenses by its id."""
    id: str = Field(..., min_length=1)
    name: str = ""
    emoji: Optional[str] = None


class CategoryBudget(_CamelModel):
    """
    Monthly spending ceiling for one category.

    Either in money or in hours of work. When both are set, the money
    amount wins.
    """
    category_id: str = Field(..., min_length=1)
    monthly_budget_amount: Optional[float] = Field(default=None, ge=0)
    monthly_budget_hours: Optional[float] = Field(default=None, ge=0)


class Settings(_CamelModel):
    """
    The installation-wide settings record.

    All numeric fields are non-negative. Tax rate is a percentage in
    [0, 100] and working days per week is in [1, 7].
    """

    # Income
    net_monthly_income: float = Field(default=0.0, ge=0)
    gross_monthly_income: float = Field(default=0.0, ge=0)
    tax_rate_percent: float = Field(default=0.0, ge=0, le=100)
    use_gross_income: bool = False

    # Working time
    weekly_working_hours: float = Field(default=DEFAULT_WEEKLY_WORKING_HOURS, ge=0)
    weeks_per_month: float = Field(default=DEFAULT_WEEKS_PER_MONTH, ge=MIN_WEEKS_PER_MONTH)
    commute_minutes_per_day: float = Field(default=0.0, ge=0)
    working_days_per_week: float = Field(default=DEFAULT_WORKING_DAYS_PER_WEEK, ge=1, le=7)
    overtime_hours_per_week: float = Field(
        default=0.0,
        ge=0,
        description="Unpaid overtime",
    )

    additional_income_sources: list[IncomeSource] = Field(default_factory=list)
    quick_add_presets: list[QuickAddPreset] = Field(default_factory=list)
    custom_categories: list[CustomCategory] = Field(default_factory=list)
    category_budgets: list[CategoryBudget] = Field(default_factory=list)

    # Display only, no effect on any computation
    prefer_time_display: bool = False
    currency: Currency = Currency.CHF
    show_onboarding_checklist: bool = True

    def to_storage_dict(self) -> dict:
        """camelCase JSON-ready dict, the persisted form."""
        return self.model_dump(by_alias=True, mode="json")

    def custom_category(self, category_id: str) -> Optional[CustomCategory]:
        for category in self.custom_categories:
            if category.id == category_id:
                return category
        return None
