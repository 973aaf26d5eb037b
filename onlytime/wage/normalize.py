"""
Settings Normalization

Turns anything (persisted JSON, a dict of raw form strings, an older
Settings dump, garbage) into a fully populated, valid Settings record.

Rules:
- numbers accept a decimal comma or dot; unparsable values take the default
- negative values clamp to 0; tax rate clamps to [0, 100], working days
  per week to [1, 7], weeks per month to >= 0.01
- list entries that aren't objects or have no id are dropped one by one,
  the rest of the record survives
- duplicate category / budget ids keep the first entry

normalize_settings(normalize_settings(x)) == normalize_settings(x) for any x.
"""

import math
from collections.abc import Mapping
from typing import Any, Optional

import structlog
from pydantic.alias_generators import to_camel

from onlytime.models.expense import DEFAULT_CATEGORY_ID
from onlytime.models.settings import (
    DEFAULT_WEEKLY_WORKING_HOURS,
    DEFAULT_WEEKS_PER_MONTH,
    DEFAULT_WORKING_DAYS_PER_WEEK,
    MIN_WEEKS_PER_MONTH,
    CategoryBudget,
    CustomCategory,
    IncomeSource,
    QuickAddPreset,
    Settings,
)
from onlytime.numeric.interpolation import clamp
from onlytime.numeric.money import Currency, parse_locale_number


logger = structlog.get_logger(__name__)


def _pick(data: Mapping, name: str) -> Any:
    """Look up a field by its camelCase (persisted) or snake_case name."""
    camel = to_camel(name)
    if camel in data:
        return data[camel]
    return data.get(name)


def _number(value: Any, default: float) -> float:
    return parse_locale_number(value, default)


def _non_negative(value: Any, default: float) -> float:
    return max(0.0, _number(value, default))


def _optional_non_negative(value: Any) -> Optional[float]:
    if value is None:
        return None
    number = parse_locale_number(value, math.nan)
    if not math.isfinite(number):
        return None
    return max(0.0, number)


def _flag(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _text(value: Any, default: str = "") -> str:
    return value.strip() if isinstance(value, str) else default


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


def _identifier(value: Any) -> Optional[str]:
    return _optional_text(value)


def _currency(value: Any) -> Currency:
    if isinstance(value, str):
        try:
            return Currency(value.strip().upper())
        except ValueError:
            pass
    return Currency.CHF


def _entries(value: Any) -> list[Mapping]:
    if not isinstance(value, (list, tuple)):
        return []
    entries = [item for item in value if isinstance(item, Mapping)]
    if len(entries) != len(value):
        logger.debug("settings_entries_dropped", dropped=len(value) - len(entries))
    return entries


def _income_sources(value: Any) -> list[IncomeSource]:
    sources = []
    for item in _entries(value):
        source_id = _identifier(item.get("id"))
        if source_id is None:
            continue
        sources.append(IncomeSource(
            id=source_id,
            name=_text(item.get("name")),
            amount=_non_negative(item.get("amount"), 0.0),
            hours_per_month=_non_negative(_pick(item, "hours_per_month"), 0.0),
        ))
    return sources


def _presets(value: Any) -> list[QuickAddPreset]:
    presets = []
    for item in _entries(value):
        preset_id = _identifier(item.get("id"))
        if preset_id is None:
            continue
        presets.append(QuickAddPreset(
            id=preset_id,
            title=_text(item.get("title")),
            amount=_non_negative(item.get("amount"), 0.0),
            category_id=_identifier(_pick(item, "category_id")) or DEFAULT_CATEGORY_ID,
            emoji=_optional_text(item.get("emoji")),
        ))
    return presets


def _custom_categories(value: Any) -> list[CustomCategory]:
    categories: list[CustomCategory] = []
    seen: set[str] = set()
    for item in _entries(value):
        category_id = _identifier(item.get("id"))
        if category_id is None or category_id in seen:
            continue
        seen.add(category_id)
        categories.append(CustomCategory(
            id=category_id,
            name=_text(item.get("name")) or category_id,
            emoji=_optional_text(item.get("emoji")),
        ))
    return categories


def _budgets(value: Any) -> list[CategoryBudget]:
    budgets: list[CategoryBudget] = []
    seen: set[str] = set()
    for item in _entries(value):
        category_id = _identifier(_pick(item, "category_id"))
        if category_id is None or category_id in seen:
            continue
        amount = _optional_non_negative(_pick(item, "monthly_budget_amount"))
        hours = _optional_non_negative(_pick(item, "monthly_budget_hours"))
        if amount is None and hours is None:
            continue
        seen.add(category_id)
        budgets.append(CategoryBudget(
            category_id=category_id,
            monthly_budget_amount=amount,
            monthly_budget_hours=hours,
        ))
    return budgets


def normalize_settings(raw: Any) -> Settings:
    """
    Build a valid Settings record from untrusted input.

    Never raises. Anything that isn't a mapping (or a Settings instance)
    is treated as an empty mapping, which yields the defaults.
    """
    if isinstance(raw, Settings):
        raw = raw.to_storage_dict()
    data: Mapping = raw if isinstance(raw, Mapping) else {}

    return Settings(
        net_monthly_income=_non_negative(_pick(data, "net_monthly_income"), 0.0),
        gross_monthly_income=_non_negative(_pick(data, "gross_monthly_income"), 0.0),
        tax_rate_percent=clamp(_number(_pick(data, "tax_rate_percent"), 0.0), 0.0, 100.0),
        use_gross_income=_flag(_pick(data, "use_gross_income"), False),
        weekly_working_hours=_non_negative(
            _pick(data, "weekly_working_hours"), DEFAULT_WEEKLY_WORKING_HOURS
        ),
        weeks_per_month=max(
            MIN_WEEKS_PER_MONTH,
            _number(_pick(data, "weeks_per_month"), DEFAULT_WEEKS_PER_MONTH),
        ),
        commute_minutes_per_day=_non_negative(_pick(data, "commute_minutes_per_day"), 0.0),
        working_days_per_week=clamp(
            _number(_pick(data, "working_days_per_week"), DEFAULT_WORKING_DAYS_PER_WEEK),
            1.0,
            7.0,
        ),
        overtime_hours_per_week=_non_negative(_pick(data, "overtime_hours_per_week"), 0.0),
        additional_income_sources=_income_sources(_pick(data, "additional_income_sources")),
        quick_add_presets=_presets(_pick(data, "quick_add_presets")),
        custom_categories=_custom_categories(_pick(data, "custom_categories")),
        category_budgets=_budgets(_pick(data, "category_budgets")),
        prefer_time_display=_flag(_pick(data, "prefer_time_display"), False),
        currency=_currency(_pick(data, "currency")),
        show_onboarding_checklist=_flag(_pick(data, "show_onboarding_checklist"), True),
    )
