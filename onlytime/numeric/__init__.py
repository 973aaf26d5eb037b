"""Number parsing, money/time formatting and calendar helpers."""

from onlytime.numeric.dates import (
    date_from_month_key,
    days_in_month,
    is_iso_date,
    is_same_month,
    iso_date,
    iter_month_keys,
    month_key_from_date,
    month_label,
    month_label_from_key,
    parse_import_date,
    shift_month,
)
from onlytime.numeric.interpolation import clamp, clamp01, inverse_lerp, lerp
from onlytime.numeric.money import (
    CURRENCY_SYMBOLS,
    Currency,
    HoursMinutes,
    amount_to_hours,
    finite_number,
    format_currency,
    format_hours_minutes,
    hours_to_amount,
    hours_to_hours_minutes,
    hours_to_minutes,
    parse_import_amount,
    parse_locale_number,
    round_half_up,
)

__all__ = [
    # Money / time
    "CURRENCY_SYMBOLS",
    "Currency",
    "HoursMinutes",
    "amount_to_hours",
    "finite_number",
    "format_currency",
    "format_hours_minutes",
    "hours_to_amount",
    "hours_to_hours_minutes",
    "hours_to_minutes",
    "parse_import_amount",
    "parse_locale_number",
    "round_half_up",
    # Dates
    "date_from_month_key",
    "days_in_month",
    "is_iso_date",
    "is_same_month",
    "iso_date",
    "iter_month_keys",
    "month_key_from_date",
    "month_label",
    "month_label_from_key",
    "parse_import_date",
    "shift_month",
    # Interpolation
    "clamp",
    "clamp01",
    "inverse_lerp",
    "lerp",
]
