"""
Money / Time Conversion Helpers

Everything that turns user-typed numbers into floats, floats into display
strings, and money into hours of work (and back).

DESIGN DECISION: None of these functions raise. Unparsable or non-finite
input degrades to zero (or to a caller supplied fallback) so that the UI can
call them on every keystroke.
"""

import math
import re
from enum import Enum
from typing import Any, NamedTuple, Optional


class Currency(str, Enum):
    """Display currencies. There is no exchange-rate logic."""
    CHF = "CHF"
    EUR = "EUR"
    USD = "USD"


CURRENCY_SYMBOLS: dict[Currency, str] = {
    Currency.CHF: "CHF",
    Currency.EUR: "€",
    Currency.USD: "$",
}


class HoursMinutes(NamedTuple):
    """Whole hours plus remaining minutes."""
    hours: int
    minutes: int


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid amount
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def finite_number(value: Any) -> Optional[float]:
    """
    The value as a finite float, or None.

    None for non-numbers, NaN, infinities and ints too large for a float.
    """
    if not _is_number(value):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going towards +infinity. Overflow rounds to 0."""
    number = finite_number(value)
    if number is None:
        return 0
    return int(math.floor(number + 0.5))


def parse_locale_number(value: Any, fallback: float = 0.0) -> float:
    """
    Parse a number typed with either a decimal comma or a decimal dot.

    Args:
        value: Raw input (number, string, or anything else)
        fallback: Returned when the input can't be parsed to a finite number

    Returns:
        The parsed float, or fallback
    """
    if _is_number(value):
        number = finite_number(value)
        return fallback if number is None else number

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return fallback
        try:
            number = float(text.replace(",", ".", 1))
        except ValueError:
            return fallback
        return number if math.isfinite(number) else fallback

    return fallback


def format_currency(amount: float, currency: Currency | str = Currency.CHF) -> str:
    """
    Format an amount with exactly two fraction digits.

    Example: format_currency(1234.5) -> "CHF 1,234.50"
    """
    number = finite_number(amount)
    if number is None:
        number = 0.0
    scaled = number * 100
    # near the float limit the cent scaling overflows; the amount is whole anyway
    rounded = round_half_up(scaled) / 100 if math.isfinite(scaled) else number
    try:
        symbol = CURRENCY_SYMBOLS[Currency(currency)]
    except ValueError:
        symbol = str(currency)
    return f"{symbol} {rounded:,.2f}"


def hours_to_hours_minutes(hours_float: float) -> HoursMinutes:
    """Split fractional hours into whole hours and minutes."""
    hours = finite_number(hours_float)
    if hours is None:
        return HoursMinutes(0, 0)
    total_minutes = round_half_up(hours * 60)
    whole_hours = int(total_minutes / 60)
    minutes = abs(int(math.fmod(total_minutes, 60)))
    return HoursMinutes(whole_hours, minutes)


def format_hours_minutes(hours_float: float) -> str:
    """Format fractional hours as e.g. "2h 30m" or "-2h 30m"."""
    hours, minutes = hours_to_hours_minutes(hours_float)
    sign = "-" if _is_number(hours_float) and hours_float < 0 else ""
    return f"{sign}{abs(hours)}h {minutes}m"


def amount_to_hours(amount: float, hourly_rate: float) -> float:
    """
    How many hours of work an amount of money represents.

    A rate of zero or below means "rate not set" and always yields 0.
    """
    number = finite_number(amount)
    rate = finite_number(hourly_rate)
    if number is None or rate is None or not rate > 0:
        return 0.0
    return number / rate


def hours_to_amount(hours: float, hourly_rate: float) -> float:
    """Money earned for a number of hours at the given rate."""
    number = finite_number(hours)
    rate = finite_number(hourly_rate)
    if number is None or rate is None or not rate > 0:
        return 0.0
    return number * rate


def hours_to_minutes(hours_float: float) -> int:
    """Convert fractional hours to whole minutes."""
    hours = finite_number(hours_float)
    if hours is None:
        return 0
    return round_half_up(hours * 60)


_AMOUNT_NOISE = re.compile(r"[^0-9.,-]")


def parse_import_amount(text: Any) -> float:
    """
    Parse an amount column from a bank export.

    Handles "1.234,56", "1,234.56", "12,50" and currency noise like
    "CHF -12.50". The sign is dropped: imported rows are always expenses.
    """
    if _is_number(text):
        number = finite_number(text)
        return 0.0 if number is None else abs(number)
    if not isinstance(text, str) or not text:
        return 0.0

    cleaned = _AMOUNT_NOISE.sub("", text)
    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".", 1)
        else:
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".", 1)

    match = re.match(r"-?\d*\.?\d+", cleaned)
    if not match:
        return 0.0
    number = float(match.group(0))
    return abs(number) if math.isfinite(number) else 0.0
