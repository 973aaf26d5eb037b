"""
Calendar-month helpers.

Expenses are partitioned per calendar month ("YYYY-MM"), so most of the
analytics code works in month keys rather than dates.
"""

import calendar
import re
from datetime import date
from typing import Iterator, Optional

_MONTH_KEY = re.compile(r"^(\d{4})-(\d{2})")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def month_key_from_date(value: date) -> str:
    """2026-01-15 -> "2026-01"."""
    return f"{value.year:04d}-{value.month:02d}"


def date_from_month_key(month_key: str) -> Optional[date]:
    """First day of the month a key names, or None if the key is malformed."""
    match = _MONTH_KEY.match(month_key or "")
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        return None
    return date(year, month, 1)


def days_in_month(value: date) -> int:
    return calendar.monthrange(value.year, value.month)[1]


def month_label(value: date) -> str:
    """Short label used on charts, e.g. "Jan 2026"."""
    return value.strftime("%b %Y")


def month_label_from_key(month_key: str) -> str:
    month_start = date_from_month_key(month_key)
    return month_label(month_start) if month_start else month_key


def iso_date(value: date) -> str:
    return value.isoformat()


def is_iso_date(text: str) -> bool:
    return bool(_ISO_DATE.match(text or ""))


def is_same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def shift_month(value: date, months: int) -> date:
    """First day of the month `months` away from value (negative = earlier)."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def iter_month_keys(start_key: str, end_key: str) -> Iterator[str]:
    """
    Yield every month key from start to end, both inclusive.

    Yields nothing when either key is malformed or start is after end.
    """
    current = date_from_month_key(start_key)
    end = date_from_month_key(end_key)
    if current is None or end is None:
        return
    while current <= end:
        yield month_key_from_date(current)
        current = shift_month(current, 1)


def parse_import_date(text: str, today: date) -> str:
    """
    Normalize a date column from a bank export to "YYYY-MM-DD".

    Accepts YYYY-MM-DD, DD.MM.YYYY, DD/MM/YYYY and MM/DD/YYYY. Day-first
    wins when both readings are possible. Anything else becomes `today`.
    """
    text = (text or "").strip()
    if is_iso_date(text):
        return text

    parts = re.split(r"[./-]", text)
    if len(parts) == 3:
        try:
            a, b, c = (int(part) for part in parts)
        except ValueError:
            return iso_date(today)
        candidates = []
        if a <= 31 and b <= 12 and c > 999:
            candidates.append((c, b, a))
        if a <= 12 and b <= 31 and c > 999:
            candidates.append((c, a, b))
        for year, month, day in candidates:
            try:
                return iso_date(date(year, month, day))
            except ValueError:
                continue

    return iso_date(today)
