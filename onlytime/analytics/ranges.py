"""Month keys covered by each reporting range."""

from datetime import date

from onlytime.models.analytics import TimeRange
from onlytime.numeric.dates import month_key_from_date, shift_month


def month_keys_for_range(time_range: TimeRange, now: date) -> list[str]:
    """
    Month keys of a range, oldest first, always ending with now's month.

    Fixed ranges go back N-1 months from the current one; year-to-date
    starts at January of the current year.
    """
    time_range = TimeRange(time_range)
    current_month = date(now.year, now.month, 1)

    if time_range == TimeRange.YEAR_TO_DATE:
        return [f"{now.year:04d}-{month:02d}" for month in range(1, now.month + 1)]

    count = time_range.month_count or 1
    return [
        month_key_from_date(shift_month(current_month, offset))
        for offset in range(-(count - 1), 1)
    ]
