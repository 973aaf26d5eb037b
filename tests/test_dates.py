"""
Tests for calendar-month and interpolation helpers.
"""

from datetime import date

import pytest

from onlytime.numeric import (
    clamp,
    clamp01,
    date_from_month_key,
    days_in_month,
    inverse_lerp,
    is_iso_date,
    is_same_month,
    iter_month_keys,
    lerp,
    month_key_from_date,
    month_label,
    month_label_from_key,
    shift_month,
)


class TestMonthKeys:
    """Tests for "YYYY-MM" keys."""

    def test_round_trip(self):
        assert month_key_from_date(date(2026, 1, 15)) == "2026-01"
        assert date_from_month_key("2026-01") == date(2026, 1, 1)

    def test_malformed_key(self):
        assert date_from_month_key("2026-13") is None
        assert date_from_month_key("soon") is None
        assert month_label_from_key("soon") == "soon"

    def test_labels(self):
        assert month_label(date(2026, 1, 15)) == "Jan 2026"
        assert month_label_from_key("2025-12") == "Dec 2025"

    def test_iter_month_keys_crosses_year(self):
        assert list(iter_month_keys("2023-11", "2024-02")) == [
            "2023-11", "2023-12", "2024-01", "2024-02",
        ]

    def test_iter_month_keys_empty(self):
        """Reversed or malformed bounds yield nothing."""
        assert list(iter_month_keys("2024-03", "2024-01")) == []
        assert list(iter_month_keys("x", "2024-01")) == []


class TestCalendar:
    """Tests for day and month arithmetic."""

    def test_days_in_month(self):
        assert days_in_month(date(2024, 2, 10)) == 29
        assert days_in_month(date(2023, 2, 10)) == 28
        assert days_in_month(date(2024, 4, 1)) == 30

    def test_shift_month(self):
        assert shift_month(date(2024, 1, 31), -1) == date(2023, 12, 1)
        assert shift_month(date(2024, 11, 5), 3) == date(2025, 2, 1)

    def test_is_same_month(self):
        assert is_same_month(date(2024, 3, 1), date(2024, 3, 31))
        assert not is_same_month(date(2024, 3, 1), date(2023, 3, 1))

    def test_is_iso_date(self):
        assert is_iso_date("2024-03-01")
        assert not is_iso_date("01.03.2024")


class TestInterpolation:
    """Tests for lerp and friends."""

    def test_lerp(self):
        assert lerp(10.0, 20.0, 0.25) == 12.5

    def test_inverse_lerp(self):
        assert inverse_lerp(10.0, 20.0, 12.5) == pytest.approx(0.25)

    def test_inverse_lerp_equal_endpoints(self):
        assert inverse_lerp(5.0, 5.0, 7.0) == 0.0

    def test_clamp(self):
        assert clamp(12.0, 0.0, 10.0) == 10.0
        assert clamp01(-0.5) == 0.0
        assert clamp01(1.5) == 1.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
