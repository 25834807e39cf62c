"""
tests/test_date_utils.py

Tests for date parsing and calendar-day arithmetic.
"""

import datetime

import pytest

from renewalreminders.utils.date_utils import (
    calculate_next_renewal, day_offset, parse_date, today, validate_date_format,
)


class TestParseDate:

    @pytest.mark.parametrize("value", [
        "2025-03-17",
        "2025-03-17T08:30:00",
        "2025-03-17T23:59:59+05:00",
        "17/03/2025",
        "March 17, 2025",
        datetime.date(2025, 3, 17),
        datetime.datetime(2025, 3, 17, 22, 15),
    ])
    def test_supported_inputs(self, value):
        assert parse_date(value) == datetime.date(2025, 3, 17)

    @pytest.mark.parametrize("value", ["", "   ", "tomorrow", "2025-13-01", None, 20250317])
    def test_invalid_inputs(self, value):
        with pytest.raises(ValueError):
            parse_date(value)


class TestDayOffset:

    def test_future_past_and_same_day(self):
        base = datetime.date(2025, 3, 10)
        assert day_offset("2025-03-17", base) == 7
        assert day_offset("2025-03-10", base) == 0
        assert day_offset("2025-03-07", base) == -3

    def test_ignores_time_of_day(self):
        late_evening = datetime.datetime(2025, 3, 10, 23, 59)
        assert day_offset(datetime.datetime(2025, 3, 11, 0, 1), late_evening) == 1

    def test_crosses_month_and_leap_day(self):
        assert day_offset("2024-03-01", datetime.date(2024, 2, 28)) == 2
        assert day_offset("2025-03-01", datetime.date(2025, 2, 28)) == 1


class TestRenewalCalculation:

    def test_monthly_clamps_to_month_end(self):
        assert calculate_next_renewal("2025-01-31", "monthly") == datetime.date(2025, 2, 28)

    def test_yearly(self):
        assert calculate_next_renewal(datetime.date(2024, 2, 29), "yearly") == datetime.date(2025, 2, 28)

    def test_invalid_cycle(self):
        with pytest.raises(ValueError):
            calculate_next_renewal("2025-01-01", "weekly")


def test_validate_date_format():
    assert validate_date_format("2025-03-17")
    assert not validate_date_format("2025-3-17")
    assert not validate_date_format("2025-02-30")
    assert not validate_date_format("")


def test_today_in_named_zone():
    assert isinstance(today("UTC"), datetime.date)
    with pytest.raises(ValueError):
        today("Not/AZone")
