"""Tests for date parsing and tenure month counting."""

from datetime import date, datetime, timezone

import pytest

from claims_portal.utils import parse_flexible_date, whole_months_between


class TestParseFlexibleDate:
    """Tests for parse_flexible_date."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2021-01-01", date(2021, 1, 1)),
            ("15/08/2022", date(2022, 8, 15)),
            ("20210101", date(2021, 1, 1)),
            ("2021-01-01T10:00:00Z", date(2021, 1, 1)),
            ("2021-01-01T10:00:00+05:30", date(2021, 1, 1)),
            ("  2021-01-01  ", date(2021, 1, 1)),
        ],
    )
    def test_supported_formats(self, value, expected):
        assert parse_flexible_date(value) == expected

    @pytest.mark.parametrize(
        "value", [None, "", "not-a-date", "2024-02-30", "1850-01-01", "2150-01-01"]
    )
    def test_invalid_returns_none(self, value):
        assert parse_flexible_date(value) is None

    def test_date_passes_through(self):
        assert parse_flexible_date(date(2020, 6, 1)) == date(2020, 6, 1)

    def test_datetime_truncated_to_date(self):
        value = datetime(2020, 6, 1, 23, 59, tzinfo=timezone.utc)

        assert parse_flexible_date(value) == date(2020, 6, 1)


class TestWholeMonthsBetween:
    """Tests for whole_months_between."""

    def test_same_day_next_month(self):
        assert whole_months_between(date(2023, 1, 15), date(2023, 2, 15)) == 1

    def test_day_before_anniversary(self):
        assert whole_months_between(date(2023, 1, 15), date(2023, 2, 14)) == 0

    def test_end_of_short_month_completes_month(self):
        assert whole_months_between(date(2023, 1, 31), date(2023, 2, 28)) == 1

    def test_leap_year_end_of_february(self):
        assert whole_months_between(date(2024, 1, 31), date(2024, 2, 29)) == 1
        assert whole_months_between(date(2024, 1, 31), date(2024, 2, 28)) == 0

    def test_multi_year_span(self):
        assert whole_months_between(date(2021, 1, 1), date(2024, 7, 1)) == 42

    def test_same_date_is_zero(self):
        assert whole_months_between(date(2024, 7, 1), date(2024, 7, 1)) == 0

    def test_future_start_is_negative(self):
        assert whole_months_between(date(2025, 1, 1), date(2024, 7, 1)) == -6

    def test_datetime_end_accepted(self):
        end = datetime(2024, 7, 1, 8, 0, tzinfo=timezone.utc)

        assert whole_months_between(date(2022, 7, 1), end) == 24
