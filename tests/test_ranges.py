"""Tests for date range resolution and limit parsing."""

from datetime import date, timedelta

import pytest

from ga4lens.errors import InvalidQueryParameter
from ga4lens.ranges import default_range, parse_limit, resolve_range


class TestDefaultRange:
    @pytest.mark.parametrize("days", [1, 7, 28, 90])
    def test_window_ends_today_and_spans_days(self, days: int):
        """End is today and the window covers `days` calendar days inclusive."""
        today = date(2024, 3, 10)
        r = default_range(days, today=today)

        assert r.end_date == "2024-03-10"
        span = date.fromisoformat(r.end_date) - date.fromisoformat(r.start_date)
        assert span == timedelta(days=days - 1)

    def test_crosses_month_boundary(self):
        r = default_range(28, today=date(2024, 3, 5))
        assert r.start_date == "2024-02-07"

    def test_defaults_to_real_today(self):
        r = default_range()
        assert r.end_date == date.today().isoformat()


class TestResolveRange:
    def test_passes_through_both_bounds(self):
        r = resolve_range("2024-01-01", "2024-01-31")
        assert r.start_date == "2024-01-01"
        assert r.end_date == "2024-01-31"

    def test_does_not_validate_dates(self):
        """Malformed dates are left for the api to reject."""
        r = resolve_range("yesterday", "not-a-date")
        assert r.start_date == "yesterday"
        assert r.end_date == "not-a-date"

    @pytest.mark.parametrize(
        "start,end",
        [("2024-01-01", None), (None, "2024-01-31"), ("", "2024-01-31"), (None, None)],
    )
    def test_partial_bounds_fall_back_to_default(self, start, end):
        today = date(2024, 6, 30)
        r = resolve_range(start, end, days=28, today=today)
        assert r == default_range(28, today=today)

    def test_serializes_camel_case(self):
        r = resolve_range("2024-01-01", "2024-01-02")
        assert r.model_dump(by_alias=True) == {
            "startDate": "2024-01-01",
            "endDate": "2024-01-02",
        }


class TestParseLimit:
    def test_missing_uses_default(self):
        assert parse_limit(None) == 10
        assert parse_limit(None, default=5) == 5

    def test_integer_string(self):
        assert parse_limit("3") == 3
        assert parse_limit("0") == 0

    def test_int_passthrough(self):
        assert parse_limit(7) == 7

    @pytest.mark.parametrize("value", ["abc", "5.5", "", "-2", "1_0", " 5 ", "\u0663", "+3", "0x10"])
    def test_strict_rejects_bad_values(self, value):
        with pytest.raises(InvalidQueryParameter) as exc_info:
            parse_limit(value)
        assert exc_info.value.name == "limit"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("abc", 0),
            ("", 0),
            ("NaN", 0),
            ("5.9", 5),
            ("-2", -2),
            ("Infinity", None),
            ("-Infinity", 0),
            ("4", 4),
            ("inf", 0),
            ("infinity", 0),
            ("INF", 0),
            ("1_0", 0),
            ("0x10", 16),
            ("0o17", 15),
            ("0B101", 5),
            ("-0x10", 0),
            (" 12 ", 12),
            ("1e3", 1000),
            (".9", 0),
            ("1e400", None),
            ("+Infinity", None),
            ("\u0663", 0),
        ],
    )
    def test_lenient_coerces(self, value, expected):
        assert parse_limit(value, strict=False) == expected
