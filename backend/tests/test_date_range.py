"""Tests for date range classification."""

import pytest

from app.services.date_range import (
    MAX_RANGE_DAYS,
    RangeKind,
    classify,
    parse_date,
    range_days,
)


class TestRangeDays:
    def test_same_day_is_zero(self):
        assert range_days("2023-01-01", "2023-01-01") == 0

    def test_full_month(self):
        assert range_days("2023-01-01", "2023-01-31") == 30

    def test_inverted_is_negative(self):
        assert range_days("2023-02-01", "2023-01-01") == -31

    def test_partial_days_floor(self):
        # 18 hours forward floors to 0, 18 hours backward floors to -1
        assert range_days("2023-01-01T12:00", "2023-01-02T06:00") == 0
        assert range_days("2023-01-02T06:00", "2023-01-01T12:00") == -1

    def test_naive_values_are_utc(self):
        assert parse_date("2023-01-01").utcoffset().total_seconds() == 0

    def test_explicit_offset_respected(self):
        # Midnight at +05:00 is 19:00 UTC the previous day
        assert range_days("2023-01-01T00:00:00+05:00", "2023-01-01") == 0
        assert range_days("2023-01-01", "2023-01-01T00:00:00+05:00") == -1


class TestClassify:
    def test_both_missing(self):
        result = classify(None, None)
        assert result.kind == RangeKind.BOTH_MISSING
        assert result.days is None
        assert not result.is_rejected

    def test_empty_strings_count_as_missing(self):
        assert classify("", "").kind == RangeKind.BOTH_MISSING
        assert classify("2023-01-01", "").kind == RangeKind.ONE_MISSING

    def test_only_to(self):
        result = classify(None, "2023-01-01")
        assert result.kind == RangeKind.ONE_MISSING
        assert result.error_message == "Kindly provide both FROM and TO to obtain values in a range"

    def test_only_from(self):
        assert classify("2023-01-01", None).kind == RangeKind.ONE_MISSING

    def test_thirty_days_is_valid(self):
        result = classify("2023-01-01", "2023-01-31")
        assert result.kind == RangeKind.VALID
        assert result.days == MAX_RANGE_DAYS
        assert result.from_date == "2023-01-01"
        assert result.to_date == "2023-01-31"

    def test_thirty_one_days_too_long(self):
        result = classify("2023-01-01", "2023-02-01")
        assert result.kind == RangeKind.TOO_LONG
        assert result.days == 31
        assert result.error_message == "From and To Dates cannot have difference more than 30 days"

    def test_inverted(self):
        result = classify("2023-02-01", "2023-01-01")
        assert result.kind == RangeKind.INVERTED
        assert result.days == -31
        assert result.error_message == "From Date cannot be greater than To Date"

    def test_same_day_valid(self):
        result = classify("2023-03-15", "2023-03-15")
        assert result.kind == RangeKind.VALID
        assert result.days == 0
        assert result.error_message is None

    def test_unparseable_date_raises(self):
        with pytest.raises(ValueError):
            classify("yesterday", "2023-01-01")
