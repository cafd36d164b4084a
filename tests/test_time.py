"""Unit tests for the duration and timestamp helpers."""

import pytest

from seqn_fprime.core.time import (
    Duration,
    InvalidDurationError,
    TimeTypes,
    balance_duration,
    get_balanced_duration,
    get_duration_time_components,
    parse_duration_string,
    validate_time,
)


class TestValidateTime:

    @pytest.mark.parametrize("text", ["2024-001T00:10:30.001", "2015-075T22:32:40"])
    def test_absolute(self, text):
        assert validate_time(text, TimeTypes.ABSOLUTE)

    def test_absolute_rejects_duration(self):
        assert not validate_time("00:10:30", TimeTypes.ABSOLUTE)

    @pytest.mark.parametrize("text", ["00:00:01", "-001T02:03:04.5", "+12:00:00.000"])
    def test_relative_full(self, text):
        assert validate_time(text, TimeTypes.RELATIVE)

    @pytest.mark.parametrize("text", ["10", "1.5", "-61"])
    def test_relative_simple(self, text):
        assert validate_time(text, TimeTypes.RELATIVE_SIMPLE)
        assert not validate_time(text, TimeTypes.RELATIVE)

    def test_garbage_matches_nothing(self):
        for time_type in TimeTypes:
            assert not validate_time("1:2", time_type)


class TestParseDurationString:

    def test_full_form_keeps_fields(self):
        duration = parse_duration_string("-001T02:03:04.5")
        assert duration == Duration(
            is_negative=True, days=1, hours=2, minutes=3, seconds=4, milliseconds=500
        )

    def test_full_form_without_days(self):
        assert parse_duration_string("00:00:01") == Duration(seconds=1)

    def test_fraction_rounding_carries_into_seconds(self):
        assert parse_duration_string("00:00:01.9999") == Duration(seconds=2)

    @pytest.mark.parametrize("text, ms", [
        ("00:00:00.0005", 1),
        ("00:00:00.0015", 2),
        ("00:00:00.0025", 3),
        ("0.0005", 1),
    ])
    def test_half_milliseconds_round_up(self, text, ms):
        assert parse_duration_string(text).milliseconds == ms

    def test_simple_form_is_balanced(self):
        duration = parse_duration_string("90061.25")
        assert duration == Duration(days=1, hours=1, minutes=1, seconds=1, milliseconds=250)

    def test_negative_simple_form(self):
        duration = parse_duration_string("-61")
        assert duration.is_negative
        assert (duration.minutes, duration.seconds) == (1, 1)

    def test_invalid_raises(self):
        with pytest.raises(InvalidDurationError):
            parse_duration_string("soon")

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            parse_duration_string("")


class TestBalance:

    def test_overflowing_fields_carry(self):
        balanced = balance_duration(Duration(hours=25, minutes=61, seconds=61, milliseconds=1500))
        assert balanced == Duration(days=1, hours=2, minutes=2, seconds=2, milliseconds=500)

    def test_zero_is_never_negative(self):
        assert not balance_duration(Duration(is_negative=True)).is_negative

    @pytest.mark.parametrize("text, expected", [
        ("10", "00:00:10.000"),
        ("1.5", "00:00:01.500"),
        ("90061.25", "001T01:01:01.250"),
        ("-61", "-00:01:01.000"),
        ("00:00:90", "00:01:30.000"),
    ])
    def test_balanced_rendering(self, text, expected):
        assert get_balanced_duration(text) == expected


class TestDurationTimeComponents:

    def test_zero_days_and_ms_are_empty(self):
        parts = get_duration_time_components(Duration(hours=1, minutes=2, seconds=3))
        assert parts.is_negative == ""
        assert parts.days == ""
        assert (parts.hours, parts.minutes, parts.seconds) == ("01", "02", "03")
        assert parts.milliseconds == ""

    def test_all_fields_rendered_at_width(self):
        parts = get_duration_time_components(
            Duration(is_negative=True, days=7, hours=0, minutes=0, seconds=5, milliseconds=42)
        )
        assert parts.is_negative == "-"
        assert parts.days == "007"
        assert parts.milliseconds == ".042"
