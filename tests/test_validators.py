from datetime import time
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError as DjangoValidationError

from common.exceptions import ValidationError
from common.validators import (
    MilesValidator,
    elapsed_minutes,
    minutes_to_hours,
    parse_clock_time,
)


class TestParseClockTime:
    def test_parses_hours_and_minutes(self):
        assert parse_clock_time("07:45") == time(7, 45)

    def test_drops_seconds(self):
        assert parse_clock_time("23:59:30") == time(23, 59)
        assert parse_clock_time(time(6, 15, 42)) == time(6, 15)

    @pytest.mark.parametrize("value", ["", "25:00", "7h45", None, 745])
    def test_rejects_values_that_are_not_times(self, value):
        with pytest.raises(ValidationError) as excinfo:
            parse_clock_time(value, field_name="start_time")
        assert "start_time" in excinfo.value.field_errors


class TestElapsedMinutes:
    def test_same_day_interval(self):
        assert elapsed_minutes(time(8, 0), time(10, 30)) == 150

    def test_midnight_crossover_adds_a_day(self):
        assert elapsed_minutes(time(23, 0), time(1, 0)) == 120

    def test_zero_length_interval(self):
        assert elapsed_minutes(time(0, 0), time(0, 0)) == 0

    def test_minutes_to_hours_rounds_to_two_places(self):
        assert minutes_to_hours(100) == Decimal("1.67")


class TestMilesValidator:
    def test_accepts_zero_and_positive_miles(self):
        validator = MilesValidator()
        validator("0")
        validator(Decimal("512.25"))

    @pytest.mark.parametrize("value", ["-1", "abc", "nan"])
    def test_rejects_negative_or_non_numeric_miles(self, value):
        with pytest.raises(DjangoValidationError):
            MilesValidator()(value)

    def test_upper_limit(self):
        with pytest.raises(DjangoValidationError):
            MilesValidator(max_miles=1000)("1000.5")
