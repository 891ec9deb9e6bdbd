"""
Common validators and utilities for the driver portal.

This module contains the clock arithmetic behind duty status coverage and
the shared validation helpers used by the accounts and driver_logs apps.
"""

from datetime import datetime, time
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.core.validators import BaseValidator

from .exceptions import ValidationError

MINUTES_PER_DAY = 24 * 60

CLOCK_FORMATS = ("%H:%M", "%H:%M:%S")


def parse_clock_time(value, field_name="time"):
    """
    Parse a wall-clock time of day.

    Accepts ``datetime.time`` values and "HH:MM" / "HH:MM:SS" strings.
    Seconds are dropped, entries are recorded to the minute.

    Raises:
        ValidationError: If the value is not a time of day
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    if isinstance(value, str):
        for fmt in CLOCK_FORMATS:
            try:
                return datetime.strptime(value.strip(), fmt).time().replace(second=0)
            except ValueError:
                continue

    raise ValidationError(
        {field_name: [f"Enter a valid time (HH:MM), got {value!r}."]}
    )


def minutes_since_midnight(value):
    """Return hour*60 + minute for a time of day."""
    return value.hour * 60 + value.minute


def elapsed_minutes(start, end):
    """
    Minutes from start to end.

    An end earlier than the start means the period runs past midnight, so a
    full day is added (23:00 -> 01:00 is 120 minutes). Equal times give 0.
    """
    elapsed = minutes_since_midnight(end) - minutes_since_midnight(start)
    if elapsed < 0:
        elapsed += MINUTES_PER_DAY
    return elapsed


def minutes_to_hours(minutes):
    """Convert minutes to hours rounded to two decimal places."""
    hours = Decimal(minutes) / Decimal("60")
    return hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_clock_time(value):
    """Format a time of day the way the backend expects it."""
    return value.strftime("%H:%M")


class MilesValidator(BaseValidator):
    """
    Validator for odometer-style mileage values.

    Ensures miles parse as a number and are not negative.
    """

    def __init__(self, max_miles=None):
        self.limit_value = max_miles
        if max_miles is None:
            self.message = "Miles must be zero or more."
        else:
            self.message = f"Miles must be between 0 and {max_miles}."

    def compare(self, value, limit_value):
        if value is None:
            return True
        if value < 0:
            return True
        return limit_value is not None and value > limit_value

    def clean(self, value):
        try:
            miles = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
        return miles if miles.is_finite() else None
