"""
Duty Status Entry model.

One interval of a driver's day classified under a single duty status.
Entries are wall-clock times of day without a date; the duration is always
derived, never stored.
"""

from dataclasses import dataclass, field
from datetime import time

from django.db import models

from common.exceptions import ValidationError
from common.validators import elapsed_minutes, format_clock_time, minutes_to_hours, parse_clock_time


class DutyStatus(models.TextChoices):
    """Duty statuses (grid rows on the paper log sheet)."""

    OFF_DUTY = "off_duty", "Off Duty"
    SLEEPER_BERTH = "sleeper_berth", "Sleeper Berth"
    DRIVING = "driving", "Driving"
    ON_DUTY_NOT_DRIVING = "on_duty_not_driving", "On Duty Not Driving"


@dataclass
class DutyStatusEntry:
    """
    Individual duty status interval.

    Attributes:
        status: Duty status for this interval
        start_time: When the interval starts (time of day)
        end_time: When the interval ends; earlier than start_time means the
            interval runs past midnight
    """

    EDITABLE_FIELDS = ("status", "start_time", "end_time")

    status: str = DutyStatus.OFF_DUTY
    start_time: time = field(default_factory=lambda: time(0, 0))
    end_time: time = field(default_factory=lambda: time(0, 0))

    def __str__(self):
        return f"{self.get_status_display()} {self.get_time_range_display()} ({self.duration_minutes}min)"

    @classmethod
    def from_dict(cls, data):
        """Build an entry from a backend record or form data."""
        entry = cls()
        for name in cls.EDITABLE_FIELDS:
            if name in data:
                entry.set_field(name, data[name])
        return entry

    def set_field(self, name, value):
        """
        Set one editable field, coercing the value.

        Raises:
            ValueError: If ``name`` is not an editable field
            ValidationError: If the value does not parse
        """
        if name not in self.EDITABLE_FIELDS:
            raise ValueError(f"Unknown duty status entry field: {name}")

        if name == "status":
            if value not in DutyStatus.values:
                raise ValidationError({"status": [f'"{value}" is not a valid choice.']})
            self.status = DutyStatus(value)
        else:
            setattr(self, name, parse_clock_time(value, field_name=name))

    @property
    def duration_minutes(self):
        """Minutes covered by this entry (midnight crossover applied)."""
        return elapsed_minutes(self.start_time, self.end_time)

    @property
    def duration_hours(self):
        return minutes_to_hours(self.duration_minutes)

    @property
    def crosses_midnight(self):
        return self.end_time < self.start_time

    def get_status_display(self):
        return DutyStatus(self.status).label

    def get_time_range_display(self):
        return f"{format_clock_time(self.start_time)} - {format_clock_time(self.end_time)}"

    def to_dict(self):
        """Stored fields only; derived values are left out."""
        return {
            "status": str(self.status),
            "start_time": format_clock_time(self.start_time),
            "end_time": format_clock_time(self.end_time),
        }
