"""
Daily Log model for HOS duty status logging.

Contains the DailyLog model that represents one driver's day: the header
fields of the paper log sheet plus the duty status entries that must cover
exactly 24 hours before the log can be submitted.

The model lives in memory only; the HOS backend persists it.
"""

import copy
from datetime import date as date_type

from django.db import models
from django.utils import timezone

from common.exceptions import LogStateError, ValidationError
from common.validators import MINUTES_PER_DAY, minutes_to_hours

from .duty_status_entry import DutyStatus, DutyStatusEntry


class LogState(models.TextChoices):
    """Lifecycle of a daily log. Nothing leaves SUBMITTED."""

    NEW = "new", "New"
    DRAFT = "draft", "Draft"
    SUBMITTED = "submitted", "Submitted"


def _parse_date(value, field_name="date"):
    if isinstance(value, date_type):
        return value
    try:
        return date_type.fromisoformat(str(value))
    except ValueError:
        raise ValidationError({field_name: ["Date has wrong format. Use YYYY-MM-DD."]})


class DailyLog:
    """
    Driver's daily log.

    Attributes:
        id: Backend identifier (None until the log is created)
        date: Day this log covers; fixed once the log is saved
        start_location: Where the day started
        end_location: Where the day ended
        carrier_name: Motor carrier name
        vehicle_id: Truck/tractor unit number
        total_miles: Total miles driven today, as entered
        remarks: Free-text remarks
        duty_status_entries: Entries in the order they were added
        is_submitted: True once the log has been made permanent
        total_driving_hours: Driving total reported by the backend, if any
    """

    HEADER_FIELDS = (
        "start_location",
        "end_location",
        "carrier_name",
        "vehicle_id",
        "total_miles",
        "remarks",
    )

    def __init__(
        self,
        date=None,
        start_location="",
        end_location="",
        carrier_name="",
        vehicle_id="",
        total_miles="",
        remarks="",
        duty_status_entries=None,
        id=None,
        is_submitted=False,
        total_driving_hours=None,
    ):
        self.id = id
        self._date = _parse_date(date) if date is not None else timezone.localdate()
        self.start_location = start_location
        self.end_location = end_location
        self.carrier_name = carrier_name
        self.vehicle_id = vehicle_id
        self.total_miles = total_miles
        self.remarks = remarks or ""
        self.duty_status_entries = list(duty_status_entries or [])
        self.is_submitted = is_submitted
        self.total_driving_hours = total_driving_hours

    def __str__(self):
        """Return string representation of the daily log."""
        return f"Daily Log {self.date} - {self.vehicle_id or 'unassigned'} ({self.state})"

    @classmethod
    def from_api(cls, data):
        """Build a log from a backend record."""
        return cls(
            id=data.get("id"),
            date=data.get("date"),
            start_location=data.get("start_location") or "",
            end_location=data.get("end_location") or "",
            carrier_name=data.get("carrier_name") or "",
            vehicle_id=data.get("vehicle_id") or "",
            total_miles=data.get("total_miles", ""),
            remarks=data.get("remarks") or "",
            duty_status_entries=[
                DutyStatusEntry.from_dict(entry)
                for entry in data.get("duty_status_entries") or []
            ],
            is_submitted=bool(data.get("is_submitted")),
            total_driving_hours=data.get("total_driving_hours"),
        )

    @property
    def date(self):
        return self._date

    @property
    def state(self):
        if self.is_submitted:
            return LogState.SUBMITTED
        if self.id is None:
            return LogState.NEW
        return LogState.DRAFT

    @property
    def is_editable(self):
        return not self.is_submitted

    def _ensure_editable(self):
        if self.is_submitted:
            raise LogStateError("This log has been submitted and can no longer be edited.")

    def update_field(self, name, value):
        """
        Edit one header field.

        Raises:
            LogStateError: If the log was submitted, or the date of a saved log
                is being changed
            ValueError: If ``name`` is not a header field
        """
        self._ensure_editable()
        if name == "date":
            if self.state != LogState.NEW:
                raise LogStateError("The log date cannot be changed once the log is saved.")
            self._date = _parse_date(value)
        elif name in self.HEADER_FIELDS:
            setattr(self, name, value)
        else:
            raise ValueError(f"Unknown daily log field: {name}")

    def add_entry(self):
        """Append an off-duty 00:00-00:00 entry and return it."""
        self._ensure_editable()
        entry = DutyStatusEntry()
        self.duty_status_entries.append(entry)
        return entry

    def update_entry(self, index, field, value):
        """Set one field of the entry at ``index``; an unknown index is ignored."""
        self._ensure_editable()
        if not 0 <= index < len(self.duty_status_entries):
            return
        self.duty_status_entries[index].set_field(field, value)

    def remove_entry(self, index):
        """Delete the entry at ``index``; later entries shift down."""
        self._ensure_editable()
        if 0 <= index < len(self.duty_status_entries):
            del self.duty_status_entries[index]

    def coverage_minutes(self):
        """
        Total minutes covered by all entries.

        This is a plain sum: overlapping entries are counted twice and gaps
        are not detected. The backend validates overlaps and gaps.
        """
        return sum(entry.duration_minutes for entry in self.duty_status_entries)

    def coverage_hours(self):
        return minutes_to_hours(self.coverage_minutes())

    def remaining_minutes(self):
        """Minutes still to account for; negative when over-covered."""
        return MINUTES_PER_DAY - self.coverage_minutes()

    def is_complete(self):
        """Check if entries cover exactly 24 hours."""
        return self.coverage_minutes() == MINUTES_PER_DAY

    def get_duty_status_summary(self):
        """Get summary of duty status hours."""
        minutes = {status: 0 for status in DutyStatus.values}
        for entry in self.duty_status_entries:
            minutes[str(entry.status)] += entry.duration_minutes

        summary = {status: float(minutes_to_hours(total)) for status, total in minutes.items()}
        summary["total"] = float(self.coverage_hours())
        summary["is_complete"] = self.is_complete()
        return summary

    def to_form_data(self):
        """Raw field values as entered, ready for serializer validation."""
        return {
            "date": self.date.isoformat(),
            "start_location": self.start_location,
            "end_location": self.end_location,
            "carrier_name": self.carrier_name,
            "vehicle_id": self.vehicle_id,
            "total_miles": self.total_miles,
            "remarks": self.remarks,
            "duty_status_entries": [entry.to_dict() for entry in self.duty_status_entries],
        }

    def to_submission_payload(self):
        """
        Project the log onto the fields the backend accepts.

        Derived values are dropped and ``total_miles`` becomes a number.

        Raises:
            ValidationError: If a field is missing or malformed
        """
        from ..serializers import DailyLogPayloadSerializer

        serializer = DailyLogPayloadSerializer(data=self.to_form_data())
        if not serializer.is_valid():
            raise ValidationError(serializer.errors)
        return serializer.data

    def mark_submitted(self):
        """One-way transition to SUBMITTED."""
        self.is_submitted = True

    def copy(self):
        return copy.deepcopy(self)
