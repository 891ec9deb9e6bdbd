"""
Driver Logs Serializers.

Validates a daily log before it is sent to the HOS backend and shapes it
into the body the backend accepts for ``POST /logs/`` and ``PUT /logs/{id}/``.
"""

from rest_framework import serializers

from common.validators import MilesValidator

from .models import DutyStatus


class DutyStatusEntrySerializer(serializers.Serializer):
    """
    One duty status entry as the backend stores it.

    Only stored fields are accepted; ``duration_minutes`` and friends are
    derived on both sides and never sent.
    """

    status = serializers.ChoiceField(choices=DutyStatus.choices)
    start_time = serializers.TimeField(format="%H:%M", input_formats=["%H:%M", "%H:%M:%S"])
    end_time = serializers.TimeField(format="%H:%M", input_formats=["%H:%M", "%H:%M:%S"])


class DailyLogPayloadSerializer(serializers.Serializer):
    """
    Body for creating or updating a daily log.

    ``total_miles`` arrives as typed by the driver and leaves as a number. Any
    non-negative amount is accepted, at whatever precision the driver typed.
    """

    date = serializers.DateField()
    start_location = serializers.CharField(max_length=200)
    end_location = serializers.CharField(max_length=200)
    carrier_name = serializers.CharField(max_length=200)
    vehicle_id = serializers.CharField(max_length=50)
    total_miles = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        coerce_to_string=False,
        validators=[MilesValidator()],
    )
    remarks = serializers.CharField(required=False, allow_blank=True, default="")
    duty_status_entries = DutyStatusEntrySerializer(many=True)
