"""
Backend error payloads.

The HOS backend answers errors in several shapes: a bare string, an object
with a ``detail`` or ``error`` message, or a DRF-style map of field name to a
list of messages (possibly nested for list serializers). ``ErrorPayload``
normalises all of them once, at the session boundary, into one of two kinds.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


# Keys that carry a whole-request message rather than a field error
MESSAGE_KEYS = ("detail", "error", "message")

# Fields whose errors are reported before any other field's
PRIORITY_FIELDS = ("duty_status_entries", "non_field_errors")


def _flatten_messages(value) -> List[str]:
    """Collect every message string from a (possibly nested) error value."""
    if value is None:
        return []
    if isinstance(value, str):
        return [str(value)] if value else []
    if isinstance(value, dict):
        messages = []
        for nested in value.values():
            messages.extend(_flatten_messages(nested))
        return messages
    if isinstance(value, (list, tuple)):
        messages = []
        for item in value:
            messages.extend(_flatten_messages(item))
        return messages
    return [str(value)]


@dataclass
class ErrorPayload:
    """
    Tagged error payload.

    Attributes:
        kind: FIELD_ERRORS or MESSAGE
        field_errors: field name -> list of messages (FIELD_ERRORS only)
        message: whole-request message (MESSAGE only)
    """

    FIELD_ERRORS = "field_errors"
    MESSAGE = "message"

    kind: str
    field_errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None

    @classmethod
    def from_data(cls, data) -> "ErrorPayload":
        """Build a payload from a decoded response body."""
        if data is None:
            return cls(kind=cls.MESSAGE, message=None)

        if isinstance(data, str):
            return cls(kind=cls.MESSAGE, message=data.strip() or None)

        if isinstance(data, dict):
            for key in MESSAGE_KEYS:
                if isinstance(data.get(key), str):
                    return cls(kind=cls.MESSAGE, message=str(data[key]))

            field_errors = {}
            for name, value in data.items():
                messages = _flatten_messages(value)
                if messages:
                    field_errors[str(name)] = messages
            return cls(kind=cls.FIELD_ERRORS, field_errors=field_errors)

        if isinstance(data, (list, tuple)):
            messages = _flatten_messages(data)
            return cls(kind=cls.MESSAGE, message=messages[0] if messages else None)

        return cls(kind=cls.MESSAGE, message=str(data))

    @property
    def is_field_errors(self) -> bool:
        return self.kind == self.FIELD_ERRORS

    def first_message(self) -> Optional[str]:
        """
        Return the single message to show the driver.

        Duty status entry errors win, then non-field errors, then the first
        field in the order the backend reported them.
        """
        if self.kind == self.MESSAGE:
            return self.message

        for name in PRIORITY_FIELDS:
            if self.field_errors.get(name):
                return self.field_errors[name][0]

        for messages in self.field_errors.values():
            if messages:
                return messages[0]
        return None
