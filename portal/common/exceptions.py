"""
Error taxonomy for the driver portal.

Every failure that crosses a service boundary is one of these exceptions.
Each carries a single-line ``message`` suitable for showing to the driver.
"""

from .error_payload import ErrorPayload


class HOSClientError(Exception):
    """Base class for all portal client errors."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(HOSClientError):
    """
    Field-level validation failure.

    Raised for local payload problems and for backend 4xx answers that carry
    field errors. ``message`` is the first offending field's first message.
    """

    default_message = "Please correct the highlighted fields."

    def __init__(self, field_errors=None, message=None):
        self.payload = ErrorPayload.from_data(field_errors or {})
        super().__init__(message or self.payload.first_message() or None)

    @classmethod
    def from_payload(cls, payload: ErrorPayload):
        error = cls(message=payload.first_message() or None)
        error.payload = payload
        return error

    @property
    def field_errors(self):
        return self.payload.field_errors


class AuthenticationError(HOSClientError):
    """The backend rejected our credentials (HTTP 401)."""

    default_message = "Your session has expired. Please log in again."


class NetworkError(HOSClientError):
    """No response from the backend (connection refused, timeout, DNS...)."""

    default_message = "Network error. Please try again."


class ConfirmationRequired(HOSClientError):
    """The driver did not confirm an irreversible action."""

    default_message = (
        "Are you sure you want to submit this log? "
        "It will become permanent and cannot be edited."
    )


class LogStateError(HOSClientError):
    """The daily log is not in a state that allows the requested operation."""

    default_message = "This log can no longer be changed."


class ApiError(HOSClientError):
    """Any other non-success answer from the backend."""

    def __init__(self, message=None, status_code=None):
        self.status_code = status_code
        super().__init__(message)
