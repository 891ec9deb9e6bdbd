"""
Daily Log Editor.

Backs one "edit daily log" view. Runs log book operations and reduces their
outcome to a single-line ``error`` or ``success`` message. The editor's log
is only replaced by what the backend returned after a successful call, so a
failed save never leaves a half-applied state behind.

Once the view is abandoned (the driver navigated away), late results are
dropped instead of being applied to the editor.
"""

import logging

from common.exceptions import (
    ApiError,
    ConfirmationRequired,
    LogStateError,
    NetworkError,
    ValidationError,
)

from ..models import DailyLog, LogState

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load log. Please try again."
SAVE_FAILED = "Failed to save log. Please try again."
SUBMIT_FAILED = "Failed to submit log."


class DailyLogEditor:
    """Editing session for one daily log."""

    def __init__(self, log_book, log=None):
        self.log_book = log_book
        self.log = log if log is not None else DailyLog()
        self.error = ""
        self.success = ""
        self.abandoned = False

    @property
    def can_submit(self):
        """Whether the submit action should be offered at all."""
        return self.log.state == LogState.DRAFT and self.log.is_complete()

    def abandon(self):
        self.abandoned = True

    def load(self, log_id):
        log = self._run(lambda: self.log_book.get_log(log_id), LOAD_FAILED)
        if log is None:
            return False
        self.log = log
        return True

    def save(self):
        """Create the log if it is new, otherwise save the draft."""
        creating = self.log.state == LogState.NEW
        draft = self.log.copy()
        if creating:
            saved = self._run(lambda: self.log_book.create_log(draft), SAVE_FAILED)
        else:
            saved = self._run(lambda: self.log_book.update_log(draft), SAVE_FAILED)
        if saved is None:
            return False

        self.log = saved
        self.success = "Log created successfully!" if creating else "Log updated successfully!"
        return True

    def submit(self, confirm):
        draft = self.log.copy()
        submitted = self._run(lambda: self.log_book.submit_log(draft, confirm), SUBMIT_FAILED)
        if submitted is None:
            return False

        self.log = submitted
        self.success = "Log submitted successfully!"
        return True

    def _run(self, operation, failure_message):
        """
        Run one operation; return its result, or None if it failed or the
        editor was abandoned meanwhile.

        ``AuthenticationError`` is not handled here: the session manager has
        already given up on the request and the driver must log in again.
        """
        self.error = ""
        self.success = ""
        try:
            result = operation()
        except ConfirmationRequired:
            return None
        except (ValidationError, LogStateError, NetworkError) as e:
            result = None
            error = e.message
        except ApiError as e:
            logger.error(f"Daily log operation failed: {e.message}")
            result = None
            error = failure_message
        else:
            error = ""

        if self.abandoned:
            logger.debug("Editor abandoned; discarding result")
            return None

        self.error = error
        return result
