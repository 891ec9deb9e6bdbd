"""
Log Book Service.

Moves daily logs between the driver and the HOS backend:

- list, fetch and delete logs
- create a log (NEW -> DRAFT) and save edits to a draft
- submit a complete draft (DRAFT -> SUBMITTED), after explicit confirmation

Every call goes through the session manager, which owns authentication.
This service never looks at a 401 itself; a failure the session manager could
not recover surfaces as ``AuthenticationError``.

Single Responsibility: Daily log persistence through the backend API only.
"""

import logging
from typing import Callable, List, Union

from common.api_gateway import ApiRequest
from common.exceptions import ConfirmationRequired, LogStateError
from common.validators import minutes_to_hours

from ..models import DailyLog, LogState

logger = logging.getLogger(__name__)

LOGS_PATH = "/logs/"

SUBMIT_CONFIRMATION = ConfirmationRequired.default_message

Confirmation = Union[bool, Callable[[str], bool]]


class LogBookService:
    """
    Service for a driver's daily logs on the HOS backend.

    Submission is gated locally: a log that is new, already submitted,
    incomplete or unconfirmed never reaches the network.
    """

    def __init__(self, session_manager):
        """Initialize log book with the driver's session."""
        self.session = session_manager
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _call(self, method, path, json=None):
        response = self.session.dispatch(ApiRequest(method, path, json=json))
        return response.raise_for_error().data

    def list_logs(self) -> List[DailyLog]:
        """Fetch every log of the driver (plain or paginated answer)."""
        data = self._call("GET", LOGS_PATH)
        records = data.get("results", []) if isinstance(data, dict) else data or []
        self.logger.debug(f"Fetched {len(records)} daily logs")
        return [DailyLog.from_api(record) for record in records]

    def get_log(self, log_id) -> DailyLog:
        return DailyLog.from_api(self._call("GET", f"{LOGS_PATH}{log_id}/"))

    def create_log(self, log: DailyLog) -> DailyLog:
        """
        Persist a new log.

        Returns:
            The created log as recorded by the backend (state DRAFT)

        Raises:
            LogStateError: If the log already exists on the backend
            ValidationError: If the log or the backend rejected a field
        """
        if log.state != LogState.NEW:
            raise LogStateError("This log has already been created.")

        payload = log.to_submission_payload()
        created = DailyLog.from_api(self._call("POST", LOGS_PATH, json=payload))
        self.logger.info(f"Created daily log {created.id} for {created.date}")
        return created

    def update_log(self, log: DailyLog) -> DailyLog:
        """
        Save edits to a draft.

        Returns:
            The log as recorded by the backend

        Raises:
            LogStateError: If the log is new or already submitted
            ValidationError: If the log or the backend rejected a field
        """
        self._ensure_draft(log)
        payload = log.to_submission_payload()
        updated = DailyLog.from_api(self._call("PUT", f"{LOGS_PATH}{log.id}/", json=payload))
        self.logger.info(f"Updated daily log {log.id}")
        return updated

    def delete_log(self, log: DailyLog) -> None:
        """Delete a draft."""
        self._ensure_draft(log)
        self._call("DELETE", f"{LOGS_PATH}{log.id}/")
        self.logger.info(f"Deleted daily log {log.id}")

    def submit_log(self, log: DailyLog, confirm: Confirmation = False) -> DailyLog:
        """
        Make a draft permanent.

        Args:
            log: A saved draft whose entries cover exactly 24 hours
            confirm: True, or a callable shown the confirmation message that
                returns whether the driver agreed

        Returns:
            The same log, now SUBMITTED

        Raises:
            LogStateError: If the log is new, submitted or incomplete
            ConfirmationRequired: If the driver did not confirm
        """
        self._ensure_draft(log)

        if not log.is_complete():
            raise LogStateError(
                f"Duty status entries cover {log.coverage_hours()} of 24.00 hours; "
                f"{minutes_to_hours(log.remaining_minutes())} hours remaining."
            )

        confirmed = confirm(SUBMIT_CONFIRMATION) if callable(confirm) else bool(confirm)
        if not confirmed:
            self.logger.info(f"Submission of daily log {log.id} cancelled by driver")
            raise ConfirmationRequired()

        record = self._call("POST", f"{LOGS_PATH}{log.id}/submit/")
        log.mark_submitted()
        if isinstance(record, dict) and record.get("total_driving_hours") is not None:
            log.total_driving_hours = record["total_driving_hours"]

        self.logger.info(f"Submitted daily log {log.id}")
        return log

    def _ensure_draft(self, log: DailyLog):
        if log.state == LogState.SUBMITTED:
            raise LogStateError("This log has already been submitted.")
        if log.state == LogState.NEW:
            raise LogStateError("Save the log before continuing.")
