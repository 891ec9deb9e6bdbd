"""Shared fixtures: a scripted backend and a session bound to it."""

from collections import namedtuple
from datetime import date

import pytest

from accounts.credential_store import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, InMemoryCredentialStore
from accounts.session_manager import SessionManager
from common.api_gateway import REFRESH_PATH, ApiRequest, ApiResponse
from driver_logs.models import DailyLog, DutyStatusEntry
from driver_logs.services import LogBookService

SentRequest = namedtuple("SentRequest", "method path headers json")


class FakeGateway:
    """
    Scripted stand-in for ApiGateway.

    Each route holds a queue of replies: ``(status, data)`` tuples, exceptions
    to raise, or callables taking the request and returning a reply. The last
    reply of a queue repeats.
    """

    def __init__(self):
        self.routes = {}
        self.sent = []

    def reply(self, method, path, *replies):
        self.routes.setdefault((method, path), []).extend(replies)
        return self

    def reply_refresh(self, *replies):
        return self.reply("POST", REFRESH_PATH, *replies)

    def send(self, request):
        self.sent.append(
            SentRequest(request.method, request.path, dict(request.headers), request.json)
        )
        queue = self.routes.get((request.method, request.path))
        if not queue:
            raise AssertionError(f"Unexpected request {request.method} {request.path}")

        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(item) and not isinstance(item, type):
            item = item(request)
        if isinstance(item, Exception):
            raise item
        status, data = item
        return ApiResponse(status, data, request=request)

    def refresh(self, refresh_token):
        return self.send(ApiRequest("POST", REFRESH_PATH, json={"refresh": refresh_token}, authenticated=False))

    def calls(self, method, path):
        return [sent for sent in self.sent if (sent.method, sent.path) == (method, path)]

    @property
    def refresh_calls(self):
        return self.calls("POST", REFRESH_PATH)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def store():
    return InMemoryCredentialStore(
        {ACCESS_TOKEN_KEY: "access-1", REFRESH_TOKEN_KEY: "refresh-1"}
    )


@pytest.fixture
def session(store, gateway):
    return SessionManager(store, gateway=gateway)


@pytest.fixture
def log_book(session):
    return LogBookService(session)


def make_entries(*spans):
    """``make_entries(("off_duty", "00:00", "08:00"), ...)``"""
    return [
        DutyStatusEntry.from_dict({"status": status, "start_time": start, "end_time": end})
        for status, start, end in spans
    ]


FULL_DAY = (
    ("off_duty", "00:00", "06:00"),
    ("on_duty_not_driving", "06:00", "07:00"),
    ("driving", "07:00", "12:00"),
    ("off_duty", "12:00", "12:30"),
    ("driving", "12:30", "17:30"),
    ("on_duty_not_driving", "17:30", "18:00"),
    ("sleeper_berth", "18:00", "00:00"),
)


def log_record(log_id=7, is_submitted=False, **overrides):
    """A backend daily log record."""
    record = {
        "id": log_id,
        "date": "2024-03-14",
        "start_location": "Dallas, TX",
        "end_location": "Tulsa, OK",
        "carrier_name": "Red River Freight",
        "vehicle_id": "TRK-42",
        "total_miles": "257.50",
        "remarks": "",
        "is_submitted": is_submitted,
        "total_driving_hours": 10.0,
        "duty_status_entries": [
            {"status": status, "start_time": f"{start}:00", "end_time": f"{end}:00", "duration_minutes": 0}
            for status, start, end in FULL_DAY
        ],
    }
    record.update(overrides)
    return record


@pytest.fixture
def new_log():
    return DailyLog(
        date=date(2024, 3, 14),
        start_location="Dallas, TX",
        end_location="Tulsa, OK",
        carrier_name="Red River Freight",
        vehicle_id="TRK-42",
        total_miles="257.5",
        duty_status_entries=make_entries(*FULL_DAY),
    )


@pytest.fixture
def draft_log():
    return DailyLog.from_api(log_record())
