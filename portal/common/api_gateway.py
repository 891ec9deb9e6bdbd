"""
API Gateway for the HOS backend.

The only network-facing collaborator of the portal. Sends JSON requests to
the backend configured in ``settings.HOS_API`` and hands back decoded
responses. It knows nothing about tokens beyond the headers it is given:
credential handling belongs to ``accounts.session_manager``.
"""

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional

import requests
from django.conf import settings
from rest_framework.utils.encoders import JSONEncoder

from .error_payload import ErrorPayload
from .exceptions import ApiError, AuthenticationError, NetworkError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 10

REFRESH_PATH = "/auth/refresh/"


@dataclass
class ApiRequest:
    """
    One outbound call to the backend.

    ``retried`` is set by the session manager once the request has been
    re-sent after a token refresh; it is never reset.
    """

    method: str
    path: str
    json: Optional[object] = None
    headers: Dict[str, str] = field(default_factory=dict)
    authenticated: bool = True
    retried: bool = False

    def set_bearer(self, token: Optional[str]) -> None:
        """Attach (or strip) the bearer credential."""
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        else:
            self.headers.pop("Authorization", None)

    @property
    def bearer_token(self) -> Optional[str]:
        value = self.headers.get("Authorization", "")
        if value.startswith("Bearer "):
            return value[len("Bearer "):]
        return None


class ApiResponse:
    """Decoded backend response."""

    def __init__(self, status_code: int, data=None, request: Optional[ApiRequest] = None):
        self.status_code = status_code
        self.data = data
        self.request = request

    def __repr__(self):
        return f"<ApiResponse {self.status_code}>"

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code == 401

    @property
    def error(self) -> Optional[ErrorPayload]:
        """Normalised error payload, or None for a successful response."""
        if self.ok:
            return None
        return ErrorPayload.from_data(self.data)

    def raise_for_error(self) -> "ApiResponse":
        """
        Raise the matching portal exception for a failed response.

        Returns the response itself when it succeeded so calls can be chained.

        Raises:
            AuthenticationError: 401 left over after the refresh protocol
            ValidationError: 400, or any 4xx carrying field errors
            ApiError: Everything else
        """
        if self.ok:
            return self

        payload = self.error
        if self.is_auth_failure:
            raise AuthenticationError()

        if self.status_code == 400 or (self.status_code < 500 and payload.is_field_errors):
            raise ValidationError.from_payload(payload)

        raise ApiError(
            payload.first_message() or f"Request failed with status {self.status_code}.",
            status_code=self.status_code,
        )


class ApiGateway:
    """
    Thin JSON client for the HOS backend.

    Transport failures become ``NetworkError``; HTTP error statuses are
    returned as ``ApiResponse`` objects so callers can inspect them.
    """

    def __init__(self, base_url=None, timeout=None, session=None):
        """Initialize gateway with configuration."""
        config = getattr(settings, "HOS_API", {})
        self.base_url = (base_url or config.get("BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout or config.get("TIMEOUT") or DEFAULT_TIMEOUT
        self.http = session or requests.Session()
        self.http.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def send(self, request: ApiRequest) -> ApiResponse:
        """
        Send one request.

        Raises:
            NetworkError: If no response was received
        """
        body = None
        if request.json is not None:
            body = json.dumps(request.json, cls=JSONEncoder)

        try:
            response = self.http.request(
                request.method,
                self.url_for(request.path),
                data=body,
                headers=dict(request.headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.logger.error(f"{request.method} {request.path} failed: {str(e)}")
            raise NetworkError() from e

        self.logger.debug(f"{request.method} {request.path} -> {response.status_code}")
        return ApiResponse(response.status_code, self._decode(response), request=request)

    def refresh(self, refresh_token: str) -> ApiResponse:
        """Exchange a refresh credential for a new access credential."""
        return self.send(
            ApiRequest(
                "POST",
                REFRESH_PATH,
                json={"refresh": refresh_token},
                authenticated=False,
            )
        )

    @staticmethod
    def _decode(response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text


@lru_cache(maxsize=None)
def get_default_gateway() -> ApiGateway:
    """Process-wide gateway sharing one connection pool."""
    return ApiGateway()
