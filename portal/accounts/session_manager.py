"""
Session/Token Lifecycle Manager.

Makes authentication transparent to the rest of the portal:

- attaches the access credential to every authenticated request
- on a 401, refreshes the access credential and re-sends the request once
- when refresh is impossible, clears both credentials and sends
  ``session_expired`` so the driver is asked to log in again

Every other component reaches the backend through ``SessionManager.dispatch``.
"""

import logging
import threading
from typing import Optional, Tuple

from common.api_gateway import ApiRequest, ApiResponse, get_default_gateway
from common.error_payload import ErrorPayload
from common.exceptions import AuthenticationError

from .credential_store import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, CredentialStore
from .serializers import AccessTokenSerializer, LoginSerializer, TokenPairSerializer
from .signals import session_expired

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login/"


class SessionManager:
    """
    Driver session bound to one credential store.

    A manager may be shared by threads. Refreshes are serialised by a lock:
    a request whose access token was already replaced by a concurrent refresh
    reuses the new token instead of calling the refresh endpoint again, and
    only the request that ends the session sends ``session_expired``. Each
    request is still re-sent at most once.

    The lock belongs to the manager, so it only serialises requests made
    through the same instance. ``DriverSessionMiddleware`` builds one manager
    per HTTP request: two browser requests sharing a Django session each run
    their own refresh.
    """

    def __init__(self, store: CredentialStore, gateway=None):
        """Initialize session manager with its credential store."""
        self.store = store
        self.gateway = gateway or get_default_gateway()
        self.requires_login = False
        self._refresh_lock = threading.Lock()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def access_token(self) -> Optional[str]:
        return self.store.get(ACCESS_TOKEN_KEY)

    @property
    def refresh_token(self) -> Optional[str]:
        return self.store.get(REFRESH_TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        """Presence check only; the token's own expiry is not inspected."""
        return bool(self.access_token)

    def login(self, username: str, password: str) -> None:
        """
        Exchange username and password for a credential pair.

        Stored credentials are only replaced when the backend accepted the
        login.

        Raises:
            AuthenticationError: If the credentials were rejected
            NetworkError: If the backend could not be reached
            ApiError: If the backend failed for another reason
        """
        credentials = LoginSerializer(data={"username": username, "password": password})
        if not credentials.is_valid():
            raise AuthenticationError(ErrorPayload.from_data(credentials.errors).first_message())

        response = self.gateway.send(
            ApiRequest("POST", LOGIN_PATH, json=credentials.validated_data, authenticated=False)
        )

        if response.status_code in (400, 401, 403):
            self.logger.warning(f"Login rejected for {username}: status {response.status_code}")
            raise AuthenticationError(
                response.error.first_message() or "Invalid username or password."
            )
        response.raise_for_error()

        tokens = TokenPairSerializer(data=response.data)
        if not tokens.is_valid():
            self.logger.error("Login response did not include a credential pair")
            raise AuthenticationError("Login failed. Please try again.")

        self.store.set_many(
            {
                ACCESS_TOKEN_KEY: tokens.validated_data["access"],
                REFRESH_TOKEN_KEY: tokens.validated_data["refresh"],
            }
        )
        self.requires_login = False
        self.logger.info(f"Driver {username} logged in")

    def logout(self) -> None:
        """Forget both credentials. Safe to call repeatedly."""
        self.store.clear_many()
        self.requires_login = False
        self.logger.info("Driver logged out")

    def dispatch(self, request: ApiRequest) -> ApiResponse:
        """
        Send a request on behalf of the driver.

        Returns the backend response. A 401 comes back only when the refresh
        protocol could not recover; by then the credentials have already been
        cleared (or the request was already retried once).

        Raises:
            NetworkError: If the backend could not be reached
        """
        if not request.authenticated:
            request.set_bearer(None)
            return self.gateway.send(request)

        request.set_bearer(self.access_token)
        response = self.gateway.send(request)

        if not response.is_auth_failure:
            return response

        if request.retried:
            self.logger.warning(
                f"{request.method} {request.path} rejected again after refresh"
            )
            return response

        request.retried = True
        access_token, ended = self._refresh_access_token(stale_token=request.bearer_token)
        if access_token is None:
            if ended:
                self._announce_expiry(request)
            return response

        return self.dispatch(request)

    def _refresh_access_token(self, stale_token: Optional[str]) -> Tuple[Optional[str], bool]:
        """
        Renew the access token.

        Returns:
            ``(access_token, False)`` on success, ``(None, True)`` if this call
            ended the session, ``(None, False)`` if a concurrent request had
            already ended it

        Credentials are cleared before the lock is released when renewal
        fails, so a concurrent request never retries a rejected refresh token.
        """
        with self._refresh_lock:
            current = self.access_token
            if current and current != stale_token:
                self.logger.debug("Access token already refreshed by a concurrent request")
                return current, False

            refresh_token = self.refresh_token
            if not refresh_token:
                self.logger.info("No refresh token stored; session cannot be renewed")
                return None, self._end_session()

            response = self.gateway.refresh(refresh_token)
            if not response.ok:
                self.logger.warning(f"Token refresh rejected: status {response.status_code}")
                return None, self._end_session()

            serializer = AccessTokenSerializer(data=response.data)
            if not serializer.is_valid():
                self.logger.error("Token refresh response did not include an access token")
                return None, self._end_session()

            access_token = serializer.validated_data["access"]
            self.store.set(ACCESS_TOKEN_KEY, access_token)
            self.logger.info("Access token refreshed")
            return access_token, False

    def _end_session(self) -> bool:
        """Clear credentials. True unless the session had already ended."""
        already_ended = self.requires_login
        self.store.clear_many()
        self.requires_login = True
        return not already_ended

    def _announce_expiry(self, request: ApiRequest) -> None:
        self.logger.warning(
            f"Session expired during {request.method} {request.path}; login required"
        )
        session_expired.send(sender=self.__class__, manager=self, request=request)
