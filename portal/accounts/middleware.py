"""
Driver session middleware.

Binds a ``SessionManager`` backed by the Django session to every request as
``request.driver_session``, and turns an ``AuthenticationError`` escaping a
view into a redirect to the login page.
"""

import logging

from django.conf import settings
from django.shortcuts import redirect

from common.exceptions import AuthenticationError

from .credential_store import DjangoSessionCredentialStore
from .session_manager import SessionManager

logger = logging.getLogger(__name__)


class DriverSessionMiddleware:
    """Requires ``SessionMiddleware`` earlier in ``MIDDLEWARE``."""

    def __init__(self, get_response, gateway=None):
        self.get_response = get_response
        self.gateway = gateway

    def __call__(self, request):
        store = DjangoSessionCredentialStore(request.session)
        request.driver_session = SessionManager(store, gateway=self.gateway)
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not isinstance(exception, AuthenticationError):
            return None
        driver_session = getattr(request, "driver_session", None)
        if driver_session is not None:
            driver_session.logout()
        logger.info(f"Authentication required for {request.path}; redirecting to login")
        return redirect(settings.LOGIN_URL)
