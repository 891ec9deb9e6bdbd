"""
Driver registration.

Creates a driver account on the backend and logs the new driver straight in.
"""

import logging
from typing import Dict

from common.api_gateway import ApiRequest
from common.exceptions import ValidationError

from .serializers import RegistrationSerializer

logger = logging.getLogger(__name__)

REGISTER_PATH = "/auth/register/"


class RegistrationService:
    """Register drivers through a ``SessionManager``."""

    def __init__(self, session_manager):
        self.session = session_manager
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def register(self, data: Dict) -> Dict:
        """
        Register a driver and log them in.

        Args:
            data: username, email, password, password2, first_name, last_name

        Returns:
            The user record created by the backend

        Raises:
            ValidationError: If the form or the backend rejected the data
            AuthenticationError: If the automatic login failed
            NetworkError: If the backend could not be reached
        """
        serializer = RegistrationSerializer(data=data)
        if not serializer.is_valid():
            raise ValidationError(serializer.errors)

        form = serializer.validated_data
        response = self.session.dispatch(
            ApiRequest("POST", REGISTER_PATH, json=dict(form), authenticated=False)
        )
        user = response.raise_for_error().data

        self.logger.info(f"Registered driver {form['username']}")
        self.session.login(form["username"], form["password"])
        return user
