"""
Account signals.

``session_expired`` is sent when the session manager gives up on a request:
the refresh credential is missing or was rejected, both credentials have been
cleared and the driver must log in again. Receivers get ``manager`` (the
``SessionManager`` that expired) and ``request`` (the failed ``ApiRequest``).
"""

from django.dispatch import Signal

session_expired = Signal()
