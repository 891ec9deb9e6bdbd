"""View decorators for driver-only pages."""

from functools import wraps

from django.conf import settings
from django.shortcuts import redirect


def driver_login_required(view_func):
    """Redirect to ``LOGIN_URL`` unless the driver holds an access token."""

    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        driver_session = getattr(request, "driver_session", None)
        if driver_session is None or not driver_session.is_authenticated:
            return redirect(settings.LOGIN_URL)
        return view_func(request, *args, **kwargs)

    return _wrapped_view
