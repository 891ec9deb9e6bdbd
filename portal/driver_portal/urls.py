"""
URL configuration for the driver_portal project.

Pages are served by the front end, including the login page at
``settings.LOGIN_URL`` (``DRIVER_PORTAL_LOGIN_URL``) that expired sessions are
redirected to. The portal itself only exposes a health endpoint that reports
whether the browser session holds credentials.
"""

from django.http import JsonResponse
from django.urls import path


def health(request):
    """Liveness probe plus the driver's authentication state."""
    driver_session = getattr(request, "driver_session", None)
    return JsonResponse(
        {
            "status": "ok",
            "authenticated": bool(driver_session and driver_session.is_authenticated),
        }
    )


urlpatterns = [
    path("health/", health, name="health"),
]
