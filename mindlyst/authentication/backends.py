# authentication/backends.py
from django.conf import settings
from rest_framework.authentication import BaseAuthentication

from .directory import get_user_directory
from .sessions import get_session_store


def resolve_session_user(token):
    """Return the user owning an unexpired session ``token``, or None."""
    if not token:
        return None
    session = get_session_store().get(token)
    if session is None:
        return None
    return get_user_directory().get(session.user_id)


class SessionTokenAuthentication(BaseAuthentication):
    """Authenticates requests from the ``mindlyst_session`` cookie."""

    def authenticate(self, request):
        token = request.COOKIES.get(settings.MINDLYST_SESSION_COOKIE)
        user = resolve_session_user(token)
        if user is None:
            return None
        return (user, token)

    def authenticate_header(self, request):
        # Any value here makes DRF answer 401 instead of 403
        return 'Session realm="api"'
