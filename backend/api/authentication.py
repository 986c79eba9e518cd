# backend/api/authentication.py
from django.conf import settings
from rest_framework.authentication import BaseAuthentication

from .sessions import resolve_session


class SessionTokenAuthentication(BaseAuthentication):
    """
    Authentifie via l'en-tête X-Session-Token.

    Un jeton absent, inconnu ou expiré laisse la requête anonyme : les
    lectures publiques passent, les écritures tombent sur 401 via la permission.
    """

    def authenticate(self, request):
        token = (request.headers.get(settings.DIARY_SESSION_HEADER) or "").strip()
        if not token:
            return None
        session = resolve_session(token)
        if session is None:
            return None
        return (session.user, session)

    def authenticate_header(self, request):
        return f'{settings.DIARY_SESSION_HEADER} realm="api"'
