import logging
import time

logger = logging.getLogger(__name__)


class RequestLogMiddleware:
    """
    Journalise les requêtes /api/* (méthode, chemin, statut, utilisateur, durée).
    Activé seulement quand DIARY_LOG_REQUESTS=true.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith("/api/"):
            return self.get_response(request)

        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        # request.user est posé par DRF sur la requête Django après authentification
        user = getattr(request, "user", None)
        username = user.get_username() if user is not None and user.is_authenticated else "-"
        logger.info(
            "%s %s -> %s user=%s %.1fms",
            request.method, request.path, response.status_code, username, elapsed_ms,
        )
        return response
