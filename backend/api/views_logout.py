import logging

from django.conf import settings
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .sessions import close_session
from .views import request_body

logger = logging.getLogger(__name__)


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def api_logout(request):
    # jeton dans le corps {token} ou, à défaut, dans l'en-tête
    token = request_body(request).get("token") or request.headers.get(settings.DIARY_SESSION_HEADER)
    if close_session(str(token or "").strip()):
        logger.info("Session closed")
    return Response({"success": True})
