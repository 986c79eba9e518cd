import logging

from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .sessions import open_session
from .views import request_body

logger = logging.getLogger(__name__)


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def api_login(request):
    data = request_body(request)
    username = data.get("username") or data.get("email")
    password = data.get("password")
    if not username or not password:
        return Response({"error": "Missing credentials"}, status=400)
    user = authenticate(request, username=username, password=password)
    if not user:
        logger.warning("Failed login for %r", username)
        return Response({"error": "Invalid credentials"}, status=401)
    session = open_session(user)
    update_last_login(None, user)
    logger.info("Login ok for %s (session expires %s)", user.get_username(), session.expires_at.isoformat())
    return Response({
        "success": True,
        "token": session.token,
        "username": session.username,
        "expires_at": session.expires_at,
    })
