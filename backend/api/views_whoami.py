from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import SessionToken


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def whoami(request):
    u = request.user
    session = request.auth if isinstance(request.auth, SessionToken) else None
    return Response({
        "id": u.id,
        "username": u.get_username(),
        "expires_at": session.expires_at if session else None,
    })
