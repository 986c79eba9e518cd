# backend/api/exceptions.py
import logging

from django.core.exceptions import RequestDataTooBig
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler

# PayloadTooLarge vit dans parsers : rest_framework.views charge DEFAULT_PARSER_CLASSES à l'import
from .parsers import PayloadTooLarge

logger = logging.getLogger(__name__)


def _flatten_errors(data):
    """{"title": ["required"]} -> "title: required" (un seul message lisible)."""
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        parts = []
        for field, value in data.items():
            msg = _flatten_errors(value)
            if not msg:
                continue
            parts.append(msg if field == "non_field_errors" else f"{field}: {msg}")
        return "; ".join(parts)
    if isinstance(data, (list, tuple)):
        return "; ".join(m for m in (_flatten_errors(v) for v in data) if m)
    return str(data)


def diary_exception_handler(exc, context):
    """Toutes les erreurs sortent en {"error": "..."}."""
    if isinstance(exc, RequestDataTooBig):
        exc = PayloadTooLarge()
    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled error in %s", type(view).__name__ if view else "view", exc_info=exc)
        return Response({"error": str(exc) or type(exc).__name__}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, NotAuthenticated):
        # DRF a déjà posé le statut (401/403) et WWW-Authenticate sur exc
        response.data = {"error": "Login required."}
    else:
        response.data = {"error": _flatten_errors(response.data)}
    return response
