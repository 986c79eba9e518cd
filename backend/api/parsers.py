# backend/api/parsers.py
from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.parsers import JSONParser


class PayloadTooLarge(APIException):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_detail = "Request body too large; upload media one file at a time."
    default_code = "payload_too_large"


class DiaryJSONParser(JSONParser):
    """JSONParser qui applique DATA_UPLOAD_MAX_MEMORY_SIZE (DRF lit le flux directement)."""

    def parse(self, stream, media_type=None, parser_context=None):
        request = (parser_context or {}).get("request")
        limit = settings.DATA_UPLOAD_MAX_MEMORY_SIZE
        if request is not None and limit is not None:
            try:
                length = int(request.META.get("CONTENT_LENGTH") or 0)
            except (TypeError, ValueError):
                length = 0
            if length > limit:
                raise PayloadTooLarge()
        return super().parse(stream, media_type=media_type, parser_context=parser_context)
