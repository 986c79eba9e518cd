# backend/api/views.py
from django.conf import settings
from django.db import IntegrityError, transaction
from django.http import JsonResponse
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .models import DiaryEntry
from .permissions import IsOwner, IsOwnerOrReadOnly
from .serializers import DiaryEntrySerializer, DiaryEntryWithMediaSerializer, EntryWriteSerializer


def request_body(request):
    """request.data peut être une liste ou un scalaire si le JSON est mal formé."""
    return request.data if isinstance(request.data, dict) else {}


def truthy(value):
    return str(value or "").lower() in {"1", "true", "yes"}


def locked_entry(entry_id):
    """Entrée verrouillée jusqu'à la fin de la transaction, ou None."""
    return DiaryEntry.objects.select_for_update().filter(pk=entry_id).first()


class EntryListView(APIView):
    permission_classes = [IsOwnerOrReadOnly]

    def get(self, request):
        include_media = truthy(request.query_params.get("include_media"))
        owner = request.user if settings.DIARY_PRIVATE_READS else None
        qs = services.entries_queryset(owner=owner, include_media=include_media)
        serializer_class = DiaryEntryWithMediaSerializer if include_media else DiaryEntrySerializer
        return Response(serializer_class(qs, many=True).data)

    def post(self, request):
        serializer = EntryWriteSerializer(data=request_body(request))
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        with transaction.atomic():
            entry = locked_entry(data["id"])
            if entry is None:
                try:
                    with transaction.atomic():
                        services.create_entry(request.user, data)
                except IntegrityError:
                    # même id créé entre-temps par une autre requête : on repasse par la mise à jour
                    entry = locked_entry(data["id"])
                    if entry is None:
                        raise
                else:
                    return Response({"success": True, "message": "Entry saved."}, status=201)
            # 403 avant toute écriture : la transaction n'a rien modifié
            self.check_object_permissions(request, entry)
            services.update_entry(entry, data)
        return Response({"success": True, "message": "Entry updated."})


class EntryDeleteView(APIView):
    permission_classes = [IsOwner]

    def post(self, request):
        entry_id = str(request_body(request).get("id") or "").strip()
        if not entry_id:
            raise ValidationError({"id": "This field is required."})

        with transaction.atomic():
            entry = locked_entry(entry_id)
            if entry is None:
                raise NotFound("Entry not found (already deleted?).")
            self.check_object_permissions(request, entry)
            services.delete_entry(entry)
        return Response({"success": True})


def healthz(_request):
    return JsonResponse({"status": "ok"})
