# backend/api/views_media.py
from django.conf import settings
from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .models import DiaryEntry, MediaItem
from .permissions import IsOwnerOrReadOnly
from .serializers import MediaItemSerializer, MediaUploadSerializer
from .views import locked_entry, request_body


class MediaView(APIView):
    """
    /api/media?entry_id=...

    POST n'accepte qu'un fichier par appel : chaque requête reste sous le
    plafond de taille, le client envoie les fichiers l'un après l'autre.
    """
    permission_classes = [IsOwnerOrReadOnly]

    def get(self, request):
        entry_id = request.query_params.get("entry_id")
        if not entry_id:
            return Response([])
        if settings.DIARY_PRIVATE_READS:
            entry = DiaryEntry.objects.filter(pk=entry_id).first()
            if entry is None:
                raise NotFound("Entry not found.")
            self.check_object_permissions(request, entry)
        items = MediaItem.objects.filter(entry_id=entry_id).order_by("sort_order", "id")
        return Response(MediaItemSerializer(items, many=True).data)

    def post(self, request):
        serializer = MediaUploadSerializer(data=request_body(request))
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        with transaction.atomic():
            entry = locked_entry(data["entry_id"])
            if entry is None:
                raise NotFound("Entry not found.")
            self.check_object_permissions(request, entry)
            media = services.add_media(entry, data)
        return Response({"success": True, "id": media.pk}, status=201)

    def delete(self, request):
        entry_id = request.query_params.get("entry_id")
        if not entry_id:
            raise ValidationError({"entry_id": "This field is required."})

        with transaction.atomic():
            entry = locked_entry(entry_id)
            # entrée déjà supprimée : on nettoie quand même les médias orphelins
            if entry is not None:
                self.check_object_permissions(request, entry)
            deleted = services.clear_media(entry_id)
        return Response({"success": True, "deleted": deleted})
