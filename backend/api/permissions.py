from django.conf import settings
from rest_framework import permissions


class IsOwner(permissions.BasePermission):
    message = "You are not the owner of this entry."
    def has_object_permission(self, request, view, obj):
        return getattr(obj, "owner_id", None) == request.user.id
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)


class IsOwnerOrReadOnly(IsOwner):
    """Lecture libre (sauf DIARY_PRIVATE_READS), écriture réservée au propriétaire."""
    def _public_read(self, request):
        return request.method in permissions.SAFE_METHODS and not settings.DIARY_PRIVATE_READS
    def has_permission(self, request, view):
        return self._public_read(request) or super().has_permission(request, view)
    def has_object_permission(self, request, view, obj):
        return self._public_read(request) or super().has_object_permission(request, view, obj)
