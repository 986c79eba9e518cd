import base64
import binascii
import re

from django.conf import settings
from rest_framework import serializers

from .models import MOODS, DiaryEntry, MediaItem

# "data:image/png;base64,...." (FileReader.readAsDataURL côté navigateur)
DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,;]*)*;base64,", re.IGNORECASE)
MEDIA_KINDS = ("image/", "video/")


class MediaItemSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="mime_type", read_only=True)
    class Meta:
        model = MediaItem
        fields = ["id", "sort_order", "name", "type", "data"]


class DiaryEntrySerializer(serializers.ModelSerializer):
    owner = serializers.CharField(source="owner.username", read_only=True)
    media_count = serializers.IntegerField(read_only=True)
    class Meta:
        model = DiaryEntry
        fields = ["id", "date", "title", "content", "mood", "tags", "owner", "media_count", "created_at", "updated_at"]


class DiaryEntryWithMediaSerializer(DiaryEntrySerializer):
    media = MediaItemSerializer(many=True, read_only=True)
    class Meta(DiaryEntrySerializer.Meta):
        fields = DiaryEntrySerializer.Meta.fields + ["media"]


class TagsField(serializers.Field):
    """Accepte ["a", "b"] ou "a, b" et renvoie "a,b"."""
    default_error_messages = {"invalid": "Tags must be a list or a comma-separated string."}

    def to_internal_value(self, data):
        if isinstance(data, str):
            items = data.split(",")
        elif isinstance(data, (list, tuple)):
            items = [str(t) for t in data]
        else:
            self.fail("invalid")
        return ",".join(t.strip() for t in items if t.strip())

    def to_representation(self, value):
        return value


class MediaPayloadSerializer(serializers.Serializer):
    """Un seul fichier encodé en base64."""
    sort_order = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    type = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    data = serializers.CharField()

    def validate(self, attrs):
        payload = "".join(attrs["data"].split())
        mime = attrs.get("type") or ""

        match = DATA_URL_RE.match(payload)
        if match:
            payload = payload[match.end():]
            mime = mime or (match.group("mime") or "")

        try:
            raw = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise serializers.ValidationError({"data": "Invalid base64 payload."})
        if not raw:
            raise serializers.ValidationError({"data": "Empty media payload."})
        if len(raw) > settings.DIARY_MEDIA_MAX_BYTES:
            raise serializers.ValidationError(
                {"data": f"Media item exceeds {settings.DIARY_MEDIA_MAX_BYTES} bytes."}
            )
        if mime and not mime.lower().startswith(MEDIA_KINDS):
            raise serializers.ValidationError({"type": "Only image/* and video/* media are accepted."})

        attrs["data"] = payload
        attrs["type"] = mime.lower()
        return attrs


class MediaUploadSerializer(MediaPayloadSerializer):
    entry_id = serializers.CharField(max_length=64)


class EntryWriteSerializer(serializers.Serializer):
    # les champs inconnus (password_hash, owner, ...) sont ignorés
    id = serializers.CharField(max_length=64)
    date = serializers.DateField(required=False, allow_null=True)
    title = serializers.CharField(max_length=200)
    content = serializers.CharField(trim_whitespace=False)
    mood = serializers.ChoiceField(choices=MOODS, required=False, allow_blank=True, allow_null=True)
    tags = TagsField(required=False, allow_null=True)
    media = MediaPayloadSerializer(many=True, required=False)

    def validate_media(self, items):
        orders = [m.get("sort_order") for m in items if m.get("sort_order") is not None]
        if len(orders) != len(set(orders)):
            raise serializers.ValidationError("Duplicate sort_order in media.")
        return items
