# backend/api/services.py
"""
Opérations sur le stockage (entrées + médias).

Les vues ouvrent la transaction, verrouillent l'entrée et vérifient le
propriétaire; les fonctions ci-dessous ne font que lire/écrire.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count, Max
from rest_framework.exceptions import ValidationError

from .models import DiaryEntry, MediaItem

logger = logging.getLogger(__name__)


def entries_queryset(owner=None, include_media=False):
    qs = (
        DiaryEntry.objects.select_related("owner")
        .annotate(media_count=Count("media"))
        .order_by("-date", "-created_at")
    )
    if owner is not None:
        qs = qs.filter(owner=owner)
    if include_media:
        qs = qs.prefetch_related("media")
    return qs


def _apply_fields(entry, data):
    entry.title = data["title"]
    entry.content = data["content"]
    if data.get("date"):
        entry.date = data["date"]
    if "mood" in data:
        entry.mood = data["mood"] or ""
    if "tags" in data:
        entry.tags = data["tags"] or ""


def create_entry(owner, data):
    entry = DiaryEntry(id=data["id"], owner=owner)
    _apply_fields(entry, data)
    entry.save(force_insert=True)
    if "media" in data:
        replace_media(entry, data["media"])
    logger.info("Entry %s created by %s", entry.pk, owner.get_username())
    return entry


def update_entry(entry, data):
    # owner ne change jamais
    _apply_fields(entry, data)
    entry.save()
    if "media" in data:
        replace_media(entry, data["media"])
    logger.info("Entry %s updated", entry.pk)
    return entry


def _assign_orders(items):
    used = {m["sort_order"] for m in items if m.get("sort_order") is not None}
    nxt = 0
    for item in items:
        order = item.get("sort_order")
        if order is None:
            while nxt in used:
                nxt += 1
            order = nxt
            used.add(order)
        yield order, item


def replace_media(entry, items):
    """Remplace tous les médias de l'entrée (à appeler dans une transaction)."""
    removed = clear_media(entry.pk)
    created = []
    # une ligne par INSERT, jamais de lot
    for order, item in _assign_orders(items):
        created.append(MediaItem.objects.create(
            entry=entry,
            sort_order=order,
            name=item.get("name") or "",
            mime_type=item.get("type") or "",
            data=item["data"],
        ))
    logger.info("Entry %s media replaced (%d removed, %d added)", entry.pk, removed, len(created))
    return created


def next_sort_order(entry):
    current = MediaItem.objects.filter(entry=entry).aggregate(m=Max("sort_order"))["m"]
    return 0 if current is None else current + 1


def add_media(entry, item):
    order = item.get("sort_order")
    if order is None:
        order = next_sort_order(entry)
    elif MediaItem.objects.filter(entry=entry, sort_order=order).exists():
        raise ValidationError({"sort_order": f"sort_order {order} already used for this entry."})
    try:
        with transaction.atomic():
            media = MediaItem.objects.create(
                entry=entry,
                sort_order=order,
                name=item.get("name") or "",
                mime_type=item.get("type") or "",
                data=item["data"],
            )
    except IntegrityError:
        raise ValidationError({"sort_order": f"sort_order {order} already used for this entry."})
    logger.info("Media %s added to entry %s (sort_order=%d)", media.pk, entry.pk, order)
    return media


def clear_media(entry_id):
    deleted, _ = MediaItem.objects.filter(entry_id=entry_id).delete()
    return deleted


def delete_entry(entry):
    """Supprime les médias explicitement puis l'entrée."""
    with transaction.atomic():
        media_deleted = clear_media(entry.pk)
        entry_id = entry.pk
        entry.delete()
    logger.info("Entry %s deleted (%d media)", entry_id, media_deleted)
    return media_deleted
