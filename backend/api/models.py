from django.conf import settings
from django.db import models
from django.utils import timezone

MOODS = ["😊", "😌", "🤩", "😢", "😤", "😴"]
MOOD_LABELS = {"😊": "joy", "😌": "calm", "🤩": "excited", "😢": "sad", "😤": "angry", "😴": "tired"}


class DiaryEntry(models.Model):
    # id généré par le client (uuid côté front)
    id = models.CharField(primary_key=True, max_length=64)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="diary_entries")
    date = models.DateField(default=timezone.localdate)
    title = models.CharField(max_length=200)
    content = models.TextField()
    mood = models.CharField(max_length=8, blank=True, default="", choices=[(m, MOOD_LABELS[m]) for m in MOODS])
    tags = models.TextField(blank=True, default="")  # "a,b,c"
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    class Meta:
        ordering = ["-date", "-created_at"]
        verbose_name_plural = "diary entries"
    def __str__(self): return f"[{self.date}] {self.title}"

    @property
    def tag_list(self):
        return [t for t in self.tags.split(",") if t]


class MediaItem(models.Model):
    entry = models.ForeignKey(DiaryEntry, on_delete=models.CASCADE, related_name="media")
    sort_order = models.PositiveIntegerField(default=0)
    name = models.CharField(max_length=255, blank=True, default="")
    mime_type = models.CharField(max_length=100, blank=True, default="", db_column="type")
    data = models.TextField()  # base64, un fichier par ligne
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        ordering = ["sort_order", "id"]
        constraints = [
            models.UniqueConstraint(fields=["entry", "sort_order"], name="uniq_media_sort_per_entry"),
        ]
    def __str__(self): return f"{self.entry_id}#{self.sort_order} {self.name}"


class SessionToken(models.Model):
    token = models.CharField(primary_key=True, max_length=64)  # 32 octets en hex
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="diary_sessions")
    username = models.CharField(max_length=150)
    expires_at = models.DateTimeField(db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    class Meta:
        ordering = ["-created_at"]
    def __str__(self): return f"{self.username} (exp. {self.expires_at:%Y-%m-%d %H:%M})"

    def is_expired(self, now=None):
        return self.expires_at < (now or timezone.now())
