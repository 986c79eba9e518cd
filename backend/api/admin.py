from django.contrib import admin
from .models import DiaryEntry, MediaItem, SessionToken

class MediaItemInline(admin.TabularInline):
    model = MediaItem
    fields = ("sort_order", "name", "mime_type", "created_at")
    readonly_fields = ("sort_order", "name", "mime_type", "created_at")
    extra = 0
    # les médias arrivent par l'API (base64), pas par l'admin
    def has_add_permission(self, request, obj=None): return False

@admin.register(DiaryEntry)
class DiaryEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "date", "title", "mood", "owner", "created_at", "updated_at")
    list_filter = ("mood", "date")
    search_fields = ("title", "content", "tags")
    readonly_fields = ("owner", "created_at", "updated_at")
    inlines = [MediaItemInline]
    def save_model(self, request, obj, form, change):
        if not change:
            obj.owner = request.user
        super().save_model(request, obj, form, change)

@admin.register(MediaItem)
class MediaItemAdmin(admin.ModelAdmin):
    list_display = ("id", "entry", "sort_order", "name", "mime_type", "created_at")
    exclude = ("data",)
    def has_add_permission(self, request): return False

@admin.register(SessionToken)
class SessionTokenAdmin(admin.ModelAdmin):
    list_display = ("username", "expires_at", "created_at")
    readonly_fields = ("token", "user", "username", "expires_at", "created_at")
    def has_add_permission(self, request): return False
