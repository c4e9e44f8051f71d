from django.contrib import admin

from .models import Bolo


@admin.register(Bolo)
class BoloAdmin(admin.ModelAdmin):
    list_display = ("id", "bolo_type", "priority", "title", "status", "expires_at", "created_at")
    list_filter = ("bolo_type", "priority", "status")
    search_fields = ("id", "title", "description")
    readonly_fields = ("id", "created_by_cid", "created_by_name", "created_at", "updated_at")
