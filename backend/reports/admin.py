from django.contrib import admin

from .models import Report, TagCatalogEntry


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ("id", "report_type", "title", "status", "author_name", "created_at")
    list_filter = ("report_type", "status")
    search_fields = ("id", "title", "location", "author_name")
    readonly_fields = (
        "id", "summary", "author_cid", "author_name", "last_editor_cid",
        "last_editor_name", "submitted_at", "created_at", "updated_at",
    )


@admin.register(TagCatalogEntry)
class TagCatalogEntryAdmin(admin.ModelAdmin):
    list_display = ("name", "position")
    ordering = ("position",)
