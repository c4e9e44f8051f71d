from django.contrib import admin

from .models import DispatchCall


@admin.register(DispatchCall)
class DispatchCallAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "title", "location", "status", "assigned_unit_id", "created_at")
    list_filter = ("status",)
    search_fields = ("id", "code", "title", "location")
    readonly_fields = ("id", "report_id", "report_summary", "created_at", "updated_at")
