from django.contrib import admin

from .models import EvidenceItem


@admin.register(EvidenceItem)
class EvidenceItemAdmin(admin.ModelAdmin):
    list_display = ("id", "label", "evidence_type", "status", "holder", "report_id", "created_at")
    list_filter = ("evidence_type", "status")
    search_fields = ("id", "label", "description", "holder", "report_id")
    readonly_fields = ("id", "status", "created_at", "updated_at")
