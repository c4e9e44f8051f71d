from django.contrib import admin

from .models import Case, CaseNumberSequence, CaseRequest


@admin.register(CaseRequest)
class CaseRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "report_id", "status", "created_by_name",
                    "decided_by_name", "case_number", "created_at")
    list_filter = ("status",)
    search_fields = ("id", "report_id", "report_title", "case_number")
    readonly_fields = ("id", "status", "decided_by_cid", "decided_by_name",
                       "decided_at", "case_id", "case_number",
                       "created_at", "updated_at")


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("case_number", "title", "status", "priority",
                    "created_at")
    list_filter = ("status", "priority")
    search_fields = ("case_number", "title", "description")
    readonly_fields = ("id", "case_number", "created_at", "updated_at")


@admin.register(CaseNumberSequence)
class CaseNumberSequenceAdmin(admin.ModelAdmin):
    list_display = ("year", "last_value")
