from django.contrib import admin

from .models import AuditEvent


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ("entity_type", "entity_id", "seq", "ts",
                    "actor_cid", "actor_name", "action")
    list_filter = ("entity_type", "action")
    search_fields = ("entity_id", "actor_name", "note")
    readonly_fields = ("entity_type", "entity_id", "seq", "ts", "actor_cid",
                       "actor_name", "action", "note", "details")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
