from django.contrib import admin

from .models import Officer, Unit


class OfficerInline(admin.TabularInline):
    model = Officer
    extra = 0
    fields = ("cid", "name", "on_duty", "unit_joined_at")
    readonly_fields = ("unit_joined_at",)


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ("id", "callsign", "label", "status", "updated_at")
    list_filter = ("status",)
    search_fields = ("callsign", "label")
    inlines = [OfficerInline]


@admin.register(Officer)
class OfficerAdmin(admin.ModelAdmin):
    list_display = ("cid", "name", "on_duty", "unit")
    list_filter = ("on_duty",)
    search_fields = ("name",)
