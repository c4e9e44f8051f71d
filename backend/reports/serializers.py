"""
Reports app serializers.

Structure
---------
1. Filter / query-param serializers
2. Report read serializers
3. Report write serializers
4. Tag catalog and lookup projections

Normalisation of tags, involved parties and plates happens in
``services.py``; these serializers only check payload shape.
"""

from __future__ import annotations

from rest_framework import serializers

from core.models import EntityType
from core.serializers import ActorRequestSerializer, serialize_timeline

from .models import InvolvedRole, Report, ReportType


# ═══════════════════════════════════════════════════════════════════
#  1. Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class ReportFilterSerializer(serializers.Serializer):
    """Query parameters for ``GET /api/reports/``; all optional."""

    query = serializers.CharField(required=False, allow_blank=True, max_length=255)
    tag = serializers.CharField(required=False, allow_blank=True, max_length=60)
    type = serializers.ChoiceField(choices=ReportType.choices, required=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=1000)


class LookupFilterSerializer(serializers.Serializer):
    query = serializers.CharField(required=False, allow_blank=True, max_length=120)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=200)


# ═══════════════════════════════════════════════════════════════════
#  2. Report Read Serializers
# ═══════════════════════════════════════════════════════════════════


class ReportListSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="report_type", read_only=True)

    class Meta:
        model = Report
        fields = [
            "id", "type", "title", "location", "tags", "summary", "status",
            "author_cid", "author_name", "created_at", "updated_at", "submitted_at",
        ]
        read_only_fields = fields


class ReportDetailSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="report_type", read_only=True)
    timeline = serializers.SerializerMethodField()

    class Meta:
        model = Report
        fields = [
            "id", "type", "title", "location", "tags", "involved", "vehicles",
            "summary", "full_text", "status",
            "author_cid", "author_name", "last_editor_cid", "last_editor_name",
            "created_at", "updated_at", "submitted_at", "timeline",
        ]
        read_only_fields = fields

    def get_timeline(self, obj: Report) -> list[dict]:
        return serialize_timeline(EntityType.REPORT, obj.pk)


# ═══════════════════════════════════════════════════════════════════
#  3. Report Write Serializers
# ═══════════════════════════════════════════════════════════════════


class InvolvedPartySerializer(serializers.Serializer):
    cid = serializers.IntegerField()
    name = serializers.CharField(max_length=120, allow_blank=True)
    role = serializers.CharField(max_length=20, required=False, default=InvolvedRole.OTHER)


class ReportCreateSerializer(ActorRequestSerializer):
    type = serializers.ChoiceField(choices=ReportType.choices)
    title = serializers.CharField(max_length=255, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    involved = InvolvedPartySerializer(many=True, required=False)
    vehicles = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    full_text = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class ReportUpdateSerializer(ActorRequestSerializer):
    """Omitted fields keep their current value."""

    full_text = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    involved = InvolvedPartySerializer(many=True, required=False)
    vehicles = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)


class ReportSubmitSerializer(ActorRequestSerializer):
    pass


# ═══════════════════════════════════════════════════════════════════
#  4. Tag Catalog & Lookup Projections
# ═══════════════════════════════════════════════════════════════════


class TagCatalogSerializer(serializers.Serializer):
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), allow_empty=True)


class RecordReportRefSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    type = serializers.CharField()
    status = serializers.CharField()
    summary = serializers.CharField()
    created_at = serializers.DateTimeField()
    role = serializers.CharField(required=False)


class RecordBoloRefSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    type = serializers.CharField()
    priority = serializers.CharField()
    status = serializers.CharField()
    is_actionable = serializers.BooleanField()


class PersonSummarySerializer(serializers.Serializer):
    cid = serializers.IntegerField()
    name = serializers.CharField()
    report_count = serializers.IntegerField()
    bolo_count = serializers.IntegerField()


class PersonDetailSerializer(serializers.Serializer):
    cid = serializers.IntegerField()
    name = serializers.CharField()
    reports = RecordReportRefSerializer(many=True)
    bolos = RecordBoloRefSerializer(many=True)


class VehicleSummarySerializer(serializers.Serializer):
    plate = serializers.CharField()
    report_count = serializers.IntegerField()
    bolo_count = serializers.IntegerField()


class VehicleDetailSerializer(serializers.Serializer):
    plate = serializers.CharField()
    reports = RecordReportRefSerializer(many=True)
    bolos = RecordBoloRefSerializer(many=True)
