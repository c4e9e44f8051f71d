"""
Cases app serializers.

Structure
---------
1. Filter / query-param serializers
2. Case request serializers
3. Case serializers
4. Workflow action serializers
"""

from __future__ import annotations

from rest_framework import serializers

from core.models import EntityType
from core.serializers import ActorRequestSerializer, serialize_timeline

from .models import Case, CasePriority, CaseRequest, CaseRequestStatus, CaseStatus


# ═══════════════════════════════════════════════════════════════════
#  1. Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseRequestFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CaseRequestStatus.choices, required=False)


class CaseFilterSerializer(serializers.Serializer):
    query = serializers.CharField(required=False, allow_blank=True, max_length=255)
    status = serializers.ChoiceField(choices=CaseStatus.choices, required=False)


# ═══════════════════════════════════════════════════════════════════
#  2. Case Request Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseRequestSerializer(serializers.ModelSerializer):
    """A request with its decision fields and history."""

    ts = serializers.DateTimeField(source="created_at", read_only=True)
    timeline = serializers.SerializerMethodField()

    class Meta:
        model = CaseRequest
        fields = [
            "id", "ts", "report_id", "report_title", "note", "status",
            "created_by_cid", "created_by_name",
            "decided_by_cid", "decided_by_name", "decided_at",
            "case_id", "case_number", "timeline",
        ]
        read_only_fields = fields

    def get_timeline(self, obj: CaseRequest) -> list[dict]:
        return serialize_timeline(EntityType.CASE_REQUEST, obj.pk)


class CaseRequestCreateSerializer(ActorRequestSerializer):
    report_id = serializers.CharField(max_length=40, allow_blank=True)
    report_title = serializers.CharField(max_length=255, required=False, allow_blank=True)
    note = serializers.CharField(required=False, allow_blank=True)


# ═══════════════════════════════════════════════════════════════════
#  3. Case Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseListSerializer(serializers.ModelSerializer):

    class Meta:
        model = Case
        fields = [
            "id", "case_number", "title", "status", "priority", "location",
            "tags", "created_at", "updated_at",
        ]
        read_only_fields = fields


class CaseDetailSerializer(CaseListSerializer):

    timeline = serializers.SerializerMethodField()

    class Meta(CaseListSerializer.Meta):
        fields = CaseListSerializer.Meta.fields + [
            "description", "linked_report_ids", "linked_evidence_ids",
            "linked_bolo_ids", "created_by_cid", "created_by_name", "timeline",
        ]
        read_only_fields = fields

    def get_timeline(self, obj: Case) -> list[dict]:
        return serialize_timeline(EntityType.CASE, obj.pk)


class CaseCreateSerializer(ActorRequestSerializer):
    title = serializers.CharField(max_length=255, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    priority = serializers.ChoiceField(choices=CasePriority.choices, required=False)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)


class ApprovalResultSerializer(serializers.Serializer):
    """Response of ``approve``: the new case and the decided request."""

    case = CaseDetailSerializer()
    request = CaseRequestSerializer()


# ═══════════════════════════════════════════════════════════════════
#  4. Workflow Action Serializers
# ═══════════════════════════════════════════════════════════════════


class CaseDecisionSerializer(ActorRequestSerializer):
    """Approve needs only the actor; reject may add a reason."""

    reason = serializers.CharField(required=False, allow_blank=True)


class CaseLinkSerializer(ActorRequestSerializer):
    report_ids = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    evidence_ids = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    bolo_ids = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)


class CaseStatusSerializer(ActorRequestSerializer):
    status = serializers.ChoiceField(choices=CaseStatus.choices)
    note = serializers.CharField(required=False, allow_blank=True)
