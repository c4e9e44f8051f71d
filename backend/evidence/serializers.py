"""
Evidence app serializers.

Contains all Request and Response serializers for the Evidence API.
Serializers handle field definitions and shape validation only; sealing
rules and report verification live in ``services.py``.

Structure
---------
1. Filter / query-param serializers
2. Evidence read serializers
3. Evidence write serializers
4. Workflow action serializers
5. Chain-of-custody serializer
"""

from __future__ import annotations

from rest_framework import serializers

from core.models import EntityType
from core.serializers import ActorRequestSerializer, serialize_timeline

from .models import EvidenceItem, EvidenceStatus, EvidenceType


# ═══════════════════════════════════════════════════════════════════
#  1. Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceFilterSerializer(serializers.Serializer):
    """
    Validates query-parameter filters for ``GET /api/evidence/``.

    All fields are optional.  The view passes the validated dict directly
    to ``EvidenceQueryService.get_filtered_queryset``.
    """

    query = serializers.CharField(required=False, allow_blank=True, max_length=255)
    status = serializers.ChoiceField(choices=EvidenceStatus.choices, required=False)
    type = serializers.ChoiceField(choices=EvidenceType.choices, required=False)
    report_id = serializers.CharField(required=False, max_length=40)
    case_id = serializers.CharField(required=False, max_length=40)


# ═══════════════════════════════════════════════════════════════════
#  2. Evidence Read Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceListSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="evidence_type", read_only=True, allow_null=True)

    class Meta:
        model = EvidenceItem
        fields = [
            "id", "label", "type", "status", "holder", "report_id", "case_id",
            "tags", "created_at", "updated_at",
        ]
        read_only_fields = fields


class EvidenceDetailSerializer(EvidenceListSerializer):
    """Full item with its events, newest first."""

    events = serializers.SerializerMethodField()

    class Meta(EvidenceListSerializer.Meta):
        fields = EvidenceListSerializer.Meta.fields + ["description", "events"]
        read_only_fields = fields

    def get_events(self, obj: EvidenceItem) -> list[dict]:
        return serialize_timeline(EntityType.EVIDENCE, obj.pk)


# ═══════════════════════════════════════════════════════════════════
#  3. Evidence Write Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceCreateSerializer(ActorRequestSerializer):
    label = serializers.CharField(max_length=255, allow_blank=True)
    holder = serializers.CharField(max_length=120, required=False, allow_blank=True)
    report_id = serializers.CharField(max_length=40, required=False, allow_blank=True, allow_null=True)
    case_id = serializers.CharField(max_length=40, required=False, allow_blank=True, allow_null=True)
    type = serializers.ChoiceField(choices=EvidenceType.choices, required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True)
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)


# ═══════════════════════════════════════════════════════════════════
#  4. Workflow Action Serializers
# ═══════════════════════════════════════════════════════════════════


class EvidenceNoteSerializer(ActorRequestSerializer):
    note = serializers.CharField(allow_blank=True)


class EvidenceTransferSerializer(ActorRequestSerializer):
    holder = serializers.CharField(max_length=120, allow_blank=True)
    note = serializers.CharField(required=False, allow_blank=True)


class EvidenceActionSerializer(ActorRequestSerializer):
    """Actions that carry nothing but the actor (seal, unlink)."""


class LinkReportSerializer(ActorRequestSerializer):
    report_id = serializers.CharField(max_length=40, allow_blank=True)


class EvidenceTagsSerializer(ActorRequestSerializer):
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), allow_empty=True)


# ═══════════════════════════════════════════════════════════════════
#  5. Chain-of-Custody Serializer
# ═══════════════════════════════════════════════════════════════════


class ChainOfCustodyEntrySerializer(serializers.Serializer):
    seq = serializers.IntegerField()
    timestamp = serializers.DateTimeField()
    action = serializers.CharField()
    performed_by = serializers.IntegerField()
    performer_name = serializers.CharField()
    holder = serializers.CharField(allow_null=True)
    note = serializers.CharField(allow_blank=True)
