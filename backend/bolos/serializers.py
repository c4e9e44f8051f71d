"""
BOLO app serializers.
"""

from __future__ import annotations

from rest_framework import serializers

from core.constants import MAX_BOLO_EXPIRY_MINUTES
from core.models import EntityType
from core.serializers import ActorRequestSerializer, serialize_timeline

from .models import Bolo, BoloPriority, BoloStatus, BoloType


class BoloFilterSerializer(serializers.Serializer):
    query = serializers.CharField(required=False, allow_blank=True, max_length=255)
    status = serializers.ChoiceField(choices=BoloStatus.choices, required=False)
    type = serializers.ChoiceField(choices=BoloType.choices, required=False)
    priority = serializers.ChoiceField(choices=BoloPriority.choices, required=False)
    actionable_only = serializers.BooleanField(required=False, default=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=1000)


class BoloListSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="bolo_type", read_only=True)
    is_expired = serializers.BooleanField(read_only=True)
    is_actionable = serializers.BooleanField(read_only=True)

    class Meta:
        model = Bolo
        fields = [
            "id", "type", "priority", "title", "tags", "people", "vehicles",
            "status", "expires_at", "is_expired", "is_actionable",
            "created_by_cid", "created_by_name", "created_at", "updated_at",
        ]
        read_only_fields = fields


class BoloDetailSerializer(BoloListSerializer):
    timeline = serializers.SerializerMethodField()

    class Meta(BoloListSerializer.Meta):
        fields = BoloListSerializer.Meta.fields + ["description", "report_ids", "timeline"]
        read_only_fields = fields

    def get_timeline(self, obj: Bolo) -> list[dict]:
        return serialize_timeline(EntityType.BOLO, obj.pk)


class BoloCreateSerializer(ActorRequestSerializer):
    type = serializers.ChoiceField(choices=BoloType.choices)
    priority = serializers.ChoiceField(choices=BoloPriority.choices)
    title = serializers.CharField(max_length=255, allow_blank=True)
    description = serializers.CharField(allow_blank=True)
    tags = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    people = serializers.ListField(child=serializers.IntegerField(), required=False)
    vehicles = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    report_ids = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    expires_in_minutes = serializers.IntegerField(
        required=False, allow_null=True, max_value=MAX_BOLO_EXPIRY_MINUTES,
    )


class BoloStatusSerializer(ActorRequestSerializer):
    status = serializers.ChoiceField(choices=BoloStatus.choices)


class BoloSightingSerializer(ActorRequestSerializer):
    note = serializers.CharField(required=False, allow_blank=True)
