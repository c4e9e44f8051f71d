"""
Dispatch app serializers.
"""

from __future__ import annotations

from rest_framework import serializers

from core.models import EntityType
from core.serializers import ActorRequestSerializer, serialize_timeline

from .models import CallStatus, DispatchCall


class DispatchFeedFilterSerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500)


class DispatchCallSerializer(serializers.ModelSerializer):
    """A call together with its timeline, newest event first."""

    origin = serializers.SerializerMethodField()
    timeline = serializers.SerializerMethodField()

    class Meta:
        model = DispatchCall
        fields = [
            "id", "code", "title", "location", "origin", "status",
            "assigned_unit_id", "report_summary", "report_id",
            "created_at", "updated_at", "timeline",
        ]
        read_only_fields = fields

    def get_origin(self, obj: DispatchCall) -> dict | None:
        return obj.origin

    def get_timeline(self, obj: DispatchCall) -> list[dict]:
        return serialize_timeline(EntityType.CALL, obj.pk)


class SeedCallSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    title = serializers.CharField(max_length=255, required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)


class AcceptCallSerializer(ActorRequestSerializer):
    unit_id = serializers.CharField(max_length=40)


class CallStatusSerializer(ActorRequestSerializer):
    status = serializers.ChoiceField(choices=CallStatus.choices)
    note = serializers.CharField(required=False, allow_blank=True)


class CallNoteSerializer(ActorRequestSerializer):
    note = serializers.CharField(allow_blank=True)


class CloseCallSerializer(ActorRequestSerializer):
    report = serializers.CharField(allow_blank=True, trim_whitespace=False)
