"""
Units app serializers.

Request serializers validate payload shape only; roster rules (capacity,
single membership, callsign uniqueness) live in ``services.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from core.constants import MAX_CID
from core.models import EntityType
from core.serializers import ActorRequestSerializer, serialize_timeline

from .models import Officer, Unit, UnitStatus


# ═══════════════════════════════════════════════════════════════════
#  Read serializers
# ═══════════════════════════════════════════════════════════════════


class OfficerSerializer(serializers.ModelSerializer):
    unit_id = serializers.CharField(read_only=True, allow_null=True)
    unit_callsign = serializers.CharField(source="unit.callsign", read_only=True, default=None)

    class Meta:
        model = Officer
        fields = ["cid", "name", "on_duty", "unit_id", "unit_callsign", "updated_at"]
        read_only_fields = fields


class UnitMemberSerializer(serializers.ModelSerializer):
    class Meta:
        model = Officer
        fields = ["cid", "name", "on_duty", "unit_joined_at"]
        read_only_fields = fields


class UnitSerializer(serializers.ModelSerializer):
    """Unit with its members in joining order."""

    members = serializers.SerializerMethodField()

    class Meta:
        model = Unit
        fields = ["id", "callsign", "label", "status", "members", "created_at", "updated_at"]
        read_only_fields = fields

    def get_members(self, obj: Unit) -> list[dict]:
        members = sorted(
            obj.members.all(),
            key=lambda officer: (officer.unit_joined_at is None, officer.unit_joined_at, officer.cid),
        )
        return UnitMemberSerializer(members, many=True).data


class UnitDetailSerializer(UnitSerializer):
    timeline = serializers.SerializerMethodField()

    class Meta(UnitSerializer.Meta):
        fields = UnitSerializer.Meta.fields + ["timeline"]
        read_only_fields = fields

    def get_timeline(self, obj: Unit) -> list[dict]:
        return serialize_timeline(EntityType.UNIT, obj.pk)


# ═══════════════════════════════════════════════════════════════════
#  Write serializers
# ═══════════════════════════════════════════════════════════════════


class UnitCreateSerializer(ActorRequestSerializer):
    callsign = serializers.CharField(max_length=20)
    label = serializers.CharField(max_length=120, required=False, allow_blank=True)


class UnitMembershipSerializer(ActorRequestSerializer):
    cid = serializers.IntegerField(min_value=1, max_value=MAX_CID)


class UnitStatusSerializer(ActorRequestSerializer):
    status = serializers.ChoiceField(choices=UnitStatus.choices)


class OfficerRegisterSerializer(serializers.Serializer):
    cid = serializers.IntegerField(min_value=1, max_value=MAX_CID)
    name = serializers.CharField(max_length=120)
    on_duty = serializers.BooleanField(default=True)


class OfficerDutySerializer(serializers.Serializer):
    on_duty = serializers.BooleanField()
