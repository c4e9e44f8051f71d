"""
Core app serializers.

Shared building blocks for every app's API layer:

- ``ActorRequestSerializer`` — base for write payloads; carries the
  acting officer (``actor_cid`` / ``actor_name``).
- ``AuditEventSerializer``   — one timeline entry.
- ``serialize_timeline``     — helper used by aggregate serializers.
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from core.constants import MAX_CID
from core.domain.actors import Actor
from core.domain.audit import AuditTrail
from core.models import AuditEvent


class ActorRequestSerializer(serializers.Serializer):
    """
    Base request serializer for every mutating command.

    Identity is verified upstream; the payload simply names who acts.
    """

    actor_cid = serializers.IntegerField(min_value=1, max_value=MAX_CID)
    actor_name = serializers.CharField(max_length=120)

    def get_actor(self) -> Actor:
        return Actor(
            cid=self.validated_data["actor_cid"],
            name=self.validated_data["actor_name"],
        )


class AuditEventSerializer(serializers.ModelSerializer):
    """Read-only representation of one ``AuditEvent``."""

    cid = serializers.IntegerField(source="actor_cid", read_only=True)
    name = serializers.CharField(source="actor_name", read_only=True)

    class Meta:
        model = AuditEvent
        fields = ["id", "seq", "ts", "cid", "name", "action", "note", "details"]
        read_only_fields = fields


def serialize_timeline(entity_type: str, entity_id: str) -> list[dict[str, Any]]:
    """Newest-first timeline of one aggregate, ready for a response body."""
    events = AuditTrail.timeline(entity_type, entity_id)
    return AuditEventSerializer(events, many=True).data
