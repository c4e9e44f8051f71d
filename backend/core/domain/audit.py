"""
core.domain.audit — Append-only, per-aggregate timelines.

Every registry records its state changes through ``AuditTrail.append``.
Callers append while holding the row lock of the aggregate they are
mutating (see ``core.domain.transactions``), which is what keeps the
per-aggregate ``seq`` gapless under concurrent writers.

Usage::

    from core.domain.audit import AuditTrail
    from core.models import AuditAction, EntityType

    AuditTrail.append(
        EntityType.EVIDENCE, item.pk, actor, AuditAction.TRANSFERRED,
        note=note, holder=new_holder,
    )
    events = AuditTrail.timeline(EntityType.EVIDENCE, item.pk)
"""

from __future__ import annotations

import logging
from typing import Any

from django.db.models import QuerySet
from django.utils import timezone

from core.domain.actors import Actor
from core.models import AuditEvent

logger = logging.getLogger(__name__)


class AuditTrail:
    """Stateless facade over the ``AuditEvent`` table."""

    @staticmethod
    def append(
        entity_type: str,
        entity_id: str,
        actor: Actor,
        action: str,
        note: str | None = None,
        **details: Any,
    ) -> AuditEvent:
        """
        Append one event to the aggregate's timeline.

        The timestamp is clamped so it is never earlier than the previous
        event of the same aggregate.
        """
        last = AuditTrail.latest(entity_type, entity_id)
        now = timezone.now()
        if last is not None and last.ts > now:
            now = last.ts

        event = AuditEvent.objects.create(
            entity_type=entity_type,
            entity_id=entity_id,
            seq=(last.seq + 1) if last is not None else 1,
            ts=now,
            actor_cid=actor.cid,
            actor_name=actor.name,
            action=action,
            note=(note or "").strip(),
            details={k: v for k, v in details.items() if v is not None},
        )
        logger.debug(
            "Audit %s:%s #%d %s by %s",
            entity_type, entity_id, event.seq, action, actor.cid,
        )
        return event

    @staticmethod
    def timeline(entity_type: str, entity_id: str) -> QuerySet[AuditEvent]:
        """Return the aggregate's events, newest first."""
        return AuditEvent.objects.filter(
            entity_type=entity_type,
            entity_id=entity_id,
        ).order_by("-seq")

    @staticmethod
    def latest(entity_type: str, entity_id: str) -> AuditEvent | None:
        """Newest event of the aggregate, or ``None`` before the first append."""
        return AuditTrail.timeline(entity_type, entity_id).first()
