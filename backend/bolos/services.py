"""
BOLO app Service Layer.

Architecture
------------
- ``BoloQueryService`` — Listing with filters & retrieval.
- ``BoloService``      — Creation, status changes and sightings.

Status rules
------------
``active`` and ``suspended`` move freely in both directions.  ``closed``
is terminal: any further status update raises ``BOLO_CLOSED``.
Sightings are pure timeline appends and are accepted in every status.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from core.constants import engine_setting
from core.domain.actors import Actor
from core.domain.audit import AuditTrail
from core.domain.exceptions import DomainError, InvalidTransition, NotFound
from core.domain.normalize import (
    build_ref_keys,
    clean_text,
    normalize_cids,
    normalize_plates,
    normalize_strings,
)
from core.domain.transactions import lock_for_update
from core.models import AuditAction, EntityType
from reports.services import TagCatalogService

from .models import Bolo, BoloPriority, BoloStatus, BoloType

logger = logging.getLogger(__name__)


def _status_action(previous: str, target: str) -> str:
    """Timeline action for a status update."""
    if target == BoloStatus.CLOSED:
        return AuditAction.CLOSED
    if target == BoloStatus.SUSPENDED and previous != BoloStatus.SUSPENDED:
        return AuditAction.SUSPENDED
    if target == BoloStatus.ACTIVE and previous == BoloStatus.SUSPENDED:
        return AuditAction.REACTIVATED
    return AuditAction.UPDATED


# ═══════════════════════════════════════════════════════════════════
#  BOLO Query Service
# ═══════════════════════════════════════════════════════════════════


class BoloQueryService:

    @staticmethod
    def get_bolo(bolo_id: str) -> Bolo:
        try:
            return Bolo.objects.get(pk=bolo_id)
        except Bolo.DoesNotExist:
            raise NotFound(f"BOLO '{bolo_id}' not found.")

    @staticmethod
    def get_bolos(
        query: str | None = None,
        status: str | None = None,
        bolo_type: str | None = None,
        priority: str | None = None,
        actionable_only: bool = False,
        limit: int | None = None,
    ) -> list[Bolo]:
        """
        Newest first.  ``query`` matches id, title, description, tags,
        people cids and plates.  ``actionable_only`` keeps active,
        unexpired alerts.
        """
        limit = limit or engine_setting("BOLO_LIST_LIMIT")
        qs = Bolo.objects.all()
        if status:
            qs = qs.filter(status=status)
        if bolo_type:
            qs = qs.filter(bolo_type=bolo_type)
        if priority:
            qs = qs.filter(priority=priority)
        if actionable_only:
            qs = qs.filter(status=BoloStatus.ACTIVE).filter(
                Q(expires_at__isnull=True) | Q(expires_at__gt=timezone.now())
            )

        query = clean_text(query)
        if not query:
            return list(qs[:limit])

        needle = query.lower()
        matches = []
        for bolo in qs:
            haystack = " ".join(
                [bolo.id, bolo.title, bolo.description]
                + bolo.tags
                + [str(cid) for cid in bolo.people]
                + bolo.vehicles
            ).lower()
            if needle in haystack:
                matches.append(bolo)
                if len(matches) >= limit:
                    break
        return matches


# ═══════════════════════════════════════════════════════════════════
#  BOLO Service
# ═══════════════════════════════════════════════════════════════════


class BoloService:

    @staticmethod
    @transaction.atomic
    def create_bolo(
        *,
        bolo_type: str,
        priority: str,
        title: str,
        description: str,
        actor: Actor,
        tags: Any = None,
        people: Any = None,
        vehicles: Any = None,
        report_ids: Any = None,
        expires_in_minutes: int | None = None,
    ) -> Bolo:
        """
        Raises:
            DomainError: unknown type/priority, empty title or description,
                         non-positive cid, malformed plate,
                         expiry beyond ``MAX_BOLO_EXPIRY_MINUTES``.
        """
        if bolo_type not in BoloType.values:
            raise DomainError(f"Unknown BOLO type '{bolo_type}'.")
        if priority not in BoloPriority.values:
            raise DomainError(f"Unknown BOLO priority '{priority}'.")
        title = clean_text(title)
        description = clean_text(description)
        if not title:
            raise DomainError("A BOLO title is required.")
        if not description:
            raise DomainError("A BOLO description is required.")

        limit = engine_setting("MAX_LIST_ITEMS")
        people = normalize_cids(people, limit=limit)
        vehicles = normalize_plates(vehicles, limit=limit)

        expires_at = None
        max_expiry = engine_setting("MAX_BOLO_EXPIRY_MINUTES")
        if expires_in_minutes and expires_in_minutes > max_expiry:
            raise DomainError(
                f"A BOLO can expire at most {max_expiry} minutes from now.",
                code="INVALID_EXPIRY",
            )
        if expires_in_minutes and expires_in_minutes > 0:
            expires_at = timezone.now() + timedelta(minutes=expires_in_minutes)

        bolo = Bolo.objects.create(
            bolo_type=bolo_type,
            priority=priority,
            title=title,
            description=description,
            tags=TagCatalogService.filter_tags(tags),
            people=people,
            vehicles=vehicles,
            report_ids=normalize_strings(report_ids, limit=limit),
            status=BoloStatus.ACTIVE,
            expires_at=expires_at,
            created_by_cid=actor.cid,
            created_by_name=actor.name,
            ref_keys=build_ref_keys(people, vehicles),
        )
        AuditTrail.append(
            EntityType.BOLO, bolo.pk, actor, AuditAction.CREATED,
            note=title, priority=priority,
        )
        logger.info("BOLO %s (%s/%s) created by %s", bolo.pk, bolo_type, priority, actor.cid)
        return bolo

    @staticmethod
    @transaction.atomic
    def update_status(bolo_id: str, status: str, actor: Actor) -> Bolo:
        """
        Raises:
            DomainError:       unknown status.
            InvalidTransition: ``BOLO_CLOSED`` when the BOLO is closed.
        """
        if status not in BoloStatus.values:
            raise DomainError(f"Unknown BOLO status '{status}'.")

        bolo = lock_for_update(Bolo, bolo_id)
        if bolo.status == BoloStatus.CLOSED:
            raise InvalidTransition(
                current=bolo.status,
                target=status,
                reason="a closed BOLO cannot change status",
                code="BOLO_CLOSED",
            )

        previous = bolo.status
        bolo.status = status
        bolo.save(update_fields=["status", "updated_at"])

        AuditTrail.append(
            EntityType.BOLO, bolo.pk, actor, _status_action(previous, status),
            previous=previous, status=status,
        )
        logger.info("BOLO %s status %s → %s by %s", bolo.pk, previous, status, actor.cid)
        return bolo

    @staticmethod
    @transaction.atomic
    def record_sighting(bolo_id: str, actor: Actor, note: str | None = None) -> Bolo:
        """Append a sighting.  Never touches ``status``."""
        bolo = lock_for_update(Bolo, bolo_id)
        bolo.save(update_fields=["updated_at"])
        AuditTrail.append(
            EntityType.BOLO, bolo.pk, actor, AuditAction.SIGHTING,
            note=note,
            actionable=None if bolo.is_actionable else False,
        )
        logger.info("Sighting recorded on BOLO %s by %s", bolo.pk, actor.cid)
        return bolo
