"""
Evidence app Service Layer.

This module is the **single source of truth** for all business logic
in the ``evidence`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``EvidenceQueryService``  — Filtered listing & retrieval.
- ``EvidenceLedgerService`` — Registration, custody transfers, sealing,
  report links and tags.
- ``ChainOfCustodyService`` — Read-only custody trail assembly.

Sealing
-------
Once sealed, an item's holder, report link and tags are frozen; every
attempt to change them raises ``Conflict`` with code ``SEALED``.  Notes
are still accepted so that handling of a sealed exhibit stays on record.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import Q, QuerySet

from cases.models import Case
from core.constants import engine_setting
from core.domain.actors import Actor
from core.domain.audit import AuditTrail
from core.domain.exceptions import Conflict, DomainError, NotFound
from core.domain.normalize import clean_text
from core.domain.transactions import lock_for_update
from core.models import AuditAction, EntityType
from reports.services import ReportQueryService, TagCatalogService

from .models import EvidenceItem, EvidenceStatus, EvidenceType

logger = logging.getLogger(__name__)


def _ensure_report(report_id: str) -> None:
    if not ReportQueryService.report_exists(report_id):
        raise NotFound(f"Report '{report_id}' not found.")


def _ensure_not_sealed(item: EvidenceItem) -> None:
    if item.is_sealed:
        raise Conflict(f"Evidence {item.pk} is sealed.", code="SEALED")


# ═══════════════════════════════════════════════════════════════════
#  Evidence Query Service
# ═══════════════════════════════════════════════════════════════════


class EvidenceQueryService:
    """
    Constructs filtered querysets for listing evidence.
    """

    @staticmethod
    def get_filtered_queryset(filters: dict[str, Any]) -> QuerySet[EvidenceItem]:
        qs = EvidenceItem.objects.all()

        status = filters.get("status")
        if status:
            qs = qs.filter(status=status)

        evidence_type = filters.get("type")
        if evidence_type:
            qs = qs.filter(evidence_type=evidence_type)

        report_id = filters.get("report_id")
        if report_id:
            qs = qs.filter(report_id=report_id)

        case_id = filters.get("case_id")
        if case_id:
            qs = qs.filter(case_id=case_id)

        query = clean_text(filters.get("query"))
        if query:
            qs = qs.filter(
                Q(id__icontains=query)
                | Q(label__icontains=query)
                | Q(description__icontains=query)
                | Q(holder__icontains=query)
                | Q(report_id__icontains=query)
            )

        return qs

    @staticmethod
    def get_evidence_detail(evidence_id: str) -> EvidenceItem:
        try:
            return EvidenceItem.objects.get(pk=evidence_id)
        except EvidenceItem.DoesNotExist:
            raise NotFound(f"Evidence '{evidence_id}' not found.")


# ═══════════════════════════════════════════════════════════════════
#  Evidence Ledger Service
# ═══════════════════════════════════════════════════════════════════


class EvidenceLedgerService:

    @staticmethod
    @transaction.atomic
    def create_evidence(
        *,
        label: str,
        actor: Actor,
        holder: str | None = None,
        report_id: str | None = None,
        case_id: str | None = None,
        evidence_type: str | None = None,
        description: str | None = None,
        tags: Any = None,
    ) -> EvidenceItem:
        """
        Register a new exhibit.

        Raises:
            DomainError: empty label or unknown type.
            NotFound:    ``report_id`` / ``case_id`` that does not exist.
        """
        label = clean_text(label)
        if not label:
            raise DomainError("An evidence label is required.")
        if evidence_type and evidence_type not in EvidenceType.values:
            raise DomainError(f"Unknown evidence type '{evidence_type}'.")

        report_id = clean_text(report_id) or None
        if report_id:
            _ensure_report(report_id)
        case_id = clean_text(case_id) or None
        if case_id and not Case.objects.filter(pk=case_id).exists():
            raise NotFound(f"Case '{case_id}' not found.")

        item = EvidenceItem.objects.create(
            label=label,
            evidence_type=evidence_type or None,
            description=clean_text(description),
            holder=clean_text(holder) or engine_setting("DEFAULT_EVIDENCE_HOLDER"),
            report_id=report_id,
            case_id=case_id,
            tags=TagCatalogService.filter_tags(tags),
            status=EvidenceStatus.OPEN,
        )
        AuditTrail.append(
            EntityType.EVIDENCE, item.pk, actor, AuditAction.CREATED,
            note=label, holder=item.holder, report_id=report_id,
        )
        logger.info("Evidence %s registered by %s (holder %s)", item.pk, actor.cid, item.holder)
        return item

    @staticmethod
    @transaction.atomic
    def add_note(evidence_id: str, note: str, actor: Actor) -> EvidenceItem:
        note = clean_text(note)
        if not note:
            raise DomainError("The note must not be empty.")

        item = lock_for_update(EvidenceItem, evidence_id)
        item.save(update_fields=["updated_at"])
        AuditTrail.append(EntityType.EVIDENCE, item.pk, actor, AuditAction.NOTE, note=note)
        logger.info("Note added to evidence %s by %s", item.pk, actor.cid)
        return item

    @staticmethod
    @transaction.atomic
    def transfer_holder(
        evidence_id: str,
        new_holder: str,
        actor: Actor,
        note: str | None = None,
    ) -> EvidenceItem:
        """
        Raises:
            DomainError: empty holder.
            Conflict:    ``SEALED``.
        """
        new_holder = clean_text(new_holder)
        if not new_holder:
            raise DomainError("The new holder must not be empty.")

        item = lock_for_update(EvidenceItem, evidence_id)
        _ensure_not_sealed(item)

        previous = item.holder
        item.holder = new_holder
        item.save(update_fields=["holder", "updated_at"])
        AuditTrail.append(
            EntityType.EVIDENCE, item.pk, actor, AuditAction.TRANSFERRED,
            note=note, holder=new_holder, previous_holder=previous,
        )
        logger.info("Evidence %s transferred %s → %s by %s", item.pk, previous, new_holder, actor.cid)
        return item

    @staticmethod
    @transaction.atomic
    def seal(evidence_id: str, actor: Actor) -> EvidenceItem:
        item = lock_for_update(EvidenceItem, evidence_id)
        _ensure_not_sealed(item)

        item.status = EvidenceStatus.SEALED
        item.save(update_fields=["status", "updated_at"])
        AuditTrail.append(
            EntityType.EVIDENCE, item.pk, actor, AuditAction.SEALED,
            holder=item.holder,
        )
        logger.info("Evidence %s sealed by %s", item.pk, actor.cid)
        return item

    @staticmethod
    @transaction.atomic
    def link_to_report(evidence_id: str, report_id: str, actor: Actor) -> EvidenceItem:
        """
        Point the item at a report.  Re-linking the same report is a
        no-op and records nothing.

        Raises:
            DomainError: empty report id.
            NotFound:    unknown report.
            Conflict:    ``SEALED``.
        """
        report_id = clean_text(report_id)
        if not report_id:
            raise DomainError("A report id is required.")

        item = lock_for_update(EvidenceItem, evidence_id)
        _ensure_not_sealed(item)
        if item.report_id == report_id:
            return item
        _ensure_report(report_id)

        previous = item.report_id
        item.report_id = report_id
        item.save(update_fields=["report_id", "updated_at"])
        AuditTrail.append(
            EntityType.EVIDENCE, item.pk, actor, AuditAction.LINKED,
            note=report_id, report_id=report_id, previous_report_id=previous,
        )
        logger.info("Evidence %s linked to report %s by %s", item.pk, report_id, actor.cid)
        return item

    @staticmethod
    @transaction.atomic
    def unlink_from_report(evidence_id: str, actor: Actor) -> EvidenceItem:
        """
        Raises:
            Conflict: ``SEALED`` or ``NOT_LINKED``.
        """
        item = lock_for_update(EvidenceItem, evidence_id)
        _ensure_not_sealed(item)
        if not item.report_id:
            raise Conflict(f"Evidence {item.pk} is not linked to a report.", code="NOT_LINKED")

        previous = item.report_id
        item.report_id = None
        item.save(update_fields=["report_id", "updated_at"])
        AuditTrail.append(
            EntityType.EVIDENCE, item.pk, actor, AuditAction.UNLINKED,
            note=previous, report_id=previous,
        )
        logger.info("Evidence %s unlinked from report %s by %s", item.pk, previous, actor.cid)
        return item

    @staticmethod
    @transaction.atomic
    def set_tags(evidence_id: str, tags: Any, actor: Actor) -> EvidenceItem:
        item = lock_for_update(EvidenceItem, evidence_id)
        _ensure_not_sealed(item)

        item.tags = TagCatalogService.filter_tags(tags)
        item.save(update_fields=["tags", "updated_at"])
        AuditTrail.append(
            EntityType.EVIDENCE, item.pk, actor, AuditAction.UPDATED,
            note="tagek", tags=item.tags,
        )
        logger.info("Evidence %s tags set by %s", item.pk, actor.cid)
        return item


# ═══════════════════════════════════════════════════════════════════
#  Chain of Custody Service
# ═══════════════════════════════════════════════════════════════════


class ChainOfCustodyService:
    """
    Assembles a read-only custody trail for an evidence item.
    """

    @staticmethod
    def get_custody_trail(item: EvidenceItem) -> list[dict[str, Any]]:
        """
        Oldest event first, with the holder in effect after each event.
        """
        trail: list[dict[str, Any]] = []
        holder = None
        for event in AuditTrail.timeline(EntityType.EVIDENCE, item.pk).order_by("seq"):
            holder = event.details.get("holder", holder)
            trail.append({
                "seq": event.seq,
                "timestamp": event.ts,
                "action": event.action,
                "performed_by": event.actor_cid,
                "performer_name": event.actor_name,
                "holder": holder,
                "note": event.note,
            })
        return trail
