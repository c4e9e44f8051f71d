"""
Cases app Service Layer.

This module is the **single source of truth** for all business logic
in the ``cases`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``CaseNumberAllocator``  — Per-year, row-locked case number counter.
- ``CaseIntakeService``    — Case requests: create, approve, reject.
- ``CaseQueryService``     — Filtered listing & retrieval of cases.
- ``CaseRegistryService``  — Direct case creation (records clerk),
  record links and status changes.

Intake Overview
---------------
::

  PENDING ──approve──▶ APPROVED   (new Case opened, numbered, linked)
     │
     └────reject────▶ REJECTED    (no case)

Approval writes two aggregates: the new ``Case`` and the decided
``CaseRequest``.  Both happen inside one ``transaction.atomic`` block
together with the sequence increment, so a failure anywhere leaves the
request pending and the year's counter untouched.

Case status: ``open``, ``in_progress``, ``prosecution`` and ``closed``
may follow one another freely, but ``closed`` is terminal.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from bolos.models import Bolo
from core.constants import engine_setting
from core.domain.actors import Actor
from core.domain.audit import AuditTrail
from core.domain.exceptions import Conflict, DomainError, InvalidTransition, NotFound
from core.domain.normalize import clean_text, normalize_strings
from core.domain.transactions import lock_for_update
from core.models import AuditAction, EntityType
from evidence.models import EvidenceItem
from reports.services import ReportQueryService, TagCatalogService

from .models import (
    Case,
    CaseNumberSequence,
    CasePriority,
    CaseRequest,
    CaseRequestStatus,
    CaseStatus,
)

logger = logging.getLogger(__name__)


def _ensure_pending(request: CaseRequest) -> None:
    if not request.is_pending:
        raise Conflict(
            f"Case request {request.pk} has already been decided ({request.status}).",
            code="REQUEST_DECIDED",
        )


def _merge_ids(current: list[str], extra: list[str]) -> list[str]:
    merged = list(current)
    for item in extra:
        if item not in merged:
            merged.append(item)
    return merged


# ═══════════════════════════════════════════════════════════════════
#  Case Number Allocator
# ═══════════════════════════════════════════════════════════════════


class CaseNumberAllocator:
    """
    Hands out ``<PREFIX>-<YYYY>-<NNNNNN>`` numbers.

    The counter row for the year is locked with ``select_for_update`` and
    stays locked until the surrounding transaction ends, so approvals in
    the same year are serialised and numbers are gapless.
    """

    @staticmethod
    def format_number(year: int, value: int) -> str:
        width = engine_setting("CASE_NUMBER_WIDTH")
        return f"{engine_setting('CASE_NUMBER_PREFIX')}-{year}-{value:0{width}d}"

    @staticmethod
    @transaction.atomic
    def allocate(year: int | None = None) -> str:
        if year is None:
            year = timezone.localdate().year
        sequence, _ = (
            CaseNumberSequence.objects.select_for_update()
            .get_or_create(year=year, defaults={"last_value": 0})
        )
        sequence.last_value += 1
        sequence.save(update_fields=["last_value"])
        return CaseNumberAllocator.format_number(year, sequence.last_value)


# ═══════════════════════════════════════════════════════════════════
#  Case Intake Service
# ═══════════════════════════════════════════════════════════════════


class CaseIntakeService:
    """
    Turns reports into cases through a request/decision step.
    """

    @staticmethod
    def get_request(request_id: str) -> CaseRequest:
        try:
            return CaseRequest.objects.get(pk=request_id)
        except CaseRequest.DoesNotExist:
            raise NotFound(f"Case request '{request_id}' not found.")

    @staticmethod
    def list_requests(status: str | None = None) -> QuerySet[CaseRequest]:
        qs = CaseRequest.objects.all()
        if status:
            qs = qs.filter(status=status)
        return qs

    @staticmethod
    @transaction.atomic
    def request_case(
        report_id: str,
        actor: Actor,
        report_title: str | None = None,
        note: str | None = None,
    ) -> CaseRequest:
        """
        File a pending request.  Only a non-empty ``report_id`` is
        required; the report itself is not looked up.
        """
        report_id = clean_text(report_id)
        if not report_id:
            raise DomainError("A report id is required.")

        request = CaseRequest.objects.create(
            report_id=report_id,
            report_title=clean_text(report_title),
            note=clean_text(note),
            created_by_cid=actor.cid,
            created_by_name=actor.name,
        )
        AuditTrail.append(
            EntityType.CASE_REQUEST, request.pk, actor, AuditAction.CREATED,
            note=request.note or None, report_id=report_id,
        )
        logger.info("Case request %s for report %s filed by %s", request.pk, report_id, actor.cid)
        return request

    @staticmethod
    @transaction.atomic
    def approve(request_id: str, actor: Actor) -> tuple[Case, CaseRequest]:
        """
        Open a numbered case from a pending request.

        Returns:
            ``(case, request)`` — the new case and the decided request.

        Raises:
            NotFound: unknown request.
            Conflict: ``REQUEST_DECIDED`` when the request is not pending.
        """
        request = lock_for_update(CaseRequest, request_id)
        _ensure_pending(request)

        case_number = CaseNumberAllocator.allocate()
        case = CaseRegistryService.open_case(
            case_number=case_number,
            title=request.report_title or f"Ügy • {request.report_id}",
            actor=actor,
            linked_report_ids=[request.report_id],
            note=f"Javaslatból: {request.pk} • Report: {request.report_id}",
        )

        request.status = CaseRequestStatus.APPROVED
        request.decided_by_cid = actor.cid
        request.decided_by_name = actor.name
        request.decided_at = timezone.now()
        request.case_id = case.pk
        request.case_number = case_number
        request.save(update_fields=[
            "status", "decided_by_cid", "decided_by_name", "decided_at",
            "case_id", "case_number", "updated_at",
        ])
        AuditTrail.append(
            EntityType.CASE_REQUEST, request.pk, actor, AuditAction.APPROVED,
            note=case_number, case_id=case.pk,
        )
        logger.info("Case request %s approved by %s → %s", request.pk, actor.cid, case_number)
        return case, request

    @staticmethod
    @transaction.atomic
    def reject(request_id: str, actor: Actor, reason: str | None = None) -> CaseRequest:
        """
        Decline a pending request.  A non-empty ``reason`` replaces the
        request's note; otherwise the existing note is kept.

        Raises:
            NotFound: unknown request.
            Conflict: ``REQUEST_DECIDED``.
        """
        request = lock_for_update(CaseRequest, request_id)
        _ensure_pending(request)

        reason = clean_text(reason)
        request.status = CaseRequestStatus.REJECTED
        request.decided_by_cid = actor.cid
        request.decided_by_name = actor.name
        request.decided_at = timezone.now()
        update_fields = ["status", "decided_by_cid", "decided_by_name", "decided_at", "updated_at"]
        if reason:
            request.note = reason
            update_fields.append("note")
        request.save(update_fields=update_fields)
        AuditTrail.append(
            EntityType.CASE_REQUEST, request.pk, actor, AuditAction.REJECTED,
            note=reason or None,
        )
        logger.info("Case request %s rejected by %s", request.pk, actor.cid)
        return request


# ═══════════════════════════════════════════════════════════════════
#  Case Query Service
# ═══════════════════════════════════════════════════════════════════


class CaseQueryService:

    @staticmethod
    def get_case(case_id: str) -> Case:
        try:
            return Case.objects.get(pk=case_id)
        except Case.DoesNotExist:
            raise NotFound(f"Case '{case_id}' not found.")

    @staticmethod
    def list_cases(query: str | None = None, status: str | None = None) -> QuerySet[Case]:
        qs = Case.objects.all()
        if status:
            qs = qs.filter(status=status)
        query = clean_text(query)
        if query:
            qs = qs.filter(
                Q(case_number__icontains=query)
                | Q(title__icontains=query)
                | Q(description__icontains=query)
                | Q(location__icontains=query)
            )
        return qs


# ═══════════════════════════════════════════════════════════════════
#  Case Registry Service
# ═══════════════════════════════════════════════════════════════════


class CaseRegistryService:

    @staticmethod
    def open_case(
        *,
        case_number: str,
        title: str,
        actor: Actor,
        description: str = "",
        priority: str = CasePriority.MEDIUM,
        location: str | None = None,
        tags: list[str] | None = None,
        linked_report_ids: list[str] | None = None,
        note: str | None = None,
    ) -> Case:
        """Insert a case and its ``Létrehozva`` event.  Caller owns the transaction."""
        case = Case.objects.create(
            case_number=case_number,
            title=title,
            description=description,
            status=CaseStatus.OPEN,
            priority=priority,
            location=location or engine_setting("DEFAULT_LOCATION"),
            tags=tags or [],
            linked_report_ids=linked_report_ids or [],
            created_by_cid=actor.cid,
            created_by_name=actor.name,
        )
        AuditTrail.append(
            EntityType.CASE, case.pk, actor, AuditAction.CREATED,
            note=note, case_number=case_number,
        )
        logger.info("Case %s (%s) opened by %s", case_number, case.pk, actor.cid)
        return case

    @staticmethod
    @transaction.atomic
    def create_case(
        *,
        title: str,
        actor: Actor,
        description: str | None = None,
        priority: str | None = None,
        location: str | None = None,
        tags: Any = None,
    ) -> Case:
        """
        Open a case directly, without a request.

        Raises:
            DomainError: empty title or unknown priority.
        """
        title = clean_text(title)
        if not title:
            raise DomainError("A case title is required.")
        priority = priority or CasePriority.MEDIUM
        if priority not in CasePriority.values:
            raise DomainError(f"Unknown case priority '{priority}'.")

        return CaseRegistryService.open_case(
            case_number=CaseNumberAllocator.allocate(),
            title=title,
            actor=actor,
            description=clean_text(description),
            priority=priority,
            location=clean_text(location),
            tags=TagCatalogService.filter_tags(tags),
        )

    @staticmethod
    @transaction.atomic
    def link_records(
        case_id: str,
        actor: Actor,
        *,
        report_ids: Any = None,
        evidence_ids: Any = None,
        bolo_ids: Any = None,
    ) -> Case:
        """
        Add report, evidence and BOLO identifiers to a case.  Every id
        must exist; ids already linked are skipped.

        Raises:
            NotFound: any unknown id.
            Conflict: ``CASE_CLOSED``.
        """
        report_ids = normalize_strings(report_ids)
        evidence_ids = normalize_strings(evidence_ids)
        bolo_ids = normalize_strings(bolo_ids)

        case = lock_for_update(Case, case_id)
        if case.is_closed:
            raise Conflict(f"Case {case.case_number} is closed.", code="CASE_CLOSED")

        for report_id in report_ids:
            if not ReportQueryService.report_exists(report_id):
                raise NotFound(f"Report '{report_id}' not found.")
        known = set(EvidenceItem.objects.filter(pk__in=evidence_ids).values_list("pk", flat=True))
        for evidence_id in evidence_ids:
            if evidence_id not in known:
                raise NotFound(f"Evidence '{evidence_id}' not found.")
        known = set(Bolo.objects.filter(pk__in=bolo_ids).values_list("pk", flat=True))
        for bolo_id in bolo_ids:
            if bolo_id not in known:
                raise NotFound(f"BOLO '{bolo_id}' not found.")

        added = {
            "report_ids": [r for r in report_ids if r not in case.linked_report_ids],
            "evidence_ids": [e for e in evidence_ids if e not in case.linked_evidence_ids],
            "bolo_ids": [b for b in bolo_ids if b not in case.linked_bolo_ids],
        }
        if not any(added.values()):
            return case

        case.linked_report_ids = _merge_ids(case.linked_report_ids, added["report_ids"])
        case.linked_evidence_ids = _merge_ids(case.linked_evidence_ids, added["evidence_ids"])
        case.linked_bolo_ids = _merge_ids(case.linked_bolo_ids, added["bolo_ids"])
        case.save(update_fields=[
            "linked_report_ids", "linked_evidence_ids", "linked_bolo_ids", "updated_at",
        ])
        AuditTrail.append(
            EntityType.CASE, case.pk, actor, AuditAction.LINKED,
            **{key: value for key, value in added.items() if value},
        )
        logger.info("Records linked to case %s by %s: %s", case.case_number, actor.cid, added)
        return case

    @staticmethod
    @transaction.atomic
    def update_case_status(case_id: str, status: str, actor: Actor, note: str | None = None) -> Case:
        """
        Raises:
            DomainError:       unknown status.
            InvalidTransition: ``CASE_CLOSED`` once the case is closed.
        """
        if status not in CaseStatus.values:
            raise DomainError(f"Unknown case status '{status}'.")

        case = lock_for_update(Case, case_id)
        if case.is_closed:
            raise InvalidTransition(f"Case {case.case_number} is closed.", code="CASE_CLOSED")

        previous = case.status
        case.status = status
        case.save(update_fields=["status", "updated_at"])
        action = AuditAction.CLOSED if status == CaseStatus.CLOSED else AuditAction.STATUS_CHANGED
        AuditTrail.append(
            EntityType.CASE, case.pk, actor, action,
            note=clean_text(note) or None, previous=previous, status=status,
        )
        logger.info("Case %s: %s → %s by %s", case.case_number, previous, status, actor.cid)
        return case
