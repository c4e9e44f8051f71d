"""
Dispatch app Service Layer.

Architecture
------------
- ``DispatchQueryService``    — The dispatch feed & single calls.
- ``DispatchWorkflowService`` — Per-call state machine.

State machine
-------------
::

    new ──accept──▶ accepted ──status──▶ en_route ⇄ on_scene
                       │                     │          │
                       └───────────close─────┴──────────┘──▶ closed

* ``accept_call`` is the only way out of ``new`` and the only place a
  unit is assigned.
* ``update_status`` moves freely between the field statuses once the
  call has a unit.
* ``close_call`` is terminal and writes a draft report in the same
  transaction.

Unit availability is deliberately not consulted: a unit may hold
several open calls.
"""

from __future__ import annotations

import logging

from django.db import transaction

from core.constants import engine_setting
from core.domain.actors import Actor
from core.domain.audit import AuditTrail
from core.domain.exceptions import Conflict, DomainError, InvalidTransition, NotFound
from core.domain.normalize import clean_text
from core.domain.transactions import lock_for_update
from core.models import AuditAction, EntityType
from reports.services import ReportService
from units.models import Unit

from .models import CallStatus, DispatchCall

logger = logging.getLogger(__name__)

#: Statuses an assigned unit may report from the field.
FIELD_STATUSES = frozenset({CallStatus.EN_ROUTE.value, CallStatus.ON_SCENE.value})


# ═══════════════════════════════════════════════════════════════════
#  Dispatch Query Service
# ═══════════════════════════════════════════════════════════════════


class DispatchQueryService:

    @staticmethod
    def get_dispatch_feed(limit: int | None = None) -> list[DispatchCall]:
        """Newest calls first, capped at ``DISPATCH_FEED_LIMIT`` by default."""
        limit = limit or engine_setting("DISPATCH_FEED_LIMIT")
        return list(DispatchCall.objects.order_by("-created_at")[:limit])

    @staticmethod
    def get_call(call_id: str) -> DispatchCall:
        try:
            return DispatchCall.objects.get(pk=call_id)
        except DispatchCall.DoesNotExist:
            raise NotFound(f"Dispatch call '{call_id}' not found.")


# ═══════════════════════════════════════════════════════════════════
#  Dispatch Workflow Service
# ═══════════════════════════════════════════════════════════════════


class DispatchWorkflowService:

    @staticmethod
    def _ensure_open(call: DispatchCall) -> None:
        if call.status == CallStatus.CLOSED:
            raise Conflict(f"Call {call.pk} is already closed.", code="CALL_CLOSED")

    @staticmethod
    def _ensure_assigned(call: DispatchCall, target: str) -> None:
        if call.assigned_unit_id is None:
            raise InvalidTransition(
                current=call.status,
                target=target,
                reason="the call has not been accepted by a unit",
                code="CALL_UNASSIGNED",
            )

    @staticmethod
    @transaction.atomic
    def test_dispatch(
        code: str | None = None,
        title: str | None = None,
        location: str | None = None,
    ) -> DispatchCall:
        """Seed a ``new`` call raised by the system actor."""
        defaults = engine_setting("TEST_DISPATCH_DEFAULTS")
        call = DispatchCall.objects.create(
            code=clean_text(code) or defaults["code"],
            title=clean_text(title) or defaults["title"],
            location=clean_text(location) or defaults["location"],
            origin_x=0.0,
            origin_y=0.0,
            origin_z=0.0,
        )
        AuditTrail.append(EntityType.CALL, call.pk, Actor.system(), AuditAction.CALL_RECEIVED)
        logger.info("Dispatch call %s (%s) received", call.pk, call.code)
        return call

    @staticmethod
    @transaction.atomic
    def accept_call(call_id: str, unit_id: str, actor: Actor) -> DispatchCall:
        """
        Assign the call to a unit.

        Raises:
            NotFound: unknown call or unit.
            Conflict: ``CALL_CLOSED`` or ``CALL_ASSIGNED``.
        """
        call = lock_for_update(DispatchCall, call_id)
        try:
            unit = Unit.objects.get(pk=unit_id)
        except Unit.DoesNotExist:
            raise NotFound(f"Unit '{unit_id}' not found.")

        DispatchWorkflowService._ensure_open(call)
        if call.assigned_unit_id is not None:
            raise Conflict(
                f"Call {call.pk} is already assigned to {call.assigned_unit_id}.",
                code="CALL_ASSIGNED",
            )

        call.assigned_unit_id = unit.pk
        call.status = CallStatus.ACCEPTED
        call.save(update_fields=["assigned_unit_id", "status", "updated_at"])

        AuditTrail.append(
            EntityType.CALL, call.pk, actor, AuditAction.CALL_ACCEPTED,
            note=unit.callsign, unit_id=unit.pk,
        )
        logger.info("Call %s accepted by unit %s (%s)", call.pk, unit.callsign, actor.cid)
        return call

    @staticmethod
    @transaction.atomic
    def update_status(
        call_id: str,
        status: str,
        actor: Actor,
        note: str | None = None,
    ) -> DispatchCall:
        """
        Report ``en_route`` / ``on_scene`` for an assigned call.

        Raises:
            DomainError:       any other target status.
            Conflict:          ``CALL_CLOSED``.
            InvalidTransition: ``CALL_UNASSIGNED`` while the call is new.
        """
        if status not in FIELD_STATUSES:
            raise DomainError(
                f"Status must be one of {', '.join(sorted(FIELD_STATUSES))}; got '{status}'."
            )

        call = lock_for_update(DispatchCall, call_id)
        DispatchWorkflowService._ensure_open(call)
        DispatchWorkflowService._ensure_assigned(call, status)

        previous = call.status
        call.status = status
        call.save(update_fields=["status", "updated_at"])

        AuditTrail.append(
            EntityType.CALL, call.pk, actor, AuditAction.STATUS_CHANGED,
            note=note, status=status, previous=previous,
        )
        logger.info("Call %s status %s → %s by %s", call.pk, previous, status, actor.cid)
        return call

    @staticmethod
    @transaction.atomic
    def add_note(call_id: str, actor: Actor, note: str) -> DispatchCall:
        note = clean_text(note)
        if not note:
            raise DomainError("The note must not be empty.")

        call = lock_for_update(DispatchCall, call_id)
        DispatchWorkflowService._ensure_open(call)

        call.save(update_fields=["updated_at"])
        AuditTrail.append(EntityType.CALL, call.pk, actor, AuditAction.NOTE, note=note)
        logger.info("Note added to call %s by %s", call.pk, actor.cid)
        return call

    @staticmethod
    @transaction.atomic
    def close_call(call_id: str, actor: Actor, report_text: str) -> DispatchCall:
        """
        Close the call and write a draft dispatch report from ``report_text``.

        The call update and the report are one transaction: if the report
        cannot be written the call stays open.

        Raises:
            DomainError:       empty closure text.
            Conflict:          ``CALL_CLOSED``.
            InvalidTransition: ``CALL_UNASSIGNED`` while the call is new.
        """
        report_text = str(report_text or "").strip()
        if not report_text:
            raise DomainError("A closing report text is required.")

        call = lock_for_update(DispatchCall, call_id)
        DispatchWorkflowService._ensure_open(call)
        DispatchWorkflowService._ensure_assigned(call, CallStatus.CLOSED)

        report = ReportService.create_dispatch_draft(
            code=call.code,
            title=call.title,
            location=call.location,
            text=report_text,
            actor=actor,
        )

        call.status = CallStatus.CLOSED
        call.report_id = report.pk
        call.report_summary = report.summary
        call.save(update_fields=["status", "report_id", "report_summary", "updated_at"])

        AuditTrail.append(
            EntityType.CALL, call.pk, actor, AuditAction.CLOSED,
            note=report.summary, report_id=report.pk,
        )
        logger.info("Call %s closed by %s; draft report %s", call.pk, actor.cid, report.pk)
        return call
