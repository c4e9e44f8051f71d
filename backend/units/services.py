"""
Units app Service Layer.

This module is the **single source of truth** for all business logic
in the ``units`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``OfficerRosterService`` — Officer registration and duty state.
- ``UnitQueryService``     — Unit listing & retrieval.
- ``UnitRosterService``    — Unit creation, membership and status.

Invariants
----------
* A unit never holds more than ``MAX_SQUAD_MEMBERS`` officers.
* An officer belongs to at most one unit; joining a new unit leaves the
  previous one in the same transaction.
* Callsigns are unique after stripping and upper-casing.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from core.constants import engine_setting
from core.domain.actors import Actor
from core.domain.audit import AuditTrail
from core.domain.exceptions import CapacityError, Conflict, DomainError, NotFound
from core.domain.normalize import clean_text, normalize_cid
from core.domain.transactions import lock_for_update, lock_many_for_update
from core.models import AuditAction, EntityType

from .models import Officer, Unit, UnitStatus

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Officer Roster Service
# ═══════════════════════════════════════════════════════════════════


class OfficerRosterService:
    """
    Keeps the officer roster in sync with the identity provider.

    Officers are created or renamed by ``register_officer`` (typically
    when an officer first opens the tablet); duty state is toggled by
    the officer themself.
    """

    @staticmethod
    def get_roster() -> QuerySet[Officer]:
        return Officer.objects.select_related("unit").all()

    @staticmethod
    def get_officer(cid: int) -> Officer:
        try:
            return Officer.objects.select_related("unit").get(pk=cid)
        except Officer.DoesNotExist:
            raise NotFound(f"Officer {cid} not found.")

    @staticmethod
    @transaction.atomic
    def register_officer(cid: int, name: str, on_duty: bool = True) -> Officer:
        """Create the officer, or refresh the name / duty flag if known."""
        cid = normalize_cid(cid)
        name = clean_text(name)
        if not name:
            raise DomainError("Officer name is required.")

        officer, created = Officer.objects.select_for_update().get_or_create(
            pk=cid,
            defaults={"name": name, "on_duty": on_duty},
        )
        if not created:
            officer.name = name
            officer.on_duty = on_duty
            officer.save(update_fields=["name", "on_duty", "updated_at"])

        logger.info(
            "Officer %d %s (on_duty=%s)",
            cid, "registered" if created else "refreshed", on_duty,
        )
        return officer

    @staticmethod
    @transaction.atomic
    def set_duty(cid: int, on_duty: bool) -> Officer:
        officer = lock_for_update(Officer, cid)
        officer.on_duty = bool(on_duty)
        officer.save(update_fields=["on_duty", "updated_at"])
        logger.info("Officer %d duty set to %s", cid, officer.on_duty)
        return officer


# ═══════════════════════════════════════════════════════════════════
#  Unit Query Service
# ═══════════════════════════════════════════════════════════════════


class UnitQueryService:

    @staticmethod
    def list_units() -> QuerySet[Unit]:
        return Unit.objects.prefetch_related("members").all()

    @staticmethod
    def get_unit(unit_id: str) -> Unit:
        try:
            return Unit.objects.prefetch_related("members").get(pk=unit_id)
        except Unit.DoesNotExist:
            raise NotFound(f"Unit '{unit_id}' not found.")


# ═══════════════════════════════════════════════════════════════════
#  Unit Roster Service
# ═══════════════════════════════════════════════════════════════════


class UnitRosterService:
    """Unit creation, membership and availability."""

    @staticmethod
    def normalize_callsign(callsign: str) -> str:
        value = clean_text(callsign).upper()
        if not value:
            raise DomainError("A callsign is required.")
        return value

    @staticmethod
    def request_unit(
        callsign: str,
        label: str | None = None,
        actor: Actor | None = None,
    ) -> Unit:
        """
        Create a new unit under a free callsign.

        Raises:
            DomainError: empty callsign.
            Conflict:    ``CALLSIGN_TAKEN`` when the callsign is in use.
        """
        callsign = UnitRosterService.normalize_callsign(callsign)
        label = clean_text(label) or f"{callsign} / Egység"
        actor = actor or Actor.system()

        if Unit.objects.filter(callsign__iexact=callsign).exists():
            raise Conflict(f"Callsign {callsign} is already taken.", code="CALLSIGN_TAKEN")

        try:
            with transaction.atomic():
                unit = Unit.objects.create(callsign=callsign, label=label)
                AuditTrail.append(
                    EntityType.UNIT, unit.pk, actor, AuditAction.CREATED,
                    note=callsign,
                )
        except IntegrityError:
            # Lost a race against a concurrent request for the same callsign.
            raise Conflict(f"Callsign {callsign} is already taken.", code="CALLSIGN_TAKEN")

        logger.info("Unit %s (%s) created by %s", unit.pk, callsign, actor.cid)
        return unit

    @staticmethod
    @transaction.atomic
    def add_member(unit_id: str, cid: int, actor: Actor) -> Unit:
        """
        Put an officer into a unit, leaving any previous unit first.

        Adding an officer who already serves in this unit returns the unit
        unchanged.

        Raises:
            NotFound:      unknown unit or officer.
            CapacityError: ``SQUAD_FULL`` when the unit already has the
                           maximum number of members.
        """
        officer = lock_for_update(Officer, cid)
        prior_unit_id = officer.unit_id
        units = lock_many_for_update(Unit, [unit_id, prior_unit_id])
        unit = units[unit_id]

        if prior_unit_id == unit.pk:
            return unit

        max_members = engine_setting("MAX_SQUAD_MEMBERS")
        if unit.members.count() >= max_members:
            raise CapacityError(
                f"Unit {unit.callsign} already has {max_members} members.",
                code="SQUAD_FULL",
            )

        if prior_unit_id is not None:
            prior = units[prior_unit_id]
            prior.save(update_fields=["updated_at"])
            AuditTrail.append(
                EntityType.UNIT, prior.pk, actor, AuditAction.MEMBER_REMOVED,
                note=officer.name, cid=officer.cid, moved_to=unit.callsign,
            )

        officer.unit = unit
        officer.unit_joined_at = timezone.now()
        officer.save(update_fields=["unit", "unit_joined_at", "updated_at"])

        unit.save(update_fields=["updated_at"])
        AuditTrail.append(
            EntityType.UNIT, unit.pk, actor, AuditAction.MEMBER_ADDED,
            note=officer.name, cid=officer.cid,
        )

        logger.info(
            "Officer %d joined unit %s (from %s) by %s",
            officer.cid, unit.pk, prior_unit_id, actor.cid,
        )
        return unit

    @staticmethod
    @transaction.atomic
    def remove_member(unit_id: str, cid: int, actor: Actor) -> Unit:
        # Officer row before unit row, same order as add_member.
        officer = lock_for_update(Officer, cid)
        unit = lock_for_update(Unit, unit_id)
        if officer.unit_id != unit.pk:
            raise NotFound(f"Officer {cid} is not a member of unit {unit.callsign}.")

        officer.unit = None
        officer.unit_joined_at = None
        officer.save(update_fields=["unit", "unit_joined_at", "updated_at"])

        unit.save(update_fields=["updated_at"])
        AuditTrail.append(
            EntityType.UNIT, unit.pk, actor, AuditAction.MEMBER_REMOVED,
            note=officer.name, cid=officer.cid,
        )
        logger.info("Officer %d left unit %s by %s", cid, unit.pk, actor.cid)
        return unit

    @staticmethod
    @transaction.atomic
    def set_status(unit_id: str, status: str, actor: Actor) -> Unit:
        """Any officer may flip a unit between available and unavailable."""
        if status not in UnitStatus.values:
            raise DomainError(f"Unknown unit status '{status}'.")

        unit = lock_for_update(Unit, unit_id)
        previous = unit.status
        unit.status = status
        unit.save(update_fields=["status", "updated_at"])
        AuditTrail.append(
            EntityType.UNIT, unit.pk, actor, AuditAction.STATUS_CHANGED,
            note=unit.get_status_display(), previous=previous, status=status,
        )
        logger.info("Unit %s status %s → %s by %s", unit.pk, previous, status, actor.cid)
        return unit
