"""
Reports app Service Layer.

This module is the **single source of truth** for all business logic
in the ``reports`` app.  Views must remain thin: validate input via
serializers, call a service method, and return the result wrapped in
a DRF ``Response``.

Architecture
------------
- ``TagCatalogService``    — The shared set of allowed tags.
- ``ReportQueryService``   — Report retrieval & free-text search.
- ``ReportService``        — Create / edit / submit, dispatch drafts.
- ``PersonLookupService``  — People mentioned in reports and BOLOs.
- ``VehicleLookupService`` — Plates mentioned in reports and BOLOs.

Locking rule
------------
A submitted report is immutable.  ``update_report`` and ``submit_report``
re-read the row with ``select_for_update`` before checking the status,
so a save racing a submit either lands before the lock or is rejected
with ``REPORT_LOCKED``.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from bolos.models import Bolo
from core.constants import engine_setting
from core.domain.actors import Actor
from core.domain.audit import AuditTrail
from core.domain.exceptions import Conflict, DomainError, NotFound
from core.domain.normalize import (
    build_ref_keys,
    cid_key,
    clean_text,
    normalize_cid,
    normalize_involved,
    normalize_plate,
    normalize_plates,
    normalize_strings,
    normalize_tags,
    plate_key,
)
from core.domain.transactions import lock_for_update
from core.models import AuditAction, EntityType

from .models import Report, ReportStatus, ReportType, TagCatalogEntry
from .text import html_from_plain, strip_html, summary_from_html

logger = logging.getLogger(__name__)

EMPTY_BODY = "<p></p>"


# ═══════════════════════════════════════════════════════════════════
#  Tag Catalog Service
# ═══════════════════════════════════════════════════════════════════


class TagCatalogService:
    """
    The catalog is shared by reports, BOLOs and evidence.  Tags outside
    the catalog are dropped silently when a record is saved.
    """

    @staticmethod
    def get_tag_catalog() -> list[str]:
        return list(TagCatalogEntry.objects.values_list("name", flat=True))

    @staticmethod
    @transaction.atomic
    def set_tag_catalog(tags: Any) -> list[str]:
        """Replace the whole catalog.  Order is kept; blanks and duplicates dropped."""
        names = normalize_strings(tags, limit=engine_setting("MAX_TAG_CATALOG_SIZE"))
        too_long = [name for name in names if len(name) > 60]
        if too_long:
            raise DomainError(f"Tags must be at most 60 characters: {', '.join(too_long)}.")

        # Lock the current rows so concurrent replacements run one after another.
        list(TagCatalogEntry.objects.select_for_update())
        TagCatalogEntry.objects.all().delete()
        TagCatalogEntry.objects.bulk_create(
            TagCatalogEntry(name=name, position=index) for index, name in enumerate(names)
        )
        logger.info("Tag catalog replaced (%d tags)", len(names))
        return names

    @staticmethod
    def filter_tags(tags: Any) -> list[str]:
        return normalize_tags(
            tags,
            TagCatalogService.get_tag_catalog(),
            limit=engine_setting("MAX_LIST_ITEMS"),
        )


# ═══════════════════════════════════════════════════════════════════
#  Report Query Service
# ═══════════════════════════════════════════════════════════════════


class ReportQueryService:

    @staticmethod
    def get_report(report_id: str) -> Report:
        try:
            return Report.objects.get(pk=report_id)
        except Report.DoesNotExist:
            raise NotFound(f"Report '{report_id}' not found.")

    @staticmethod
    def report_exists(report_id: str) -> bool:
        return Report.objects.filter(pk=report_id).exists()

    @staticmethod
    def list_reports(
        query: str | None = None,
        tag: str | None = None,
        report_type: str | None = None,
        limit: int | None = None,
    ) -> list[Report]:
        """
        Newest first.  ``query`` matches id, title, location, author name,
        the plain-text body, involved cids/names and plates.
        """
        limit = limit or engine_setting("REPORT_LIST_LIMIT")
        qs = Report.objects.all()

        if report_type:
            qs = qs.filter(report_type=report_type)

        query = clean_text(query)
        if query:
            qs = qs.filter(
                Q(id__icontains=query)
                | Q(title__icontains=query)
                | Q(location__icontains=query)
                | Q(author_name__icontains=query)
                | Q(search_index__icontains=query.lower())
            )

        tag = clean_text(tag)
        if tag:
            # JSON containment is not portable across backends.
            return [report for report in qs if tag in report.tags][:limit]
        return list(qs[:limit])


# ═══════════════════════════════════════════════════════════════════
#  Report Service
# ═══════════════════════════════════════════════════════════════════


def describe_changes(before: dict[str, Any], after: dict[str, Any]) -> str:
    """Short Hungarian summary of what a save changed, ``—`` if nothing."""
    changes = []
    if before["tags"] != after["tags"]:
        changes.append("tagek")
    if before["involved"] != after["involved"]:
        changes.append("érintettek")
    if before["vehicles"] != after["vehicles"]:
        changes.append("járművek")
    if before["full_text"] != after["full_text"]:
        changes.append(
            f"tartalom ({len(before['full_text'])}→{len(after['full_text'])} karakter)"
        )
    return ", ".join(changes) if changes else "—"


class ReportService:
    """Report lifecycle: ``draft`` → ``submitted`` (locked)."""

    @staticmethod
    def _refresh_derived(report: Report) -> None:
        report.summary = summary_from_html(report.full_text)
        parts = [strip_html(report.full_text)]
        for entry in report.involved:
            parts.extend([str(entry["cid"]), entry["name"]])
        parts.extend(report.vehicles)
        report.search_index = " ".join(parts).lower()
        report.ref_keys = build_ref_keys(
            [entry["cid"] for entry in report.involved],
            report.vehicles,
        )

    @staticmethod
    @transaction.atomic
    def create_report(
        *,
        report_type: str,
        title: str,
        actor: Actor,
        location: str | None = None,
        tags: Any = None,
        involved: Any = None,
        vehicles: Any = None,
        full_text: str | None = None,
        note: str = "Új jelentés",
    ) -> Report:
        """
        Create a draft report.

        Raises:
            DomainError: unknown type, empty title, malformed involved
                         party or plate.
        """
        if report_type not in ReportType.values:
            raise DomainError(f"Unknown report type '{report_type}'.")
        title = clean_text(title)
        if not title:
            raise DomainError("A report title is required.")

        report = Report(
            report_type=report_type,
            title=title,
            location=clean_text(location) or engine_setting("DEFAULT_LOCATION"),
            tags=TagCatalogService.filter_tags(tags),
            involved=normalize_involved(involved, limit=engine_setting("MAX_LIST_ITEMS")),
            vehicles=normalize_plates(vehicles, limit=engine_setting("MAX_LIST_ITEMS")),
            full_text=EMPTY_BODY if full_text is None else str(full_text),
            status=ReportStatus.DRAFT,
            author_cid=actor.cid,
            author_name=actor.name,
            last_editor_cid=actor.cid,
            last_editor_name=actor.name,
        )
        ReportService._refresh_derived(report)
        report.save()

        AuditTrail.append(EntityType.REPORT, report.pk, actor, AuditAction.CREATED, note=note)
        logger.info("Report %s (%s) created by %s", report.pk, report_type, actor.cid)
        return report

    @staticmethod
    @transaction.atomic
    def update_report(
        report_id: str,
        actor: Actor,
        *,
        full_text: str | None = None,
        tags: Any = None,
        involved: Any = None,
        vehicles: Any = None,
    ) -> Report:
        """
        Save a draft.  Only the fields that are given are replaced.

        Raises:
            Conflict: ``REPORT_LOCKED`` once the report is submitted.
        """
        report = lock_for_update(Report, report_id)
        if report.is_locked:
            raise Conflict(f"Report {report.pk} is submitted and locked.", code="REPORT_LOCKED")

        limit = engine_setting("MAX_LIST_ITEMS")
        before = {
            "tags": report.tags,
            "involved": report.involved,
            "vehicles": report.vehicles,
            "full_text": report.full_text,
        }
        after = {
            "tags": before["tags"] if tags is None else TagCatalogService.filter_tags(tags),
            "involved": before["involved"] if involved is None else normalize_involved(involved, limit=limit),
            "vehicles": before["vehicles"] if vehicles is None else normalize_plates(vehicles, limit=limit),
            "full_text": before["full_text"] if full_text is None else str(full_text),
        }
        changes = describe_changes(before, after)

        for field, value in after.items():
            setattr(report, field, value)
        report.last_editor_cid = actor.cid
        report.last_editor_name = actor.name
        ReportService._refresh_derived(report)
        report.save()

        AuditTrail.append(EntityType.REPORT, report.pk, actor, AuditAction.SAVED, note=changes)
        logger.info("Report %s saved by %s (%s)", report.pk, actor.cid, changes)
        return report

    @staticmethod
    @transaction.atomic
    def submit_report(report_id: str, actor: Actor) -> Report:
        """
        Submit and lock the report.

        Raises:
            Conflict: ``REPORT_LOCKED`` when it was already submitted.
        """
        report = lock_for_update(Report, report_id)
        if report.is_locked:
            raise Conflict(f"Report {report.pk} is already submitted.", code="REPORT_LOCKED")

        report.status = ReportStatus.SUBMITTED
        report.submitted_at = timezone.now()
        report.last_editor_cid = actor.cid
        report.last_editor_name = actor.name
        report.save(update_fields=[
            "status", "submitted_at", "last_editor_cid", "last_editor_name", "updated_at",
        ])

        AuditTrail.append(
            EntityType.REPORT, report.pk, actor, AuditAction.SUBMITTED,
            note="Jelentés leadva (lezárva)",
        )
        logger.info("Report %s submitted by %s", report.pk, actor.cid)
        return report

    @staticmethod
    def create_dispatch_draft(
        *,
        code: str,
        title: str,
        location: str,
        text: str,
        actor: Actor,
    ) -> Report:
        """Draft report written when a dispatch call is closed."""
        return ReportService.create_report(
            report_type=ReportType.DISPATCH,
            title=f"{code} • {title}",
            location=location,
            tags=["Dispatch"],
            full_text=html_from_plain(text),
            actor=actor,
            note="Dispatch lezárás",
        )


# ═══════════════════════════════════════════════════════════════════
#  Person / Vehicle Lookups
# ═══════════════════════════════════════════════════════════════════


def _report_ref(report: Report, **extra: Any) -> dict[str, Any]:
    return {
        "id": report.pk,
        "title": report.title,
        "type": report.report_type,
        "status": report.status,
        "summary": report.summary,
        "created_at": report.created_at,
        **extra,
    }


def _bolo_ref(bolo: Bolo) -> dict[str, Any]:
    return {
        "id": bolo.pk,
        "title": bolo.title,
        "type": bolo.bolo_type,
        "priority": bolo.priority,
        "status": bolo.status,
        "is_actionable": bolo.is_actionable,
    }


class PersonLookupService:
    """
    Read-only projection of the people (by cid) that reports and BOLOs
    mention.  There is no person table: a cid exists for the lookup as
    long as some record references it.
    """

    @staticmethod
    def search_person(query: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        limit = limit or engine_setting("LOOKUP_LIMIT")
        query = clean_text(query).lower()
        people: dict[int, dict[str, Any]] = {}

        reports = Report.objects.filter(ref_keys__contains="|cid:")
        if query:
            reports = reports.filter(search_index__icontains=query)
        for report in reports:
            for entry in report.involved:
                if query and query not in str(entry["cid"]) and query not in entry["name"].lower():
                    continue
                person = people.setdefault(entry["cid"], {
                    "cid": entry["cid"],
                    "name": entry["name"],
                    "report_count": 0,
                    "bolo_count": 0,
                })
                person["report_count"] += 1

        for bolo in Bolo.objects.filter(ref_keys__contains="|cid:"):
            for cid in bolo.people:
                if query and query not in str(cid):
                    continue
                person = people.setdefault(cid, {
                    "cid": cid,
                    "name": engine_setting("UNKNOWN_PERSON_NAME"),
                    "report_count": 0,
                    "bolo_count": 0,
                })
                person["bolo_count"] += 1

        return list(people.values())[:limit]

    @staticmethod
    def get_person(cid: Any) -> dict[str, Any]:
        cid = normalize_cid(cid)
        reports = list(Report.objects.filter(ref_keys__contains=cid_key(cid)))
        bolos = list(Bolo.objects.filter(ref_keys__contains=cid_key(cid)))
        if not reports and not bolos:
            raise NotFound(f"No record mentions person {cid}.")

        name = engine_setting("UNKNOWN_PERSON_NAME")
        report_refs = []
        for report in reports:
            entry = next(e for e in report.involved if e["cid"] == cid)
            if not report_refs:
                name = entry["name"]
            report_refs.append(_report_ref(report, role=entry["role"]))

        return {
            "cid": cid,
            "name": name,
            "reports": report_refs,
            "bolos": [_bolo_ref(bolo) for bolo in bolos],
        }


class VehicleLookupService:
    """Read-only projection of the plates that reports and BOLOs mention."""

    @staticmethod
    def search_vehicle(query: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        limit = limit or engine_setting("LOOKUP_LIMIT")
        query = clean_text(query).upper()
        vehicles: dict[str, dict[str, Any]] = {}

        for report in Report.objects.filter(ref_keys__contains="|plate:"):
            for plate in report.vehicles:
                if query and query not in plate:
                    continue
                vehicle = vehicles.setdefault(plate, {"plate": plate, "report_count": 0, "bolo_count": 0})
                vehicle["report_count"] += 1

        for bolo in Bolo.objects.filter(ref_keys__contains="|plate:"):
            for plate in bolo.vehicles:
                if query and query not in plate:
                    continue
                vehicle = vehicles.setdefault(plate, {"plate": plate, "report_count": 0, "bolo_count": 0})
                vehicle["bolo_count"] += 1

        return list(vehicles.values())[:limit]

    @staticmethod
    def get_vehicle(plate: Any) -> dict[str, Any]:
        plate = normalize_plate(plate)
        reports = list(Report.objects.filter(ref_keys__contains=plate_key(plate)))
        bolos = list(Bolo.objects.filter(ref_keys__contains=plate_key(plate)))
        if not reports and not bolos:
            raise NotFound(f"No record mentions vehicle {plate}.")
        return {
            "plate": plate,
            "reports": [_report_ref(report) for report in reports],
            "bolos": [_bolo_ref(bolo) for bolo in bolos],
        }
