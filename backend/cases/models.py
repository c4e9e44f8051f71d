"""
Cases app models.

Covers case intake: a ``CaseRequest`` proposes that a report become a
formal case, and approving it opens a numbered ``Case``.  Case numbers
come from ``CaseNumberSequence``, one counter row per calendar year.
"""

from django.db import models

from core.constants import DEFAULT_LOCATION
from core.domain import ids
from core.models import TimeStampedModel


def generate_case_request_id() -> str:
    return ids.new_id(ids.CASE_REQUEST)


def generate_case_id() -> str:
    return ids.new_id(ids.CASE)


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class CaseRequestStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"


class CaseStatus(models.TextChoices):
    OPEN = "open", "Open"
    IN_PROGRESS = "in_progress", "In Progress"
    PROSECUTION = "prosecution", "Prosecution"
    CLOSED = "closed", "Closed"


class CasePriority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    CRITICAL = "critical", "Critical"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class CaseRequest(TimeStampedModel):
    """
    A proposal to open a case from a report.

    The decision fields (``decided_by_*``, ``decided_at`` and, on approval,
    ``case_id`` / ``case_number``) are written together, exactly once,
    while the request leaves ``PENDING``.
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_case_request_id,
        editable=False,
    )
    report_id = models.CharField(
        max_length=40,
        db_index=True,
        verbose_name="Report",
    )
    report_title = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name="Report Title",
    )
    note = models.TextField(
        blank=True,
        default="",
        verbose_name="Note",
    )
    status = models.CharField(
        max_length=20,
        choices=CaseRequestStatus.choices,
        default=CaseRequestStatus.PENDING,
        db_index=True,
        verbose_name="Status",
    )
    created_by_cid = models.PositiveIntegerField(verbose_name="Requested By (CID)")
    created_by_name = models.CharField(max_length=120, verbose_name="Requested By")
    decided_by_cid = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name="Decided By (CID)",
    )
    decided_by_name = models.CharField(
        max_length=120,
        blank=True,
        default="",
        verbose_name="Decided By",
    )
    decided_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Decided At",
    )
    case_id = models.CharField(
        max_length=40,
        null=True,
        blank=True,
        verbose_name="Case",
    )
    case_number = models.CharField(
        max_length=40,
        null=True,
        blank=True,
        verbose_name="Case Number",
    )

    class Meta:
        verbose_name = "Case Request"
        verbose_name_plural = "Case Requests"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.id} → {self.report_id} [{self.get_status_display()}]"

    @property
    def is_pending(self) -> bool:
        return self.status == CaseRequestStatus.PENDING


class Case(TimeStampedModel):
    """
    A formally numbered investigation.  Linked records are identifiers of
    reports, evidence items and BOLOs owned by other apps.
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_case_id,
        editable=False,
    )
    case_number = models.CharField(
        max_length=40,
        unique=True,
        verbose_name="Case Number",
    )
    title = models.CharField(
        max_length=255,
        verbose_name="Title",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    status = models.CharField(
        max_length=20,
        choices=CaseStatus.choices,
        default=CaseStatus.OPEN,
        db_index=True,
        verbose_name="Status",
    )
    priority = models.CharField(
        max_length=20,
        choices=CasePriority.choices,
        default=CasePriority.MEDIUM,
        verbose_name="Priority",
    )
    location = models.CharField(
        max_length=255,
        default=DEFAULT_LOCATION,
        verbose_name="Location",
    )
    tags = models.JSONField(default=list, blank=True, verbose_name="Tags")
    linked_report_ids = models.JSONField(default=list, blank=True, verbose_name="Linked Reports")
    linked_evidence_ids = models.JSONField(default=list, blank=True, verbose_name="Linked Evidence")
    linked_bolo_ids = models.JSONField(default=list, blank=True, verbose_name="Linked BOLOs")
    created_by_cid = models.PositiveIntegerField(verbose_name="Created By (CID)")
    created_by_name = models.CharField(max_length=120, verbose_name="Created By")

    class Meta:
        verbose_name = "Case"
        verbose_name_plural = "Cases"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.case_number} — {self.title}"

    @property
    def is_closed(self) -> bool:
        return self.status == CaseStatus.CLOSED


class CaseNumberSequence(models.Model):
    """Last case number handed out in ``year``."""

    year = models.PositiveIntegerField(primary_key=True, verbose_name="Year")
    last_value = models.PositiveIntegerField(default=0, verbose_name="Last Value")

    class Meta:
        verbose_name = "Case Number Sequence"
        verbose_name_plural = "Case Number Sequences"

    def __str__(self):
        return f"{self.year}: {self.last_value}"
