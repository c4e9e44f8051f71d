"""
Reports app models.

``Report`` is the written record officers file (identity checks, actions,
incidents, investigations and the drafts created when a dispatch call is
closed).  ``TagCatalogEntry`` holds the shared, editable set of tags a
report, BOLO or evidence item may carry.
"""

from django.db import models

from core.constants import DEFAULT_LOCATION
from core.domain import ids
from core.models import TimeStampedModel


def generate_report_id() -> str:
    return ids.new_id(ids.REPORT)


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class ReportType(models.TextChoices):
    IDENTITY_CHECK = "identity_check", "Identity Check"
    ACTION = "action", "Action"
    INCIDENT = "incident", "Incident"
    INVESTIGATION = "investigation", "Investigation"
    DISPATCH = "dispatch", "Dispatch"
    OTHER = "other", "Other"


class ReportStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    SUBMITTED = "submitted", "Submitted"


class InvolvedRole(models.TextChoices):
    SUSPECT = "suspect", "Suspect"
    WITNESS = "witness", "Witness"
    VICTIM = "victim", "Victim"
    OTHER = "other", "Other"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Report(TimeStampedModel):
    """
    A report with an HTML body.

    Once ``status`` is ``submitted`` the record is locked: only its
    timeline keeps growing.

    ``search_index`` holds the lower-cased plain body plus involved
    names/cids and plates for free-text search; ``ref_keys`` holds
    ``|cid:<n>|`` and ``|plate:<PLATE>|`` markers for exact lookups.
    Both are rebuilt on every save by the service layer.
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_report_id,
        editable=False,
    )
    report_type = models.CharField(
        max_length=20,
        choices=ReportType.choices,
        default=ReportType.OTHER,
        db_index=True,
        verbose_name="Type",
    )
    title = models.CharField(
        max_length=255,
        verbose_name="Title",
    )
    location = models.CharField(
        max_length=255,
        default=DEFAULT_LOCATION,
        verbose_name="Location",
    )
    tags = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Tags",
    )
    involved = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Involved Parties",
        help_text="List of {cid, name, role} objects.",
    )
    vehicles = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Vehicles",
        help_text="Upper-case licence plates.",
    )
    summary = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name="Summary",
    )
    full_text = models.TextField(
        default="<p></p>",
        verbose_name="Full Text (HTML)",
    )
    status = models.CharField(
        max_length=20,
        choices=ReportStatus.choices,
        default=ReportStatus.DRAFT,
        db_index=True,
        verbose_name="Status",
    )
    author_cid = models.PositiveIntegerField(verbose_name="Author CID")
    author_name = models.CharField(max_length=120, verbose_name="Author Name")
    last_editor_cid = models.PositiveIntegerField(verbose_name="Last Editor CID")
    last_editor_name = models.CharField(max_length=120, verbose_name="Last Editor Name")
    submitted_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Submitted At",
    )
    search_index = models.TextField(
        blank=True,
        default="",
        editable=False,
    )
    ref_keys = models.TextField(
        blank=True,
        default="",
        editable=False,
    )

    class Meta:
        verbose_name = "Report"
        verbose_name_plural = "Reports"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.id} {self.title} [{self.get_status_display()}]"

    @property
    def is_locked(self) -> bool:
        return self.status == ReportStatus.SUBMITTED


class TagCatalogEntry(models.Model):
    """One allowed tag.  ``position`` keeps the catalog in display order."""

    name = models.CharField(
        max_length=60,
        unique=True,
        verbose_name="Tag",
    )
    position = models.PositiveIntegerField(
        default=0,
        verbose_name="Position",
    )

    class Meta:
        verbose_name = "Tag Catalog Entry"
        verbose_name_plural = "Tag Catalog"
        ordering = ["position", "id"]

    def __str__(self):
        return self.name
