"""
BOLO ("be on the lookout") models.

A BOLO alerts officers to a person, a vehicle or a general situation.
Closing is final; suspension is reversible.  ``expires_at`` is advisory:
the clock never changes ``status``, it only makes the alert
non-actionable.
"""

from django.db import models
from django.utils import timezone

from core.domain import ids
from core.models import TimeStampedModel


def generate_bolo_id() -> str:
    return ids.new_id(ids.BOLO)


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class BoloType(models.TextChoices):
    PERSON = "person", "Person"
    VEHICLE = "vehicle", "Vehicle"
    GENERAL = "general", "General"


class BoloPriority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    CRITICAL = "critical", "Critical"


class BoloStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    SUSPENDED = "suspended", "Suspended"
    CLOSED = "closed", "Closed"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Bolo(TimeStampedModel):
    """
    One alert.  ``people`` holds cids, ``vehicles`` upper-case plates and
    ``report_ids`` the reports that back the alert.  ``ref_keys`` mirrors
    people and vehicles as ``|cid:<n>|`` / ``|plate:<PLATE>|`` markers for
    the person and vehicle lookups.
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_bolo_id,
        editable=False,
    )
    bolo_type = models.CharField(
        max_length=20,
        choices=BoloType.choices,
        default=BoloType.GENERAL,
        verbose_name="Type",
    )
    priority = models.CharField(
        max_length=20,
        choices=BoloPriority.choices,
        default=BoloPriority.MEDIUM,
        verbose_name="Priority",
    )
    title = models.CharField(max_length=255, verbose_name="Title")
    description = models.TextField(verbose_name="Description")
    tags = models.JSONField(default=list, blank=True, verbose_name="Tags")
    people = models.JSONField(default=list, blank=True, verbose_name="People (cids)")
    vehicles = models.JSONField(default=list, blank=True, verbose_name="Vehicles")
    report_ids = models.JSONField(default=list, blank=True, verbose_name="Report IDs")
    status = models.CharField(
        max_length=20,
        choices=BoloStatus.choices,
        default=BoloStatus.ACTIVE,
        db_index=True,
        verbose_name="Status",
    )
    expires_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Expires At",
    )
    created_by_cid = models.PositiveIntegerField(verbose_name="Created By CID")
    created_by_name = models.CharField(max_length=120, verbose_name="Created By")
    ref_keys = models.TextField(blank=True, default="", editable=False)

    class Meta:
        verbose_name = "BOLO"
        verbose_name_plural = "BOLOs"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.id} {self.title} [{self.get_status_display()}]"

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and self.expires_at < timezone.now()

    @property
    def is_actionable(self) -> bool:
        return self.status == BoloStatus.ACTIVE and not self.is_expired
