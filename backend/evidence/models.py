"""
Evidence app models.

An ``EvidenceItem`` is a physical or digital exhibit with a custodian
(``holder``) and an append-only chain of custody (its audit timeline).
Sealing is one-way: a sealed item keeps its holder, report link and tags
forever, although notes may still be added.
"""

from django.db import models

from core.constants import DEFAULT_EVIDENCE_HOLDER
from core.domain import ids
from core.models import TimeStampedModel


def generate_evidence_id() -> str:
    return ids.new_id(ids.EVIDENCE)


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class EvidenceType(models.TextChoices):
    PHOTO = "photo", "Photo"
    VIDEO = "video", "Video"
    DNA = "dna", "DNA"
    FINGERPRINT = "fingerprint", "Fingerprint"
    WEAPON = "weapon", "Weapon"
    ITEM = "item", "Item"
    OTHER = "other", "Other"


class EvidenceStatus(models.TextChoices):
    OPEN = "open", "Open"
    SEALED = "sealed", "Sealed"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class EvidenceItem(TimeStampedModel):
    """
    One exhibit.  ``report_id`` and ``case_id`` are identifiers of records
    owned by other apps, not foreign keys.
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_evidence_id,
        editable=False,
    )
    label = models.CharField(
        max_length=255,
        verbose_name="Label",
    )
    evidence_type = models.CharField(
        max_length=20,
        choices=EvidenceType.choices,
        null=True,
        blank=True,
        verbose_name="Type",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    status = models.CharField(
        max_length=20,
        choices=EvidenceStatus.choices,
        default=EvidenceStatus.OPEN,
        db_index=True,
        verbose_name="Status",
    )
    holder = models.CharField(
        max_length=120,
        default=DEFAULT_EVIDENCE_HOLDER,
        verbose_name="Holder",
    )
    report_id = models.CharField(
        max_length=40,
        null=True,
        blank=True,
        db_index=True,
        verbose_name="Linked Report",
    )
    case_id = models.CharField(
        max_length=40,
        null=True,
        blank=True,
        db_index=True,
        verbose_name="Linked Case",
    )
    tags = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Tags",
    )

    class Meta:
        verbose_name = "Evidence Item"
        verbose_name_plural = "Evidence Items"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.id} {self.label} [{self.get_status_display()}]"

    @property
    def is_sealed(self) -> bool:
        return self.status == EvidenceStatus.SEALED
