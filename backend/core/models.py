"""
Core app models.

Provides the abstract timestamp base shared by every aggregate and the
append-only ``AuditEvent`` table that backs every timeline in the system
(call timelines, report history, BOLO activity, evidence chain-of-custody,
case history).
"""

from django.db import models


class TimeStampedModel(models.Model):
    """
    Abstract base model that provides self-updating ``created_at`` and
    ``updated_at`` timestamp fields for every concrete child model.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated At",
    )

    class Meta:
        abstract = True


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class EntityType(models.TextChoices):
    """Aggregate kinds that own a timeline."""

    UNIT = "unit", "Unit"
    CALL = "call", "Dispatch Call"
    REPORT = "report", "Report"
    BOLO = "bolo", "BOLO"
    EVIDENCE = "evidence", "Evidence Item"
    CASE_REQUEST = "case_request", "Case Request"
    CASE = "case", "Case"


class AuditAction(models.TextChoices):
    """
    Timeline vocabulary.  The stored value is what officers see in the
    timeline; the label is the English meaning.
    """

    CREATED = "Létrehozva", "Created"
    SAVED = "Mentve", "Saved"
    SUBMITTED = "Leadva", "Submitted"
    UPDATED = "Frissítve", "Updated"
    SIGHTING = "Láttam", "Sighting"
    SUSPENDED = "Felfüggesztve", "Suspended"
    REACTIVATED = "Újraaktiválva", "Reactivated"
    CLOSED = "Lezárva", "Closed"
    NOTE = "Megjegyzés", "Note"
    TRANSFERRED = "Átadva", "Transferred"
    SEALED = "Lepecsételve", "Sealed"
    LINKED = "Linkelve", "Linked"
    UNLINKED = "Leválasztva", "Unlinked"
    CALL_RECEIVED = "Riasztás beérkezett", "Call received"
    CALL_ACCEPTED = "Elfogadta a hívást", "Call accepted"
    STATUS_CHANGED = "Státusz", "Status changed"
    MEMBER_ADDED = "Tag felvéve", "Member added"
    MEMBER_REMOVED = "Tag eltávolítva", "Member removed"
    APPROVED = "Jóváhagyva", "Approved"
    REJECTED = "Elutasítva", "Rejected"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class AuditEvent(models.Model):
    """
    One immutable entry in an aggregate's timeline.

    The aggregate is addressed by ``(entity_type, entity_id)`` rather than
    a foreign key so that each app keeps exclusive ownership of its own
    tables.  ``seq`` is a gapless per-aggregate counter; ``ts`` never goes
    backwards within one aggregate even if the wall clock does.
    """

    entity_type = models.CharField(
        max_length=20,
        choices=EntityType.choices,
        verbose_name="Entity Type",
    )
    entity_id = models.CharField(
        max_length=40,
        verbose_name="Entity ID",
    )
    seq = models.PositiveIntegerField(
        verbose_name="Sequence",
    )
    ts = models.DateTimeField(
        verbose_name="Timestamp",
    )
    actor_cid = models.PositiveIntegerField(
        verbose_name="Actor CID",
        help_text="0 is the system (dispatch) actor.",
    )
    actor_name = models.CharField(
        max_length=120,
        verbose_name="Actor Name",
    )
    action = models.CharField(
        max_length=40,
        choices=AuditAction.choices,
        verbose_name="Action",
    )
    note = models.TextField(
        blank=True,
        default="",
        verbose_name="Note",
    )
    details = models.JSONField(
        default=dict,
        blank=True,
        verbose_name="Details",
        help_text="Action-specific payload (holder, changes, status …).",
    )

    class Meta:
        verbose_name = "Audit Event"
        verbose_name_plural = "Audit Events"
        ordering = ["-seq"]
        constraints = [
            models.UniqueConstraint(
                fields=["entity_type", "entity_id", "seq"],
                name="audit_event_unique_seq",
            ),
        ]
        indexes = [
            models.Index(fields=["entity_type", "entity_id"], name="audit_entity_idx"),
        ]

    def __str__(self):
        return f"[{self.entity_type}:{self.entity_id} #{self.seq}] {self.action}"
