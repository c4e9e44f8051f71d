"""
Units app models.

The roster of officers and the capacity-bounded patrol units ("squads")
they serve in.  An officer belongs to at most one unit at a time: the
membership is a single nullable foreign key on ``Officer``, so the data
model itself cannot express double membership.
"""

from django.db import models

from core.domain import ids
from core.models import TimeStampedModel


def generate_unit_id() -> str:
    return ids.new_id(ids.UNIT)


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class UnitStatus(models.TextChoices):
    AVAILABLE = "available", "Available"
    UNAVAILABLE = "unavailable", "Unavailable"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class Unit(TimeStampedModel):
    """
    A patrol unit identified by a unique upper-case callsign (``A-01``).

    Members are the officers whose ``unit`` points here; there are never
    more than ``MAX_SQUAD_MEMBERS`` of them.
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_unit_id,
        editable=False,
    )
    callsign = models.CharField(
        max_length=20,
        unique=True,
        verbose_name="Callsign",
    )
    label = models.CharField(
        max_length=120,
        verbose_name="Label",
    )
    status = models.CharField(
        max_length=20,
        choices=UnitStatus.choices,
        default=UnitStatus.AVAILABLE,
        verbose_name="Status",
        db_index=True,
    )

    class Meta:
        verbose_name = "Unit"
        verbose_name_plural = "Units"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.callsign} ({self.get_status_display()})"

    @property
    def member_cids(self) -> list[int]:
        return list(
            self.members.order_by("unit_joined_at", "cid").values_list("cid", flat=True)
        )


class Officer(TimeStampedModel):
    """An officer on the roster, keyed by their stable ``cid``."""

    cid = models.PositiveIntegerField(
        primary_key=True,
        verbose_name="CID",
    )
    name = models.CharField(
        max_length=120,
        verbose_name="Name",
    )
    on_duty = models.BooleanField(
        default=False,
        verbose_name="On Duty",
    )
    unit = models.ForeignKey(
        Unit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="members",
        verbose_name="Unit",
    )
    unit_joined_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Joined Unit At",
    )

    class Meta:
        verbose_name = "Officer"
        verbose_name_plural = "Officers"
        ordering = ["name", "cid"]

    def __str__(self):
        return f"{self.name} ({self.cid})"
