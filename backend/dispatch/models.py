"""
Dispatch app models.

A ``DispatchCall`` moves through ``new → accepted → en_route →
on_scene → closed``.  The assigned unit is referenced by id only;
closing writes a draft report and stores its id and summary here.
"""

from django.db import models

from core.domain import ids
from core.models import TimeStampedModel


def generate_call_id() -> str:
    return ids.new_id(ids.CALL)


class CallStatus(models.TextChoices):
    NEW = "new", "New"
    ACCEPTED = "accepted", "Accepted"
    EN_ROUTE = "en_route", "En Route"
    ON_SCENE = "on_scene", "On Scene"
    CLOSED = "closed", "Closed"


class DispatchCall(TimeStampedModel):
    """
    One incoming call.

    ``assigned_unit_id`` is set exactly when ``status`` is not ``new``.
    A closed call never changes status or assignment again and always
    carries ``report_id``.
    """

    id = models.CharField(
        primary_key=True,
        max_length=40,
        default=generate_call_id,
        editable=False,
    )
    code = models.CharField(max_length=20, verbose_name="Code")
    title = models.CharField(max_length=255, verbose_name="Title")
    location = models.CharField(max_length=255, verbose_name="Location")
    origin_x = models.FloatField(null=True, blank=True)
    origin_y = models.FloatField(null=True, blank=True)
    origin_z = models.FloatField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=CallStatus.choices,
        default=CallStatus.NEW,
        db_index=True,
        verbose_name="Status",
    )
    assigned_unit_id = models.CharField(
        max_length=40,
        null=True,
        blank=True,
        db_index=True,
        verbose_name="Assigned Unit",
    )
    report_summary = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name="Report Summary",
    )
    report_id = models.CharField(
        max_length=40,
        null=True,
        blank=True,
        verbose_name="Report",
    )

    class Meta:
        verbose_name = "Dispatch Call"
        verbose_name_plural = "Dispatch Calls"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.code} {self.title} [{self.get_status_display()}]"

    @property
    def origin(self) -> dict | None:
        if self.origin_x is None:
            return None
        return {"x": self.origin_x, "y": self.origin_y, "z": self.origin_z}
