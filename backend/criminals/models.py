from django.db import models

from core.models import OwnedModel, TimeStampedModel
from core.permissions_constants import Entity, permission_choices


class Criminal(TimeStampedModel, OwnedModel):
    """A person on record.  Plain permission-gated entity."""

    name = models.CharField(max_length=255, verbose_name="Name")
    father_name = models.CharField(max_length=255, blank=True, default="", verbose_name="Father Name")
    national_id = models.CharField(
        max_length=20,
        blank=True,
        default="",
        verbose_name="National ID",
        db_index=True,
    )
    crime_type = models.CharField(max_length=255, blank=True, default="", verbose_name="Crime Type")
    arrest_date = models.DateField(null=True, blank=True, verbose_name="Arrest Date")
    arrest_location = models.CharField(max_length=255, blank=True, default="", verbose_name="Arrest Location")
    final_verdict = models.TextField(blank=True, default="", verbose_name="Final Verdict")
    notes = models.TextField(blank=True, default="", verbose_name="Notes")
    department = models.ForeignKey(
        "accounts.Department",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="criminals",
        verbose_name="Department",
    )

    class Meta:
        verbose_name = "Criminal"
        verbose_name_plural = "Criminals"
        ordering = ["name"]
        default_permissions = ()
        permissions = permission_choices(Entity.CRIMINAL)

    def __str__(self):
        return self.name
