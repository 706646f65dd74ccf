"""
Locations app models: ``Province`` and its ``District`` rows.

Both are plain permission-gated reference data.
"""

from django.db import models

from core.models import OwnedModel, TimeStampedModel
from core.permissions_constants import Entity, permission_choices


class Province(TimeStampedModel, OwnedModel):
    name = models.CharField(max_length=255, unique=True, verbose_name="Name")
    code = models.CharField(max_length=20, blank=True, default="", verbose_name="Code")
    capital = models.CharField(max_length=255, blank=True, default="", verbose_name="Capital")

    class Meta:
        verbose_name = "Province"
        verbose_name_plural = "Provinces"
        ordering = ["name"]
        default_permissions = ()
        permissions = permission_choices(Entity.PROVINCE)

    def __str__(self):
        return self.name


class District(TimeStampedModel, OwnedModel):
    province = models.ForeignKey(
        Province,
        on_delete=models.CASCADE,
        related_name="districts",
        verbose_name="Province",
    )
    name = models.CharField(max_length=255, verbose_name="Name")
    code = models.CharField(max_length=20, blank=True, default="", verbose_name="Code")

    class Meta:
        verbose_name = "District"
        verbose_name_plural = "Districts"
        ordering = ["province__name", "name"]
        default_permissions = ()
        permissions = permission_choices(Entity.DISTRICT)
        constraints = [
            models.UniqueConstraint(
                fields=["province", "name"],
                name="unique_district_name_per_province",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.province})"
