"""
Infos app models.

* ``InfoCategory`` / ``InfoType`` — classifications of ``Info`` records.
  Neither can be deleted while an ``Info`` still references it.
* ``Info`` — a confirmable intelligence record.  Besides its creator it
  may be assigned to a user (``user``), who can then view and edit it.
"""

from django.conf import settings
from django.db import models

from core.models import ConfirmableModel, OwnedModel, TimeStampedModel
from core.permissions_constants import Entity, permission_choices


class InfoCategory(TimeStampedModel, OwnedModel):
    name = models.CharField(max_length=255, unique=True, verbose_name="Name")
    code = models.CharField(max_length=50, blank=True, default="", verbose_name="Code")
    description = models.TextField(blank=True, default="", verbose_name="Description")

    class Meta:
        verbose_name = "Info Category"
        verbose_name_plural = "Info Categories"
        ordering = ["name"]
        default_permissions = ()
        permissions = permission_choices(Entity.INFO_CATEGORY)

    def __str__(self):
        return self.name


class InfoType(TimeStampedModel, OwnedModel):
    GRANT_SCOPE = Entity.INFO_TYPE

    name = models.CharField(max_length=255, verbose_name="Name")
    description = models.TextField(blank=True, default="", verbose_name="Description")

    class Meta:
        verbose_name = "Info Type"
        verbose_name_plural = "Info Types"
        ordering = ["name"]
        default_permissions = ()
        permissions = permission_choices(Entity.INFO_TYPE)

    def __str__(self):
        return self.name


class Info(TimeStampedModel, OwnedModel, ConfirmableModel):
    info_type = models.ForeignKey(
        InfoType,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="infos",
        verbose_name="Info Type",
    )
    info_category = models.ForeignKey(
        InfoCategory,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="infos",
        verbose_name="Info Category",
    )
    department = models.ForeignKey(
        "accounts.Department",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="infos",
        verbose_name="Department",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_infos",
        verbose_name="Assigned User",
    )
    title = models.CharField(max_length=255, verbose_name="Title")
    code = models.CharField(max_length=50, blank=True, default="", verbose_name="Code")
    description = models.TextField(blank=True, default="", verbose_name="Description")
    info_date = models.DateField(null=True, blank=True, verbose_name="Date")

    class Meta:
        verbose_name = "Info"
        verbose_name_plural = "Infos"
        ordering = ["-created_at", "-id"]
        default_permissions = ()
        permissions = permission_choices(Entity.INFO)

    def __str__(self):
        return self.title
