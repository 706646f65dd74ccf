"""
Incidents app models.

* ``IncidentCategory`` — classification of incidents.
* ``IncidentReport``   — a periodic report that groups incidents.  Access
                         to reports is additionally governed by access
                         grants (``GRANT_SCOPE``).
* ``Incident``         — a single incident inside a report.
"""

from django.conf import settings
from django.db import models

from core.models import OwnedModel, TimeStampedModel
from core.permissions_constants import Entity, permission_choices


class IncidentCategory(TimeStampedModel, OwnedModel):
    name = models.CharField(max_length=255, unique=True, verbose_name="Name")
    code = models.CharField(max_length=50, blank=True, default="", verbose_name="Code")
    description = models.TextField(blank=True, default="", verbose_name="Description")
    color = models.CharField(max_length=20, blank=True, default="", verbose_name="Color")

    class Meta:
        verbose_name = "Incident Category"
        verbose_name_plural = "Incident Categories"
        ordering = ["name"]
        default_permissions = ()
        permissions = permission_choices(Entity.INCIDENT_CATEGORY)

    def __str__(self):
        return self.name


class IncidentReport(TimeStampedModel, OwnedModel):
    GRANT_SCOPE = Entity.INCIDENT_REPORT

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        SUBMITTED = "submitted", "Submitted"
        REVIEWED = "reviewed", "Reviewed"

    report_number = models.CharField(max_length=50, unique=True, verbose_name="Report Number")
    report_date = models.DateField(verbose_name="Report Date")
    security_level = models.CharField(max_length=50, blank=True, default="normal", verbose_name="Security Level")
    details = models.TextField(blank=True, default="", verbose_name="Details")
    action_taken = models.TextField(blank=True, default="", verbose_name="Action Taken")
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.DRAFT,
        verbose_name="Status",
    )

    class Meta:
        verbose_name = "Incident Report"
        verbose_name_plural = "Incident Reports"
        ordering = ["-report_date", "-id"]
        default_permissions = ()
        permissions = permission_choices(Entity.INCIDENT_REPORT)

    def __str__(self):
        return self.report_number


class Incident(TimeStampedModel, OwnedModel):
    report = models.ForeignKey(
        IncidentReport,
        on_delete=models.CASCADE,
        related_name="incidents",
        verbose_name="Report",
    )
    category = models.ForeignKey(
        IncidentCategory,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="incidents",
        verbose_name="Category",
    )
    province = models.ForeignKey(
        "locations.Province",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="incidents",
        verbose_name="Province",
    )
    district = models.ForeignKey(
        "locations.District",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="incidents",
        verbose_name="District",
    )
    reported_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Reported By",
    )
    title = models.CharField(max_length=255, verbose_name="Title")
    description = models.TextField(blank=True, default="", verbose_name="Description")
    incident_date = models.DateField(null=True, blank=True, verbose_name="Incident Date")
    casualties = models.PositiveIntegerField(default=0, verbose_name="Casualties")
    injuries = models.PositiveIntegerField(default=0, verbose_name="Injuries")
    # Set by the report owner; not a write lock.
    confirmed = models.BooleanField(default=False, verbose_name="Confirmed")

    class Meta:
        verbose_name = "Incident"
        verbose_name_plural = "Incidents"
        ordering = ["-incident_date", "-id"]
        default_permissions = ()
        permissions = permission_choices(Entity.INCIDENT)

    def __str__(self):
        return self.title
