"""
Reports app models.

* ``StatCategory`` / ``StatCategoryItem`` — the statistics catalogue.
  Items form a tree inside a category.
* ``Report`` / ``ReportStat`` — a dated report and its statistic values.
"""

from django.db import models

from core.models import OwnedModel, TimeStampedModel
from core.permissions_constants import Entity, permission_choices


class StatCategory(TimeStampedModel, OwnedModel):
    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"

    name = models.CharField(max_length=255, unique=True, verbose_name="Name")
    label = models.CharField(max_length=255, blank=True, default="", verbose_name="Label")
    color = models.CharField(max_length=20, blank=True, default="", verbose_name="Color")
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        verbose_name="Status",
    )

    class Meta:
        verbose_name = "Stat Category"
        verbose_name_plural = "Stat Categories"
        ordering = ["name"]
        default_permissions = ()
        permissions = permission_choices(Entity.STAT_CATEGORY)

    def __str__(self):
        return self.label or self.name


class StatCategoryItem(TimeStampedModel, OwnedModel):
    category = models.ForeignKey(
        StatCategory,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name="Category",
    )
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children",
        verbose_name="Parent Item",
    )
    name = models.CharField(max_length=255, verbose_name="Name")
    label = models.CharField(max_length=255, blank=True, default="", verbose_name="Label")
    order = models.PositiveIntegerField(default=0, verbose_name="Order")

    class Meta:
        verbose_name = "Stat Category Item"
        verbose_name_plural = "Stat Category Items"
        ordering = ["category_id", "order", "id"]
        default_permissions = ()
        permissions = permission_choices(Entity.STAT_CATEGORY_ITEM)

    def __str__(self):
        return self.label or self.name


class Report(TimeStampedModel, OwnedModel):
    title = models.CharField(max_length=255, verbose_name="Title")
    report_date = models.DateField(verbose_name="Report Date")
    description = models.TextField(blank=True, default="", verbose_name="Description")
    province = models.ForeignKey(
        "locations.Province",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reports",
        verbose_name="Province",
    )

    class Meta:
        verbose_name = "Report"
        verbose_name_plural = "Reports"
        ordering = ["-report_date", "-id"]
        default_permissions = ()
        permissions = permission_choices(Entity.REPORT)

    def __str__(self):
        return self.title


class ReportStat(TimeStampedModel, OwnedModel):
    report = models.ForeignKey(
        Report,
        on_delete=models.CASCADE,
        related_name="stats",
        verbose_name="Report",
    )
    stat_category_item = models.ForeignKey(
        StatCategoryItem,
        on_delete=models.PROTECT,
        related_name="report_stats",
        verbose_name="Stat Category Item",
    )
    integer_value = models.IntegerField(null=True, blank=True, verbose_name="Integer Value")
    string_value = models.CharField(max_length=255, blank=True, default="", verbose_name="String Value")
    notes = models.TextField(blank=True, default="", verbose_name="Notes")

    class Meta:
        verbose_name = "Report Stat"
        verbose_name_plural = "Report Stats"
        default_permissions = ()
        permissions = permission_choices(Entity.REPORT_STAT)
        constraints = [
            models.UniqueConstraint(
                fields=["report", "stat_category_item"],
                name="unique_stat_per_report",
            ),
        ]

    def __str__(self):
        return f"{self.report_id}:{self.stat_category_item_id}"
