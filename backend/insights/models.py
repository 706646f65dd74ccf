"""
Insights app models.

* ``NationalInsightCenterInfo``          — confirmable record; access can
                                           be shared through grants.
* ``NationalInsightCenterInfoItem``      — confirmable child item.  A
                                           confirmed parent locks every
                                           child (``LOCK_PARENT``).
* ``NationalInsightCenterInfoItemStat``  — statistic values attached to an
                                           item against a stat category item.
"""

from django.db import models

from core.models import ConfirmableModel, OwnedModel, TimeStampedModel
from core.permissions_constants import Entity, permission_choices


class NationalInsightCenterInfo(TimeStampedModel, OwnedModel, ConfirmableModel):
    GRANT_SCOPE = Entity.NATIONAL_INSIGHT_CENTER_INFO

    title = models.CharField(max_length=255, verbose_name="Title")
    code = models.CharField(max_length=50, blank=True, default="", verbose_name="Code")
    description = models.TextField(blank=True, default="", verbose_name="Description")

    class Meta:
        verbose_name = "National Insight Center Info"
        verbose_name_plural = "National Insight Center Infos"
        ordering = ["-created_at", "-id"]
        default_permissions = ()
        permissions = permission_choices(Entity.NATIONAL_INSIGHT_CENTER_INFO)

    def __str__(self):
        return self.title


class NationalInsightCenterInfoItem(TimeStampedModel, OwnedModel, ConfirmableModel):
    LOCK_PARENT = "info"

    info = models.ForeignKey(
        NationalInsightCenterInfo,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name="Insight Record",
    )
    title = models.CharField(max_length=255, verbose_name="Title")
    registration_number = models.CharField(max_length=100, blank=True, default="", verbose_name="Registration Number")
    info_category = models.ForeignKey(
        "infos.InfoCategory",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="insight_items",
        verbose_name="Info Category",
    )
    province = models.ForeignKey(
        "locations.Province",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="insight_items",
        verbose_name="Province",
    )
    district = models.ForeignKey(
        "locations.District",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="insight_items",
        verbose_name="District",
    )
    item_date = models.DateField(null=True, blank=True, verbose_name="Date")
    description = models.TextField(blank=True, default="", verbose_name="Description")

    class Meta:
        verbose_name = "National Insight Center Info Item"
        verbose_name_plural = "National Insight Center Info Items"
        ordering = ["-item_date", "-id"]
        default_permissions = ()
        permissions = permission_choices(Entity.NATIONAL_INSIGHT_CENTER_INFO_ITEM)

    def __str__(self):
        return self.title


class NationalInsightCenterInfoItemStat(TimeStampedModel, OwnedModel):
    item = models.ForeignKey(
        NationalInsightCenterInfoItem,
        on_delete=models.CASCADE,
        related_name="stats",
        verbose_name="Item",
    )
    stat_category_item = models.ForeignKey(
        "reports.StatCategoryItem",
        on_delete=models.PROTECT,
        related_name="insight_item_stats",
        verbose_name="Stat Category Item",
    )
    integer_value = models.IntegerField(null=True, blank=True, verbose_name="Integer Value")
    string_value = models.CharField(max_length=255, blank=True, default="", verbose_name="String Value")
    notes = models.TextField(blank=True, default="", verbose_name="Notes")

    class Meta:
        verbose_name = "Insight Item Statistic"
        verbose_name_plural = "Insight Item Statistics"
        default_permissions = ()
        constraints = [
            models.UniqueConstraint(
                fields=["item", "stat_category_item"],
                name="unique_stat_per_insight_item",
            ),
        ]

    def __str__(self):
        return f"{self.item_id}:{self.stat_category_item_id}"
