"""
Insights Service Layer.

- ``InsightRecordService`` — list / create / update / delete parent
                             records.  Lists hold only records the actor
                             created or holds an effective grant on.
- ``InsightItemService``   — list / create / retrieve / update / delete
                             items of a record, and ``update_stats`` to
                             replace the statistics attached to an item.

Every mutation authorizes through ``core.domain.policy`` first; the
policy layer owns every confirmation-lock rule.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import QuerySet

from access.services import AccessGrantRegistry
from core.domain.exceptions import DomainError, NotFound
from core.domain.policy import authorize
from core.permissions_constants import Action

from .models import (
    NationalInsightCenterInfo,
    NationalInsightCenterInfoItem,
    NationalInsightCenterInfoItemStat,
)
from .policies import has_record_access

logger = logging.getLogger(__name__)


def _apply(instance, validated_data: dict[str, Any]):
    for field, value in validated_data.items():
        setattr(instance, field, value)
    instance.save()
    return instance


# ════════════════════════════════════════════════════════════════════
#  Parent records
# ════════════════════════════════════════════════════════════════════


class InsightRecordService:

    @staticmethod
    def get_record(info_id: Any) -> NationalInsightCenterInfo:
        try:
            return NationalInsightCenterInfo.objects.get(pk=info_id)
        except (NationalInsightCenterInfo.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Insight record with id {info_id} not found.")

    @staticmethod
    def list_records(actor: Any) -> QuerySet:
        authorize(actor, Action.VIEW_ANY, NationalInsightCenterInfo)
        return AccessGrantRegistry.visible(NationalInsightCenterInfo.objects.all(), actor)

    @staticmethod
    def retrieve_record(actor: Any, info: NationalInsightCenterInfo) -> NationalInsightCenterInfo:
        authorize(actor, Action.VIEW, info)
        return info

    @staticmethod
    def create_record(actor: Any, validated_data: dict[str, Any]) -> NationalInsightCenterInfo:
        authorize(actor, Action.CREATE, NationalInsightCenterInfo)
        info = NationalInsightCenterInfo.objects.create(created_by=actor, **validated_data)
        logger.info("Insight record #%s created by user %s", info.pk, actor.pk)
        return info

    @staticmethod
    def update_record(
        actor: Any,
        info: NationalInsightCenterInfo,
        validated_data: dict[str, Any],
    ) -> NationalInsightCenterInfo:
        """Only the creator, and only while the record is unconfirmed."""
        authorize(actor, Action.UPDATE, info)
        return _apply(info, validated_data)

    @staticmethod
    def delete_record(actor: Any, info: NationalInsightCenterInfo) -> None:
        authorize(actor, Action.DELETE, info)
        pk = info.pk
        info.delete()
        logger.info("Insight record #%s deleted by user %s", pk, actor.pk)


# ════════════════════════════════════════════════════════════════════
#  Items
# ════════════════════════════════════════════════════════════════════


class InsightItemService:

    @staticmethod
    def get_item(item_id: int, info: NationalInsightCenterInfo | None = None) -> NationalInsightCenterInfoItem:
        """
        Fetch an item; with ``info`` the item must belong to that record,
        otherwise it is reported as missing.
        """
        qs = NationalInsightCenterInfoItem.objects.select_related("info")
        if info is not None:
            qs = qs.filter(info=info)
        try:
            return qs.get(pk=item_id)
        except (NationalInsightCenterInfoItem.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Insight item with id {item_id} not found.")

    @staticmethod
    def list_items(actor: Any, info: NationalInsightCenterInfo) -> QuerySet:
        """
        Items of ``info`` the actor may view: all of them with access to
        the record, otherwise only the items the actor created.
        """
        authorize(actor, Action.VIEW_ANY, NationalInsightCenterInfoItem)
        items = info.items.select_related("info")
        if has_record_access(actor, info):
            return items
        return items.filter(created_by_id=actor.pk)

    @staticmethod
    def create_item(
        actor: Any,
        info: NationalInsightCenterInfo,
        validated_data: dict[str, Any],
    ) -> NationalInsightCenterInfoItem:
        authorize(actor, Action.CREATE, NationalInsightCenterInfoItem, parent=info)
        return NationalInsightCenterInfoItem.objects.create(
            info=info,
            created_by=actor,
            **validated_data,
        )

    @staticmethod
    def retrieve_item(actor: Any, item: NationalInsightCenterInfoItem) -> NationalInsightCenterInfoItem:
        authorize(actor, Action.VIEW, item)
        return item

    @staticmethod
    def update_item(
        actor: Any,
        item: NationalInsightCenterInfoItem,
        validated_data: dict[str, Any],
    ) -> NationalInsightCenterInfoItem:
        authorize(actor, Action.UPDATE, item)
        return _apply(item, validated_data)

    @staticmethod
    def delete_item(actor: Any, item: NationalInsightCenterInfoItem) -> None:
        authorize(actor, Action.DELETE, item)
        pk, info_id = item.pk, item.info_id
        item.delete()
        logger.info("Insight item #%s of record #%s deleted by user %s", pk, info_id, actor.pk)
    @staticmethod
    def list_stats(actor: Any, item: NationalInsightCenterInfoItem) -> QuerySet:
        authorize(actor, Action.VIEW, item)
        return item.stats.select_related("stat_category_item").order_by("stat_category_item_id")

    @staticmethod
    def update_stats(
        actor: Any,
        item: NationalInsightCenterInfoItem,
        values: list[dict[str, Any]],
    ) -> QuerySet:
        """
        Replace the item's statistics with ``values``.

        Parameters
        ----------
        values : list[dict]
            Each entry: ``stat_category_item`` (StatCategoryItem),
            ``integer_value`` and / or ``string_value``, optional ``notes``.

        Raises
        ------
        PermissionDenied
            ``updateStats`` is denied (e.g. the parent record is confirmed).
        DomainError
            The same stat category item appears twice.
        """
        authorize(actor, Action.UPDATE_STATS, item)

        seen = set()
        for entry in values:
            key = entry["stat_category_item"].pk
            if key in seen:
                raise DomainError(f"Stat category item {key} is listed more than once.")
            seen.add(key)

        with transaction.atomic():
            item.stats.all().delete()
            NationalInsightCenterInfoItemStat.objects.bulk_create([
                NationalInsightCenterInfoItemStat(
                    item=item,
                    stat_category_item=entry["stat_category_item"],
                    integer_value=entry.get("integer_value"),
                    string_value=entry.get("string_value") or "",
                    notes=entry.get("notes") or "",
                    created_by=actor,
                )
                for entry in values
            ])

        logger.info("Stats of insight item #%s replaced by user %s (%d values)",
                    item.pk, actor.pk, len(values))
        return item.stats.select_related("stat_category_item").order_by("stat_category_item_id")
