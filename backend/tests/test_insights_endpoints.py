"""
Integration tests — insight records, items and item statistics.

Endpoints under test:
    GET/POST             /api/insights/infos/                       (insights:info-list)
    GET/PATCH/DELETE     /api/insights/infos/{id}/                  (insights:info-detail)
    GET/POST             /api/insights/infos/{info_pk}/items/       (insights:info-item-list)
    GET/PATCH/DELETE     /api/insights/infos/{info_pk}/items/{id}/  (insights:info-item-detail)
    GET/PUT              /api/insights/items/{id}/stats/            (insights:item-stats)

A confirmed record refuses edits to itself and to its items; a confirmed
item refuses edits to itself.  Both show up as 403.
"""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from access.services import AccessGrantRegistry
from core.permissions_constants import Entity
from insights.models import NationalInsightCenterInfo, NationalInsightCenterInfoItem
from reports.models import StatCategory, StatCategoryItem

from .factories import make_insight, make_insight_item, make_user

ITEM_PERMISSIONS = [
    "national_insight_center_info.view_any",
    "national_insight_center_info.view",
    "national_insight_center_info.create",
    "national_insight_center_info.update",
    "national_insight_center_info.delete",
    "national_insight_center_info_item.view_any",
    "national_insight_center_info_item.view",
    "national_insight_center_info_item.create",
    "national_insight_center_info_item.update",
    "national_insight_center_info_item.delete",
]


class TestInsightEndpoints(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.owner = make_user(username="nic_api_owner", permissions=ITEM_PERMISSIONS)
        cls.peer = make_user(username="nic_api_peer", permissions=ITEM_PERMISSIONS)
        cls.record = make_insight(cls.owner)
        cls.locked = make_insight(cls.owner, confirmed=True)
        category = StatCategory.objects.create(name="Seizures")
        cls.stat_a = StatCategoryItem.objects.create(category=category, name="Weapons")
        cls.stat_b = StatCategoryItem.objects.create(category=category, name="Vehicles")

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=self.owner)

    def _items_url(self, record):
        return reverse("insights:info-item-list", kwargs={"info_pk": record.pk})

    def _stats_url(self, item):
        return reverse("insights:item-stats", kwargs={"pk": item.pk})

    def _record_url(self, record):
        return reverse("insights:info-detail", kwargs={"pk": record.pk})

    def _item_url(self, item, record=None):
        record = record or item.info
        return reverse("insights:info-item-detail", kwargs={"info_pk": record.pk, "pk": item.pk})

    # ── Records ─────────────────────────────────────────────────────

    def test_owner_views_record(self):
        url = reverse("insights:info-detail", kwargs={"pk": self.record.pk})
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["id"], self.record.pk)

    def test_peer_needs_grant_to_view(self):
        url = reverse("insights:info-detail", kwargs={"pk": self.record.pk})
        self.client.force_authenticate(user=self.peer)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        AccessGrantRegistry.grant(
            user=self.peer,
            scope=Entity.NATIONAL_INSIGHT_CENTER_INFO,
            resource=self.record,
        )
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

    def test_missing_record_is_404(self):
        url = reverse("insights:info-detail", kwargs={"pk": 31337})
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_list_holds_own_and_granted_records(self):
        foreign = make_insight(self.peer)
        hidden = make_insight(self.peer)
        AccessGrantRegistry.grant(
            user=self.owner,
            scope=Entity.NATIONAL_INSIGHT_CENTER_INFO,
            resource=foreign,
        )
        response = self.client.get(reverse("insights:info-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = {row["id"] for row in response.json()}
        self.assertTrue({self.record.pk, self.locked.pk, foreign.pk} <= ids)
        self.assertNotIn(hidden.pk, ids)

    def test_global_grant_lists_every_record(self):
        foreign = make_insight(self.peer)
        AccessGrantRegistry.grant(user=self.owner, scope=Entity.NATIONAL_INSIGHT_CENTER_INFO)
        ids = {row["id"] for row in self.client.get(reverse("insights:info-list")).json()}
        self.assertIn(foreign.pk, ids)

    def test_list_requires_view_any(self):
        self.client.force_authenticate(user=make_user(username="nic_api_bare"))
        response = self.client.get(reverse("insights:info-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_record(self):
        response = self.client.post(
            reverse("insights:info-list"),
            {"title": "Border report", "code": "BR-1", "confirmed": True},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        record = NationalInsightCenterInfo.objects.get(pk=response.json()["id"])
        self.assertEqual(record.created_by, self.owner)
        self.assertFalse(record.confirmed)

    def test_owner_updates_open_record(self):
        response = self.client.patch(self._record_url(self.record), {"title": "Renamed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(NationalInsightCenterInfo.objects.get(pk=self.record.pk).title, "Renamed")

    def test_confirmed_record_refuses_update_and_delete(self):
        url = self._record_url(self.locked)
        response = self.client.patch(url, {"title": "Rewritten"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["action"], "update")
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(NationalInsightCenterInfo.objects.filter(pk=self.locked.pk).exists())

    def test_grantee_cannot_update_someone_elses_record(self):
        AccessGrantRegistry.grant(
            user=self.peer,
            scope=Entity.NATIONAL_INSIGHT_CENTER_INFO,
            resource=self.record,
        )
        self.client.force_authenticate(user=self.peer)
        response = self.client.patch(self._record_url(self.record), {"title": "Hijack"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_owner_deletes_open_record(self):
        record = make_insight(self.owner)
        make_insight_item(record, self.owner)
        self.assertEqual(self.client.delete(self._record_url(record)).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(NationalInsightCenterInfo.objects.filter(pk=record.pk).exists())

    def test_non_numeric_ids_are_404(self):
        self.assertEqual(self.client.get("/api/insights/infos/abc/").status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.get("/api/insights/infos/abc/items/").status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(
            self.client.get(f"/api/insights/infos/{self.record.pk}/items/abc/").status_code,
            status.HTTP_404_NOT_FOUND,
        )

    # ── Items ───────────────────────────────────────────────────────

    def test_create_item_on_open_record(self):
        response = self.client.post(self._items_url(self.record), {"title": "Checkpoint"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        item = NationalInsightCenterInfoItem.objects.get(pk=response.json()["id"])
        self.assertEqual(item.info, self.record)
        self.assertEqual(item.created_by, self.owner)

    def test_create_item_on_confirmed_record_is_403(self):
        response = self.client.post(self._items_url(self.locked), {"title": "Late entry"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(self.locked.items.exists())

    def test_peer_cannot_add_items_without_access(self):
        self.client.force_authenticate(user=self.peer)
        response = self.client.post(self._items_url(self.record), {"title": "Intrusion"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_item_list_follows_record_access(self):
        own = make_insight_item(self.record, self.owner)
        peer_item = make_insight_item(self.record, self.peer)
        ids = {row["id"] for row in self.client.get(self._items_url(self.record)).json()}
        self.assertEqual(ids, {own.pk, peer_item.pk})

        self.client.force_authenticate(user=self.peer)
        ids = {row["id"] for row in self.client.get(self._items_url(self.record)).json()}
        self.assertEqual(ids, {peer_item.pk})

    def test_retrieve_item(self):
        item = make_insight_item(self.record, self.owner)
        response = self.client.get(self._item_url(item))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["info"], self.record.pk)

    def test_item_under_another_record_is_404(self):
        item = make_insight_item(self.record, self.owner)
        response = self.client.get(self._item_url(item, record=self.locked))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_open_item(self):
        item = make_insight_item(self.record, self.owner)
        response = self.client.patch(self._item_url(item), {"title": "Revised"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(NationalInsightCenterInfoItem.objects.get(pk=item.pk).title, "Revised")

    def test_confirmed_item_refuses_update_and_delete(self):
        item = make_insight_item(self.record, self.owner, confirmed=True)
        url = self._item_url(item)
        self.assertEqual(
            self.client.patch(url, {"title": "Revised"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

    def test_confirmed_record_locks_its_items(self):
        item = make_insight_item(self.locked, self.owner)
        url = self._item_url(item)
        response = self.client.patch(url, {"title": "Revised"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["entity"], "national_insight_center_info_item")
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(NationalInsightCenterInfoItem.objects.filter(pk=item.pk).exists())

    def test_delete_open_item(self):
        item = make_insight_item(self.record, self.owner)
        self.assertEqual(self.client.delete(self._item_url(item)).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(NationalInsightCenterInfoItem.objects.filter(pk=item.pk).exists())

    # ── Statistics ──────────────────────────────────────────────────

    def test_replace_stats_on_confirmed_item(self):
        item = make_insight_item(self.record, self.owner, confirmed=True)
        payload = {
            "stats": [
                {"stat_category_item": self.stat_a.pk, "integer_value": 4},
                {"stat_category_item": self.stat_b.pk, "string_value": "two trucks"},
            ]
        }
        response = self.client.put(self._stats_url(item), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.json()), 2)

        payload = {"stats": [{"stat_category_item": self.stat_a.pk, "integer_value": 5}]}
        response = self.client.put(self._stats_url(item), payload, format="json")
        self.assertEqual(
            [(s["stat_category_item"], s["integer_value"]) for s in response.json()],
            [(self.stat_a.pk, 5)],
        )
        self.assertEqual(self.client.get(self._stats_url(item)).json(), response.json())

    def test_stats_under_confirmed_record_are_frozen(self):
        item = make_insight_item(self.locked, self.owner)
        payload = {"stats": [{"stat_category_item": self.stat_a.pk, "integer_value": 1}]}
        response = self.client.put(self._stats_url(item), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_duplicate_stat_rows_are_400(self):
        item = make_insight_item(self.record, self.owner)
        payload = {
            "stats": [
                {"stat_category_item": self.stat_a.pk, "integer_value": 1},
                {"stat_category_item": self.stat_a.pk, "integer_value": 2},
            ]
        }
        response = self.client.put(self._stats_url(item), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_stat_without_value_is_400(self):
        item = make_insight_item(self.record, self.owner)
        payload = {"stats": [{"stat_category_item": self.stat_a.pk}]}
        response = self.client.put(self._stats_url(item), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
