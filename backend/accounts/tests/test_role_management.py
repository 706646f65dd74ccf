"""
Integration tests — role management (``/api/accounts/roles/``).

- ``admin`` / ``superadmin`` list, create, read and update roles.
- Only ``superadmin`` deletes, never the reserved ``admin`` /
  ``superadmin`` roles, and never a role that is still assigned.
- Reserved roles keep their names; no other role may take one.
"""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import Role
from tests.factories import get_permission, make_role, make_user


class TestRoleManagement(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.superadmin = make_user(username="rm_super", roles=["superadmin"])
        cls.admin = make_user(username="rm_admin", roles=["admin"])
        cls.plain = make_user(username="rm_plain", roles=["user"])
        cls.view_any = get_permission("criminal.view_any")
        cls.view = get_permission("criminal.view")

    def setUp(self):
        self.client = APIClient()
        self.list_url = reverse("accounts:role-list")

    def _as(self, user):
        self.client.force_authenticate(user=user)

    def _detail(self, role):
        return reverse("accounts:role-detail", kwargs={"pk": role.pk})

    # ── Create / read ───────────────────────────────────────────────

    def test_admin_creates_role_with_permissions(self):
        self._as(self.admin)
        payload = {
            "name": "  investigator ",
            "description": "Field investigators",
            "permissions": [self.view_any.pk, self.view.pk],
        }
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        self.assertEqual(body["name"], "investigator")
        self.assertFalse(body["is_reserved"])
        self.assertEqual(body["permissions_display"], ["criminal.view", "criminal.view_any"])

    def test_duplicate_name_is_409(self):
        make_role("auditor")
        self._as(self.admin)
        response = self.client.post(self.list_url, {"name": "auditor"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_reserved_name_is_409(self):
        self._as(self.superadmin)
        response = self.client.post(self.list_url, {"name": "SuperAdmin"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_plain_user_is_refused(self):
        self._as(self.plain)
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_403_FORBIDDEN)
        response = self.client.post(self.list_url, {"name": "rogue"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_marks_reserved_roles(self):
        self._as(self.admin)
        roles = {r["name"]: r for r in self.client.get(self.list_url).json()}
        self.assertTrue(roles["admin"]["is_reserved"])
        self.assertTrue(roles["superadmin"]["is_reserved"])
        self.assertFalse(roles["user"]["is_reserved"])

    # ── Update ──────────────────────────────────────────────────────

    def test_rename_custom_role(self):
        role = make_role("reviewer")
        self._as(self.admin)
        response = self.client.patch(self._detail(role), {"name": "senior reviewer"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Role.objects.get(pk=role.pk).name, "senior reviewer")

    def test_reserved_role_cannot_be_renamed(self):
        admin_role = Role.objects.get(name="admin")
        self._as(self.superadmin)
        response = self.client.patch(self._detail(admin_role), {"name": "boss"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reserved_role_description_can_change(self):
        admin_role = Role.objects.get(name="admin")
        self._as(self.superadmin)
        response = self.client.patch(
            self._detail(admin_role), {"description": "Administrators"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_assign_permissions(self):
        role = make_role("clerk", permissions=["criminal.view"])
        self._as(self.admin)
        url = reverse("accounts:role-assign-permissions", kwargs={"pk": role.pk})
        response = self.client.post(url, {"permission_ids": [self.view_any.pk]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["permissions_display"], ["criminal.view_any"])

    def test_assign_unknown_permission_is_400(self):
        role = make_role("clerk")
        self._as(self.admin)
        url = reverse("accounts:role-assign-permissions", kwargs={"pk": role.pk})
        response = self.client.post(url, {"permission_ids": [987654]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_cannot_change_reserved_role_permissions(self):
        admin_role = Role.objects.get(name="admin")
        before = set(admin_role.permissions.values_list("pk", flat=True))
        self._as(self.admin)

        url = reverse("accounts:role-assign-permissions", kwargs={"pk": admin_role.pk})
        response = self.client.post(url, {"permission_ids": [self.view_any.pk]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["entity"], "role")

        response = self.client.patch(
            self._detail(admin_role), {"permissions": [self.view_any.pk]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(set(admin_role.permissions.values_list("pk", flat=True)), before)

    def test_superadmin_changes_reserved_role_permissions(self):
        admin_role = Role.objects.get(name="admin")
        self._as(self.superadmin)
        url = reverse("accounts:role-assign-permissions", kwargs={"pk": admin_role.pk})
        response = self.client.post(url, {"permission_ids": [self.view_any.pk]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["permissions_display"], ["criminal.view_any"])

    # ── Delete ──────────────────────────────────────────────────────

    def test_superadmin_deletes_unassigned_custom_role(self):
        role = make_role("temporary")
        self._as(self.superadmin)
        self.assertEqual(self.client.delete(self._detail(role)).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Role.objects.filter(pk=role.pk).exists())

    def test_admin_cannot_delete(self):
        role = make_role("temporary")
        self._as(self.admin)
        self.assertEqual(self.client.delete(self._detail(role)).status_code, status.HTTP_403_FORBIDDEN)

    def test_reserved_roles_cannot_be_deleted(self):
        self._as(self.superadmin)
        for name in ("admin", "superadmin"):
            role = Role.objects.get(name=name)
            response = self.client.delete(self._detail(role))
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, name)
            self.assertTrue(Role.objects.filter(pk=role.pk).exists())

    def test_assigned_role_cannot_be_deleted(self):
        make_user(username="rm_holder", roles=["busy"])
        role = Role.objects.get(name="busy")
        self._as(self.superadmin)
        self.assertEqual(self.client.delete(self._detail(role)).status_code, status.HTTP_409_CONFLICT)

    # ── Permission catalogue ────────────────────────────────────────

    def test_permission_list_is_the_catalogue(self):
        self._as(self.admin)
        response = self.client.get(reverse("accounts:permission-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        codenames = [p["codename"] for p in response.json()]
        self.assertIn("criminal.view_any", codenames)
        self.assertIn("backup.manage", codenames)
        self.assertEqual(codenames, sorted(codenames))
        self.assertTrue(all("." in codename for codename in codenames))
