"""
Integration tests — user management (``/api/accounts/users/``).

Access is role-gated: ``admin`` and ``superadmin`` may list, read and
assign roles; only ``superadmin`` may delete.  Plain users get 403.
"""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import Role, User
from core.domain.policy import decide
from tests.factories import make_role, make_user


class TestUserManagement(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.superadmin = make_user(username="um_super", roles=["superadmin"])
        cls.admin = make_user(username="um_admin", roles=["admin"])
        cls.plain = make_user(username="um_plain", roles=["user"], first_name="Plain")
        cls.dormant = make_user(username="um_dormant", is_active=False)
        cls.analyst_role = make_role("analyst", permissions=["criminal.view_any"])

    def setUp(self):
        self.client = APIClient()

    def _as(self, user):
        self.client.force_authenticate(user=user)

    # ── Listing ─────────────────────────────────────────────────────

    def test_admin_lists_users(self):
        self._as(self.admin)
        response = self.client.get(reverse("accounts:user-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        usernames = {u["username"] for u in response.json()}
        self.assertTrue({"um_super", "um_admin", "um_plain", "um_dormant"} <= usernames)

    def test_plain_user_is_refused(self):
        self._as(self.plain)
        response = self.client.get(reverse("accounts:user-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_filters(self):
        self._as(self.admin)
        url = reverse("accounts:user-list")

        user_role = Role.objects.get(name="user")
        by_role = self.client.get(url, {"role": user_role.pk}).json()
        self.assertEqual([u["username"] for u in by_role], ["um_plain"])

        inactive = self.client.get(url, {"is_active": "false"}).json()
        self.assertEqual([u["username"] for u in inactive], ["um_dormant"])

        searched = self.client.get(url, {"search": "plain"}).json()
        self.assertEqual([u["username"] for u in searched], ["um_plain"])

    # ── Retrieve ────────────────────────────────────────────────────

    def test_retrieve(self):
        self._as(self.admin)
        response = self.client.get(reverse("accounts:user-detail", kwargs={"pk": self.plain.pk}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["roles"], ["user"])
        self.assertEqual(response.json()["role"], "user")

    def test_retrieve_missing_is_404(self):
        self._as(self.admin)
        response = self.client.get(reverse("accounts:user-detail", kwargs={"pk": 999999}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # ── Role assignment ─────────────────────────────────────────────

    def test_admin_assigns_roles(self):
        self._as(self.admin)
        url = reverse("accounts:user-assign-roles", kwargs={"pk": self.plain.pk})
        response = self.client.post(url, {"role_ids": [self.analyst_role.pk]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["roles"], ["analyst"])
        self.assertEqual(response.json()["permissions"], ["criminal.view_any"])

        fresh = User.objects.get(pk=self.plain.pk)
        self.assertEqual(fresh.get_role_names(), {"analyst"})

    def test_empty_list_removes_every_role(self):
        self._as(self.admin)
        url = reverse("accounts:user-assign-roles", kwargs={"pk": self.plain.pk})
        response = self.client.post(url, {"role_ids": []}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["roles"], [])

    def test_unknown_role_id_is_404(self):
        self._as(self.admin)
        url = reverse("accounts:user-assign-roles", kwargs={"pk": self.plain.pk})
        response = self.client.post(url, {"role_ids": [424242]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(User.objects.get(pk=self.plain.pk).get_role_names(), {"user"})

    def test_plain_user_cannot_assign_roles(self):
        self._as(self.plain)
        url = reverse("accounts:user-assign-roles", kwargs={"pk": self.plain.pk})
        response = self.client.post(url, {"role_ids": [self.analyst_role.pk]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_cannot_grant_themselves_superadmin(self):
        custom = make_role("scratch")
        superadmin_role = Role.objects.get(name="superadmin")
        self._as(self.admin)
        url = reverse("accounts:user-assign-roles", kwargs={"pk": self.admin.pk})
        response = self.client.post(
            url, {"role_ids": [Role.objects.get(name="admin").pk, superadmin_role.pk]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["entity"], "user")

        fresh = User.objects.get(pk=self.admin.pk)
        self.assertEqual(fresh.get_role_names(), {"admin"})
        self.assertFalse(decide(fresh, "delete", custom))

    def test_admin_cannot_strip_a_reserved_role(self):
        other_admin = make_user(username="um_admin_two", roles=["admin"])
        self._as(self.admin)
        url = reverse("accounts:user-assign-roles", kwargs={"pk": other_admin.pk})
        response = self.client.post(url, {"role_ids": [self.analyst_role.pk]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(User.objects.get(pk=other_admin.pk).get_role_names(), {"admin"})

    def test_admin_keeps_reserved_role_while_changing_others(self):
        other_admin = make_user(username="um_admin_three", roles=["admin"])
        admin_role = Role.objects.get(name="admin")
        self._as(self.admin)
        url = reverse("accounts:user-assign-roles", kwargs={"pk": other_admin.pk})
        response = self.client.post(
            url, {"role_ids": [admin_role.pk, self.analyst_role.pk]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(sorted(response.json()["roles"]), ["admin", "analyst"])

    def test_superadmin_assigns_reserved_roles(self):
        self._as(self.superadmin)
        url = reverse("accounts:user-assign-roles", kwargs={"pk": self.plain.pk})
        superadmin_role = Role.objects.get(name="superadmin")
        response = self.client.post(url, {"role_ids": [superadmin_role.pk]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["roles"], ["superadmin"])

    # ── Deletion ────────────────────────────────────────────────────

    def test_only_superadmin_deletes(self):
        url = reverse("accounts:user-detail", kwargs={"pk": self.dormant.pk})

        self._as(self.admin)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

        self._as(self.superadmin)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.dormant.pk).exists())

    def test_superadmin_cannot_delete_self(self):
        self._as(self.superadmin)
        url = reverse("accounts:user-detail", kwargs={"pk": self.superadmin.pk})
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_400_BAD_REQUEST)
