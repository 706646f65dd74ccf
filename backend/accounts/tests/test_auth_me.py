"""
Integration tests — current user profile.

Endpoint under test:  GET /api/accounts/me/   (named URL: accounts:me)

The front end renders modules from ``roles`` / ``role`` and the flat
``permissions`` list returned here.
"""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import Department
from tests.factories import make_role, make_user


class TestMe(TestCase):
    @classmethod
    def setUpTestData(cls):
        make_role("analyst", permissions=["info.view_any", "info.create"])
        cls.department = Department.objects.create(name="Research", code="RSC")
        cls.user = make_user(
            username="me_user",
            roles=["analyst", "superadmin"],
            permissions=["criminal.view_any"],
            department=cls.department,
        )

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("accounts:me")

    def test_requires_authentication(self):
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_with_bearer_token(self):
        token = AccessToken.for_user(self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        body = response.json()
        self.assertEqual(body["username"], "me_user")
        self.assertEqual(sorted(body["roles"]), ["analyst", "superadmin"])
        self.assertEqual(body["role"], "superadmin")
        self.assertEqual(body["department"]["code"], "RSC")
        self.assertEqual(
            body["permissions"],
            ["criminal.view_any", "info.create", "info.view_any"],
        )

    def test_user_without_roles(self):
        bare = make_user(username="me_bare")
        self.client.force_authenticate(user=bare)
        body = self.client.get(self.url).json()
        self.assertEqual(body["roles"], [])
        self.assertIsNone(body["role"])
        self.assertEqual(body["permissions"], [])
        self.assertIsNone(body["department"])
