"""
Integration tests — login with username or email.

Endpoint under test:  POST /api/accounts/auth/login/
                      (named URL: accounts:login)
Request payload:      {"identifier": "<username|email>", "password": "<password>"}
Success response:     HTTP 200, body contains {"access": "...", "refresh": "...",
                      "user": {...}}
Failure response:     HTTP 400 — CustomTokenObtainPairSerializer.validate
                      raises ValidationError when credentials are invalid
"""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from tests.factories import make_user

# ── Constants ────────────────────────────────────────────────────────────────
_PASSWORD = "Str0ng!Pass99"


class TestLogin(TestCase):
    """Login with either identifier, token claims, and refresh."""

    @classmethod
    def setUpTestData(cls):
        cls.user = make_user(
            username="login_test_user",
            email="login_test_user@example.com",
            password=_PASSWORD,
            roles=["admin"],
            permissions=["criminal.view_any"],
        )

    def setUp(self):
        self.client = APIClient()
        self.login_url = reverse("accounts:login")

    # ── Helper ───────────────────────────────────────────────────────────────

    def _post_login(self, identifier: str, password: str):
        return self.client.post(
            self.login_url,
            {"identifier": identifier, "password": password},
            format="json",
        )

    # ── Happy paths ──────────────────────────────────────────────────────────

    def test_login_with_username(self):
        response = self._post_login("login_test_user", _PASSWORD)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertIn("access", body)
        self.assertIn("refresh", body)
        self.assertEqual(body["user"]["id"], self.user.pk)

    def test_login_with_email_is_case_insensitive(self):
        response = self._post_login("LOGIN_TEST_USER@example.com", _PASSWORD)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["user"]["username"], "login_test_user")

    def test_response_user_carries_roles_and_permissions(self):
        user = self._post_login("login_test_user", _PASSWORD).json()["user"]
        self.assertEqual(user["roles"], ["admin"])
        self.assertEqual(user["role"], "admin")
        self.assertEqual(user["permissions"], ["criminal.view_any"])

    def test_access_token_carries_role_claims(self):
        access = self._post_login("login_test_user", _PASSWORD).json()["access"]
        token = AccessToken(access)
        self.assertEqual(token["roles"], ["admin"])
        self.assertEqual(token["role"], "admin")
        self.assertNotIn("permissions", token.payload)

    def test_refresh_returns_new_access_token(self):
        refresh = self._post_login("login_test_user", _PASSWORD).json()["refresh"]
        response = self.client.post(
            reverse("accounts:token-refresh"), {"refresh": refresh}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.json())

    # ── Failures ─────────────────────────────────────────────────────────────

    def test_wrong_password(self):
        response = self._post_login("login_test_user", "wrong-password")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertNotIn("access", response.json())

    def test_unknown_identifier(self):
        response = self._post_login("nobody@example.com", _PASSWORD)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_inactive_user_cannot_log_in(self):
        make_user(username="dormant", password=_PASSWORD, is_active=False)
        response = self._post_login("dormant", _PASSWORD)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_missing_fields(self):
        response = self.client.post(self.login_url, {"identifier": "login_test_user"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
