"""
Smoke tests — verify that Django boots, URL routing resolves, every
catalogued entity has a policy, and domain exceptions reach the client
as JSON with the right status.

Written against the shared pytest fixtures in ``conftest.py``
(``api_client``, ``create_user``, ``auth_header``).
"""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status

from core.domain.exception_handler import error_payload, status_for
from core.domain.exceptions import (
    Conflict,
    DomainError,
    InvalidTransition,
    NotFound,
    PermissionDenied,
    ResourceRequired,
)
from core.domain.policy import registry
from core.permissions_constants import Entity


# ════════════════════════════════════════════════════════════════════
#  URL Routing
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Named URLs of every app reverse under the expected prefix."""

    EXPECTED_URLS = [
        ("accounts:login",           "/api/accounts/auth/login/"),
        ("accounts:me",              "/api/accounts/me/"),
        ("accounts:permission-list", "/api/accounts/permissions/"),
        ("accounts:role-list",       "/api/accounts/roles/"),
        ("accounts:user-list",       "/api/accounts/users/"),
        ("access:grant-list",        "/api/access/grants/"),
        ("core:authorize",           "/api/core/authorize/"),
        ("insights:info-list",       "/api/insights/infos/"),
        ("schema",                   "/api/schema/"),
    ]

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_url_reverses(self, url_name: str, expected_path: str):
        assert reverse(url_name) == expected_path


# ════════════════════════════════════════════════════════════════════
#  Policy registry
# ════════════════════════════════════════════════════════════════════

class TestPolicyAutodiscovery:

    @pytest.mark.parametrize("entity", list(Entity))
    def test_every_entity_has_a_policy(self, entity: Entity):
        assert registry.get(entity) is not None


# ════════════════════════════════════════════════════════════════════
#  Exception → HTTP mapping
# ════════════════════════════════════════════════════════════════════

class TestExceptionMapping:

    @pytest.mark.parametrize(
        "exc,expected_status,expected_code",
        [
            (DomainError(), 400, "domain_error"),
            (ResourceRequired(entity="criminal", action="view"), 400, "resource_required"),
            (PermissionDenied(), 403, "permission_denied"),
            (NotFound(), 404, "not_found"),
            (Conflict(), 409, "conflict"),
            (InvalidTransition(current="confirmed", target="confirmed"), 409, "invalid_transition"),
        ],
    )
    def test_status_and_code(self, exc, expected_status, expected_code):
        assert status_for(exc) == expected_status
        assert error_payload(exc)["code"] == expected_code

    def test_decision_context_is_included_when_known(self):
        payload = error_payload(PermissionDenied(entity="info", action="confirm"))
        assert payload["entity"] == "info"
        assert payload["action"] == "confirm"

        assert "entity" not in error_payload(NotFound("Missing."))


# ════════════════════════════════════════════════════════════════════
#  Authenticated round trip (JWT)
# ════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestAuthenticatedRequests:

    def test_anonymous_is_401(self, api_client):
        resp = api_client.get(reverse("access:grant-list"))
        assert resp.status_code == status.HTTP_401_UNAUTHORIZED

    def test_superadmin_lists_grants(self, api_client, auth_header):
        header = auth_header(roles=["superadmin"])
        api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
        resp = api_client.get(reverse("access:grant-list"))
        assert resp.status_code == status.HTTP_200_OK

    def test_plain_user_gets_domain_403_payload(self, api_client, auth_header):
        header = auth_header(roles=["user"])
        api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
        resp = api_client.get(reverse("access:grant-list"))
        assert resp.status_code == status.HTTP_403_FORBIDDEN
        assert resp.json()["code"] == "permission_denied"
        assert resp.json()["entity"] == "access_grant"

    def test_create_user_fixture_assigns_roles(self, create_user):
        user = create_user(roles=["admin"], permissions=["criminal.view_any"])
        assert user.get_role_names() == {"admin"}
        assert user.permissions_list == ["criminal.view_any"]
