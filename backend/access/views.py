"""
Access app views.

Thin views: validate input, authorize through the policy layer,
delegate to ``AccessGrantRegistry``.

View Map
--------
- ``AccessGrantViewSet``      — /grants/ (list, create, retrieve,
                                partial_update, revoke)
- ``UserAccessGrantViewSet``  — /users/{user_pk}/grants/ (list, create)
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from core.domain.exceptions import NotFound
from core.domain.policy import authorize
from core.permissions_constants import Action

from .models import AccessGrant
from .serializers import (
    AccessGrantCreateSerializer,
    AccessGrantSerializer,
    AccessGrantTermsSerializer,
    AccessGrantUpdateSerializer,
)
from .services import AccessGrantRegistry

User = get_user_model()


def _issue_grant(request: Request, user, data: dict) -> Response:
    grant = AccessGrantRegistry.grant(
        user=user,
        scope=data["scope"],
        resource=data.get("object_id"),
        access_type=data["access_type"],
        expires_at=data.get("expires_at"),
        notes=data.get("notes", ""),
        granted_by=request.user,
    )
    return Response(AccessGrantSerializer(grant).data, status=status.HTTP_201_CREATED)


class AccessGrantViewSet(viewsets.ViewSet):
    """
    /api/access/grants/

    Superadmin-only management of access grants.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(
        summary="List access grants",
        parameters=[
            OpenApiParameter("user", int, description="Filter by grantee."),
            OpenApiParameter("scope", str, description="Filter by scope."),
            OpenApiParameter("object_id", int, description="Filter by target record."),
            OpenApiParameter("effective", bool, description="Only active, unexpired grants."),
        ],
        responses={200: AccessGrantSerializer(many=True)},
        tags=["Access Grants"],
    )
    def list(self, request: Request) -> Response:
        authorize(request.user, Action.VIEW_ANY, AccessGrant)
        params = request.query_params
        qs = AccessGrantRegistry.list_grants(
            user_id=int(params["user"]) if params.get("user", "").isdigit() else None,
            scope=params.get("scope") or None,
            object_id=int(params["object_id"]) if params.get("object_id", "").isdigit() else None,
            effective_only=params.get("effective", "").lower() in ("1", "true", "yes"),
        )
        return Response(AccessGrantSerializer(qs, many=True).data)

    @extend_schema(
        summary="Grant access",
        request=AccessGrantCreateSerializer,
        responses={
            201: AccessGrantSerializer,
            400: OpenApiResponse(description="Invalid scope, type, target or expiry."),
            403: OpenApiResponse(description="Superadmin only."),
            409: OpenApiResponse(description="Concurrent duplicate grant."),
        },
        tags=["Access Grants"],
    )
    def create(self, request: Request) -> Response:
        authorize(request.user, Action.CREATE, AccessGrant)
        serializer = AccessGrantCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return _issue_grant(request, serializer.validated_data["user"], serializer.validated_data)

    @extend_schema(
        summary="Retrieve an access grant",
        responses={200: AccessGrantSerializer},
        tags=["Access Grants"],
    )
    def retrieve(self, request: Request, pk: str = None) -> Response:
        grant = AccessGrantRegistry.get_grant(int(pk))
        authorize(request.user, Action.VIEW, grant)
        return Response(AccessGrantSerializer(grant).data)

    @extend_schema(
        summary="Update an access grant",
        request=AccessGrantUpdateSerializer,
        responses={200: AccessGrantSerializer},
        tags=["Access Grants"],
    )
    def partial_update(self, request: Request, pk: str = None) -> Response:
        grant = AccessGrantRegistry.get_grant(int(pk))
        authorize(request.user, Action.UPDATE, grant)
        serializer = AccessGrantUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        grant = AccessGrantRegistry.update_grant(
            grant,
            access_type=data.get("access_type"),
            expires_at=data.get("expires_at"),
            clear_expiry="expires_at" in data and data["expires_at"] is None,
            notes=data.get("notes"),
        )
        return Response(AccessGrantSerializer(grant).data)

    @extend_schema(
        summary="Revoke an access grant",
        request=None,
        responses={200: AccessGrantSerializer},
        tags=["Access Grants"],
    )
    @action(detail=True, methods=["post"], url_path="revoke")
    def revoke(self, request: Request, pk: str = None) -> Response:
        grant = AccessGrantRegistry.get_grant(int(pk))
        authorize(request.user, Action.DELETE, grant)
        grant = AccessGrantRegistry.revoke(grant, performed_by=request.user)
        return Response(AccessGrantSerializer(grant).data)


class UserAccessGrantViewSet(viewsets.ViewSet):
    """
    /api/accounts/users/{user_pk}/grants/

    Grants held by one user; superadmin only, like ``/grants/``.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List a user's access grants",
        responses={200: AccessGrantSerializer(many=True)},
        tags=["Access Grants"],
    )
    def list(self, request: Request, user_pk: str = None) -> Response:
        authorize(request.user, Action.VIEW_ANY, AccessGrant)
        qs = AccessGrantRegistry.list_grants(user_id=int(user_pk))
        return Response(AccessGrantSerializer(qs, many=True).data)

    @extend_schema(
        summary="Grant access to a user",
        request=AccessGrantTermsSerializer,
        responses={
            201: AccessGrantSerializer,
            400: OpenApiResponse(description="Invalid scope, type, target or expiry."),
            403: OpenApiResponse(description="Superadmin only."),
            404: OpenApiResponse(description="Unknown user."),
        },
        tags=["Access Grants"],
    )
    def create(self, request: Request, user_pk: str = None) -> Response:
        authorize(request.user, Action.CREATE, AccessGrant)
        try:
            user = User.objects.get(pk=user_pk)
        except User.DoesNotExist:
            raise NotFound(f"User with id {user_pk} not found.")
        serializer = AccessGrantTermsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return _issue_grant(request, user, serializer.validated_data)
