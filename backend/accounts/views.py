"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.  **No business logic** resides here;
authorization is decided by the services through the policy layer.

View Map
--------
- ``LoginView``          — POST /auth/login/
- ``MeView``             — GET /me/
- ``UserViewSet``        — /users/  (list, retrieve, destroy,
                           assign-roles)
- ``RoleViewSet``        — /roles/  (CRUD + assign-permissions)
- ``PermissionListView`` — GET /permissions/
"""

from __future__ import annotations

from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import OpenApiParameter, extend_schema

from .serializers import (
    AssignRolesSerializer,
    CustomTokenObtainPairSerializer,
    PermissionSerializer,
    RoleAssignPermissionsSerializer,
    RoleDetailSerializer,
    RoleListSerializer,
    TokenResponseSerializer,
    UserDetailSerializer,
    UserListSerializer,
)
from .services import (
    CurrentUserService,
    RoleManagementService,
    UserManagementService,
    list_all_permissions,
)


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes")


def _parse_int(value: str | None) -> int | None:
    try:
        return int(value) if value not in (None, "") else None
    except ValueError:
        return None


# ═══════════════════════════════════════════════════════════════════
#  Authentication Views
# ═══════════════════════════════════════════════════════════════════


class LoginView(APIView):
    """
    POST /api/accounts/auth/login/

    Public endpoint.  Authenticates a user by username or email plus
    password.

    Request body  → ``{"identifier": ..., "password": ...}``
    Response body → ``TokenResponseSerializer`` (200 OK)
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Obtain a JWT pair",
        request=CustomTokenObtainPairSerializer,
        responses={200: TokenResponseSerializer},
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = CustomTokenObtainPairSerializer(
            data=request.data,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)

        payload = dict(serializer.validated_data)
        payload["user"] = CurrentUserService.get_profile(serializer.user)

        return Response(TokenResponseSerializer(payload).data, status=status.HTTP_200_OK)


# ═══════════════════════════════════════════════════════════════════
#  Current User ("Me") View
# ═══════════════════════════════════════════════════════════════════


class MeView(APIView):
    """
    GET /api/accounts/me/ → current user profile, roles and the flat
    effective-permission list.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Current user profile", responses={200: UserDetailSerializer}, tags=["Auth"])
    def get(self, request: Request) -> Response:
        user = CurrentUserService.get_profile(request.user)
        return Response(UserDetailSerializer(user).data)


# ═══════════════════════════════════════════════════════════════════
#  User Management ViewSet
# ═══════════════════════════════════════════════════════════════════


class UserViewSet(viewsets.ViewSet):
    """
    /api/accounts/users/

    Administrative user management.  Gated by the role-based ``user``
    policy: ``admin`` / ``superadmin`` may read and assign roles,
    only ``superadmin`` may delete.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(
        summary="List users",
        parameters=[
            OpenApiParameter("role", int, description="Role PK"),
            OpenApiParameter("is_active", bool),
            OpenApiParameter("search", str),
        ],
        responses={200: UserListSerializer(many=True)},
        tags=["Users"],
    )
    def list(self, request: Request) -> Response:
        params = request.query_params
        users = UserManagementService.list_users(
            request.user,
            role_id=_parse_int(params.get("role")),
            is_active=_parse_bool(params.get("is_active")),
            search=params.get("search") or None,
        )
        return Response(UserListSerializer(users, many=True).data)

    @extend_schema(summary="Retrieve a user", responses={200: UserDetailSerializer}, tags=["Users"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        user = UserManagementService.get_user(request.user, int(pk))
        return Response(UserDetailSerializer(user).data)

    @extend_schema(summary="Delete a user", responses={204: None}, tags=["Users"])
    def destroy(self, request: Request, pk: str = None) -> Response:
        UserManagementService.delete_user(request.user, int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        summary="Replace a user's roles",
        request=AssignRolesSerializer,
        responses={200: UserDetailSerializer},
        tags=["Users"],
    )
    @action(detail=True, methods=["post"], url_path="assign-roles")
    def assign_roles(self, request: Request, pk: str = None) -> Response:
        serializer = AssignRolesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserManagementService.assign_roles(
            request.user,
            int(pk),
            serializer.validated_data["role_ids"],
        )
        return Response(UserDetailSerializer(user).data)


# ═══════════════════════════════════════════════════════════════════
#  Role Management ViewSet
# ═══════════════════════════════════════════════════════════════════


class RoleViewSet(viewsets.ViewSet):
    """
    /api/accounts/roles/

    CRUD for Roles + permission assignment.  Gated by the role-based
    ``role`` policy; the reserved ``admin`` / ``superadmin`` roles can
    never be deleted.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(summary="List roles", responses={200: RoleListSerializer(many=True)}, tags=["Roles"])
    def list(self, request: Request) -> Response:
        roles = RoleManagementService.list_roles(request.user)
        return Response(RoleListSerializer(roles, many=True).data)

    @extend_schema(
        summary="Create a role",
        request=RoleDetailSerializer,
        responses={201: RoleDetailSerializer},
        tags=["Roles"],
    )
    def create(self, request: Request) -> Response:
        serializer = RoleDetailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        role = RoleManagementService.create_role(request.user, dict(serializer.validated_data))
        return Response(RoleDetailSerializer(role).data, status=status.HTTP_201_CREATED)

    @extend_schema(summary="Retrieve a role", responses={200: RoleDetailSerializer}, tags=["Roles"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        role = RoleManagementService.get_role(request.user, int(pk))
        return Response(RoleDetailSerializer(role).data)

    @extend_schema(
        summary="Update a role",
        request=RoleDetailSerializer,
        responses={200: RoleDetailSerializer},
        tags=["Roles"],
    )
    def partial_update(self, request: Request, pk: str = None) -> Response:
        serializer = RoleDetailSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        role = RoleManagementService.update_role(
            request.user, int(pk), dict(serializer.validated_data),
        )
        return Response(RoleDetailSerializer(role).data)

    @extend_schema(summary="Delete a role", responses={204: None}, tags=["Roles"])
    def destroy(self, request: Request, pk: str = None) -> Response:
        RoleManagementService.delete_role(request.user, int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        summary="Replace a role's permissions",
        request=RoleAssignPermissionsSerializer,
        responses={200: RoleDetailSerializer},
        tags=["Roles"],
    )
    @action(detail=True, methods=["post"], url_path="assign-permissions")
    def assign_permissions(self, request: Request, pk: str = None) -> Response:
        serializer = RoleAssignPermissionsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        role = RoleManagementService.assign_permissions_to_role(
            request.user,
            int(pk),
            serializer.validated_data["permission_ids"],
        )
        return Response(RoleDetailSerializer(role).data)


# ═══════════════════════════════════════════════════════════════════
#  Permission List View (Utility)
# ═══════════════════════════════════════════════════════════════════


class PermissionListView(generics.ListAPIView):
    """
    GET /api/accounts/permissions/

    Lists every catalogued permission (PK, description, dotted name)
    for the role permission picker.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = PermissionSerializer
    pagination_class = None

    def get_queryset(self):
        return list_all_permissions()
