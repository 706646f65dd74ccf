"""
Accounts app serializers.

Contains all Request and Response serializers for the accounts API.
Serializers handle field definitions, read/write constraints, and
basic validation.  **No business logic** lives here — all domain
rules are delegated to ``services.py``.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.models import Permission
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from core.domain.access import get_user_role_name

from .models import Department, Role

User = get_user_model()


# ═══════════════════════════════════════════════════════════════════
#  Authentication Serializers
# ═══════════════════════════════════════════════════════════════════


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Custom SimpleJWT serializer that:

    1. Accepts ``identifier`` (username or email) + ``password``.
    2. Resolves the user via ``UsernameOrEmailBackend``.
    3. Injects RBAC claims (``roles``, ``role``) into the JWT payload.
    4. Exposes the authenticated user as ``self.user`` so the view can
       nest the profile in the response body.
    """

    username_field = "identifier"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields.pop(User.USERNAME_FIELD, None)
        self.fields["identifier"] = serializers.CharField(
            help_text="Username or Email.",
        )

    @classmethod
    def get_token(cls, user) -> Any:
        """
        Add role claims to the JWT payload so the front end can decode
        them without a separate API call.  Permission lists are not
        embedded; they change too often and are served by ``/me/``.
        """
        token = super().get_token(user)
        token["roles"] = sorted(user.get_role_names())
        token["role"] = get_user_role_name(user)
        return token

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        user = authenticate(
            request=self.context.get("request"),
            identifier=attrs.get("identifier"),
            password=attrs.get("password"),
        )

        if user is None:
            raise serializers.ValidationError(
                {"detail": "Invalid credentials."},
                code="authentication",
            )

        refresh = self.get_token(user)
        self.user = user
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }


class TokenResponseSerializer(serializers.Serializer):
    """Serializes the JWT token pair returned after successful login."""

    access = serializers.CharField(read_only=True)
    refresh = serializers.CharField(read_only=True)
    user = serializers.SerializerMethodField()

    def get_user(self, obj: dict) -> dict | None:
        user = obj.get("user")
        if user:
            return UserDetailSerializer(user).data
        return None


# ═══════════════════════════════════════════════════════════════════
#  Role Serializers
# ═══════════════════════════════════════════════════════════════════


class RoleListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for listing roles (no permissions detail)."""

    is_reserved = serializers.BooleanField(read_only=True)

    class Meta:
        model = Role
        fields = ["id", "name", "description", "is_reserved"]
        read_only_fields = ["id", "is_reserved"]


class RoleDetailSerializer(serializers.ModelSerializer):
    """
    Full serializer for Role CRUD.

    ``permissions`` is a list of permission PKs (writable on create /
    update); ``permissions_display`` resolves them to the dotted
    catalogue names on read.
    """

    is_reserved = serializers.BooleanField(read_only=True)
    permissions = serializers.PrimaryKeyRelatedField(
        many=True,
        required=False,
        queryset=Permission.objects.all(),
    )
    permissions_display = serializers.SerializerMethodField(
        help_text="Flat list of dotted permission names (read-only).",
    )

    class Meta:
        model = Role
        fields = [
            "id",
            "name",
            "description",
            "is_reserved",
            "permissions",
            "permissions_display",
        ]
        read_only_fields = ["id", "is_reserved", "permissions_display"]
        # Uniqueness is checked in the service so it can answer 409.
        extra_kwargs = {"name": {"validators": []}}

    def get_permissions_display(self, obj: Role) -> list[str]:
        return sorted(p.codename for p in obj.permissions.all())


class RoleAssignPermissionsSerializer(serializers.Serializer):
    """
    Accepts a list of Django Permission IDs to assign to a Role.
    Used by the ``assign-permissions`` action on ``RoleViewSet``.
    """

    permission_ids = serializers.ListField(
        child=serializers.IntegerField(),
        help_text="List of Django Permission PKs to assign to this Role.",
    )


# ═══════════════════════════════════════════════════════════════════
#  User Serializers
# ═══════════════════════════════════════════════════════════════════


class DepartmentSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ["id", "name", "code"]
        read_only_fields = fields


class UserListSerializer(serializers.ModelSerializer):
    """Serializer for listing users (admin views)."""

    roles = serializers.SlugRelatedField(many=True, read_only=True, slug_field="name")

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "is_active",
            "roles",
            "department",
        ]
        read_only_fields = fields


class UserDetailSerializer(serializers.ModelSerializer):
    """
    Full user representation (used in retrieve, me and the login
    response).  Includes role names, the highest role and a flat
    permissions list consumed by the front end.

    ``permissions`` is a read-only flat list such as:
        ['criminal.view_any', 'info.create', ...]
    """

    roles = serializers.SlugRelatedField(many=True, read_only=True, slug_field="name")
    role = serializers.SerializerMethodField(
        help_text="Highest assigned role (superadmin > admin > user), or null.",
    )
    department = DepartmentSummarySerializer(read_only=True)
    permissions = serializers.ListField(
        child=serializers.CharField(),
        source="permissions_list",
        read_only=True,
        help_text="Flat list of dotted permission names.",
    )

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "is_active",
            "date_joined",
            "department",
            "roles",
            "role",
            "permissions",
        ]
        read_only_fields = fields

    def get_role(self, obj: User) -> str | None:
        return get_user_role_name(obj)


class AssignRolesSerializer(serializers.Serializer):
    """
    Accepts the complete list of role PKs a user should hold.

    Used by the ``assign-roles`` action on ``UserViewSet``.  An empty
    list removes every role.
    """

    role_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
        help_text="PKs of the Roles to assign. Replaces the current set.",
    )


# ═══════════════════════════════════════════════════════════════════
#  Utility Serializers
# ═══════════════════════════════════════════════════════════════════


class PermissionSerializer(serializers.ModelSerializer):
    """
    Serializer for listing catalogued permissions.
    Used by the admin UI when assigning permissions to roles.
    """

    class Meta:
        model = Permission
        fields = ["id", "name", "codename"]
        read_only_fields = fields
