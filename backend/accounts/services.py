"""
Accounts Service Layer.

This module is the **single source of truth** for all business logic
within the ``accounts`` app.  Views must remain *thin*: they validate
input through serializers, call a service method, and return the
result wrapped in a DRF ``Response``.

Every mutating or reading operation on roles and users goes through
``core.domain.policy.authorize`` first, so the HTTP surface and the
policy evaluator can never disagree.

Architecture
------------
- ``AuthenticationService``    — username-or-email login + JWT issuance.
- ``UserManagementService``    — list / retrieve / delete users, role
                                 assignment.
- ``RoleManagementService``    — Role CRUD, permission assignment.
- ``CurrentUserService``       — "Me" endpoint helpers.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from django.contrib.auth import authenticate as django_authenticate
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet
from rest_framework_simplejwt.tokens import RefreshToken

from core.domain.access import has_role, is_reserved_role_name
from core.domain.exceptions import Conflict, DomainError, NotFound, PermissionDenied
from core.domain.policy import authorize
from core.permissions_constants import Action, Entity, RoleName, all_abilities

from .models import Role

User = get_user_model()

logger = logging.getLogger(__name__)


def _require_superadmin_for_reserved(actor: User, roles: Iterable[Role], *, entity: Entity) -> None:
    """
    Changes touching the reserved ``admin`` / ``superadmin`` roles
    (membership or permissions) are reserved to ``superadmin``.

    Raises:
        PermissionDenied: A reserved role is among ``roles`` and the
            actor is not a ``superadmin``.
    """
    reserved = sorted({role.name for role in roles if role.is_reserved})
    if not reserved or has_role(actor, RoleName.SUPERADMIN):
        return
    logger.info(
        "Denied change to reserved role(s) %s for user %s",
        reserved,
        getattr(actor, "pk", None),
    )
    raise PermissionDenied(
        f"Only a superadmin may change the reserved role(s): {', '.join(reserved)}.",
        entity=entity.value,
        action=Action.UPDATE.value,
    )


# ═══════════════════════════════════════════════════════════════════
#  Authentication Service
# ═══════════════════════════════════════════════════════════════════


class AuthenticationService:
    """
    Handles login and JWT token generation.

    A user may identify with either ``username`` or ``email``; the
    lookup itself lives in ``accounts.backends.UsernameOrEmailBackend``.
    """

    @staticmethod
    def resolve_user(identifier: str) -> User | None:
        """
        Locate a ``User`` by ``username`` or ``email``.

        Returns ``None`` when nothing (or more than one row) matches.
        """
        try:
            return User.objects.get(Q(username=identifier) | Q(email__iexact=identifier))
        except (User.DoesNotExist, User.MultipleObjectsReturned):
            return None

    @staticmethod
    def authenticate(identifier: str, password: str, request=None) -> User | None:
        """
        Validate credentials and return the user if successful.

        Inactive users are rejected by the backend
        (``ModelBackend.user_can_authenticate``).
        """
        return django_authenticate(request=request, identifier=identifier, password=password)

    @staticmethod
    def generate_tokens(user: User) -> dict[str, str]:
        """
        Issue a JWT access/refresh token pair for the given user.

        Returns
        -------
        dict
            ``{"access": "<token>", "refresh": "<token>"}``.
        """
        refresh = RefreshToken.for_user(user)
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }


# ═══════════════════════════════════════════════════════════════════
#  User Management Service
# ═══════════════════════════════════════════════════════════════════


class UserManagementService:
    """
    Administrative operations on users.

    Access Policy (``accounts.policies``, role-gated):
    - ``viewAny`` / ``view`` / ``update``: ``admin`` or ``superadmin``.
    - ``delete``: ``superadmin`` only.
    """

    @staticmethod
    def _fetch(user_id: int) -> User:
        try:
            return User.objects.prefetch_related("roles").get(pk=user_id)
        except User.DoesNotExist:
            raise NotFound(f"User with id {user_id} not found.")

    @staticmethod
    def list_users(
        actor: User,
        *,
        role_id: int | None = None,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> QuerySet[User]:
        """
        Return a filtered queryset of users.

        Parameters
        ----------
        role_id : int, optional
            Only users holding this role.
        is_active : bool, optional
            Filter by ``is_active`` status.
        search : str, optional
            Case-insensitive search across ``username``, ``email``,
            ``first_name``, ``last_name``.
        """
        authorize(actor, Action.VIEW_ANY, User)

        qs = User.objects.prefetch_related("roles").select_related("department").order_by("id")

        if role_id is not None:
            qs = qs.filter(roles__id=role_id)
        if is_active is not None:
            qs = qs.filter(is_active=is_active)
        if search:
            qs = qs.filter(
                Q(username__icontains=search)
                | Q(email__icontains=search)
                | Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
            )

        return qs.distinct()

    @classmethod
    def get_user(cls, actor: User, user_id: int) -> User:
        target = cls._fetch(user_id)
        authorize(actor, Action.VIEW, target)
        return target

    @classmethod
    def delete_user(cls, actor: User, user_id: int) -> None:
        """
        Delete a user account.

        Raises
        ------
        PermissionDenied
            The actor is not a ``superadmin``.
        DomainError
            The actor tried to delete their own account.
        """
        target = cls._fetch(user_id)
        authorize(actor, Action.DELETE, target)

        if target.pk == actor.pk:
            raise DomainError("You cannot delete your own account.")

        logger.info("User %s deleted by user %s", target.pk, actor.pk)
        target.delete()

    @classmethod
    def assign_roles(cls, actor: User, user_id: int, role_ids: Iterable[int]) -> User:
        """
        Replace the user's role set with ``role_ids``.

        Implementation Contract
        -----------------------
        1. Fetch the target user; ``authorize(update)``.
        2. Validate that every role id exists (``NotFound`` otherwise).
        3. Adding or removing a reserved role needs ``superadmin``.
        4. ``target.roles.set(...)`` and clear the target's access
           caches so the next decision sees the new roles.
        """
        target = cls._fetch(user_id)
        authorize(actor, Action.UPDATE, target)

        role_ids = set(role_ids)
        roles = list(Role.objects.filter(pk__in=role_ids))
        missing = role_ids - {role.pk for role in roles}
        if missing:
            raise NotFound(f"The following role IDs do not exist: {sorted(missing)}")

        current = list(target.roles.all())
        changed = set(roles).symmetric_difference(current)
        _require_superadmin_for_reserved(actor, changed, entity=Entity.USER)

        target.roles.set(roles)
        target.clear_access_caches()

        logger.info(
            "Roles of user %s set to %s by user %s",
            target.pk,
            sorted(role.name for role in roles),
            actor.pk,
        )
        return cls._fetch(target.pk)


# ═══════════════════════════════════════════════════════════════════
#  Role Management Service
# ═══════════════════════════════════════════════════════════════════


class RoleManagementService:
    """
    CRUD operations for roles and permission assignment.

    Access Policy (``accounts.policies``, role-gated):
    - ``viewAny`` / ``view`` / ``create`` / ``update``: ``admin`` or
      ``superadmin``.
    - ``delete`` / ``restore`` / ``forceDelete``: ``superadmin``, and
      never on the reserved ``admin`` / ``superadmin`` roles.

    Reserved roles keep their names, and no other role may take one.
    Their description is editable by ``admin``; their permissions only
    by ``superadmin``.
    """

    @staticmethod
    def _fetch(role_id: int) -> Role:
        try:
            return Role.objects.prefetch_related("permissions").get(pk=role_id)
        except Role.DoesNotExist:
            raise NotFound(f"Role with id {role_id} not found.")

    @staticmethod
    def _check_name(name: str, role: Role | None = None) -> str:
        name = name.strip()
        if not name:
            raise DomainError("Role name cannot be blank.")
        if role is not None and role.is_reserved and name.lower() != role.name.strip().lower():
            raise DomainError(f"The reserved role '{role.name}' cannot be renamed.")
        if is_reserved_role_name(name) and (role is None or not role.is_reserved):
            raise Conflict(f"'{name}' is a reserved role name.")
        return name

    @staticmethod
    def list_roles(actor: User) -> QuerySet[Role]:
        authorize(actor, Action.VIEW_ANY, Role)
        return Role.objects.prefetch_related("permissions").all()

    @classmethod
    def create_role(cls, actor: User, validated_data: dict[str, Any]) -> Role:
        """
        Create a new role.

        ``validated_data`` holds ``name``, ``description`` and optionally
        ``permissions`` (list of ``Permission`` instances or PKs).
        """
        authorize(actor, Action.CREATE, Role)

        permissions = validated_data.pop("permissions", None)
        validated_data["name"] = cls._check_name(validated_data["name"])

        try:
            with transaction.atomic():
                role = Role.objects.create(**validated_data)
                if permissions is not None:
                    role.permissions.set(permissions)
        except IntegrityError:
            raise Conflict(f"A role named '{validated_data['name']}' already exists.")

        logger.info("Role '%s' created by user %s", role.name, actor.pk)
        return cls._fetch(role.pk)

    @classmethod
    def get_role(cls, actor: User, role_id: int) -> Role:
        role = cls._fetch(role_id)
        authorize(actor, Action.VIEW, role)
        return role

    @classmethod
    def update_role(cls, actor: User, role_id: int, validated_data: dict[str, Any]) -> Role:
        role = cls._fetch(role_id)
        authorize(actor, Action.UPDATE, role)

        permissions = validated_data.pop("permissions", None)
        if permissions is not None:
            _require_superadmin_for_reserved(actor, [role], entity=Entity.ROLE)
        if "name" in validated_data:
            validated_data["name"] = cls._check_name(validated_data["name"], role)

        try:
            with transaction.atomic():
                for field, value in validated_data.items():
                    setattr(role, field, value)
                role.save()
                if permissions is not None:
                    role.permissions.set(permissions)
        except IntegrityError:
            raise Conflict(f"A role named '{validated_data.get('name')}' already exists.")

        return cls._fetch(role.pk)

    @classmethod
    def delete_role(cls, actor: User, role_id: int) -> None:
        """
        Delete a role.

        Raises
        ------
        PermissionDenied
            Not a ``superadmin``, or the role is reserved.
        Conflict
            Users are still assigned to the role.
        """
        role = cls._fetch(role_id)
        authorize(actor, Action.DELETE, role)

        assigned = role.users.count()
        if assigned:
            raise Conflict(
                f"Cannot delete role '{role.name}' because it is still assigned to "
                f"{assigned} user(s). Re-assign them first."
            )

        logger.info("Role '%s' deleted by user %s", role.name, actor.pk)
        role.delete()

    @classmethod
    def assign_permissions_to_role(
        cls,
        actor: User,
        role_id: int,
        permission_ids: list[int],
    ) -> Role:
        """
        Replace the role's permission set with the given IDs.

        Implementation Contract
        -----------------------
        1. Fetch the role; ``authorize(update)``.  A reserved role's
           permissions are changed by ``superadmin`` only.
        2. Validate that all ``permission_ids`` exist.
        3. ``role.permissions.set(permission_ids)``.
        """
        role = cls._fetch(role_id)
        authorize(actor, Action.UPDATE, role)
        _require_superadmin_for_reserved(actor, [role], entity=Entity.ROLE)

        existing = set(
            Permission.objects.filter(pk__in=permission_ids)
            .values_list("pk", flat=True)
        )
        invalid = set(permission_ids) - existing
        if invalid:
            raise DomainError(
                f"The following permission IDs do not exist: {sorted(invalid)}"
            )

        role.permissions.set(permission_ids)
        logger.info(
            "Role '%s' permissions replaced (%d) by user %s",
            role.name,
            len(existing),
            actor.pk,
        )
        return cls._fetch(role.pk)


# ═══════════════════════════════════════════════════════════════════
#  Current User (Me) Service
# ═══════════════════════════════════════════════════════════════════


class CurrentUserService:
    """
    Helpers for the "Me" endpoint.

    The front end reads the user's roles and flat permission list from
    here to decide which modules to render.
    """

    @staticmethod
    def get_profile(user: User) -> User:
        return (
            User.objects.select_related("department")
            .prefetch_related("roles")
            .get(pk=user.pk)
        )


# ═══════════════════════════════════════════════════════════════════
#  Utility: Permission Listing
# ═══════════════════════════════════════════════════════════════════


def list_all_permissions() -> QuerySet[Permission]:
    """
    Return every catalogued permission, for the role permission picker.

    Django's built-in permissions of third-party apps (``auth``,
    ``contenttypes`` …) are left out.
    """
    codenames = [ability.codename for ability in all_abilities()]
    return (
        Permission.objects.select_related("content_type")
        .filter(codename__in=codenames)
        .order_by("codename")
    )
