"""
Access Service Layer — the Access Grant Registry.

Answers "which grant, if any, lets this user see this record?" and owns
every mutation of ``AccessGrant`` rows.

Architecture
------------
- ``AccessGrantRegistry``    — effective-grant lookup, visible-row
                               filtering and grant / revoke / update
                               mutations.
- ``IncidentReportAccess``   — incident-report capability helpers
                               (``can_view_incident_reports`` & co.) used
                               by ``incidents.policies``.

Precedence
----------
When a user holds both an effective grant for a specific record and an
effective global grant for the same scope, the **record-specific grant
wins** and the global one is not consulted.  Expired or inactive grants
are treated exactly like no grant.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from django.db import IntegrityError, models, transaction
from django.db.models import QuerySet
from django.utils import timezone

from core.domain.access import has_any_role
from core.domain.exceptions import Conflict, DomainError, NotFound
from core.domain.policy import registry
from core.domain.predicates import actor_id
from core.permissions_constants import RoleName

from .models import AccessGrant, AccessScope, AccessType, Capability

logger = logging.getLogger(__name__)


def _object_id(resource: Any) -> int | None:
    if resource is None:
        return None
    if isinstance(resource, int):
        return resource
    return getattr(resource, "pk", None)


def _scope_value(scope: Any) -> str:
    value = getattr(scope, "value", scope)
    if value not in AccessScope.values:
        raise DomainError(f"'{value}' does not accept access grants.")
    return value


def _target_id(scope_value: str, resource: Any) -> int | None:
    """
    PK of the record a grant targets, checked against the scope's model.

    ``None`` means a global grant.  A model instance must be a saved row
    of the scope's model; a bare PK must name an existing row.
    """
    if resource is None:
        return None
    policy = registry.get(scope_value)
    model = policy.model if policy is not None else None
    if model is None:
        raise DomainError(f"'{scope_value}' has no records to grant access to.")

    if isinstance(resource, models.Model):
        if not isinstance(resource, model):
            raise DomainError(
                f"{type(resource).__name__} is not a '{scope_value}' record."
            )
        if resource.pk is None:
            raise DomainError("Cannot grant access to an unsaved record.")
        return resource.pk

    object_id = _object_id(resource)
    if object_id is None or not model._default_manager.filter(pk=object_id).exists():
        raise DomainError(f"No '{scope_value}' record with id {resource}.")
    return object_id


# ═══════════════════════════════════════════════════════════════════
#  Access Grant Registry
# ═══════════════════════════════════════════════════════════════════


class AccessGrantRegistry:
    """
    Read side and write side of access grants.

    Models that accept grants declare ``GRANT_SCOPE`` (an ``Entity``);
    ``grant_for`` / ``has_access`` read it to pick the scope.
    """

    # ── Read side ───────────────────────────────────────────────────

    @staticmethod
    def scope_of(resource: Any) -> str | None:
        scope = getattr(type(resource), "GRANT_SCOPE", None)
        return getattr(scope, "value", scope)

    @staticmethod
    def effective_grant(user: Any, scope: Any, resource: Any = None) -> AccessGrant | None:
        """
        Return the most specific effective grant of ``user`` for ``scope``.

        Parameters
        ----------
        user : User
            The grantee.  Anonymous / missing users have no grants.
        scope : str | Entity
            Record kind (``incident_report`` ...).
        resource : Model | int | None
            Target record or its PK.  ``None`` asks for the global grant.

        Returns
        -------
        AccessGrant or None
            The record-specific grant when one is effective, otherwise
            the effective global grant, otherwise ``None``.
        """
        uid = actor_id(user)
        if uid is None:
            return None
        scope_value = getattr(scope, "value", scope)
        if scope_value not in AccessScope.values:
            return None

        qs = (
            AccessGrant.objects.effective()
            .filter(user_id=uid)
            .for_scope(scope_value)
            .order_by("-created_at", "-id")
        )
        object_id = _object_id(resource)
        if object_id is not None:
            specific = qs.for_object(object_id).first()
            if specific is not None:
                return specific
        return qs.global_scope().first()

    @classmethod
    def grant_for(cls, user: Any, resource: Any) -> AccessGrant | None:
        scope = cls.scope_of(resource)
        if scope is None:
            return None
        return cls.effective_grant(user, scope, resource)

    @classmethod
    def has_access(cls, user: Any, resource: Any, capability: str | None = None) -> bool:
        """
        ``True`` when an effective grant covers ``resource``.

        With ``capability`` the grant must also confer it
        (see ``access.models.CAPABILITIES``).
        """
        grant = cls.grant_for(user, resource)
        if grant is None:
            return False
        if capability is None:
            return True
        return grant.has_access_type(capability)

    @staticmethod
    def visible(queryset: QuerySet, user: Any) -> QuerySet:
        """
        Narrow ``queryset`` to rows ``user`` created or holds an effective
        grant on.  An effective global grant for the scope opens every row.
        """
        uid = actor_id(user)
        if uid is None:
            return queryset.none()
        owned = models.Q(created_by_id=uid)
        scope = getattr(queryset.model, "GRANT_SCOPE", None)
        scope_value = getattr(scope, "value", scope)
        if scope_value not in AccessScope.values:
            return queryset.filter(owned)

        grants = AccessGrant.objects.effective().filter(user_id=uid).for_scope(scope_value)
        if grants.global_scope().exists():
            return queryset
        granted = grants.filter(object_id__isnull=False).values("object_id")
        return queryset.filter(owned | models.Q(pk__in=granted))

    # ── Write side ──────────────────────────────────────────────────

    @staticmethod
    def list_grants(
        *,
        user_id: int | None = None,
        scope: str | None = None,
        object_id: int | None = None,
        effective_only: bool = False,
    ) -> QuerySet[AccessGrant]:
        qs = AccessGrant.objects.select_related("user", "granted_by")
        if user_id is not None:
            qs = qs.filter(user_id=user_id)
        if scope:
            qs = qs.for_scope(scope)
        if object_id is not None:
            qs = qs.for_object(object_id)
        if effective_only:
            qs = qs.effective()
        return qs

    @staticmethod
    def get_grant(grant_id: int) -> AccessGrant:
        try:
            return AccessGrant.objects.select_related("user", "granted_by").get(pk=grant_id)
        except AccessGrant.DoesNotExist:
            raise NotFound(f"Access grant with id {grant_id} not found.")

    @staticmethod
    def grant(
        *,
        user: Any,
        scope: Any,
        resource: Any = None,
        access_type: str = AccessType.READ_ONLY,
        expires_at: datetime | None = None,
        notes: str = "",
        granted_by: Any = None,
    ) -> AccessGrant:
        """
        Create a new active grant, deactivating any previous active grant
        for the same ``(user, scope, resource)``.

        Both steps run in one transaction; the previous rows are locked
        with ``select_for_update`` first.  The partial unique constraints
        on ``AccessGrant`` reject a concurrent duplicate, reported as
        ``Conflict``.

        Raises
        ------
        DomainError
            Unknown scope or access type, ``expires_at`` in the past, or
            ``resource`` is not an existing record of the scope.
        Conflict
            A concurrent request activated a grant for the same scope.
        """
        scope_value = _scope_value(scope)
        if access_type not in AccessType.values:
            raise DomainError(f"Unknown access type '{access_type}'.")
        if expires_at is not None and expires_at <= timezone.now():
            raise DomainError("Expiry date must be in the future.")

        object_id = _target_id(scope_value, resource)

        with transaction.atomic():
            previous = list(
                AccessGrant.objects.select_for_update()
                .filter(user=user, scope=scope_value, object_id=object_id, is_active=True)
                .values_list("pk", flat=True)
            )
            if previous:
                AccessGrant.objects.filter(pk__in=previous).update(
                    is_active=False,
                    updated_at=timezone.now(),
                )
            try:
                with transaction.atomic():
                    grant = AccessGrant.objects.create(
                        user=user,
                        scope=scope_value,
                        object_id=object_id,
                        access_type=access_type,
                        expires_at=expires_at,
                        notes=notes or "",
                        granted_by=granted_by,
                    )
            except IntegrityError:
                raise Conflict(
                    "An active access grant for this user and scope was created concurrently."
                )

        logger.info(
            "Access grant #%s: user %s ← %s %s (%s, expires %s) by %s; deactivated %s",
            grant.pk,
            grant.user_id,
            scope_value,
            object_id if object_id is not None else "*",
            access_type,
            expires_at or "never",
            getattr(granted_by, "pk", None),
            previous or "none",
        )
        return grant

    @staticmethod
    def revoke(grant: AccessGrant, *, performed_by: Any = None) -> AccessGrant:
        """Deactivate ``grant``.  Revoking an inactive grant is a no-op."""
        if grant.is_active:
            grant.is_active = False
            grant.save(update_fields=["is_active", "updated_at"])
            logger.info(
                "Access grant #%s revoked by %s",
                grant.pk,
                getattr(performed_by, "pk", None),
            )
        return grant

    @staticmethod
    def update_grant(
        grant: AccessGrant,
        *,
        access_type: str | None = None,
        expires_at: datetime | None = None,
        clear_expiry: bool = False,
        notes: str | None = None,
    ) -> AccessGrant:
        """Change the tier, expiry or notes of an existing grant."""
        update_fields = ["updated_at"]
        if access_type is not None:
            if access_type not in AccessType.values:
                raise DomainError(f"Unknown access type '{access_type}'.")
            grant.access_type = access_type
            update_fields.append("access_type")
        if clear_expiry:
            grant.expires_at = None
            update_fields.append("expires_at")
        elif expires_at is not None:
            if expires_at <= timezone.now():
                raise DomainError("Expiry date must be in the future.")
            grant.expires_at = expires_at
            update_fields.append("expires_at")
        if notes is not None:
            grant.notes = notes
            update_fields.append("notes")
        grant.save(update_fields=update_fields)
        return grant


# ═══════════════════════════════════════════════════════════════════
#  Incident-report capabilities
# ═══════════════════════════════════════════════════════════════════


class IncidentReportAccess:
    """
    Incident-report visibility rules.

    Administrators (``admin`` / ``superadmin``) always pass.  Everyone
    else needs an effective grant conferring the capability.
    """

    SCOPE = AccessScope.INCIDENT_REPORT.value

    @staticmethod
    def _is_admin(user: Any) -> bool:
        return has_any_role(user, (RoleName.ADMIN, RoleName.SUPERADMIN))

    @classmethod
    def has_global_access(cls, user: Any, capability: str = Capability.READ) -> bool:
        if cls._is_admin(user):
            return True
        grant = AccessGrantRegistry.effective_grant(user, cls.SCOPE)
        return grant is not None and grant.has_access_type(capability)

    @classmethod
    def has_report_access(cls, user: Any, report: Any, capability: str = Capability.READ) -> bool:
        if cls._is_admin(user):
            return True
        grant = AccessGrantRegistry.effective_grant(user, cls.SCOPE, report)
        return grant is not None and grant.has_access_type(capability)

    @classmethod
    def can_view_incident_reports(cls, user: Any) -> bool:
        return cls.has_global_access(user, Capability.READ)

    @classmethod
    def can_view_incident_report(cls, user: Any, report: Any) -> bool:
        return cls.has_report_access(user, report, Capability.READ)

    @classmethod
    def can_access_incidents_for_report(cls, user: Any, report: Any) -> bool:
        return cls.has_report_access(user, report, Capability.INCIDENTS)
