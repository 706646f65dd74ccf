"""
Access app models.

``AccessGrant`` is a scoped, time-bounded, tiered override that lets a
user see records they did not create, independently of the role /
permission system.

A grant targets one *scope* (the kind of record it is for) and either
one record of that kind (``object_id`` set) or every record of that
kind (``object_id`` null, a *global* grant).

At most one active grant exists per ``(user, scope, object_id)``; the
two partial unique constraints below enforce this at the storage
boundary, and ``AccessGrantRegistry.grant`` deactivates the previous
grant before creating a new one.
"""

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from core.models import TimeStampedModel
from core.permissions_constants import Entity


class AccessScope(models.TextChoices):
    """Record kinds that accept access grants."""

    INCIDENT_REPORT = Entity.INCIDENT_REPORT.value, "Incident Report"
    NATIONAL_INSIGHT_CENTER_INFO = (
        Entity.NATIONAL_INSIGHT_CENTER_INFO.value,
        "National Insight Center Info",
    )
    INFO_TYPE = Entity.INFO_TYPE.value, "Info Type"


class AccessType(models.TextChoices):
    FULL = "full", "Full Access"
    READ_ONLY = "read_only", "Read Only"
    INCIDENTS_ONLY = "incidents_only", "Incidents Only"


class Capability(models.TextChoices):
    """What a grant lets its holder do."""

    FULL = "full", "Full"
    READ = "read", "Read"
    INCIDENTS = "incidents", "Incidents"
    CREATE = "create", "Create"
    UPDATE = "update", "Update"
    DELETE = "delete", "Delete"


# access type → capabilities it confers.  ``full`` implies every other one;
# ``read_only`` and ``incidents_only`` overlap only through ``full``.
CAPABILITIES: dict[str, frozenset[str]] = {
    AccessType.FULL.value: frozenset(Capability.values),
    AccessType.READ_ONLY.value: frozenset({Capability.READ.value}),
    AccessType.INCIDENTS_ONLY.value: frozenset({Capability.INCIDENTS.value}),
}


class AccessGrantQuerySet(models.QuerySet):
    def effective(self, now=None):
        """Active and not expired."""
        now = now or timezone.now()
        return self.filter(is_active=True).filter(
            Q(expires_at__isnull=True) | Q(expires_at__gt=now)
        )

    def expired(self, now=None):
        now = now or timezone.now()
        return self.filter(is_active=True, expires_at__lte=now)

    def for_scope(self, scope):
        return self.filter(scope=getattr(scope, "value", scope))

    def for_object(self, object_id):
        return self.filter(object_id=object_id)

    def global_scope(self):
        return self.filter(object_id__isnull=True)


class AccessGrant(TimeStampedModel):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="access_grants",
        verbose_name="User",
    )
    granted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Granted By",
    )
    scope = models.CharField(
        max_length=64,
        choices=AccessScope.choices,
        verbose_name="Scope",
        db_index=True,
    )
    object_id = models.PositiveBigIntegerField(
        null=True,
        blank=True,
        verbose_name="Object ID",
        help_text="Target record; empty for a global grant.",
    )
    access_type = models.CharField(
        max_length=20,
        choices=AccessType.choices,
        default=AccessType.READ_ONLY,
        verbose_name="Access Type",
    )
    is_active = models.BooleanField(default=True, verbose_name="Active")
    expires_at = models.DateTimeField(null=True, blank=True, verbose_name="Expires At")
    notes = models.TextField(blank=True, default="", verbose_name="Notes")

    objects = AccessGrantQuerySet.as_manager()

    class Meta:
        verbose_name = "Access Grant"
        verbose_name_plural = "Access Grants"
        ordering = ["-created_at", "-id"]
        default_permissions = ()
        constraints = [
            models.UniqueConstraint(
                fields=["user", "scope", "object_id"],
                condition=Q(is_active=True, object_id__isnull=False),
                name="unique_active_grant_per_record",
            ),
            models.UniqueConstraint(
                fields=["user", "scope"],
                condition=Q(is_active=True, object_id__isnull=True),
                name="unique_active_global_grant",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "scope", "object_id"], name="access_grant_lookup_idx"),
        ]

    def __str__(self):
        target = f"#{self.object_id}" if self.object_id is not None else "*"
        return f"{self.user_id} → {self.scope} {target} ({self.access_type})"

    @property
    def is_global(self) -> bool:
        return self.object_id is None

    def is_expired(self, now=None) -> bool:
        now = now or timezone.now()
        return self.expires_at is not None and self.expires_at <= now

    def is_effective(self, now=None) -> bool:
        return self.is_active and not self.is_expired(now)

    def has_access_type(self, access_type: str) -> bool:
        """
        ``True`` when this grant confers ``access_type``.

        Accepts either an access type (``read_only``) or a capability
        (``read``, ``update`` ...).
        """
        aliases = {
            AccessType.READ_ONLY.value: Capability.READ.value,
            AccessType.INCIDENTS_ONLY.value: Capability.INCIDENTS.value,
        }
        capability = aliases.get(str(access_type), str(access_type))
        return capability in CAPABILITIES.get(str(self.access_type), frozenset())

    def is_full_access(self) -> bool:
        return self.access_type == AccessType.FULL

    def is_read_only(self) -> bool:
        return self.access_type in (AccessType.READ_ONLY, AccessType.FULL)

    def is_incidents_only(self) -> bool:
        return self.access_type in (AccessType.INCIDENTS_ONLY, AccessType.FULL)
