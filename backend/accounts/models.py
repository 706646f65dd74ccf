"""
Accounts app models.

Defines the Role system, departments, and a custom User model that
extends Django's ``AbstractUser``.

A user's **effective permissions** are the union of the permissions of
every assigned role and the permissions granted to the user directly
(``user_permissions``).  Permission names are the dotted catalogue
codenames from ``core.permissions_constants`` (``criminal.view_any``),
not Django's ``app_label.codename`` form.
"""

from django.contrib.auth.models import AbstractUser, Permission
from django.db import models

from core.models import OwnedModel, TimeStampedModel
from core.permissions_constants import Entity, RoleName, permission_choices


class Role(models.Model):
    """
    Named bundle of permissions.

    ``user``, ``admin`` and ``superadmin`` are seeded by ``setup_rbac``;
    any other role is created at runtime by an administrator.  The two
    reserved names can never be deleted, restored or force-deleted
    (see ``accounts.policies``).
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name="Role Name",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    permissions = models.ManyToManyField(
        Permission,
        blank=True,
        related_name="roles",
        verbose_name="Permissions",
        help_text="Specific permissions for this role.",
    )

    class Meta:
        verbose_name = "Role"
        verbose_name_plural = "Roles"
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def is_reserved(self) -> bool:
        return self.name.strip().lower() in RoleName.RESERVED


class Department(TimeStampedModel, OwnedModel):
    """Organisational unit that owns ``infos.Info`` records."""

    name = models.CharField(max_length=255, unique=True, verbose_name="Name")
    code = models.CharField(max_length=50, blank=True, default="", verbose_name="Code")
    description = models.TextField(blank=True, default="", verbose_name="Description")

    class Meta:
        verbose_name = "Department"
        verbose_name_plural = "Departments"
        ordering = ["name"]
        default_permissions = ()
        permissions = permission_choices(Entity.DEPARTMENT)

    def __str__(self):
        return self.name


class User(AbstractUser):
    """
    Custom user model.

    Holds any number of roles.  ``department`` is display metadata only;
    no policy consults it.
    """

    roles = models.ManyToManyField(
        Role,
        blank=True,
        related_name="users",
        verbose_name="Roles",
    )
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="members",
        verbose_name="Department",
    )

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        default_permissions = ()
        # No backup model exists; its single permission lives here.
        permissions = permission_choices(Entity.BACKUP)

    def __str__(self):
        return self.username

    # ── Role lookups ────────────────────────────────────────────────

    def get_role_names(self) -> set[str]:
        """Names of the roles assigned to this user (empty when inactive)."""
        if not self.is_active or self.pk is None:
            return set()
        if not hasattr(self, "_role_cache"):
            self._role_cache = set(self.roles.values_list("name", flat=True))
        return self._role_cache

    def has_role(self, role_name: str) -> bool:
        from core.domain.access import has_role

        return has_role(self, role_name)

    # ── Permission overrides ────────────────────────────────────────

    def get_all_permissions(self, obj=None) -> set:
        """
        Return the set of dotted permission names the user holds.

        Superusers hold every permission.  Inactive users hold none.
        """
        if not self.is_active or self.pk is None:
            return set()

        if self.is_superuser:
            if not hasattr(self, "_superuser_perm_cache"):
                self._superuser_perm_cache = set(
                    Permission.objects.values_list("codename", flat=True)
                )
            return self._superuser_perm_cache

        if not hasattr(self, "_perm_cache"):
            via_roles = Permission.objects.filter(roles__users=self)
            direct = self.user_permissions.all()
            self._perm_cache = set(via_roles.values_list("codename", flat=True)) | set(
                direct.values_list("codename", flat=True)
            )
        return self._perm_cache

    def has_perm(self, perm: str, obj=None) -> bool:
        if self.is_active and self.is_superuser:
            return True
        return perm in self.get_all_permissions(obj)

    def has_perms(self, perm_list, obj=None) -> bool:
        return all(self.has_perm(perm, obj) for perm in perm_list)

    def has_module_perms(self, app_label: str) -> bool:
        """
        Django admin hook.  Catalogue names are not app-prefixed, so this
        is answered by staff status plus any held permission.
        """
        if self.is_active and self.is_superuser:
            return True
        return self.is_active and self.is_staff and bool(self.get_all_permissions())

    def clear_access_caches(self) -> None:
        """Forget cached roles / permissions after an assignment change."""
        for attr in ("_perm_cache", "_superuser_perm_cache", "_role_cache"):
            if hasattr(self, attr):
                delattr(self, attr)

    @property
    def permissions_list(self) -> list[str]:
        """Sorted permission names, for the front end's conditional UI."""
        return sorted(self.get_all_permissions())
