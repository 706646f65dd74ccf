"""
Management command: setup_rbac
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Seeds the database with the three base **Roles** (``user``, ``admin``,
``superadmin``) and links each role to its set of catalogue
permissions.

Key design principle — **this command does NOT create Permission objects**.
Permissions are declared in each model's ``Meta.permissions`` (built
from ``core.permissions_constants.PERMISSION_CATALOGUE``) and inserted
by ``migrate``.

The command is **idempotent** — safe to run multiple times.  Existing
roles are updated; permissions are replaced (set) to match the
mapping below.

Usage::

    python manage.py setup_rbac
"""

from django.contrib.auth.models import Permission
from django.core.management.base import BaseCommand

from accounts.models import Role
from core.permissions_constants import (
    Ability,
    Action,
    Entity,
    RoleName,
    all_abilities,
)

# Abilities every signed-in user gets: read access to reference data and
# records, plus taking part in meetings.
_READ_ACTIONS = (Action.VIEW_ANY, Action.VIEW)


def _user_abilities() -> list[Ability]:
    abilities = [
        ability for ability in all_abilities()
        if ability.action in _READ_ACTIONS and ability.entity is not Entity.BACKUP
    ]
    abilities += [
        Ability(Entity.MEETING, Action.JOIN),
        Ability(Entity.MEETING_MESSAGE, Action.CREATE),
    ]
    return abilities


def _admin_abilities() -> list[Ability]:
    return [ability for ability in all_abilities() if ability.entity is not Entity.BACKUP]


def _superadmin_abilities() -> list[Ability]:
    return all_abilities()


# ────────────────────────────────────────────────────────────────────
# Role → Permission mapping
# ────────────────────────────────────────────────────────────────────
# Key:   (role_name, description)
# Value: callable returning the role's abilities

ROLE_PERMISSIONS_MAP = {
    (
        RoleName.SUPERADMIN,
        "Full system access, including backups, role deletion and access grants.",
    ): _superadmin_abilities,
    (
        RoleName.ADMIN,
        "Manages users, roles and every record type except backups.",
    ): _admin_abilities,
    (
        RoleName.USER,
        "Default role: read access to records and meeting participation.",
    ): _user_abilities,
}


class Command(BaseCommand):
    help = (
        "Seeds the database with the user / admin / superadmin roles and "
        "maps each role to its catalogue permissions.  Safe to run multiple "
        "times (idempotent).  Does NOT create permissions — run `migrate` first."
    )

    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n══════════════════════════════════════════"
            "\n  RBAC Setup — Seeding Roles & Permissions"
            "\n══════════════════════════════════════════\n"
        ))

        all_permissions: dict[str, Permission] = {
            p.codename: p for p in Permission.objects.all()
        }

        roles_created = 0
        roles_updated = 0
        warnings = 0

        for (role_name, description), abilities in ROLE_PERMISSIONS_MAP.items():
            # ── 1. Idempotent role creation / update ────────────────
            role, created = Role.objects.get_or_create(
                name=role_name,
                defaults={"description": description},
            )
            if not created and role.description != description:
                role.description = description
                role.save(update_fields=["description"])

            # ── 2. Resolve permission names ─────────────────────────
            resolved: list[Permission] = []
            for ability in abilities():
                perm = all_permissions.get(ability.codename)
                if perm is not None:
                    resolved.append(perm)
                else:
                    warnings += 1
                    self.stdout.write(self.style.WARNING(
                        f"  ⚠  Permission '{ability.codename}' not found — "
                        f"skipped for role '{role_name}'.  (Run migrate first?)"
                    ))

            # ── 3. Set permissions (replaces old set entirely) ──────
            role.permissions.set(resolved)

            if created:
                roles_created += 1
            else:
                roles_updated += 1

            self.stdout.write(self.style.SUCCESS(
                f"  ✔  {'Created' if created else 'Updated'} role: {role_name:<12s} "
                f"(permissions={len(resolved)})"
            ))

        # ── Summary ─────────────────────────────────────────────────
        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n──────────────────────────────────────────"
        ))
        summary = (
            f"  Done!  {roles_created} role(s) created, "
            f"{roles_updated} role(s) updated."
        )
        if warnings:
            summary += f"  ({warnings} permission warning(s) — see above.)"
        self.stdout.write(self.style.SUCCESS(summary + "\n"))
