"""
core.domain.access — Permission Store and Role Hierarchy.

These are the two leaf lookups every policy decision starts from.

╔══════════════════════════════════════════════════════════════════╗
║  Permission checks are EXACT string matches on the dotted      ║
║  ``"<entity>.<action>"`` name.  There is no wildcard or        ║
║  prefix matching.                                              ║
║                                                                ║
║  Role checks go through ``ROLE_IMPLIES`` so that a             ║
║  ``superadmin`` also counts as an ``admin`` (and as a plain    ║
║  ``user``).                                                    ║
╚══════════════════════════════════════════════════════════════════╝

Actor contract
--------------
Anything passed as ``actor`` is duck-typed.  The store reads:

    actor.is_authenticated        → bool
    actor.get_all_permissions()   → set[str] of dotted permission names
    actor.get_role_names()        → set[str] of assigned role names

``accounts.models.User`` implements all three.  ``None`` and
``AnonymousUser`` hold no permissions and no roles.

Usage::

    from core.domain.access import has_permission, has_any_role
    from core.permissions_constants import Ability, Action, Entity

    has_permission(user, Ability(Entity.CRIMINAL, Action.VIEW_ANY))
    has_permission(user, "criminal.view_any")
    has_any_role(user, ["admin", "superadmin"])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from core.permissions_constants import Ability, RoleName

if TYPE_CHECKING:
    from accounts.models import User


# role → the roles it implicitly includes (itself included)
ROLE_IMPLIES: dict[str, frozenset[str]] = {
    RoleName.SUPERADMIN: frozenset({RoleName.SUPERADMIN, RoleName.ADMIN, RoleName.USER}),
    RoleName.ADMIN: frozenset({RoleName.ADMIN, RoleName.USER}),
    RoleName.USER: frozenset({RoleName.USER}),
}

# Highest first; used by ``get_user_role_name``.
ROLE_PRECEDENCE: tuple[str, ...] = (RoleName.SUPERADMIN, RoleName.ADMIN, RoleName.USER)


def _is_active_actor(actor: Any) -> bool:
    return actor is not None and bool(getattr(actor, "is_authenticated", False))


def _permission_name(name: Ability | str) -> str:
    if isinstance(name, Ability):
        return name.codename
    return str(name)


def get_permission_names(actor: Any) -> frozenset[str]:
    """Effective permission names of ``actor`` (empty for anonymous)."""
    if not _is_active_actor(actor):
        return frozenset()
    getter = getattr(actor, "get_all_permissions", None)
    if getter is None:
        return frozenset()
    return frozenset(getter())


def get_role_names(actor: Any) -> frozenset[str]:
    """Role names directly assigned to ``actor``."""
    if not _is_active_actor(actor):
        return frozenset()
    getter = getattr(actor, "get_role_names", None)
    if getter is None:
        return frozenset()
    return frozenset(getter())


def get_effective_role_names(actor: Any) -> frozenset[str]:
    """Assigned role names expanded through ``ROLE_IMPLIES``."""
    effective: set[str] = set()
    for role in get_role_names(actor):
        effective |= ROLE_IMPLIES.get(role, frozenset({role}))
    return frozenset(effective)


# ── Permission Store ────────────────────────────────────────────────


def has_permission(actor: Any, name: Ability | str) -> bool:
    """``True`` iff ``actor`` holds exactly the permission ``name``."""
    return _permission_name(name) in get_permission_names(actor)


def has_any_permission(actor: Any, names: Iterable[Ability | str]) -> bool:
    held = get_permission_names(actor)
    return any(_permission_name(name) in held for name in names)


def has_all_permissions(actor: Any, names: Iterable[Ability | str]) -> bool:
    """``True`` iff every name is held.  Vacuously true for no names."""
    held = get_permission_names(actor)
    return all(_permission_name(name) in held for name in names)


def require_permission(actor: User, *names: Ability | str, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` if the actor lacks **all** of
    the given permissions (OR-logic: having any one is sufficient).

    Raises:
        core.domain.exceptions.PermissionDenied: If the actor has none
            of the listed permissions.

    Example::

        require_permission(user, Ability(Entity.BACKUP, Action.MANAGE))
    """
    from core.domain.exceptions import PermissionDenied as DomainPermissionDenied

    if has_any_permission(actor, names):
        return
    raise DomainPermissionDenied(
        message
        or f"Missing required permission: {', '.join(_permission_name(n) for n in names)}."
    )


# ── Role Hierarchy ──────────────────────────────────────────────────


def has_role(actor: Any, name: str) -> bool:
    """
    ``True`` when the actor holds ``name`` or a role implying it.

    ``has_role(superadmin_user, "admin")`` is ``True``;
    ``has_role(admin_user, "superadmin")`` is ``False``.
    """
    return name in get_effective_role_names(actor)


def has_any_role(actor: Any, names: Iterable[str]) -> bool:
    effective = get_effective_role_names(actor)
    return any(name in effective for name in names)


def is_reserved_role_name(name: Any) -> bool:
    """``admin`` / ``superadmin`` in any casing, surrounding blanks ignored."""
    if not isinstance(name, str):
        return False
    return name.strip().lower() in RoleName.RESERVED


def get_user_role_name(actor: Any) -> str | None:
    """
    Return the highest role name held by ``actor``, or ``None``.

    This is an **informational** helper — used for JWT claims, API
    responses, and logging.  Access control goes through
    ``core.domain.policy.decide``.
    """
    assigned = get_role_names(actor)
    for name in ROLE_PRECEDENCE:
        if name in assigned:
            return name
    if assigned:
        return sorted(assigned)[0]
    return None
