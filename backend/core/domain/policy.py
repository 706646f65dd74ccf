"""
core.domain.policy — Policy Evaluator.

One generic evaluator, parameterised per entity by an ``EntityPolicy``
descriptor.  Each domain app declares its descriptors in a
``policies.py`` module; ``CoreConfig.ready()`` autodiscovers those
modules the same way ``django.contrib.admin`` discovers ``admin.py``.

Decision pipeline
-----------------
``decide(actor, action, target=None, parent=None)``::

    1. parse action              unknown              → False
    2. resolve descriptor        unknown entity       → False
    3. action supported?         no                   → False
    4. actor authenticated?      no                   → False
    5. resource present / typed  missing when needed  → False
    6. confirmation lock         confirmed target     → False
    7. dependents lock           dependent rows exist → False
    8. override hook             present              → its verdict
    9. base capability           permission or role
   10. owner lock                created_by == actor

``decide`` is total: it never raises and returns ``False`` for anything
it cannot evaluate.  ``authorize`` is the raising guard used by
services and views.

Declaring a policy::

    from core.domain.policy import EntityPolicy, register

    register(EntityPolicy(
        entity=Entity.MEETING,
        model=Meeting,
        owner_locked_actions={Action.VIEW, Action.UPDATE, Action.DELETE},
        overrides={Action.JOIN: _can_join},
    ))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping

from django.core.exceptions import ImproperlyConfigured, ObjectDoesNotExist
from django.utils.module_loading import autodiscover_modules

from core.domain.access import has_any_role, has_permission, has_role
from core.domain.exceptions import PermissionDenied, ResourceRequired
from core.domain.predicates import has_dependents, is_confirmed, is_owned_by
from core.permissions_constants import (
    CRUD_ACTIONS,
    DESTRUCTIVE_ACTIONS,
    LOCKED_ACTIONS,
    Ability,
    Action,
    Entity,
    RoleName,
)

logger = logging.getLogger(__name__)

# (actor, target, parent) -> verdict
Rule = Callable[[Any, Any, Any], bool]

RESOURCELESS_ACTIONS = frozenset({Action.VIEW_ANY, Action.CREATE})


@dataclass(frozen=True)
class EntityPolicy:
    """
    Capability descriptor for one entity type.

    Attributes:
        entity:                   Catalogue entity the descriptor governs.
        model:                    Django model class of the target, used
                                  for type checks and model → policy lookup.
        actions:                  Supported actions; anything else is denied.
        resourceless_actions:     Actions decided without a target.
        optional_resource_actions: Actions decided with or without a target
                                  (list-level vs. record-level).
        owner_locked_actions:     Actions that also require
                                  ``target.created_by == actor``.
        confirmable:              Confirmed targets refuse ``LOCKED_ACTIONS``.
        dependents:               Reverse relation names whose rows block
                                  ``dependent_locked_actions``.
        role_gated:               Base check uses the role hierarchy
                                  instead of permission names.
        overrides:                Per-action rules replacing steps 9-10.
    """

    entity: Entity
    model: type | None = None
    actions: frozenset[Action] = frozenset(CRUD_ACTIONS)
    resourceless_actions: frozenset[Action] = RESOURCELESS_ACTIONS
    optional_resource_actions: frozenset[Action] = frozenset()
    owner_locked_actions: frozenset[Action] = frozenset()
    confirmable: bool = False
    dependents: tuple[str, ...] = ()
    dependent_locked_actions: frozenset[Action] = frozenset({Action.DELETE, Action.FORCE_DELETE})
    role_gated: bool = False
    overrides: Mapping[Action, Rule] = field(default_factory=dict)

    def __post_init__(self):
        for name in (
            "actions",
            "resourceless_actions",
            "optional_resource_actions",
            "owner_locked_actions",
            "dependent_locked_actions",
        ):
            object.__setattr__(self, name, frozenset(getattr(self, name)))
        object.__setattr__(self, "dependents", tuple(self.dependents))
        object.__setattr__(self, "overrides", dict(self.overrides))
        unknown = set(self.overrides) - self.actions
        if unknown:
            raise ImproperlyConfigured(
                f"Policy for '{self.entity.value}' overrides unsupported "
                f"action(s): {', '.join(sorted(a.value for a in unknown))}."
            )

    # ── Introspection ───────────────────────────────────────────────

    def ability(self, action: Action) -> Ability:
        return Ability(self.entity, action)

    def requires_resource(self, action: Action) -> bool:
        return (
            action not in self.resourceless_actions
            and action not in self.optional_resource_actions
        )

    def accepts(self, target: Any) -> bool:
        return self.model is None or isinstance(target, self.model)

    def resource_actions(self) -> list[Action]:
        """Supported actions that are decided against a single record."""
        return [
            action for action in Action
            if action in self.actions and action not in self.resourceless_actions
        ]

    # ── Evaluation ──────────────────────────────────────────────────

    def base_check(self, actor: Any, action: Action) -> bool:
        if self.role_gated:
            if action in DESTRUCTIVE_ACTIONS:
                return has_role(actor, RoleName.SUPERADMIN)
            return has_any_role(actor, (RoleName.ADMIN, RoleName.SUPERADMIN))
        return has_permission(actor, self.ability(action))

    def evaluate(self, actor: Any, action: Action, target: Any = None, parent: Any = None) -> bool:
        if action not in self.actions:
            return False
        if actor is None or not getattr(actor, "is_authenticated", False):
            return False

        if target is None:
            if self.requires_resource(action):
                return False
        else:
            if not self.accepts(target):
                return False
            if self.confirmable and action in LOCKED_ACTIONS and is_confirmed(target):
                return False
            if (
                self.dependents
                and action in self.dependent_locked_actions
                and has_dependents(target, self.dependents)
            ):
                return False

        rule = self.overrides.get(action)
        if rule is not None:
            return bool(rule(actor, target, parent))

        if not self.base_check(actor, action):
            return False
        if action in self.owner_locked_actions:
            return target is not None and is_owned_by(target, actor)
        return True


class PolicyRegistry:
    """Entity → descriptor map with model-class lookup."""

    def __init__(self) -> None:
        self._policies: dict[Entity, EntityPolicy] = {}

    def register(self, policy: EntityPolicy) -> EntityPolicy:
        if policy.entity in self._policies:
            raise ImproperlyConfigured(
                f"A policy for '{policy.entity.value}' is already registered."
            )
        self._policies[policy.entity] = policy
        return policy

    def unregister(self, entity: Entity) -> None:
        self._policies.pop(entity, None)

    def get(self, entity: Any) -> EntityPolicy | None:
        parsed = Entity.parse(entity)
        if parsed is None:
            return None
        return self._policies.get(parsed)

    def for_model(self, model: type) -> EntityPolicy | None:
        for klass in getattr(model, "__mro__", ()):
            for policy in self._policies.values():
                if policy.model is klass:
                    return policy
        return None

    def __contains__(self, entity: Any) -> bool:
        return self.get(entity) is not None

    def __iter__(self) -> Iterator[EntityPolicy]:
        return iter(sorted(self._policies.values(), key=lambda p: p.entity.value))


registry = PolicyRegistry()


def register(policy: EntityPolicy) -> EntityPolicy:
    """Register ``policy`` with the global registry."""
    return registry.register(policy)


def autodiscover() -> None:
    autodiscover_modules("policies")


def _resolve(target: Any, entity: Any = None) -> tuple[EntityPolicy | None, Any]:
    """
    Find the descriptor for a call.

    ``target`` may be a model instance, a model class (for list-level
    actions such as ``viewAny``), or ``None`` when ``entity`` is given.
    """
    if isinstance(target, type):
        policy = registry.get(entity) if entity is not None else registry.for_model(target)
        return policy, None
    if entity is not None:
        return registry.get(entity), target
    if target is not None:
        return registry.for_model(type(target)), target
    return None, None


def decide(
    actor: Any,
    action: Any,
    target: Any = None,
    parent: Any = None,
    *,
    entity: Any = None,
) -> bool:
    """
    Return ``True`` iff ``actor`` may perform ``action`` on ``target``.

    Never raises.  An unknown action, unknown entity, malformed target
    or missing actor all resolve to ``False``.
    """
    parsed = Action.parse(action)
    if parsed is None:
        return False
    policy, resolved = _resolve(target, entity)
    if policy is None:
        return False
    try:
        return policy.evaluate(actor, parsed, resolved, parent)
    except (AttributeError, TypeError, ValueError, ObjectDoesNotExist) as exc:
        logger.warning(
            "Policy %s.%s could not be evaluated (%s: %s); denying.",
            policy.entity.value,
            parsed.value,
            type(exc).__name__,
            exc,
        )
        return False


def authorize(
    actor: Any,
    action: Any,
    target: Any = None,
    parent: Any = None,
    *,
    entity: Any = None,
    message: str = "",
) -> None:
    """
    Raising guard around ``decide``.

    Raises:
        ResourceRequired: The action needs a target record and none was
            supplied (caller contract violation).
        PermissionDenied: The decision is a denial.
    """
    parsed = Action.parse(action)
    policy, resolved = _resolve(target, entity)
    if (
        parsed is not None
        and policy is not None
        and resolved is None
        and policy.requires_resource(parsed)
    ):
        raise ResourceRequired(entity=policy.entity.value, action=parsed.value)

    if decide(actor, parsed or action, resolved, parent, entity=policy.entity if policy else entity):
        return

    logger.info(
        "Denied '%s' on %s%s for user %s",
        getattr(parsed, "value", action),
        policy.entity.value if policy else entity,
        f" #{resolved.pk}" if getattr(resolved, "pk", None) is not None else "",
        getattr(actor, "pk", None),
    )
    raise PermissionDenied(
        message or "You do not have permission to perform this action.",
        entity=policy.entity.value if policy else None,
        action=getattr(parsed, "value", None),
    )


def abilities(actor: Any, target: Any, parent: Any = None) -> dict[str, bool]:
    """
    Verdict for every record-level action supported on ``target``.

    Used by the front end to show or hide per-row actions.
    """
    policy, resolved = _resolve(target)
    if policy is None or resolved is None:
        return {}
    return {
        action.value: decide(actor, action, resolved, parent)
        for action in policy.resource_actions()
    }


def list_abilities(actor: Any, entity: Any) -> dict[str, bool]:
    """Verdict for every list-level action of ``entity``."""
    policy = registry.get(entity)
    if policy is None:
        return {}
    return {
        action.value: decide(actor, action, entity=policy.entity)
        for action in Action
        if action in policy.actions and not policy.requires_resource(action)
    }


def permitted(actor: Any, entity: Entity, action: Action) -> bool:
    """Plain permission check for ``<entity>.<action>``; used by override hooks."""
    return has_permission(actor, Ability(entity, action))

