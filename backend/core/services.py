"""
Core app services — **Service Layer**.

Generic, entity-agnostic entry points into the policy layer used by the
``/api/core/`` endpoints.  Views delegate all business logic to the
service classes defined here.

╔══════════════════════════════════════════════════════════════════════╗
║  CROSS-APP IMPORT RULEBOOK                                         ║
║                                                                    ║
║  The core app never imports models from other apps.  Target        ║
║  models are reached through the policy registry                    ║
║  (``EntityPolicy.model``), which every app populates from its own  ║
║  ``policies.py``.                                                  ║
╚══════════════════════════════════════════════════════════════════════╝

Architecture
------------
- ``AuthorizationQueryService``  — "may I?" checks and ability maps for
                                   arbitrary ``(entity, action, id)``.
- ``ConfirmationService``        — the one-way confirm transition for
                                   confirmable records.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django.db import models

from core.domain.exceptions import DomainError, NotFound, ResourceRequired
from core.domain.policy import (
    EntityPolicy,
    abilities,
    authorize,
    decide,
    list_abilities,
    registry,
)
from core.domain.transactions import atomic_confirm
from core.permissions_constants import Action, Entity

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)


def _get_policy(entity: Any) -> EntityPolicy:
    policy = registry.get(entity)
    if policy is None or policy.model is None:
        raise DomainError(f"Unknown entity '{entity}'.")
    return policy


def _get_instance(model: type[models.Model], pk: Any) -> models.Model:
    try:
        return model.objects.get(pk=pk)
    except (model.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"{model._meta.verbose_name.title()} with id {pk} not found.")


def _parent_model(model: type[models.Model]) -> type[models.Model] | None:
    field_name = getattr(model, "LOCK_PARENT", None)
    if not field_name:
        return None
    return model._meta.get_field(field_name).related_model


# ════════════════════════════════════════════════════════════════════
#  Authorization queries
# ════════════════════════════════════════════════════════════════════


class AuthorizationQueryService:
    """
    Resolve ids to records and ask the policy evaluator.

    Used by the front end to decide which actions to render; the
    verdicts are computed fresh on every call.
    """

    @staticmethod
    def check(
        user: User,
        *,
        entity: str,
        action: str,
        resource_id: int | None = None,
        parent_id: int | None = None,
    ) -> dict[str, Any]:
        """
        Return ``{"entity", "action", "allowed"}`` for one decision.

        Raises
        ------
        DomainError
            Unknown entity.
        ResourceRequired
            The action is record-level and no ``resource_id`` was given.
        NotFound
            ``resource_id`` / ``parent_id`` does not exist.
        """
        policy = _get_policy(entity)
        parsed = Action.parse(action)

        target = None
        if resource_id is not None:
            target = _get_instance(policy.model, resource_id)
        elif parsed is not None and policy.requires_resource(parsed):
            raise ResourceRequired(entity=policy.entity.value, action=parsed.value)

        parent = None
        if parent_id is not None:
            parent_model = _parent_model(policy.model)
            if parent_model is None:
                raise DomainError(f"'{policy.entity.value}' has no parent record.")
            parent = _get_instance(parent_model, parent_id)

        allowed = decide(user, action, target, parent, entity=policy.entity)
        return {
            "entity": policy.entity.value,
            "action": parsed.value if parsed else str(action),
            "allowed": allowed,
        }

    @staticmethod
    def abilities_for_record(user: User, *, entity: str, resource_id: int) -> dict[str, Any]:
        policy = _get_policy(entity)
        target = _get_instance(policy.model, resource_id)
        return {
            "entity": policy.entity.value,
            "id": target.pk,
            "abilities": abilities(user, target),
        }

    @staticmethod
    def abilities_for_entity(user: User, *, entity: str) -> dict[str, Any]:
        policy = _get_policy(entity)
        return {
            "entity": policy.entity.value,
            "id": None,
            "abilities": list_abilities(user, policy.entity),
        }


# ════════════════════════════════════════════════════════════════════
#  Confirmation
# ════════════════════════════════════════════════════════════════════


class ConfirmationService:
    """
    Confirm a confirmable record.

    ``authorize(confirm)`` runs first for an early refusal.  ``atomic_confirm``
    then locks the parent record (if any) and the row, evaluates the policy
    again on the locked state and performs the ``False → True`` flip, so
    two concurrent confirmations cannot both succeed and a parent confirmed
    in between still locks its children.
    """

    @staticmethod
    def confirmable_entities() -> list[Entity]:
        return [policy.entity for policy in registry if policy.confirmable]

    @staticmethod
    def confirm(user: User, *, entity: str, resource_id: int) -> models.Model:
        policy = _get_policy(entity)
        if not policy.confirmable:
            raise DomainError(f"'{policy.entity.value}' records cannot be confirmed.")

        instance = _get_instance(policy.model, resource_id)
        authorize(user, Action.CONFIRM, instance)
        instance = atomic_confirm(
            instance=instance,
            confirmed_by=user,
            check=lambda locked: authorize(user, Action.CONFIRM, locked),
        )

        logger.info(
            "%s #%s confirmed by user %s",
            policy.entity.value,
            instance.pk,
            user.pk,
        )
        return instance
