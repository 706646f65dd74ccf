"""
core.domain.predicates — Resource State Predicates.

Pure read-only questions the policy evaluator asks about a target
resource.  Every predicate re-reads the instance it is given; nothing
is cached between calls because confirmation state and dependent rows
change over time.

Models opt in through class attributes:

    LOCK_PARENT   name of the FK whose ``confirmed`` flag locks the child
                  (e.g. ``NationalInsightCenterInfoItem.LOCK_PARENT = "info"``).
"""

from __future__ import annotations

from typing import Any, Iterable


def actor_id(actor: Any) -> Any:
    """Primary key of ``actor`` or ``None`` for anonymous / missing actors."""
    if actor is None or not getattr(actor, "is_authenticated", False):
        return None
    return getattr(actor, "pk", None)


def is_confirmed(resource: Any) -> bool:
    return getattr(resource, "confirmed", False) is True


def is_owned_by(resource: Any, actor: Any) -> bool:
    """``resource.created_by`` is the actor."""
    uid = actor_id(actor)
    return uid is not None and getattr(resource, "created_by_id", None) == uid


def lock_parent(resource: Any) -> Any:
    """The confirmable parent of ``resource`` or ``None``."""
    field = getattr(type(resource), "LOCK_PARENT", None)
    if not field:
        return None
    return getattr(resource, field, None)


def parent_blocks_write(resource: Any, parent: Any = None) -> bool:
    """
    ``True`` when the confirmable parent is confirmed.

    ``parent`` may be passed explicitly (e.g. on ``create``, where no
    child instance exists yet); otherwise it is read from the resource.
    """
    if parent is None and resource is not None:
        parent = lock_parent(resource)
    return parent is not None and is_confirmed(parent)


def has_dependents(resource: Any, relations: Iterable[str]) -> bool:
    """
    ``True`` when any of the named reverse relations has at least one row.

    Unsaved instances have no dependents.
    """
    if resource is None or getattr(resource, "pk", None) is None:
        return False
    for relation in relations:
        manager = getattr(resource, relation)
        if manager.exists():
            return True
    return False


def dependent_count(resource: Any, relations: Iterable[str]) -> int:
    if resource is None or getattr(resource, "pk", None) is None:
        return 0
    return sum(getattr(resource, relation).count() for relation in relations)
