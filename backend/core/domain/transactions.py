"""
core.domain.transactions — Helpers for safe state transitions.

Provides utilities that wrap ``transaction.atomic`` and
``select_for_update`` into reusable patterns so that every app's
service layer follows the same concurrency-safe approach.

Design goals
------------
* Ensure that state-transition reads always lock the row first
  (``select_for_update``) so two concurrent requests cannot both
  observe the old state.
* Keep the helpers **generic** — they accept any Django ``Model``
  instance.

Usage::

    from core.domain.transactions import atomic_confirm

    info = atomic_confirm(instance=info, confirmed_by=request.user)
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from django.db import models, transaction
from django.utils import timezone

from core.domain.exceptions import InvalidTransition, NotFound

M = TypeVar("M", bound=models.Model)


def lock_for_update(model_class: type[M], pk: Any) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Convenience wrapper around ``select_for_update().get(pk=pk)``
    that must be called inside an ``atomic()`` block.

    Raises:
        NotFound: If no row with that PK exists.
    """
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except model_class.DoesNotExist:
        raise NotFound(f"{model_class.__name__} with pk={pk} does not exist.")


def _lock_parent(instance: models.Model) -> models.Model | None:
    """Lock the ``LOCK_PARENT`` row of ``instance``, if its model declares one."""
    field_name = getattr(type(instance), "LOCK_PARENT", None)
    if not field_name:
        return None
    parent_id = getattr(instance, f"{field_name}_id", None)
    if parent_id is None:
        return None
    parent_model = type(instance)._meta.get_field(field_name).related_model
    return lock_for_update(parent_model, parent_id)


def atomic_confirm(
    *,
    instance: M,
    confirmed_by: Any,
    check: Callable[[M], None] | None = None,
) -> M:
    """
    Flip ``confirmed`` from ``False`` to ``True`` exactly once.

    Steps performed inside ``transaction.atomic()``:
        1. Lock the ``LOCK_PARENT`` row, when the model declares one.
        2. Re-fetch the instance with ``select_for_update()``.
        3. Refuse if it is already confirmed.
        4. Run ``check`` against the locked instance.
        5. Stamp ``confirmed``, ``confirmed_by`` and ``confirmed_at``.

    The parent is always locked before the child.  ``check`` receives the
    instance with the locked parent attached, so a parent confirmed after
    the caller's first policy check still refuses the child.

    Raises:
        NotFound:          If the instance no longer exists.
        InvalidTransition: If the instance is already confirmed.
        Whatever ``check`` raises, normally ``PermissionDenied``.
    """
    model_class = type(instance)

    with transaction.atomic():
        parent = _lock_parent(instance)
        locked = lock_for_update(model_class, instance.pk)
        if parent is not None:
            setattr(locked, model_class.LOCK_PARENT, parent)
        if locked.confirmed:
            raise InvalidTransition(
                current="confirmed",
                target="confirmed",
                reason=f"{model_class.__name__} #{instance.pk} is already confirmed",
            )
        if check is not None:
            check(locked)
        locked.confirmed = True
        locked.confirmed_by = confirmed_by
        locked.confirmed_at = timezone.now()
        locked.save(update_fields=["confirmed", "confirmed_by", "confirmed_at", "updated_at"])

    instance.refresh_from_db()
    return instance
