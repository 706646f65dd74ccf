"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF exception handler for the above.
access             Permission Store and Role Hierarchy lookups.
predicates         Resource State Predicates (confirmation, ownership, dependents).
policy             Policy Evaluator: descriptors, registry, ``decide`` / ``authorize``.
transactions       Helpers for ``transaction.atomic`` + ``select_for_update``.

Usage from any app::

    from core.domain.exceptions import DomainError, InvalidTransition
    from core.domain.policy import authorize, decide
    from core.domain.transactions import atomic_confirm
"""
