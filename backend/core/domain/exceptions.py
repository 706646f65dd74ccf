"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler
(``core.domain.exception_handler``) maps them to HTTP responses.

Policy decisions themselves never raise: ``core.domain.policy.decide``
always returns a boolean.  These exceptions are raised by the *guards*
(``authorize``, ``require_permission``) and by services.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ DRF / HTTP equivalent        │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ ValidationError / 400        │ 400  │
│ ResourceRequired    │ ValidationError / 400        │ 400  │
│ PermissionDenied    │ PermissionDenied / 403       │ 403  │
│ NotFound            │ NotFound / 404               │ 404  │
│ Conflict            │ APIException / 409           │ 409  │
│ InvalidTransition   │ APIException / 409           │ 409  │
└─────────────────────┴──────────────────────────────┴──────┘

Recommended usage inside a service::

    from core.domain.exceptions import InvalidTransition

    if record.confirmed:
        raise InvalidTransition(
            current="confirmed",
            target="confirmed",
            reason="Record is already confirmed.",
        )
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    """

    code = "domain_error"

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class ResourceRequired(DomainError):
    """
    A caller asked for a resource-level decision without supplying the
    resource.

    This is a contract violation by the caller, not a policy outcome,
    so it is reported separately from ``PermissionDenied``.  Maps to
    HTTP 400.
    """

    code = "resource_required"

    def __init__(
        self,
        message: str | None = None,
        *,
        entity: str | None = None,
        action: str | None = None,
    ) -> None:
        if message is None:
            message = "A target resource is required"
            if entity and action:
                message += f" to decide '{action}' on '{entity}'"
            message += "."
        super().__init__(message)
        self.entity = entity
        self.action = action


class PermissionDenied(DomainError):
    """
    The authenticated user does not have the required role or permission
    for this operation.

    Maps to HTTP 403.
    """

    code = "permission_denied"

    def __init__(
        self,
        message: str = "You do not have permission to perform this action.",
        *,
        entity: str | None = None,
        action: str | None = None,
    ) -> None:
        super().__init__(message)
        self.entity = entity
        self.action = action


class NotFound(DomainError):
    """
    The requested resource does not exist.

    Maps to HTTP 404.
    """

    code = "not_found"

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Typical usage: duplicate active access grant, deleting a role that
    is still assigned.  Maps to HTTP 409.
    """

    code = "conflict"

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)


class InvalidTransition(Conflict):
    """
    A state transition that is not allowed from the current state.

    Inherits from ``Conflict`` because an invalid transition IS a conflict
    with the resource's current state.  Maps to HTTP 409.

    Example::

        raise InvalidTransition(
            current="confirmed",
            target="confirmed",
            reason="Confirmation is one-shot.",
        )
    """

    code = "invalid_transition"

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        target: str | None = None,
        reason: str | None = None,
    ) -> None:
        if message is None:
            parts = ["Invalid state transition"]
            if current and target:
                parts.append(f"from '{current}' to '{target}'")
            if reason:
                parts.append(f"({reason})")
            message = " ".join(parts) + "."
        super().__init__(message)
        self.current = current
        self.target = target
        self.reason = reason
