"""
core.domain.exception_handler — DRF-compatible global exception handler.

Turns ``core.domain.exceptions`` raised by services and guards into JSON
responses, so views stay free of try/except boilerplate.

Response body::

    {
        "detail": "You do not have permission to perform this action.",
        "code": "permission_denied",
        "entity": "info_type",       # decision errors only
        "action": "update"           # decision errors only
    }

Register in ``settings.py``::

    REST_FRAMEWORK = {
        ...
        'EXCEPTION_HANDLER': 'core.domain.exception_handler.domain_exception_handler',
    }
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler

from core.domain.exceptions import (
    Conflict,
    DomainError,
    NotFound,
    PermissionDenied,
)

logger = logging.getLogger(__name__)

# Most specific first; InvalidTransition is caught by Conflict and
# ResourceRequired falls through to DomainError.
_STATUS_MAP: tuple[tuple[type[DomainError], int], ...] = (
    (PermissionDenied, status.HTTP_403_FORBIDDEN),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Conflict, status.HTTP_409_CONFLICT),
    (DomainError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: DomainError) -> int:
    """HTTP status for a domain exception."""
    for exc_class, status_code in _STATUS_MAP:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_payload(exc: DomainError) -> dict:
    """Serialisable body for a domain exception."""
    payload = {"detail": str(exc), "code": exc.code}
    for attr in ("entity", "action"):
        value = getattr(exc, attr, None)
        if value:
            payload[attr] = value
    return payload


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    DRF exception handler that also handles ``core.domain.exceptions``.

    DRF's own handler runs first (validation, authentication, throttling).
    Anything it does not recognise and that is not a ``DomainError`` is
    left to propagate as a 500.
    """
    response = drf_default_handler(exc, context)
    if response is not None:
        return response

    if not isinstance(exc, DomainError):
        return None

    status_code = status_for(exc)
    view = context.get("view")
    logger.warning(
        "%s (%s) in %s: %s",
        exc.code,
        status_code,
        type(view).__name__ if view is not None else "unknown",
        exc,
    )
    return Response(error_payload(exc), status=status_code)
