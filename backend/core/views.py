"""
Core app views — **Thin Views**.

Each view delegates all business logic to the corresponding service in
``core.services``.  Views are responsible only for:

1. Validating the request payload / path parameters.
2. Calling the service with the authenticated user and parameters.
3. Serialising the result and returning an HTTP ``Response``.

Domain exceptions raised by the services (``ResourceRequired``,
``NotFound``, ``PermissionDenied`` …) are translated to HTTP responses
by ``core.domain.exception_handler``.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import OpenApiResponse, extend_schema

from .serializers import (
    AbilitiesResponseSerializer,
    AuthorizeRequestSerializer,
    AuthorizeResponseSerializer,
    ConfirmResponseSerializer,
)
from .services import AuthorizationQueryService, ConfirmationService


class AuthorizeView(APIView):
    """
    **POST /api/core/authorize/**

    Ask the policy evaluator a single question.

    **Request body**::

        {"entity": "info", "action": "update", "resource_id": 12}

    **Response** (``200 OK``)::

        {"entity": "info", "action": "update", "allowed": false}

    **Error Responses**:
        - ``400``: unknown entity, or a record-level action without
          ``resource_id``.
        - ``404``: ``resource_id`` / ``parent_id`` does not exist.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Evaluate one authorization decision",
        request=AuthorizeRequestSerializer,
        responses={
            200: OpenApiResponse(response=AuthorizeResponseSerializer, description="Decision."),
            400: OpenApiResponse(description="Resource required or unknown entity."),
            404: OpenApiResponse(description="Resource not found."),
        },
        tags=["Authorization"],
    )
    def post(self, request: Request) -> Response:
        serializer = AuthorizeRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = AuthorizationQueryService.check(request.user, **serializer.validated_data)
        return Response(AuthorizeResponseSerializer(result).data, status=status.HTTP_200_OK)


class EntityAbilitiesView(APIView):
    """
    **GET /api/core/abilities/{entity}/**

    List-level ability map: every action of ``entity`` that can be
    decided without a record.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List-level abilities for an entity",
        responses={200: AbilitiesResponseSerializer},
        tags=["Authorization"],
    )
    def get(self, request: Request, entity: str) -> Response:
        result = AuthorizationQueryService.abilities_for_entity(request.user, entity=entity)
        return Response(AbilitiesResponseSerializer(result).data)


class RecordAbilitiesView(APIView):
    """
    **GET /api/core/abilities/{entity}/{id}/**

    Full ability map (every supported action → bool) for one record.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Abilities on a single record",
        responses={
            200: AbilitiesResponseSerializer,
            404: OpenApiResponse(description="Resource not found."),
        },
        tags=["Authorization"],
    )
    def get(self, request: Request, entity: str, pk: int) -> Response:
        result = AuthorizationQueryService.abilities_for_record(
            request.user, entity=entity, resource_id=pk,
        )
        return Response(AbilitiesResponseSerializer(result).data)


class ConfirmView(APIView):
    """
    **POST /api/core/confirm/{entity}/{id}/**

    Confirm a confirmable record.  Confirmation is one-way: once
    confirmed the record (and, for parent records, its items) is locked
    against update / delete / restore / forceDelete.

    **Error Responses**:
        - ``400``: entity is not confirmable.
        - ``403``: policy denied ``confirm``.
        - ``404``: record not found.
        - ``409``: record already confirmed.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Confirm a record",
        request=None,
        responses={
            200: ConfirmResponseSerializer,
            403: OpenApiResponse(description="Not allowed."),
            409: OpenApiResponse(description="Already confirmed."),
        },
        tags=["Authorization"],
    )
    def post(self, request: Request, entity: str, pk: int) -> Response:
        instance = ConfirmationService.confirm(request.user, entity=entity, resource_id=pk)
        payload = {
            "entity": entity,
            "id": instance.pk,
            "confirmed": instance.confirmed,
            "confirmed_by_id": instance.confirmed_by_id,
            "confirmed_at": instance.confirmed_at,
        }
        return Response(ConfirmResponseSerializer(payload).data, status=status.HTTP_200_OK)
