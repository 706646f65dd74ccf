"""
Insights app views.

View Map
--------
- ``InsightInfoViewSet``   — GET / POST /infos/,
                             GET / PATCH / DELETE /infos/{id}/
- ``InsightItemViewSet``   — GET / POST /infos/{info_pk}/items/,
                             GET / PATCH / DELETE /infos/{info_pk}/items/{id}/
- ``InsightItemStatsView`` — GET / PUT /items/{id}/stats/

Views only parse input and render output; ``insights.services`` authorizes
every call, so confirmation locks surface here as 403 responses.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    InsightInfoSerializer,
    InsightItemSerializer,
    InsightItemStatSerializer,
    InsightItemStatsUpdateSerializer,
)
from .services import InsightItemService, InsightRecordService


class InsightInfoViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(responses={200: InsightInfoSerializer(many=True)}, tags=["Insights"])
    def list(self, request: Request) -> Response:
        records = InsightRecordService.list_records(request.user)
        return Response(InsightInfoSerializer(records, many=True).data)

    @extend_schema(
        request=InsightInfoSerializer,
        responses={201: InsightInfoSerializer},
        tags=["Insights"],
    )
    def create(self, request: Request) -> Response:
        serializer = InsightInfoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        info = InsightRecordService.create_record(request.user, serializer.validated_data)
        return Response(InsightInfoSerializer(info).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: InsightInfoSerializer}, tags=["Insights"])
    def retrieve(self, request: Request, pk: str = None) -> Response:
        info = InsightRecordService.get_record(pk)
        InsightRecordService.retrieve_record(request.user, info)
        return Response(InsightInfoSerializer(info).data)

    @extend_schema(
        request=InsightInfoSerializer,
        responses={200: InsightInfoSerializer},
        tags=["Insights"],
    )
    def partial_update(self, request: Request, pk: str = None) -> Response:
        info = InsightRecordService.get_record(pk)
        serializer = InsightInfoSerializer(info, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        info = InsightRecordService.update_record(request.user, info, serializer.validated_data)
        return Response(InsightInfoSerializer(info).data)

    @extend_schema(responses={204: None}, tags=["Insights"])
    def destroy(self, request: Request, pk: str = None) -> Response:
        info = InsightRecordService.get_record(pk)
        InsightRecordService.delete_record(request.user, info)
        return Response(status=status.HTTP_204_NO_CONTENT)


class InsightItemViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(responses={200: InsightItemSerializer(many=True)}, tags=["Insights"])
    def list(self, request: Request, info_pk: str = None) -> Response:
        info = InsightRecordService.get_record(info_pk)
        items = InsightItemService.list_items(request.user, info)
        return Response(InsightItemSerializer(items, many=True).data)

    @extend_schema(
        request=InsightItemSerializer,
        responses={201: InsightItemSerializer},
        tags=["Insights"],
    )
    def create(self, request: Request, info_pk: str = None) -> Response:
        info = InsightRecordService.get_record(info_pk)
        serializer = InsightItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = InsightItemService.create_item(request.user, info, serializer.validated_data)
        return Response(InsightItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: InsightItemSerializer}, tags=["Insights"])
    def retrieve(self, request: Request, pk: str = None, info_pk: str = None) -> Response:
        item = InsightItemService.get_item(pk, InsightRecordService.get_record(info_pk))
        InsightItemService.retrieve_item(request.user, item)
        return Response(InsightItemSerializer(item).data)

    @extend_schema(
        request=InsightItemSerializer,
        responses={200: InsightItemSerializer},
        tags=["Insights"],
    )
    def partial_update(self, request: Request, pk: str = None, info_pk: str = None) -> Response:
        item = InsightItemService.get_item(pk, InsightRecordService.get_record(info_pk))
        serializer = InsightItemSerializer(item, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        item = InsightItemService.update_item(request.user, item, serializer.validated_data)
        return Response(InsightItemSerializer(item).data)

    @extend_schema(responses={204: None}, tags=["Insights"])
    def destroy(self, request: Request, pk: str = None, info_pk: str = None) -> Response:
        item = InsightItemService.get_item(pk, InsightRecordService.get_record(info_pk))
        InsightItemService.delete_item(request.user, item)
        return Response(status=status.HTTP_204_NO_CONTENT)


class InsightItemStatsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: InsightItemStatSerializer(many=True)}, tags=["Insights"])
    def get(self, request: Request, pk: int) -> Response:
        item = InsightItemService.get_item(pk)
        stats = InsightItemService.list_stats(request.user, item)
        return Response(InsightItemStatSerializer(stats, many=True).data)

    @extend_schema(
        request=InsightItemStatsUpdateSerializer,
        responses={200: InsightItemStatSerializer(many=True)},
        tags=["Insights"],
    )
    def put(self, request: Request, pk: int) -> Response:
        item = InsightItemService.get_item(pk)
        serializer = InsightItemStatsUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        stats = InsightItemService.update_stats(
            request.user, item, serializer.validated_data["stats"]
        )
        return Response(InsightItemStatSerializer(stats, many=True).data)
