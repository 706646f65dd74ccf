from __future__ import annotations

from rest_framework import serializers

from reports.models import StatCategoryItem

from .models import (
    NationalInsightCenterInfo,
    NationalInsightCenterInfoItem,
    NationalInsightCenterInfoItemStat,
)


class InsightInfoSerializer(serializers.ModelSerializer):
    class Meta:
        model = NationalInsightCenterInfo
        fields = [
            "id", "title", "code", "description",
            "confirmed", "confirmed_by", "confirmed_at",
            "created_by", "created_at", "updated_at",
        ]
        read_only_fields = [
            "id", "confirmed", "confirmed_by", "confirmed_at",
            "created_by", "created_at", "updated_at",
        ]


class InsightItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = NationalInsightCenterInfoItem
        fields = [
            "id", "info", "title", "registration_number", "info_category",
            "province", "district", "item_date", "description",
            "confirmed", "confirmed_by", "confirmed_at",
            "created_by", "created_at", "updated_at",
        ]
        read_only_fields = [
            "id", "info", "confirmed", "confirmed_by", "confirmed_at",
            "created_by", "created_at", "updated_at",
        ]


class InsightItemStatSerializer(serializers.ModelSerializer):
    stat_category_item = serializers.PrimaryKeyRelatedField(
        queryset=StatCategoryItem.objects.all(),
    )

    class Meta:
        model = NationalInsightCenterInfoItemStat
        fields = ["id", "stat_category_item", "integer_value", "string_value", "notes"]
        read_only_fields = ["id"]

    def validate(self, attrs):
        if attrs.get("integer_value") is None and not attrs.get("string_value"):
            raise serializers.ValidationError("Either integer_value or string_value is required.")
        return attrs


class InsightItemStatsUpdateSerializer(serializers.Serializer):
    stats = InsightItemStatSerializer(many=True)
