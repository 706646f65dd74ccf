"""
Core app serializers.

Input serializers for the authorization endpoints and **response-only**
serializers describing their output.  They work with plain dicts
produced by ``core.services``; no model from another app is imported.
"""

from __future__ import annotations

from rest_framework import serializers

from core.models import Translation
from core.permissions_constants import Entity


class AuthorizeRequestSerializer(serializers.Serializer):
    """
    Body of ``POST /api/core/authorize/``.

    ``action`` is deliberately a free string: an unknown action is a
    normal *deny*, not a validation error.
    """

    entity = serializers.ChoiceField(choices=[(e.value, e.label) for e in Entity])
    action = serializers.CharField(max_length=50)
    resource_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    parent_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class AuthorizeResponseSerializer(serializers.Serializer):
    entity = serializers.CharField()
    action = serializers.CharField()
    allowed = serializers.BooleanField()


class AbilitiesResponseSerializer(serializers.Serializer):
    entity = serializers.CharField()
    id = serializers.IntegerField(allow_null=True)
    abilities = serializers.DictField(child=serializers.BooleanField())


class ConfirmResponseSerializer(serializers.Serializer):
    entity = serializers.CharField()
    id = serializers.IntegerField()
    confirmed = serializers.BooleanField()
    confirmed_by = serializers.IntegerField(source="confirmed_by_id", allow_null=True)
    confirmed_at = serializers.DateTimeField(allow_null=True)


class TranslationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Translation
        fields = ["id", "language", "key", "value"]
