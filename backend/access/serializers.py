"""
Access app serializers.

- ``AccessGrantSerializer``        — read representation of a grant.
- ``AccessGrantTermsSerializer``   — grant terms; input for
                                     ``POST /users/{user_pk}/grants/``.
- ``AccessGrantCreateSerializer``  — terms plus grantee; input for
                                     ``POST /grants/``.
- ``AccessGrantUpdateSerializer``  — input for ``PATCH /grants/{id}/``.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework import serializers

from .models import AccessGrant, AccessScope, AccessType

User = get_user_model()


class AccessGrantSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    granted_by_username = serializers.CharField(
        source="granted_by.username", read_only=True, default=None
    )
    access_type_label = serializers.CharField(source="get_access_type_display", read_only=True)
    is_expired = serializers.SerializerMethodField()
    is_effective = serializers.SerializerMethodField()

    class Meta:
        model = AccessGrant
        fields = [
            "id",
            "user",
            "username",
            "granted_by",
            "granted_by_username",
            "scope",
            "object_id",
            "access_type",
            "access_type_label",
            "is_active",
            "expires_at",
            "notes",
            "is_expired",
            "is_effective",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_is_expired(self, obj: AccessGrant) -> bool:
        return obj.is_expired()

    def get_is_effective(self, obj: AccessGrant) -> bool:
        return obj.is_effective()


class AccessGrantTermsSerializer(serializers.Serializer):
    scope = serializers.ChoiceField(choices=AccessScope.choices)
    object_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    access_type = serializers.ChoiceField(
        choices=AccessType.choices,
        default=AccessType.READ_ONLY,
    )
    expires_at = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_expires_at(self, value):
        if value is not None and value <= timezone.now():
            raise serializers.ValidationError("Expiry date must be in the future.")
        return value


class AccessGrantCreateSerializer(AccessGrantTermsSerializer):
    user_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        source="user",
    )


class AccessGrantUpdateSerializer(serializers.Serializer):
    access_type = serializers.ChoiceField(choices=AccessType.choices, required=False)
    expires_at = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
