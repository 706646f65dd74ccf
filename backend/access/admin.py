from django.contrib import admin

from .models import AccessGrant


@admin.register(AccessGrant)
class AccessGrantAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "scope", "object_id", "access_type",
                    "is_active", "expires_at", "granted_by", "created_at")
    list_filter = ("scope", "access_type", "is_active")
    search_fields = ("user__username", "notes")
    raw_id_fields = ("user", "granted_by")
