from django.contrib import admin

from .models import Info, InfoCategory, InfoType


@admin.register(InfoCategory)
class InfoCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "created_by")
    search_fields = ("name", "code")


@admin.register(InfoType)
class InfoTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "created_by", "created_at")
    search_fields = ("name",)


@admin.register(Info)
class InfoAdmin(admin.ModelAdmin):
    list_display = ("title", "info_type", "info_category", "department",
                    "user", "confirmed", "created_by")
    list_filter = ("confirmed", "info_type", "info_category", "department")
    search_fields = ("title", "code", "description")
    readonly_fields = ("confirmed", "confirmed_by", "confirmed_at")
