from django.contrib import admin

from .models import (
    NationalInsightCenterInfo,
    NationalInsightCenterInfoItem,
    NationalInsightCenterInfoItemStat,
)


class ItemInline(admin.TabularInline):
    model = NationalInsightCenterInfoItem
    extra = 0
    fields = ("title", "item_date", "confirmed")
    readonly_fields = ("confirmed",)


@admin.register(NationalInsightCenterInfo)
class NationalInsightCenterInfoAdmin(admin.ModelAdmin):
    list_display = ("title", "code", "confirmed", "created_by", "created_at")
    list_filter = ("confirmed",)
    search_fields = ("title", "code")
    readonly_fields = ("confirmed", "confirmed_by", "confirmed_at")
    inlines = [ItemInline]


class StatInline(admin.TabularInline):
    model = NationalInsightCenterInfoItemStat
    extra = 0


@admin.register(NationalInsightCenterInfoItem)
class NationalInsightCenterInfoItemAdmin(admin.ModelAdmin):
    list_display = ("title", "info", "item_date", "confirmed", "created_by")
    list_filter = ("confirmed",)
    search_fields = ("title", "registration_number")
    readonly_fields = ("confirmed", "confirmed_by", "confirmed_at")
    inlines = [StatInline]
