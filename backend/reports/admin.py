from django.contrib import admin

from .models import Report, ReportStat, StatCategory, StatCategoryItem


class StatCategoryItemInline(admin.TabularInline):
    model = StatCategoryItem
    extra = 0
    fields = ("name", "label", "parent", "order")


@admin.register(StatCategory)
class StatCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "label", "status")
    list_filter = ("status",)
    inlines = [StatCategoryItemInline]


class ReportStatInline(admin.TabularInline):
    model = ReportStat
    extra = 0


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ("title", "report_date", "province", "created_by")
    search_fields = ("title",)
    inlines = [ReportStatInline]
