from django.contrib import admin

from .models import Incident, IncidentCategory, IncidentReport


@admin.register(IncidentCategory)
class IncidentCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "created_by")
    search_fields = ("name", "code")


class IncidentInline(admin.TabularInline):
    model = Incident
    extra = 0
    fields = ("title", "category", "incident_date", "confirmed")


@admin.register(IncidentReport)
class IncidentReportAdmin(admin.ModelAdmin):
    list_display = ("report_number", "report_date", "status", "created_by")
    list_filter = ("status", "security_level")
    search_fields = ("report_number", "details")
    inlines = [IncidentInline]


@admin.register(Incident)
class IncidentAdmin(admin.ModelAdmin):
    list_display = ("title", "report", "category", "incident_date", "confirmed")
    list_filter = ("confirmed", "category")
    search_fields = ("title", "description")
