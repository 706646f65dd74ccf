from django.contrib import admin

from .models import Criminal


@admin.register(Criminal)
class CriminalAdmin(admin.ModelAdmin):
    list_display = ("name", "national_id", "crime_type", "arrest_date", "department")
    list_filter = ("department",)
    search_fields = ("name", "national_id", "crime_type")
