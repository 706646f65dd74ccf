from django.contrib import admin

from .models import District, Province


class DistrictInline(admin.TabularInline):
    model = District
    extra = 0
    fields = ("name", "code")


@admin.register(Province)
class ProvinceAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "capital", "created_by")
    search_fields = ("name", "code")
    inlines = [DistrictInline]


@admin.register(District)
class DistrictAdmin(admin.ModelAdmin):
    list_display = ("name", "province", "code", "created_by")
    list_filter = ("province",)
    search_fields = ("name", "code")
