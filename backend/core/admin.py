from django.contrib import admin

from .models import Translation


@admin.register(Translation)
class TranslationAdmin(admin.ModelAdmin):
    list_display = ("id", "language", "key", "value")
    list_filter = ("language",)
    search_fields = ("key", "value")
