from django.contrib import admin

from .models import Meeting, MeetingMessage, MeetingParticipant, MeetingSession


class ParticipantInline(admin.TabularInline):
    model = MeetingParticipant
    extra = 0
    raw_id_fields = ("user",)


@admin.register(Meeting)
class MeetingAdmin(admin.ModelAdmin):
    list_display = ("title", "scheduled_at", "is_active", "created_by")
    list_filter = ("is_active", "offline_enabled")
    search_fields = ("title",)
    inlines = [ParticipantInline]


@admin.register(MeetingSession)
class MeetingSessionAdmin(admin.ModelAdmin):
    list_display = ("meeting", "started_at", "ended_at", "is_offline")


@admin.register(MeetingMessage)
class MeetingMessageAdmin(admin.ModelAdmin):
    list_display = ("meeting", "created_by", "created_at")
    search_fields = ("content",)
