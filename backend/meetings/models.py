"""
Meetings app models.

A ``Meeting`` is owned by its creator.  Other users take part through
``MeetingParticipant`` rows; sessions and chat messages hang off the
meeting.
"""

from django.conf import settings
from django.db import models

from core.models import OwnedModel, TimeStampedModel
from core.permissions_constants import Entity, permission_choices


class Meeting(TimeStampedModel, OwnedModel):
    title = models.CharField(max_length=255, verbose_name="Title")
    description = models.TextField(blank=True, default="", verbose_name="Description")
    scheduled_at = models.DateTimeField(null=True, blank=True, verbose_name="Scheduled At")
    is_active = models.BooleanField(default=True, verbose_name="Active")
    offline_enabled = models.BooleanField(default=False, verbose_name="Offline Enabled")
    participants = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="MeetingParticipant",
        related_name="meetings",
        blank=True,
    )

    class Meta:
        verbose_name = "Meeting"
        verbose_name_plural = "Meetings"
        ordering = ["-scheduled_at", "-id"]
        default_permissions = ()
        permissions = permission_choices(Entity.MEETING)

    def __str__(self):
        return self.title

    def has_participant(self, user) -> bool:
        user_id = getattr(user, "pk", None)
        if user_id is None or self.pk is None:
            return False
        return self.memberships.filter(user_id=user_id).exists()


class MeetingParticipant(models.Model):
    class Role(models.TextChoices):
        PARTICIPANT = "participant", "Participant"
        CO_HOST = "co-host", "Co-host"

    meeting = models.ForeignKey(
        Meeting,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="meeting_memberships",
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.PARTICIPANT,
    )
    joined_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        default_permissions = ()
        constraints = [
            models.UniqueConstraint(
                fields=["meeting", "user"],
                name="unique_meeting_participant",
            ),
        ]

    def __str__(self):
        return f"{self.user_id} in {self.meeting_id} ({self.role})"


class MeetingSession(TimeStampedModel, OwnedModel):
    meeting = models.ForeignKey(
        Meeting,
        on_delete=models.CASCADE,
        related_name="sessions",
        verbose_name="Meeting",
    )
    started_at = models.DateTimeField(null=True, blank=True, verbose_name="Started At")
    ended_at = models.DateTimeField(null=True, blank=True, verbose_name="Ended At")
    is_offline = models.BooleanField(default=False, verbose_name="Offline")

    class Meta:
        verbose_name = "Meeting Session"
        verbose_name_plural = "Meeting Sessions"
        ordering = ["-started_at", "-id"]
        default_permissions = ()
        permissions = permission_choices(Entity.MEETING_SESSION)

    def __str__(self):
        return f"{self.meeting} @ {self.started_at}"


class MeetingMessage(TimeStampedModel, OwnedModel):
    meeting = models.ForeignKey(
        Meeting,
        on_delete=models.CASCADE,
        related_name="messages",
        verbose_name="Meeting",
    )
    content = models.TextField(verbose_name="Content")

    class Meta:
        verbose_name = "Meeting Message"
        verbose_name_plural = "Meeting Messages"
        ordering = ["created_at", "id"]
        default_permissions = ()
        permissions = permission_choices(Entity.MEETING_MESSAGE)

    def __str__(self):
        return self.content[:50]
