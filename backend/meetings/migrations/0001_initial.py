from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Meeting",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("scheduled_at", models.DateTimeField(blank=True, null=True, verbose_name="Scheduled At")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("offline_enabled", models.BooleanField(default=False, verbose_name="Offline Enabled")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Meeting",
                "verbose_name_plural": "Meetings",
                "ordering": ["-scheduled_at", "-id"],
                "default_permissions": (),
                "permissions": [
                    ("meeting.view_any", "Can view any meeting"),
                    ("meeting.view", "Can view meeting"),
                    ("meeting.create", "Can create meeting"),
                    ("meeting.update", "Can update meeting"),
                    ("meeting.delete", "Can delete meeting"),
                    ("meeting.restore", "Can restore meeting"),
                    ("meeting.force_delete", "Can force delete meeting"),
                    ("meeting.join", "Can join meeting"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MeetingParticipant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("role", models.CharField(choices=[("participant", "Participant"), ("co-host", "Co-host")], default="participant", max_length=20)),
                ("joined_at", models.DateTimeField(blank=True, null=True)),
                ("meeting", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="memberships", to="meetings.meeting")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="meeting_memberships", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "default_permissions": (),
                "constraints": [
                    models.UniqueConstraint(fields=("meeting", "user"), name="unique_meeting_participant"),
                ],
            },
        ),
        migrations.AddField(
            model_name="meeting",
            name="participants",
            field=models.ManyToManyField(blank=True, related_name="meetings", through="meetings.MeetingParticipant", to=settings.AUTH_USER_MODEL),
        ),
        migrations.CreateModel(
            name="MeetingSession",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("started_at", models.DateTimeField(blank=True, null=True, verbose_name="Started At")),
                ("ended_at", models.DateTimeField(blank=True, null=True, verbose_name="Ended At")),
                ("is_offline", models.BooleanField(default=False, verbose_name="Offline")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("meeting", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="sessions", to="meetings.meeting", verbose_name="Meeting")),
            ],
            options={
                "verbose_name": "Meeting Session",
                "verbose_name_plural": "Meeting Sessions",
                "ordering": ["-started_at", "-id"],
                "default_permissions": (),
                "permissions": [
                    ("meeting_session.view_any", "Can view any meeting session"),
                    ("meeting_session.view", "Can view meeting session"),
                    ("meeting_session.create", "Can create meeting session"),
                    ("meeting_session.update", "Can update meeting session"),
                    ("meeting_session.delete", "Can delete meeting session"),
                    ("meeting_session.restore", "Can restore meeting session"),
                    ("meeting_session.force_delete", "Can force delete meeting session"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MeetingMessage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("content", models.TextField(verbose_name="Content")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("meeting", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="messages", to="meetings.meeting", verbose_name="Meeting")),
            ],
            options={
                "verbose_name": "Meeting Message",
                "verbose_name_plural": "Meeting Messages",
                "ordering": ["created_at", "id"],
                "default_permissions": (),
                "permissions": [
                    ("meeting_message.view_any", "Can view any meeting message"),
                    ("meeting_message.view", "Can view meeting message"),
                    ("meeting_message.create", "Can create meeting message"),
                    ("meeting_message.update", "Can update meeting message"),
                    ("meeting_message.delete", "Can delete meeting message"),
                    ("meeting_message.restore", "Can restore meeting message"),
                    ("meeting_message.force_delete", "Can force delete meeting message"),
                ],
            },
        ),
    ]
