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
            name="AccessGrant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("scope", models.CharField(choices=[("incident_report", "Incident Report"), ("national_insight_center_info", "National Insight Center Info"), ("info_type", "Info Type")], db_index=True, max_length=64, verbose_name="Scope")),
                ("object_id", models.PositiveBigIntegerField(blank=True, help_text="Target record; empty for a global grant.", null=True, verbose_name="Object ID")),
                ("access_type", models.CharField(choices=[("full", "Full Access"), ("read_only", "Read Only"), ("incidents_only", "Incidents Only")], default="read_only", max_length=20, verbose_name="Access Type")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("expires_at", models.DateTimeField(blank=True, null=True, verbose_name="Expires At")),
                ("notes", models.TextField(blank=True, default="", verbose_name="Notes")),
                ("granted_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Granted By")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="access_grants", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Access Grant",
                "verbose_name_plural": "Access Grants",
                "ordering": ["-created_at", "-id"],
                "default_permissions": (),
                "indexes": [
                    models.Index(fields=["user", "scope", "object_id"], name="access_grant_lookup_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("is_active", True), ("object_id__isnull", False)), fields=("user", "scope", "object_id"), name="unique_active_grant_per_record"),
                    models.UniqueConstraint(condition=models.Q(("is_active", True), ("object_id__isnull", True)), fields=("user", "scope"), name="unique_active_global_grant"),
                ],
            },
        ),
    ]
