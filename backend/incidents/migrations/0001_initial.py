from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("locations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="IncidentCategory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, unique=True, verbose_name="Name")),
                ("code", models.CharField(blank=True, default="", max_length=50, verbose_name="Code")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("color", models.CharField(blank=True, default="", max_length=20, verbose_name="Color")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Incident Category",
                "verbose_name_plural": "Incident Categories",
                "ordering": ["name"],
                "default_permissions": (),
                "permissions": [
                    ("incident_category.view_any", "Can view any incident category"),
                    ("incident_category.view", "Can view incident category"),
                    ("incident_category.create", "Can create incident category"),
                    ("incident_category.update", "Can update incident category"),
                    ("incident_category.delete", "Can delete incident category"),
                    ("incident_category.restore", "Can restore incident category"),
                    ("incident_category.force_delete", "Can force delete incident category"),
                ],
            },
        ),
        migrations.CreateModel(
            name="IncidentReport",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("report_number", models.CharField(max_length=50, unique=True, verbose_name="Report Number")),
                ("report_date", models.DateField(verbose_name="Report Date")),
                ("security_level", models.CharField(blank=True, default="normal", max_length=50, verbose_name="Security Level")),
                ("details", models.TextField(blank=True, default="", verbose_name="Details")),
                ("action_taken", models.TextField(blank=True, default="", verbose_name="Action Taken")),
                ("status", models.CharField(choices=[("draft", "Draft"), ("submitted", "Submitted"), ("reviewed", "Reviewed")], default="draft", max_length=20, verbose_name="Status")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Incident Report",
                "verbose_name_plural": "Incident Reports",
                "ordering": ["-report_date", "-id"],
                "default_permissions": (),
                "permissions": [
                    ("incident_report.view_any", "Can view any incident report"),
                    ("incident_report.view", "Can view incident report"),
                    ("incident_report.create", "Can create incident report"),
                    ("incident_report.update", "Can update incident report"),
                    ("incident_report.delete", "Can delete incident report"),
                    ("incident_report.restore", "Can restore incident report"),
                    ("incident_report.force_delete", "Can force delete incident report"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Incident",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("incident_date", models.DateField(blank=True, null=True, verbose_name="Incident Date")),
                ("casualties", models.PositiveIntegerField(default=0, verbose_name="Casualties")),
                ("injuries", models.PositiveIntegerField(default=0, verbose_name="Injuries")),
                ("confirmed", models.BooleanField(default=False, verbose_name="Confirmed")),
                ("category", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="incidents", to="incidents.incidentcategory", verbose_name="Category")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("district", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="incidents", to="locations.district", verbose_name="District")),
                ("province", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="incidents", to="locations.province", verbose_name="Province")),
                ("report", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="incidents", to="incidents.incidentreport", verbose_name="Report")),
                ("reported_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Reported By")),
            ],
            options={
                "verbose_name": "Incident",
                "verbose_name_plural": "Incidents",
                "ordering": ["-incident_date", "-id"],
                "default_permissions": (),
                "permissions": [
                    ("incident.view_any", "Can view any incident"),
                    ("incident.view", "Can view incident"),
                    ("incident.create", "Can create incident"),
                    ("incident.update", "Can update incident"),
                    ("incident.delete", "Can delete incident"),
                    ("incident.restore", "Can restore incident"),
                    ("incident.force_delete", "Can force delete incident"),
                    ("incident.confirm", "Can confirm incident"),
                ],
            },
        ),
    ]
