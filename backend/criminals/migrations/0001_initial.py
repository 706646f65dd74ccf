from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Criminal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("father_name", models.CharField(blank=True, default="", max_length=255, verbose_name="Father Name")),
                ("national_id", models.CharField(blank=True, db_index=True, default="", max_length=20, verbose_name="National ID")),
                ("crime_type", models.CharField(blank=True, default="", max_length=255, verbose_name="Crime Type")),
                ("arrest_date", models.DateField(blank=True, null=True, verbose_name="Arrest Date")),
                ("arrest_location", models.CharField(blank=True, default="", max_length=255, verbose_name="Arrest Location")),
                ("final_verdict", models.TextField(blank=True, default="", verbose_name="Final Verdict")),
                ("notes", models.TextField(blank=True, default="", verbose_name="Notes")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("department", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="criminals", to="accounts.department", verbose_name="Department")),
            ],
            options={
                "verbose_name": "Criminal",
                "verbose_name_plural": "Criminals",
                "ordering": ["name"],
                "default_permissions": (),
                "permissions": [
                    ("criminal.view_any", "Can view any criminal"),
                    ("criminal.view", "Can view criminal"),
                    ("criminal.create", "Can create criminal"),
                    ("criminal.update", "Can update criminal"),
                    ("criminal.delete", "Can delete criminal"),
                    ("criminal.restore", "Can restore criminal"),
                    ("criminal.force_delete", "Can force delete criminal"),
                ],
            },
        ),
    ]
