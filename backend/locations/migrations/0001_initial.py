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
            name="Province",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, unique=True, verbose_name="Name")),
                ("code", models.CharField(blank=True, default="", max_length=20, verbose_name="Code")),
                ("capital", models.CharField(blank=True, default="", max_length=255, verbose_name="Capital")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Province",
                "verbose_name_plural": "Provinces",
                "ordering": ["name"],
                "default_permissions": (),
                "permissions": [
                    ("province.view_any", "Can view any province"),
                    ("province.view", "Can view province"),
                    ("province.create", "Can create province"),
                    ("province.update", "Can update province"),
                    ("province.delete", "Can delete province"),
                    ("province.restore", "Can restore province"),
                    ("province.force_delete", "Can force delete province"),
                ],
            },
        ),
        migrations.CreateModel(
            name="District",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("code", models.CharField(blank=True, default="", max_length=20, verbose_name="Code")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("province", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="districts", to="locations.province", verbose_name="Province")),
            ],
            options={
                "verbose_name": "District",
                "verbose_name_plural": "Districts",
                "ordering": ["province__name", "name"],
                "default_permissions": (),
                "permissions": [
                    ("district.view_any", "Can view any district"),
                    ("district.view", "Can view district"),
                    ("district.create", "Can create district"),
                    ("district.update", "Can update district"),
                    ("district.delete", "Can delete district"),
                    ("district.restore", "Can restore district"),
                    ("district.force_delete", "Can force delete district"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("province", "name"), name="unique_district_name_per_province"),
                ],
            },
        ),
    ]
