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
            name="InfoCategory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, unique=True, verbose_name="Name")),
                ("code", models.CharField(blank=True, default="", max_length=50, verbose_name="Code")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Info Category",
                "verbose_name_plural": "Info Categories",
                "ordering": ["name"],
                "default_permissions": (),
                "permissions": [
                    ("info_category.view_any", "Can view any info category"),
                    ("info_category.view", "Can view info category"),
                    ("info_category.create", "Can create info category"),
                    ("info_category.update", "Can update info category"),
                    ("info_category.delete", "Can delete info category"),
                    ("info_category.restore", "Can restore info category"),
                    ("info_category.force_delete", "Can force delete info category"),
                    ("info_category.confirm", "Can confirm info category"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InfoType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Info Type",
                "verbose_name_plural": "Info Types",
                "ordering": ["name"],
                "default_permissions": (),
                "permissions": [
                    ("info_type.view_any", "Can view any info type"),
                    ("info_type.view", "Can view info type"),
                    ("info_type.create", "Can create info type"),
                    ("info_type.update", "Can update info type"),
                    ("info_type.delete", "Can delete info type"),
                    ("info_type.restore", "Can restore info type"),
                    ("info_type.force_delete", "Can force delete info type"),
                    ("info_type.confirm", "Can confirm info type"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Info",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("confirmed", models.BooleanField(db_index=True, default=False, verbose_name="Confirmed")),
                ("confirmed_at", models.DateTimeField(blank=True, null=True, verbose_name="Confirmed At")),
                ("confirmed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Confirmed By")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("code", models.CharField(blank=True, default="", max_length=50, verbose_name="Code")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("info_date", models.DateField(blank=True, null=True, verbose_name="Date")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("department", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="infos", to="accounts.department", verbose_name="Department")),
                ("info_category", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="infos", to="infos.infocategory", verbose_name="Info Category")),
                ("info_type", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="infos", to="infos.infotype", verbose_name="Info Type")),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="assigned_infos", to=settings.AUTH_USER_MODEL, verbose_name="Assigned User")),
            ],
            options={
                "verbose_name": "Info",
                "verbose_name_plural": "Infos",
                "ordering": ["-created_at", "-id"],
                "default_permissions": (),
                "permissions": [
                    ("info.view_any", "Can view any info"),
                    ("info.view", "Can view info"),
                    ("info.create", "Can create info"),
                    ("info.update", "Can update info"),
                    ("info.delete", "Can delete info"),
                    ("info.restore", "Can restore info"),
                    ("info.force_delete", "Can force delete info"),
                    ("info.confirm", "Can confirm info"),
                ],
            },
        ),
    ]
