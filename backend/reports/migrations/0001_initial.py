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
            name="StatCategory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, unique=True, verbose_name="Name")),
                ("label", models.CharField(blank=True, default="", max_length=255, verbose_name="Label")),
                ("color", models.CharField(blank=True, default="", max_length=20, verbose_name="Color")),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive")], default="active", max_length=20, verbose_name="Status")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Stat Category",
                "verbose_name_plural": "Stat Categories",
                "ordering": ["name"],
                "default_permissions": (),
                "permissions": [
                    ("stat_category.view_any", "Can view any stat category"),
                    ("stat_category.view", "Can view stat category"),
                    ("stat_category.create", "Can create stat category"),
                    ("stat_category.update", "Can update stat category"),
                    ("stat_category.delete", "Can delete stat category"),
                    ("stat_category.restore", "Can restore stat category"),
                    ("stat_category.force_delete", "Can force delete stat category"),
                ],
            },
        ),
        migrations.CreateModel(
            name="StatCategoryItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("label", models.CharField(blank=True, default="", max_length=255, verbose_name="Label")),
                ("order", models.PositiveIntegerField(default=0, verbose_name="Order")),
                ("category", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="reports.statcategory", verbose_name="Category")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("parent", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="children", to="reports.statcategoryitem", verbose_name="Parent Item")),
            ],
            options={
                "verbose_name": "Stat Category Item",
                "verbose_name_plural": "Stat Category Items",
                "ordering": ["category_id", "order", "id"],
                "default_permissions": (),
                "permissions": [
                    ("stat_category_item.view_any", "Can view any stat category item"),
                    ("stat_category_item.view", "Can view stat category item"),
                    ("stat_category_item.create", "Can create stat category item"),
                    ("stat_category_item.update", "Can update stat category item"),
                    ("stat_category_item.delete", "Can delete stat category item"),
                    ("stat_category_item.restore", "Can restore stat category item"),
                    ("stat_category_item.force_delete", "Can force delete stat category item"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Report",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("report_date", models.DateField(verbose_name="Report Date")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("province", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="reports", to="locations.province", verbose_name="Province")),
            ],
            options={
                "verbose_name": "Report",
                "verbose_name_plural": "Reports",
                "ordering": ["-report_date", "-id"],
                "default_permissions": (),
                "permissions": [
                    ("report.view_any", "Can view any report"),
                    ("report.view", "Can view report"),
                    ("report.create", "Can create report"),
                    ("report.update", "Can update report"),
                    ("report.delete", "Can delete report"),
                    ("report.restore", "Can restore report"),
                    ("report.force_delete", "Can force delete report"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ReportStat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("integer_value", models.IntegerField(blank=True, null=True, verbose_name="Integer Value")),
                ("string_value", models.CharField(blank=True, default="", max_length=255, verbose_name="String Value")),
                ("notes", models.TextField(blank=True, default="", verbose_name="Notes")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("report", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="stats", to="reports.report", verbose_name="Report")),
                ("stat_category_item", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="report_stats", to="reports.statcategoryitem", verbose_name="Stat Category Item")),
            ],
            options={
                "verbose_name": "Report Stat",
                "verbose_name_plural": "Report Stats",
                "default_permissions": (),
                "permissions": [
                    ("report_stat.view_any", "Can view any report stat"),
                    ("report_stat.view", "Can view report stat"),
                    ("report_stat.create", "Can create report stat"),
                    ("report_stat.update", "Can update report stat"),
                    ("report_stat.delete", "Can delete report stat"),
                    ("report_stat.restore", "Can restore report stat"),
                    ("report_stat.force_delete", "Can force delete report stat"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("report", "stat_category_item"), name="unique_stat_per_report"),
                ],
            },
        ),
    ]
