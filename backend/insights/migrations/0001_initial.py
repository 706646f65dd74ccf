from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("infos", "0001_initial"),
        ("locations", "0001_initial"),
        ("reports", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="NationalInsightCenterInfo",
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
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "National Insight Center Info",
                "verbose_name_plural": "National Insight Center Infos",
                "ordering": ["-created_at", "-id"],
                "default_permissions": (),
                "permissions": [
                    ("national_insight_center_info.view_any", "Can view any national insight center info"),
                    ("national_insight_center_info.view", "Can view national insight center info"),
                    ("national_insight_center_info.create", "Can create national insight center info"),
                    ("national_insight_center_info.update", "Can update national insight center info"),
                    ("national_insight_center_info.delete", "Can delete national insight center info"),
                    ("national_insight_center_info.restore", "Can restore national insight center info"),
                    ("national_insight_center_info.force_delete", "Can force delete national insight center info"),
                    ("national_insight_center_info.confirm", "Can confirm national insight center info"),
                    ("national_insight_center_info.print", "Can print national insight center info"),
                    ("national_insight_center_info.print_dates", "Can print dates national insight center info"),
                ],
            },
        ),
        migrations.CreateModel(
            name="NationalInsightCenterInfoItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("confirmed", models.BooleanField(db_index=True, default=False, verbose_name="Confirmed")),
                ("confirmed_at", models.DateTimeField(blank=True, null=True, verbose_name="Confirmed At")),
                ("confirmed_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Confirmed By")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("registration_number", models.CharField(blank=True, default="", max_length=100, verbose_name="Registration Number")),
                ("item_date", models.DateField(blank=True, null=True, verbose_name="Date")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("district", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="insight_items", to="locations.district", verbose_name="District")),
                ("info", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="insights.nationalinsightcenterinfo", verbose_name="Insight Record")),
                ("info_category", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="insight_items", to="infos.infocategory", verbose_name="Info Category")),
                ("province", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="insight_items", to="locations.province", verbose_name="Province")),
            ],
            options={
                "verbose_name": "National Insight Center Info Item",
                "verbose_name_plural": "National Insight Center Info Items",
                "ordering": ["-item_date", "-id"],
                "default_permissions": (),
                "permissions": [
                    ("national_insight_center_info_item.view_any", "Can view any national insight center info item"),
                    ("national_insight_center_info_item.view", "Can view national insight center info item"),
                    ("national_insight_center_info_item.create", "Can create national insight center info item"),
                    ("national_insight_center_info_item.update", "Can update national insight center info item"),
                    ("national_insight_center_info_item.delete", "Can delete national insight center info item"),
                    ("national_insight_center_info_item.restore", "Can restore national insight center info item"),
                    ("national_insight_center_info_item.force_delete", "Can force delete national insight center info item"),
                    ("national_insight_center_info_item.confirm", "Can confirm national insight center info item"),
                ],
            },
        ),
        migrations.CreateModel(
            name="NationalInsightCenterInfoItemStat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("integer_value", models.IntegerField(blank=True, null=True, verbose_name="Integer Value")),
                ("string_value", models.CharField(blank=True, default="", max_length=255, verbose_name="String Value")),
                ("notes", models.TextField(blank=True, default="", verbose_name="Notes")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
                ("item", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="stats", to="insights.nationalinsightcenterinfoitem", verbose_name="Item")),
                ("stat_category_item", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="insight_item_stats", to="reports.statcategoryitem", verbose_name="Stat Category Item")),
            ],
            options={
                "verbose_name": "Insight Item Statistic",
                "verbose_name_plural": "Insight Item Statistics",
                "default_permissions": (),
                "constraints": [
                    models.UniqueConstraint(fields=("item", "stat_category_item"), name="unique_stat_per_insight_item"),
                ],
            },
        ),
    ]
