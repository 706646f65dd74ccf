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
            name="Translation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("language", models.CharField(db_index=True, max_length=10, verbose_name="Language Code")),
                ("key", models.CharField(max_length=255, verbose_name="Key")),
                ("value", models.TextField(verbose_name="Value")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Translation",
                "verbose_name_plural": "Translations",
                "ordering": ["language", "key"],
                "default_permissions": (),
                "permissions": [
                    ("translation.view_any", "Can view any translation"),
                    ("translation.view", "Can view translation"),
                    ("translation.create", "Can create translation"),
                    ("translation.update", "Can update translation"),
                    ("translation.delete", "Can delete translation"),
                    ("translation.restore", "Can restore translation"),
                    ("translation.force_delete", "Can force delete translation"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("language", "key"), name="unique_translation_language_key"),
                ],
            },
        ),
    ]
