import uuid

import django.core.validators
from django.db import migrations, models

import authentication.managers
import authentication.models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "username",
                    models.CharField(
                        max_length=30,
                        unique=True,
                        validators=[django.core.validators.MinLengthValidator(3)],
                    ),
                ),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("password_hash", models.CharField(max_length=128)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("subscriber", "Subscriber"),
                            ("author", "Author"),
                            ("editor", "Editor"),
                            ("admin", "Admin"),
                        ],
                        default="subscriber",
                        max_length=20,
                    ),
                ),
                ("first_name", models.CharField(blank=True, max_length=150)),
                ("last_name", models.CharField(blank=True, max_length=150)),
                ("bio", models.TextField(blank=True)),
                ("avatar", models.URLField(blank=True, max_length=500)),
                ("social_links", models.JSONField(blank=True, default=dict)),
                (
                    "preferences",
                    models.JSONField(blank=True, default=authentication.models.default_preferences),
                ),
                ("posts_count", models.IntegerField(default=0)),
                ("views_count", models.IntegerField(default=0)),
                ("likes_count", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
            managers=[
                ("objects", authentication.managers.UserManager()),
            ],
        ),
    ]
