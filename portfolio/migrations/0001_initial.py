import uuid

import django.core.validators
from django.db import migrations, models


SINGLETON_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="About",
            fields=[
                ("id", models.UUIDField(default=SINGLETON_ID, editable=False, primary_key=True, serialize=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(blank=True, max_length=200, null=True)),
                ("content", models.TextField(blank=True, null=True)),
            ],
            options={
                "verbose_name_plural": "about",
            },
        ),
        migrations.CreateModel(
            name="ContactSubmission",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(max_length=254)),
                ("subject", models.CharField(max_length=300)),
                ("message", models.TextField()),
                ("read", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Journey",
            fields=[
                ("id", models.UUIDField(default=SINGLETON_ID, editable=False, primary_key=True, serialize=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(blank=True, max_length=200, null=True)),
                ("headline", models.TextField(blank=True, null=True)),
                ("who_i_am", models.TextField(blank=True, null=True)),
                ("what_i_do", models.TextField(blank=True, null=True)),
                ("short_term_goals", models.TextField(blank=True, null=True)),
                ("long_term_goals", models.TextField(blank=True, null=True)),
                ("experience", models.TextField(blank=True, null=True)),
                ("how_i_work", models.TextField(blank=True, null=True)),
                ("content", models.TextField(blank=True, null=True)),
                ("image_url", models.CharField(blank=True, max_length=500, null=True)),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.UUIDField(default=SINGLETON_ID, editable=False, primary_key=True, serialize=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(blank=True, max_length=200, null=True)),
                ("title", models.CharField(blank=True, max_length=200, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("image_url", models.CharField(blank=True, max_length=500, null=True)),
                ("email", models.CharField(blank=True, max_length=254, null=True)),
                ("phone", models.CharField(blank=True, max_length=60, null=True)),
                ("location", models.CharField(blank=True, max_length=200, null=True)),
                ("linkedin_url", models.CharField(blank=True, max_length=500, null=True)),
                ("github_url", models.CharField(blank=True, max_length=500, null=True)),
                ("twitter_url", models.CharField(blank=True, max_length=500, null=True)),
                ("website_url", models.CharField(blank=True, max_length=500, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField()),
                ("technologies", models.JSONField(blank=True, default=list)),
                ("github_url", models.CharField(blank=True, max_length=500, null=True)),
                ("live_url", models.CharField(blank=True, max_length=500, null=True)),
                ("image_url", models.CharField(blank=True, max_length=500, null=True)),
                ("demo_video_url", models.CharField(blank=True, max_length=500, null=True)),
                ("map_url", models.CharField(blank=True, max_length=1000, null=True)),
                ("role", models.CharField(blank=True, max_length=200, null=True)),
                ("published_date", models.DateField(blank=True, null=True)),
                ("featured", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at", "title"],
            },
        ),
        migrations.CreateModel(
            name="ProjectFilter",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=80)),
                ("display_order", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["display_order", "name"],
            },
        ),
        migrations.CreateModel(
            name="Skill",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=80)),
                ("category", models.CharField(max_length=80)),
                (
                    "proficiency",
                    models.PositiveSmallIntegerField(
                        default=0,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                    ),
                ),
                ("image_url", models.CharField(blank=True, max_length=500, null=True)),
                ("category_order", models.IntegerField(default=0)),
                ("skill_order", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["category_order", "skill_order", "name"],
            },
        ),
    ]
