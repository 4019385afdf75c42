import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

# Fixed identifier every singleton row (profile, about, journey) is upserted against
SINGLETON_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")


class SingletonModel(models.Model):
    """Base for record kinds with exactly one logical row."""

    id = models.UUIDField(primary_key=True, default=SINGLETON_ID, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        # Always the same row: concurrent writers overwrite each other
        self.pk = SINGLETON_ID
        super().save(*args, **kwargs)


class Profile(SingletonModel):
    name = models.CharField(max_length=200, null=True, blank=True)
    title = models.CharField(max_length=200, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    image_url = models.CharField(max_length=500, null=True, blank=True)
    # Contact details shown in the footer/contact section
    email = models.CharField(max_length=254, null=True, blank=True)
    phone = models.CharField(max_length=60, null=True, blank=True)
    location = models.CharField(max_length=200, null=True, blank=True)
    linkedin_url = models.CharField(max_length=500, null=True, blank=True)
    github_url = models.CharField(max_length=500, null=True, blank=True)
    twitter_url = models.CharField(max_length=500, null=True, blank=True)
    website_url = models.CharField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name or "Profile"


class About(SingletonModel):
    title = models.CharField(max_length=200, null=True, blank=True)
    content = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name_plural = "about"

    def __str__(self):
        return self.title or "About"


class Journey(SingletonModel):
    """Long-form "my journey" page.

    The narrative fields hold newline-delimited text; lists are derived at
    render time and never stored. ``content`` is the legacy single blob, shown
    only while every narrative field is empty.
    """

    title = models.CharField(max_length=200, null=True, blank=True)
    headline = models.TextField(null=True, blank=True)
    who_i_am = models.TextField(null=True, blank=True)
    what_i_do = models.TextField(null=True, blank=True)
    short_term_goals = models.TextField(null=True, blank=True)
    long_term_goals = models.TextField(null=True, blank=True)
    experience = models.TextField(null=True, blank=True)
    how_i_work = models.TextField(null=True, blank=True)
    content = models.TextField(null=True, blank=True)
    image_url = models.CharField(max_length=500, null=True, blank=True)

    def __str__(self):
        return self.title or "Journey"


class Project(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField()
    # Native JSON array; rows written by older clients may hold a JSON-encoded string
    technologies = models.JSONField(default=list, blank=True)
    github_url = models.CharField(max_length=500, null=True, blank=True)
    live_url = models.CharField(max_length=500, null=True, blank=True)
    image_url = models.CharField(max_length=500, null=True, blank=True)
    demo_video_url = models.CharField(max_length=500, null=True, blank=True)
    map_url = models.CharField(max_length=1000, null=True, blank=True)
    role = models.CharField(max_length=200, null=True, blank=True)
    published_date = models.DateField(null=True, blank=True)
    featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.title

    class Meta:
        ordering = ["-created_at", "title"]


class Skill(models.Model):
    """A skill shown on the skills board.

    ``category_order`` positions the whole category (every skill in a category
    carries the same value); ``skill_order`` positions the skill inside it.
    Neither is unique, ties fall back to ``name``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=80)
    category = models.CharField(max_length=80)
    proficiency = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    image_url = models.CharField(max_length=500, null=True, blank=True)
    category_order = models.IntegerField(default=0)
    skill_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.name}"

    class Meta:
        ordering = ["category_order", "skill_order", "name"]


class ProjectFilter(models.Model):
    # name is matched against project technologies by the projects page
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=80)
    display_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name

    class Meta:
        ordering = ["display_order", "name"]


class ContactSubmission(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    email = models.EmailField()
    subject = models.CharField(max_length=300)
    message = models.TextField()
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Message from {self.name}: {self.subject}"
