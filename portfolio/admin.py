from django.contrib import admin
from .models import About, Journey, Profile
from .models import ContactSubmission, Project, ProjectFilter, Skill

@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "title", "email", "location", "updated_at")
    search_fields = ("name", "title", "email")

@admin.register(About)
class AboutAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "updated_at")

@admin.register(Journey)
class JourneyAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "headline", "updated_at")

@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("title", "role", "featured", "published_date", "created_at")
    list_filter = ("featured",)
    search_fields = ("title", "description")

@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "proficiency", "category_order", "skill_order")
    list_filter = ("category",)
    list_editable = ("category_order", "skill_order")
    search_fields = ("name", "category")

@admin.register(ProjectFilter)
class ProjectFilterAdmin(admin.ModelAdmin):
    list_display = ("name", "display_order", "is_active")
    list_filter = ("is_active",)
    list_editable = ("display_order", "is_active")

@admin.register(ContactSubmission)
class ContactSubmissionAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "subject", "read", "created_at")
    list_filter = ("read",)
    search_fields = ("name", "email", "subject", "message")
    readonly_fields = ("created_at",)
