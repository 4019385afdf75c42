"""
URL configuration for portfolio_backend project.

Public content lives under ``api/``; the content-management surface under
``api/admin/`` sits behind the Auth Gate. ``admin/`` is Django's own admin.
"""

import os

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.http import JsonResponse
from django.urls import path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from portfolio import views as portfolio_views

admin_api = [
    path("api/admin/about", portfolio_views.AdminAboutView.as_view(), name="admin-about"),
    path("api/admin/journey", portfolio_views.AdminJourneyView.as_view(), name="admin-journey"),
    path("api/admin/profile", portfolio_views.AdminProfileView.as_view(), name="admin-profile"),
    path("api/admin/projects", portfolio_views.AdminProjectsView.as_view(), name="admin-projects"),
    path(
        "api/admin/project-filters",
        portfolio_views.AdminProjectFiltersView.as_view(),
        name="admin-project-filters",
    ),
    path(
        "api/admin/project-filters/swap",
        portfolio_views.AdminProjectFilterSwapView.as_view(),
        name="admin-project-filters-swap",
    ),
    path("api/admin/skills", portfolio_views.AdminSkillsView.as_view(), name="admin-skills"),
    path("api/admin/contacts", portfolio_views.AdminContactsView.as_view(), name="admin-contacts"),
    path("api/admin/uploads", portfolio_views.AdminUploadView.as_view(), name="admin-uploads"),
    path("api/admin/session", portfolio_views.AdminSessionView.as_view(), name="admin-session"),
    path("api/admin/login", portfolio_views.AdminLoginView.as_view(), name="admin-login"),
    path("api/admin/logout", portfolio_views.AdminLogoutView.as_view(), name="admin-logout"),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health", lambda request: JsonResponse({"status": "ok"}), name="health"),
    path(
        "api/info",
        lambda request: JsonResponse(
            {
                "app": "portfolio-cms",
                "env": os.environ.get("DJANGO_ENV", "dev"),
                "debug": settings.DEBUG,
                "version": "1.0.0",
            }
        ),
        name="info",
    ),
    path("api/about", portfolio_views.AboutView.as_view(), name="about"),
    path("api/journey", portfolio_views.JourneyView.as_view(), name="journey"),
    path("api/profile", portfolio_views.ProfileView.as_view(), name="profile"),
    path("api/projects", portfolio_views.ProjectListView.as_view(), name="projects"),
    path("api/project-filters", portfolio_views.ProjectFilterListView.as_view(), name="project-filters"),
    path("api/skills", portfolio_views.SkillListView.as_view(), name="skills"),
    path("api/skills/grouped", portfolio_views.SkillGroupsView.as_view(), name="skills-grouped"),
    path("api/contact", portfolio_views.ContactView.as_view(), name="contact"),
    *admin_api,
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="docs"),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
