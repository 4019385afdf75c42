from unittest import mock

from django.db import DatabaseError
from rest_framework.test import APITestCase

from portfolio.models import About, Journey, Profile, Project, ProjectFilter, Skill


class PublicSingletonTests(APITestCase):
    def test_never_saved_profile_reads_as_defaults(self):
        response = self.client.get("/api/profile")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["name"], "Full Stack Developer")
        self.assertEqual(payload["title"], "Building Digital Solutions")
        self.assertEqual(payload["linkedinUrl"], "")

    def test_stored_nulls_are_filled_and_values_kept(self):
        Profile.objects.create(name="Ada", image_url=None, github_url="https://github.com/ada")
        payload = self.client.get("/api/profile").json()
        self.assertEqual(payload["name"], "Ada")
        self.assertEqual(payload["githubUrl"], "https://github.com/ada")
        self.assertEqual(payload["imageUrl"], "")
        self.assertNotIn("github_url", payload)

    def test_about_defaults(self):
        payload = self.client.get("/api/about").json()
        self.assertEqual(payload["title"], "About Me")
        About.objects.create(title="Hello", content=None)
        payload = self.client.get("/api/about").json()
        self.assertEqual(payload["title"], "Hello")
        self.assertTrue(payload["content"].startswith("Experienced Full Stack Developer"))

    def test_journey_is_rendered(self):
        Journey.objects.create(title="Path", who_i_am="Builder\n\nMentor", content="Old blob")
        payload = self.client.get("/api/journey").json()
        self.assertEqual(payload["whoIAm"], "Builder\n\nMentor")
        self.assertEqual(payload["rendered"]["mode"], "structured")
        self.assertEqual(payload["rendered"]["sections"]["whoIAm"], ["Builder", "Mentor"])

    def test_journey_absent(self):
        payload = self.client.get("/api/journey").json()
        self.assertEqual(payload["title"], "My Journey")
        self.assertEqual(payload["rendered"]["mode"], "empty")

    def test_store_failure_is_a_collaborator_error(self):
        with mock.patch(
            "portfolio.views.ContentStore.get_singleton", side_effect=DatabaseError("connection refused")
        ):
            response = self.client.get("/api/about")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "collaborator_error", "details": "connection refused"})


class PublicProjectTests(APITestCase):
    def setUp(self):
        self.go = Project.objects.create(
            title="CLI", description="A tool", technologies=["Go", "Cobra"], featured=True
        )
        # Written by an older client: the array is a JSON-encoded string
        self.web = Project.objects.create(
            title="Site", description="A site", technologies='["React", "Next.js"]'
        )

    def test_both_encodings_read_as_lists(self):
        payload = self.client.get("/api/projects").json()
        by_title = {p["title"]: p for p in payload}
        self.assertEqual(by_title["CLI"]["technologies"], ["Go", "Cobra"])
        self.assertEqual(by_title["Site"]["technologies"], ["React", "Next.js"])
        self.assertEqual(by_title["Site"]["githubUrl"], "")

    def test_technology_filter_is_case_insensitive(self):
        payload = self.client.get("/api/projects", {"technology": "next"}).json()
        self.assertEqual([p["title"] for p in payload], ["Site"])
        payload = self.client.get("/api/projects", {"technology": "all"}).json()
        self.assertEqual(len(payload), 2)

    def test_featured_filter(self):
        payload = self.client.get("/api/projects", {"featured": "true"}).json()
        self.assertEqual([p["title"] for p in payload], ["CLI"])

    def test_malformed_technologies_fail_loudly(self):
        Project.objects.create(title="Broken", description="x", technologies="[React,")
        response = self.client.get("/api/projects")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "malformed_content")


class PublicSkillAndFilterTests(APITestCase):
    def setUp(self):
        Skill.objects.create(name="Git", category="Tools", category_order=2, skill_order=1)
        Skill.objects.create(name="React", category="Frontend", category_order=1, skill_order=2)
        Skill.objects.create(name="CSS", category="Frontend", category_order=1, skill_order=1)

    def test_skills_sorted_by_category_then_position(self):
        payload = self.client.get("/api/skills").json()
        self.assertEqual([s["name"] for s in payload], ["CSS", "React", "Git"])
        self.assertEqual(payload[0]["categoryOrder"], 1)
        self.assertEqual(payload[0]["imageUrl"], "")

    def test_grouped_skills(self):
        payload = self.client.get("/api/skills/grouped").json()
        self.assertEqual([g["category"] for g in payload], ["Frontend", "Tools"])
        self.assertEqual([s["name"] for s in payload[0]["skills"]], ["CSS", "React"])

    def test_only_active_filters_are_public(self):
        ProjectFilter.objects.create(name="React", display_order=1)
        ProjectFilter.objects.create(name="All", display_order=0)
        ProjectFilter.objects.create(name="Hidden", display_order=2, is_active=False)
        payload = self.client.get("/api/project-filters").json()
        self.assertEqual([f["name"] for f in payload], ["All", "React"])
        self.assertIn("displayOrder", payload[0])


class OperationalEndpointTests(APITestCase):
    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.json(), {"status": "ok"})

    def test_info(self):
        payload = self.client.get("/api/info").json()
        self.assertEqual(payload["app"], "portfolio-cms")
