import uuid

from rest_framework.test import APITestCase

from portfolio.models import SINGLETON_ID, ContactSubmission, Journey, Profile, Project, ProjectFilter, Skill

from .helpers import AdminAPITestCase


class AdminGateTests(APITestCase):
    def test_admin_routes_require_credentials(self):
        for path in ("/api/admin/about", "/api/admin/projects", "/api/admin/contacts", "/api/admin/session"):
            with self.subTest(path=path):
                response = self.client.get(path)
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json(), {"error": "unauthorized", "details": "No session found"})
                self.assertIn("Bearer", response["WWW-Authenticate"])

    def test_refused_request_never_reaches_the_store(self):
        response = self.client.post(
            "/api/admin/projects", {"title": "P", "description": "D"}, format="json"
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(Project.objects.count(), 0)

    def test_invalid_token_reason(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer nope")
        response = self.client.put("/api/admin/profile", {"name": "X"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["details"], "Invalid token")
        self.assertFalse(Profile.objects.exists())


class AdminSingletonTests(AdminAPITestCase):
    def test_never_saved_singleton_is_null(self):
        response = self.client.get("/api/admin/profile")
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json())

    def test_upsert_is_idempotent(self):
        body = {"name": "Ada", "imageUrl": "https://cdn/ada.png", "githubUrl": "https://github.com/ada"}
        first = self.client.put("/api/admin/profile", body, format="json")
        second = self.client.put("/api/admin/profile", body, format="json")
        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.json(), first.json() | {"updatedAt": second.json()["updatedAt"]})
        self.assertEqual(Profile.objects.count(), 1)
        self.assertEqual(Profile.objects.get().pk, SINGLETON_ID)
        self.assertEqual(second.json()["imageUrl"], "https://cdn/ada.png")

    def test_partial_update_keeps_other_fields(self):
        self.client.put("/api/admin/profile", {"name": "Ada", "location": "London"}, format="json")
        payload = self.client.put("/api/admin/profile", {"location": "Paris"}, format="json").json()
        self.assertEqual(payload["name"], "Ada")
        self.assertEqual(payload["location"], "Paris")

    def test_admin_sees_raw_nulls(self):
        self.client.put("/api/admin/about", {"title": "Hi"}, format="json")
        payload = self.client.get("/api/admin/about").json()
        self.assertEqual(payload["title"], "Hi")
        self.assertIsNone(payload["content"])

    def test_journey_round_trip(self):
        body = {"title": "Path", "whoIAm": "One\nTwo", "shortTermGoals": "Ship it"}
        payload = self.client.put("/api/admin/journey", body, format="json").json()
        self.assertEqual(payload["whoIAm"], "One\nTwo")
        self.assertNotIn("rendered", payload)
        self.assertEqual(Journey.objects.get().short_term_goals, "Ship it")
        public = self.client.get("/api/journey").json()
        self.assertEqual(public["rendered"]["sections"]["shortTermGoals"], ["Ship it"])


class AdminProjectTests(AdminAPITestCase):
    def test_create_read_update_delete(self):
        created = self.client.post(
            "/api/admin/projects",
            {"title": "CLI", "description": "Tool", "technologies": ["Go", "React"], "liveUrl": ""},
            format="json",
        )
        self.assertEqual(created.status_code, 201)
        project_id = created.json()["id"]
        self.assertEqual(created.json()["technologies"], ["Go", "React"])
        self.assertEqual(Project.objects.get(pk=project_id).technologies, ["Go", "React"])

        updated = self.client.put(
            "/api/admin/projects", {"id": project_id, "title": "CLI 2", "publishedDate": ""}, format="json"
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["title"], "CLI 2")
        self.assertIsNone(updated.json()["publishedDate"])

        deleted = self.client.delete(f"/api/admin/projects?id={project_id}")
        self.assertEqual(deleted.json(), {"success": True})
        self.assertFalse(Project.objects.exists())

    def test_encoded_technologies_are_stored_as_a_list(self):
        created = self.client.post(
            "/api/admin/projects",
            {"title": "Site", "description": "x", "technologies": '["Vue"]'},
            format="json",
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(Project.objects.get().technologies, ["Vue"])

    def test_technologies_read_back_in_order_on_both_surfaces(self):
        created = self.client.post(
            "/api/admin/projects",
            {"title": "Native", "description": "x", "technologies": ["Go", "React"]},
            format="json",
        )
        self.assertEqual(created.status_code, 201)
        # Row written by an older client: the array is a JSON-encoded string
        Project.objects.create(title="Legacy", description="x", technologies='["Go", "React"]')

        for path in ("/api/admin/projects", "/api/projects"):
            with self.subTest(path=path):
                by_title = {p["title"]: p for p in self.client.get(path).json()}
                self.assertEqual(by_title["Native"]["technologies"], ["Go", "React"])
                self.assertEqual(by_title["Legacy"]["technologies"], ["Go", "React"])

    def test_required_fields(self):
        response = self.client.post("/api/admin/projects", {"title": "No description"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "validation_error")
        self.assertIn("description", response.json()["details"])

    def test_missing_and_unknown_ids(self):
        response = self.client.put("/api/admin/projects", {"title": "x"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"], {"id": ["ID is required"]})

        response = self.client.delete("/api/admin/projects")
        self.assertEqual(response.status_code, 400)

        response = self.client.delete(f"/api/admin/projects?id={uuid.uuid4()}")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "not_found")

        response = self.client.put("/api/admin/projects", {"id": "not-a-uuid", "title": "x"}, format="json")
        self.assertEqual(response.status_code, 404)


class AdminProjectFilterTests(AdminAPITestCase):
    def setUp(self):
        super().setUp()
        self.all = ProjectFilter.objects.create(name="All", display_order=0)
        self.react = ProjectFilter.objects.create(name="React", display_order=1)

    def public_names(self):
        return [f["name"] for f in self.client.get("/api/project-filters").json()]

    def test_swap_with_two_updates(self):
        self.client.put("/api/admin/project-filters", {"id": str(self.all.pk), "displayOrder": 1}, format="json")
        self.client.put("/api/admin/project-filters", {"id": str(self.react.pk), "displayOrder": 0}, format="json")
        self.assertEqual(self.public_names(), ["React", "All"])

    def test_atomic_swap(self):
        response = self.client.post(
            "/api/admin/project-filters/swap", {"ids": [str(self.all.pk), str(self.react.pk)]}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.public_names(), ["React", "All"])
        self.all.refresh_from_db()
        self.assertEqual(self.all.display_order, 1)

    def test_swap_with_unknown_row_changes_nothing(self):
        response = self.client.post(
            "/api/admin/project-filters/swap", {"ids": [str(self.all.pk), str(uuid.uuid4())]}, format="json"
        )
        self.assertEqual(response.status_code, 404)
        self.all.refresh_from_db()
        self.assertEqual(self.all.display_order, 0)

    def test_swap_needs_two_distinct_ids(self):
        response = self.client.post(
            "/api/admin/project-filters/swap", {"ids": [str(self.all.pk), str(self.all.pk)]}, format="json"
        )
        self.assertEqual(response.status_code, 400)

    def test_admin_list_includes_inactive(self):
        self.client.put("/api/admin/project-filters", {"id": str(self.react.pk), "isActive": False}, format="json")
        names = [f["name"] for f in self.client.get("/api/admin/project-filters").json()]
        self.assertEqual(names, ["All", "React"])
        self.assertEqual(self.public_names(), ["All"])


class AdminSkillTests(AdminAPITestCase):
    def setUp(self):
        super().setUp()
        self.css = Skill.objects.create(name="CSS", category="Frontend", category_order=1, skill_order=1)
        self.git = Skill.objects.create(name="Git", category="Tools", category_order=2, skill_order=1)

    def test_batch_reorder(self):
        response = self.client.patch(
            "/api/admin/skills",
            {
                "updates": [
                    {"id": str(self.css.pk), "categoryOrder": 3},
                    {"id": str(self.git.pk), "categoryOrder": 1, "skillOrder": 4},
                ]
            },
            format="json",
        )
        self.assertEqual(response.json(), {"success": True, "updated": 2})
        names = [s["name"] for s in self.client.get("/api/skills").json()]
        self.assertEqual(names, ["Git", "CSS"])
        self.git.refresh_from_db()
        self.assertEqual(self.git.skill_order, 4)

    def test_batch_reorder_rejects_bad_entries_wholesale(self):
        response = self.client.patch(
            "/api/admin/skills",
            {"updates": [{"id": str(self.css.pk), "categoryOrder": 9}, {"categoryOrder": 1}]},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.css.refresh_from_db()
        self.assertEqual(self.css.category_order, 1)

    def test_create_with_out_of_range_proficiency(self):
        response = self.client.post(
            "/api/admin/skills", {"name": "Go", "category": "Backend", "proficiency": 120}, format="json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("proficiency", response.json()["details"])


class AdminContactTests(AdminAPITestCase):
    def setUp(self):
        super().setUp()
        self.message = ContactSubmission.objects.create(
            name="A", email="a@example.com", subject="Hi", message="Hello"
        )

    def test_toggle_read_and_filter(self):
        response = self.client.put(
            "/api/admin/contacts", {"id": str(self.message.pk), "read": True, "message": "edited"}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["read"])
        self.message.refresh_from_db()
        self.assertEqual(self.message.message, "Hello")

        unread = self.client.get("/api/admin/contacts", {"read": "false"}).json()
        self.assertEqual(unread, [])
        read = self.client.get("/api/admin/contacts", {"read": "true"}).json()
        self.assertEqual(len(read), 1)

    def test_contacts_cannot_be_created_by_admin(self):
        response = self.client.post("/api/admin/contacts", {"name": "x"}, format="json")
        self.assertEqual(response.status_code, 405)

    def test_delete(self):
        response = self.client.delete(f"/api/admin/contacts?id={self.message.pk}")
        self.assertEqual(response.json(), {"success": True})
        self.assertFalse(ContactSubmission.objects.exists())
