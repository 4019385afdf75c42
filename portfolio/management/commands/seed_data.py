from django.core.management.base import BaseCommand
from django.db import transaction

from portfolio.models import About, Journey, Profile, ProjectFilter, Skill
from portfolio.normalizers import ABOUT_DEFAULTS, PROFILE_DEFAULTS
from portfolio.store import ContentStore


DEFAULT_SKILLS = [
    # (category, category_order, [(name, proficiency), ...])
    ("Frontend", 1, [("React", 90), ("Next.js", 85), ("TypeScript", 85), ("Tailwind CSS", 80)]),
    ("Backend", 2, [("Python", 90), ("Django", 90), ("Node.js", 80), ("PostgreSQL", 80)]),
    ("Tools", 3, [("Git", 90), ("Docker", 75), ("Supabase", 75)]),
]

DEFAULT_FILTERS = ["All", "React", "Next.js", "Django", "Python"]


class Command(BaseCommand):
    help = "Seed default portfolio content (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-skills", action="store_true", help="Leave the skills table untouched."
        )

    @transaction.atomic
    def handle(self, *args, **options):
        store = ContentStore()
        if store.get_singleton(Profile) is None:
            store.upsert_singleton(
                Profile,
                {
                    "name": "Your Name",
                    "title": PROFILE_DEFAULTS["title"],
                    "description": PROFILE_DEFAULTS["description"],
                    "email": "you@example.com",
                    "location": "Remote",
                },
            )
            self.stdout.write("profile created")
        if store.get_singleton(About) is None:
            store.upsert_singleton(
                About, {"title": ABOUT_DEFAULTS["title"], "content": ABOUT_DEFAULTS["content"]}
            )
            self.stdout.write("about created")
        if store.get_singleton(Journey) is None:
            store.upsert_singleton(
                Journey,
                {
                    "title": "My Journey",
                    "headline": "From curiosity to craft",
                    "who_i_am": "A developer who enjoys building things for the web.",
                },
            )
            self.stdout.write("journey created")

        created = 0
        if not options["skip_skills"]:
            for category, category_order, skills in DEFAULT_SKILLS:
                for skill_order, (name, proficiency) in enumerate(skills, start=1):
                    _, was_created = Skill.objects.get_or_create(
                        name=name,
                        category=category,
                        defaults={
                            "proficiency": proficiency,
                            "category_order": category_order,
                            "skill_order": skill_order,
                        },
                    )
                    created += was_created

        for display_order, name in enumerate(DEFAULT_FILTERS):
            _, was_created = ProjectFilter.objects.get_or_create(
                name=name, defaults={"display_order": display_order, "is_active": True}
            )
            created += was_created

        self.stdout.write(self.style.SUCCESS(f"Seed data created/updated ({created} new rows)."))
