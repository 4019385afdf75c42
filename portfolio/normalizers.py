"""Mapping between the wire shape (camelCase JSON) and the stored shape.

Each record kind declares one alias table: storage field name -> wire name.
Both the read and the write path consult the same table, so a field is only
ever renamed in one place.
"""
import json
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import MalformedContent


class FieldAliases:
    def __init__(self, **storage_to_wire: str) -> None:
        self.storage_to_wire: Dict[str, str] = dict(storage_to_wire)
        self.wire_to_storage: Dict[str, str] = {w: s for s, w in storage_to_wire.items()}

    def to_storage(self, data: Mapping) -> Dict[str, Any]:
        """Accept either spelling; the wire spelling wins when both are sent."""
        out: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in self.wire_to_storage:
                out[key] = value
        for key, value in data.items():
            storage_key = self.wire_to_storage.get(key)
            if storage_key is not None:
                out[storage_key] = value
        return out

    def to_wire(self, row: Mapping) -> Dict[str, Any]:
        return {self.storage_to_wire.get(key, key): value for key, value in row.items()}


PROFILE_ALIASES = FieldAliases(
    image_url="imageUrl",
    linkedin_url="linkedinUrl",
    github_url="githubUrl",
    twitter_url="twitterUrl",
    website_url="websiteUrl",
    created_at="createdAt",
    updated_at="updatedAt",
)

ABOUT_ALIASES = FieldAliases(updated_at="updatedAt")

JOURNEY_ALIASES = FieldAliases(
    who_i_am="whoIAm",
    what_i_do="whatIDo",
    short_term_goals="shortTermGoals",
    long_term_goals="longTermGoals",
    how_i_work="howIWork",
    image_url="imageUrl",
    updated_at="updatedAt",
)

PROJECT_ALIASES = FieldAliases(
    github_url="githubUrl",
    live_url="liveUrl",
    image_url="imageUrl",
    demo_video_url="demoVideoUrl",
    map_url="mapUrl",
    published_date="publishedDate",
    created_at="createdAt",
)

SKILL_ALIASES = FieldAliases(
    image_url="imageUrl",
    category_order="categoryOrder",
    skill_order="skillOrder",
    created_at="createdAt",
)

PROJECT_FILTER_ALIASES = FieldAliases(
    display_order="displayOrder",
    is_active="isActive",
    created_at="createdAt",
)

CONTACT_ALIASES = FieldAliases(created_at="createdAt")


# Public read defaults, keyed by wire name. The admin surface never sees these.
ABOUT_DEFAULTS = {
    "title": "About Me",
    "content": "Experienced Full Stack Developer with a passion for creating innovative digital solutions.",
}

PROFILE_DEFAULTS = {
    "name": "Full Stack Developer",
    "title": "Building Digital Solutions",
    "description": "Creating exceptional web experiences with modern technologies",
    "imageUrl": "",
    "email": "",
    "phone": "",
    "location": "",
    "linkedinUrl": "",
    "githubUrl": "",
    "twitterUrl": "",
    "websiteUrl": "",
}

JOURNEY_DEFAULTS = {
    "title": "My Journey",
    "headline": "",
    "whoIAm": "",
    "whatIDo": "",
    "shortTermGoals": "",
    "longTermGoals": "",
    "experience": "",
    "howIWork": "",
    "content": "",
    "imageUrl": "",
}

PROJECT_DEFAULTS = {
    "technologies": [],
    "githubUrl": "",
    "liveUrl": "",
    "imageUrl": "",
    "demoVideoUrl": "",
    "mapUrl": "",
    "role": "",
    "publishedDate": "",
}

SKILL_DEFAULTS = {"imageUrl": ""}


def apply_defaults(payload: Dict[str, Any], defaults: Mapping) -> Dict[str, Any]:
    for key, default in defaults.items():
        if payload.get(key) is None:
            payload[key] = list(default) if isinstance(default, list) else default
    return payload


def decode_technologies(value: Any) -> List[str]:
    """Read technologies from either a native list or its JSON-encoded string."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as exc:
            raise MalformedContent(f"technologies is not valid JSON: {exc}") from exc
    if not isinstance(value, list):
        raise MalformedContent("technologies must be a list of strings")
    return [str(item) for item in value]


def split_lines(text: Optional[str]) -> List[str]:
    """One element per non-empty line, trimmed, order preserved."""
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


JOURNEY_NARRATIVE_FIELDS = (
    "whoIAm",
    "whatIDo",
    "shortTermGoals",
    "longTermGoals",
    "experience",
    "howIWork",
)


def render_journey(journey: Mapping) -> Dict[str, Any]:
    """Build the page layout from a wire-shaped journey.

    The legacy ``content`` blob is used only when every narrative field is
    empty; otherwise it is ignored even when present.
    """
    sections = {name: split_lines(journey.get(name)) for name in JOURNEY_NARRATIVE_FIELDS}
    headline = split_lines(journey.get("headline"))
    if any(sections.values()):
        return {"mode": "structured", "headline": headline, "sections": sections}
    paragraphs = split_lines(journey.get("content"))
    if paragraphs:
        return {"mode": "legacy", "headline": headline, "paragraphs": paragraphs}
    return {"mode": "empty", "headline": headline}


def matches_technology(technologies: Iterable[str], needle: Optional[str]) -> bool:
    # "all" is the catch-all filter shown first on the projects page
    if not needle or needle.strip().lower() == "all":
        return True
    needle = needle.strip().lower()
    return any(needle in tech.lower() for tech in technologies)


def group_skills(skills: Iterable[Mapping]) -> List[Dict[str, Any]]:
    """Group an already sorted skill listing by category.

    A category takes the ``categoryOrder`` of the first skill seen for it.
    """
    groups: Dict[str, Dict[str, Any]] = {}
    for skill in skills:
        category = skill.get("category") or ""
        group = groups.get(category)
        if group is None:
            group = groups[category] = {
                "category": category,
                "categoryOrder": skill.get("categoryOrder") or 0,
                "skills": [],
            }
        group["skills"].append(skill)
    return sorted(groups.values(), key=lambda g: (g["categoryOrder"], g["category"]))
