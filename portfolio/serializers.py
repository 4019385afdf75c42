from collections.abc import Mapping

from rest_framework import serializers

from .exceptions import MalformedContent
from .models import About, ContactSubmission, Journey, Profile, Project, ProjectFilter, Skill
from .normalizers import (
    ABOUT_ALIASES,
    ABOUT_DEFAULTS,
    CONTACT_ALIASES,
    JOURNEY_ALIASES,
    JOURNEY_DEFAULTS,
    PROFILE_ALIASES,
    PROFILE_DEFAULTS,
    PROJECT_ALIASES,
    PROJECT_DEFAULTS,
    PROJECT_FILTER_ALIASES,
    SKILL_ALIASES,
    SKILL_DEFAULTS,
    FieldAliases,
    apply_defaults,
    decode_technologies,
    render_journey,
)


class AliasedSerializerMixin:
    """Speak camelCase on the wire while the model keeps snake_case columns.

    ``aliases`` is the record kind's alias table. ``public_defaults`` are
    substituted for null values when the serializer context has
    ``public=True``; the admin surface gets raw values so it can tell "never
    set" from "empty".
    """

    aliases = FieldAliases()
    public_defaults = {}
    # Wire sends "" for "no value" on these; the column stores NULL
    blank_as_null = ()

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            data = self.aliases.to_storage(data)
            for name in self.blank_as_null:
                if data.get(name) == "":
                    data[name] = None
        try:
            return super().to_internal_value(data)
        except serializers.ValidationError as exc:
            if isinstance(exc.detail, dict):
                raise serializers.ValidationError(self.aliases.to_wire(exc.detail)) from exc
            raise

    def to_representation(self, instance):
        payload = self.aliases.to_wire(super().to_representation(instance))
        if self.context.get("public"):
            apply_defaults(payload, self.public_defaults)
        return payload


class TechnologiesField(serializers.Field):
    """Ordered list of technology names.

    Accepts a list or its JSON-encoded string on write and always stores a
    native list. Reads tolerate both encodings; malformed stored JSON raises.
    """

    default_error_messages = {
        "invalid": "Expected a list of strings or a JSON-encoded list of strings.",
    }

    def to_representation(self, value):
        return decode_technologies(value)

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = decode_technologies(data)
            except MalformedContent:
                self.fail("invalid")
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            self.fail("invalid")
        return [item.strip() for item in data if item.strip()]


class ProfileSerializer(AliasedSerializerMixin, serializers.ModelSerializer):
    aliases = PROFILE_ALIASES
    public_defaults = PROFILE_DEFAULTS

    class Meta:
        model = Profile
        fields = [
            "id",
            "name",
            "title",
            "description",
            "image_url",
            "email",
            "phone",
            "location",
            "linkedin_url",
            "github_url",
            "twitter_url",
            "website_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class AboutSerializer(AliasedSerializerMixin, serializers.ModelSerializer):
    aliases = ABOUT_ALIASES
    public_defaults = ABOUT_DEFAULTS

    class Meta:
        model = About
        fields = ["id", "title", "content", "updated_at"]
        read_only_fields = ["id", "updated_at"]


class JourneySerializer(AliasedSerializerMixin, serializers.ModelSerializer):
    aliases = JOURNEY_ALIASES
    public_defaults = JOURNEY_DEFAULTS

    class Meta:
        model = Journey
        fields = [
            "id",
            "title",
            "headline",
            "who_i_am",
            "what_i_do",
            "short_term_goals",
            "long_term_goals",
            "experience",
            "how_i_work",
            "content",
            "image_url",
            "updated_at",
        ]
        read_only_fields = ["id", "updated_at"]

    def to_representation(self, instance):
        payload = super().to_representation(instance)
        if self.context.get("public"):
            payload["rendered"] = render_journey(payload)
        return payload


class ProjectSerializer(AliasedSerializerMixin, serializers.ModelSerializer):
    aliases = PROJECT_ALIASES
    public_defaults = PROJECT_DEFAULTS
    blank_as_null = ("published_date",)

    technologies = TechnologiesField(required=False)

    class Meta:
        model = Project
        fields = [
            "id",
            "title",
            "description",
            "technologies",
            "github_url",
            "live_url",
            "image_url",
            "demo_video_url",
            "map_url",
            "role",
            "published_date",
            "featured",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]


class SkillSerializer(AliasedSerializerMixin, serializers.ModelSerializer):
    aliases = SKILL_ALIASES
    public_defaults = SKILL_DEFAULTS

    class Meta:
        model = Skill
        fields = [
            "id",
            "name",
            "category",
            "proficiency",
            "image_url",
            "category_order",
            "skill_order",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]


class ProjectFilterSerializer(AliasedSerializerMixin, serializers.ModelSerializer):
    aliases = PROJECT_FILTER_ALIASES

    class Meta:
        model = ProjectFilter
        fields = ["id", "name", "display_order", "is_active", "created_at"]
        read_only_fields = ["id", "created_at"]


class ContactSerializer(AliasedSerializerMixin, serializers.ModelSerializer):
    """Public contact form: every field is required."""

    aliases = CONTACT_ALIASES

    class Meta:
        model = ContactSubmission
        fields = ["id", "name", "email", "subject", "message", "read", "created_at"]
        read_only_fields = ["id", "read", "created_at"]


class ContactAdminSerializer(ContactSerializer):
    # The operator only flips the read flag; the message itself is immutable
    class Meta(ContactSerializer.Meta):
        read_only_fields = ["id", "name", "email", "subject", "message", "created_at"]


class SkillOrderUpdateSerializer(AliasedSerializerMixin, serializers.Serializer):
    aliases = SKILL_ALIASES

    id = serializers.UUIDField()
    category_order = serializers.IntegerField(required=False)
    skill_order = serializers.IntegerField(required=False)


class SkillReorderSerializer(serializers.Serializer):
    updates = SkillOrderUpdateSerializer(many=True)


class SwapOrderSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), min_length=2, max_length=2)

    def validate_ids(self, value):
        if value[0] == value[1]:
            raise serializers.ValidationError("Two different ids are required.")
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class ImageUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    folder = serializers.RegexField(r"^[A-Za-z0-9_-]+(/[A-Za-z0-9_-]+)*$", required=False, default="images")
