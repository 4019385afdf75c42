import logging
import uuid

from django.conf import settings
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import exceptions, generics, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from .authentication import (
    SESSION_ACCESS_TOKEN,
    SESSION_EXPIRES_AT,
    SESSION_REFRESH_TOKEN,
    AdminAuthentication,
)
from .exceptions import CollaboratorError
from .identity import IdentityProviderError, get_identity_provider
from .models import About, ContactSubmission, Journey, Profile, Project, ProjectFilter, Skill
from .normalizers import group_skills, matches_technology, render_journey
from .serializers import (
    AboutSerializer,
    ContactAdminSerializer,
    ContactSerializer,
    ImageUploadSerializer,
    JourneySerializer,
    LoginSerializer,
    ProfileSerializer,
    ProjectFilterSerializer,
    ProjectSerializer,
    SkillReorderSerializer,
    SkillSerializer,
    SwapOrderSerializer,
)
from .store import ContentStore
from .tasks import send_contact_email
from .uploads import ImageRejected, delete_image, store_image

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public surface
# ---------------------------------------------------------------------------


class PublicSingletonView(generics.GenericAPIView):
    """Read-only singleton; a row that was never saved reads as its defaults."""

    permission_classes = [AllowAny]
    model = None

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["public"] = True
        return context

    def absent(self):
        return dict(self.serializer_class.public_defaults)

    def get(self, request):
        instance = ContentStore().get_singleton(self.model)
        if instance is None:
            return Response(self.absent())
        return Response(self.get_serializer(instance).data)


class AboutView(PublicSingletonView):
    model = About
    serializer_class = AboutSerializer


class ProfileView(PublicSingletonView):
    model = Profile
    serializer_class = ProfileSerializer


class JourneyView(PublicSingletonView):
    model = Journey
    serializer_class = JourneySerializer

    def absent(self):
        payload = super().absent()
        payload["rendered"] = render_journey(payload)
        return payload


class PublicListView(generics.ListAPIView):
    permission_classes = [AllowAny]
    pagination_class = None

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["public"] = True
        return context


class ProjectListView(PublicListView):
    queryset = Project.objects.all()
    serializer_class = ProjectSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["featured"]

    @extend_schema(
        parameters=[OpenApiParameter("technology", str, description="Case-insensitive technology match; 'all' disables")]
    )
    def get(self, request, *args, **kwargs):
        projects = self.get_serializer(self.filter_queryset(self.get_queryset()), many=True).data
        technology = request.query_params.get("technology")
        return Response([p for p in projects if matches_technology(p["technologies"], technology)])


class SkillListView(PublicListView):
    queryset = Skill.objects.all()
    serializer_class = SkillSerializer


class SkillGroupsView(SkillListView):
    def get(self, request, *args, **kwargs):
        skills = self.get_serializer(self.get_queryset(), many=True).data
        return Response(group_skills(skills))


class ProjectFilterListView(PublicListView):
    queryset = ProjectFilter.objects.filter(is_active=True).order_by("display_order", "name")
    serializer_class = ProjectFilterSerializer


class ContactView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "contact"
    permission_classes = [AllowAny]

    @extend_schema(request=ContactSerializer, responses={200: None})
    def post(self, request):
        serializer = ContactSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        submission = serializer.save()
        logger.info("contact submission %s from %s", submission.pk, submission.email)
        self.notify(submission)
        return Response({"success": True})

    def notify(self, submission):
        # The submission is already stored; a mail failure must not fail the request
        fallback = getattr(settings, "CONTACT_EMAIL", None)
        try:
            recipient = ContentStore().contact_recipient(fallback)
        except Exception:
            logger.exception("profile email lookup failed; using CONTACT_EMAIL for %s", submission.pk)
            recipient = fallback
        if not recipient:
            logger.warning("no contact recipient configured; email for %s not sent", submission.pk)
            return
        try:
            send_contact_email.delay(
                submission.name, submission.email, submission.subject, submission.message, recipient
            )
        except Exception:
            logger.exception("could not queue contact email for submission %s", submission.pk)


# ---------------------------------------------------------------------------
# Admin surface
# ---------------------------------------------------------------------------


class AdminAPIView(generics.GenericAPIView):
    """Base for every /admin route: the Auth Gate runs before any handler."""

    authentication_classes = [AdminAuthentication]
    permission_classes = [IsAuthenticated]
    pagination_class = None

    @property
    def store(self) -> ContentStore:
        return self.request.auth.store


class AdminSingletonView(AdminAPIView):
    model = None

    def get(self, request):
        instance = self.store.get_singleton(self.model)
        if instance is None:
            # Never saved: the editor starts from an empty form
            return JsonResponse(None, safe=False)
        return Response(self.get_serializer(instance).data)

    def put(self, request):
        instance = self.store.get_singleton(self.model)
        serializer = self.get_serializer(instance, data=request.data, partial=instance is not None)
        serializer.is_valid(raise_exception=True)
        instance = self.store.upsert_singleton(self.model, serializer.validated_data)
        return Response(self.get_serializer(instance).data)


class AdminAboutView(AdminSingletonView):
    model = About
    serializer_class = AboutSerializer


class AdminProfileView(AdminSingletonView):
    model = Profile
    serializer_class = ProfileSerializer


class AdminJourneyView(AdminSingletonView):
    model = Journey
    serializer_class = JourneySerializer


class AdminCollectionView(AdminAPIView):
    """List/create/update/delete with the id in the body (PUT) or query (DELETE)."""

    filter_backends = [DjangoFilterBackend]

    def get_object_by_id(self, pk):
        if not pk:
            raise exceptions.ValidationError({"id": ["ID is required"]})
        try:
            uuid.UUID(str(pk))
        except ValueError:
            raise exceptions.NotFound(f"No {self.queryset.model.__name__} with id {pk}") from None
        return get_object_or_404(self.get_queryset(), pk=pk)

    def get(self, request):
        rows = self.filter_queryset(self.get_queryset())
        return Response(self.get_serializer(rows, many=True).data)

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = serializer.save()
        logger.info("%s %s created by %s", type(instance).__name__, instance.pk, self.store.actor_label)
        return Response(self.get_serializer(instance).data, status=status.HTTP_201_CREATED)

    def put(self, request):
        instance = self.get_object_by_id(request.data.get("id"))
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        instance = serializer.save()
        logger.info("%s %s updated by %s", type(instance).__name__, instance.pk, self.store.actor_label)
        return Response(self.get_serializer(instance).data)

    @extend_schema(parameters=[OpenApiParameter("id", str, required=True)])
    def delete(self, request):
        instance = self.get_object_by_id(request.query_params.get("id"))
        pk = instance.pk
        instance.delete()
        logger.info("%s %s deleted by %s", self.queryset.model.__name__, pk, self.store.actor_label)
        return Response({"success": True})


class AdminProjectsView(AdminCollectionView):
    queryset = Project.objects.all()
    serializer_class = ProjectSerializer
    filterset_fields = ["featured"]


class AdminProjectFiltersView(AdminCollectionView):
    queryset = ProjectFilter.objects.all()
    serializer_class = ProjectFilterSerializer
    filterset_fields = ["is_active"]


class AdminProjectFilterSwapView(AdminAPIView):
    serializer_class = SwapOrderSerializer

    @extend_schema(request=SwapOrderSerializer, responses={200: ProjectFilterSerializer(many=True)})
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        first, second = serializer.validated_data["ids"]
        try:
            self.store.swap_order(ProjectFilter, first, second, field="display_order")
        except ProjectFilter.DoesNotExist as exc:
            raise exceptions.NotFound(str(exc))
        rows = ProjectFilter.objects.filter(pk__in=[first, second])
        return Response(ProjectFilterSerializer(rows, many=True).data)


class AdminSkillsView(AdminCollectionView):
    queryset = Skill.objects.all()
    serializer_class = SkillSerializer
    filterset_fields = ["category"]

    @extend_schema(request=SkillReorderSerializer, responses={200: None})
    def patch(self, request):
        serializer = SkillReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        written = self.store.reorder_skills(serializer.validated_data["updates"])
        return Response({"success": True, "updated": written})


class AdminContactsView(AdminCollectionView):
    # Submissions only arrive through the public contact form
    http_method_names = ["get", "put", "delete", "head", "options"]
    queryset = ContactSubmission.objects.all()
    serializer_class = ContactAdminSerializer
    filterset_fields = ["read"]


class AdminUploadView(AdminAPIView):
    parser_classes = [MultiPartParser, FormParser]
    serializer_class = ImageUploadSerializer

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data["file"]
        try:
            stored = store_image(upload, folder=serializer.validated_data["folder"])
        except ImageRejected:
            raise
        except Exception as exc:
            raise CollaboratorError(f"Image upload failed: {exc}") from exc
        return Response({"path": stored.path, "url": stored.url}, status=status.HTTP_201_CREATED)

    @extend_schema(parameters=[OpenApiParameter("path", str, required=True)])
    def delete(self, request):
        path = request.query_params.get("path")
        if not path:
            raise exceptions.ValidationError({"path": ["Path is required"]})
        try:
            delete_image(path)
        except Exception as exc:
            raise CollaboratorError(f"Image delete failed: {exc}") from exc
        return Response({"success": True})


class AdminSessionView(AdminAPIView):
    """Which identity the gate resolved, and through which resolver."""

    def get(self, request):
        grant = request.auth
        return Response(
            {
                "user": {"id": grant.identity.id, "email": grant.identity.email},
                "resolver": grant.resolver,
            }
        )


class AdminLoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=LoginSerializer, responses={200: None})
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            session = get_identity_provider().sign_in(
                serializer.validated_data["email"], serializer.validated_data["password"]
            )
        except IdentityProviderError as exc:
            logger.info("admin login refused for %s: %s", serializer.validated_data["email"], exc.reason)
            return Response(
                {"error": "unauthorized", "details": exc.reason}, status=status.HTTP_401_UNAUTHORIZED
            )
        except Exception as exc:
            raise CollaboratorError(f"Identity provider unavailable: {exc}") from exc

        request.session.cycle_key()
        request.session[SESSION_ACCESS_TOKEN] = session.access_token
        request.session[SESSION_REFRESH_TOKEN] = session.refresh_token
        request.session[SESSION_EXPIRES_AT] = session.expires_at
        logger.info("admin %s signed in", session.identity.email)
        return Response(
            {
                "success": True,
                "user": {"id": session.identity.id, "email": session.identity.email},
                "session": {"accessToken": session.access_token, "expiresAt": session.expires_at},
            }
        )


class AdminLogoutView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=None, responses={200: None})
    def post(self, request):
        tokens = {request.session.get(SESSION_ACCESS_TOKEN)}
        scheme, _, bearer = (request.META.get("HTTP_AUTHORIZATION") or "").partition(" ")
        if scheme.lower() == "bearer":
            tokens.add(bearer.strip())
        provider = get_identity_provider()
        for token in filter(None, tokens):
            try:
                provider.sign_out(token)
            except IdentityProviderError as exc:
                # Already invalid at the provider; the local session still goes
                logger.info("sign out ignored by provider: %s", exc.reason)
            except Exception as exc:
                raise CollaboratorError(f"Identity provider unavailable: {exc}") from exc
        request.session.flush()
        return Response({"success": True})
