"""
Auth Gate for the admin API.

The gate walks an ordered list of credential resolvers (configured through
``PORTFOLIO_AUTH_RESOLVERS``) and takes the first identity one of them
resolves. A resolver that has nothing to go on, or whose credential the
identity provider refuses, steps aside with a diagnostic note so the next
one can try; only a malformed credential stops the walk.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from django.conf import settings
from django.utils.module_loading import import_string
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, CSRFCheck

from .exceptions import CollaboratorError
from .identity import Identity, IdentityProviderError, get_identity_provider
from .store import ContentStore

logger = logging.getLogger(__name__)

# Keys the login view writes into the Django session
SESSION_ACCESS_TOKEN = "portfolio_access_token"
SESSION_REFRESH_TOKEN = "portfolio_refresh_token"
SESSION_EXPIRES_AT = "portfolio_expires_at"

NO_SESSION = "No session found"
SESSION_EXPIRED = "Session expired"


@dataclass
class Credentials:
    """Everything a request offers to authenticate with.

    ``session`` is the ambient cookie session, passed in explicitly so the
    resolvers can be exercised with a plain dict.
    """

    authorization: Optional[str] = None
    session: Mapping = field(default_factory=dict)

    @classmethod
    def from_request(cls, request) -> "Credentials":
        return cls(
            authorization=request.META.get("HTTP_AUTHORIZATION"),
            session=getattr(request, "session", None) or {},
        )


@dataclass(frozen=True)
class Resolution:
    identity: Optional[Identity] = None
    token: Optional[str] = None
    note: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.identity is not None


class MalformedCredential(Exception):
    pass


@dataclass(frozen=True)
class AdminGrant:
    """What ``request.auth`` holds once the gate lets a request through."""

    identity: Identity
    token: str
    resolver: str
    store: ContentStore


class BearerTokenResolver:
    """``Authorization: Bearer <token>``, checked against the provider only."""

    name = "bearer"

    def resolve(self, credentials: Credentials, provider) -> Resolution:
        header = credentials.authorization
        if not header:
            return Resolution(note=NO_SESSION)
        scheme, _, token = header.strip().partition(" ")
        if scheme.lower() != "bearer":
            return Resolution(note=f"Unsupported authorization scheme: {scheme}")
        token = token.strip()
        if not token or " " in token:
            raise MalformedCredential("Malformed bearer token")
        try:
            identity = provider.get_user(token)
        except IdentityProviderError as exc:
            return Resolution(note=exc.reason)
        return Resolution(identity=identity, token=token)


class SessionCookieResolver:
    """The access token stored in the Django session by the login view."""

    name = "session"

    def resolve(self, credentials: Credentials, provider) -> Resolution:
        token = credentials.session.get(SESSION_ACCESS_TOKEN)
        if not token:
            return Resolution(note=NO_SESSION)
        expires_at = credentials.session.get(SESSION_EXPIRES_AT)
        if expires_at and expires_at <= time.time():
            return Resolution(note=SESSION_EXPIRED)
        try:
            identity = provider.get_user(token)
        except IdentityProviderError as exc:
            return Resolution(note=exc.reason)
        return Resolution(identity=identity, token=token)


DEFAULT_RESOLVERS = (
    "portfolio.authentication.BearerTokenResolver",
    "portfolio.authentication.SessionCookieResolver",
)


class AuthGate:
    def __init__(self, resolvers: Sequence, provider=None) -> None:
        self.resolvers = list(resolvers)
        self.provider = provider

    @classmethod
    def from_settings(cls) -> "AuthGate":
        paths = getattr(settings, "PORTFOLIO_AUTH_RESOLVERS", DEFAULT_RESOLVERS)
        return cls([import_string(path)() for path in paths])

    def authenticate(self, credentials: Credentials):
        """Return ``(resolver_name, resolution)`` for the first identity found.

        Raises ``exceptions.AuthenticationFailed`` carrying a readable reason
        when no resolver produces one.
        """
        provider = self.provider or get_identity_provider()
        notes: List[str] = []
        for resolver in self.resolvers:
            try:
                resolution = resolver.resolve(credentials, provider)
            except MalformedCredential as exc:
                raise exceptions.AuthenticationFailed(str(exc)) from exc
            if resolution.resolved:
                return resolver.name, resolution
            if resolution.note:
                notes.append(resolution.note)
        raise exceptions.AuthenticationFailed(self._reason(notes))

    @staticmethod
    def _reason(notes: List[str]) -> str:
        # A refused credential says more than "nothing was sent"
        for note in notes:
            if note != NO_SESSION:
                return note
        return NO_SESSION


class AdminAuthentication(BaseAuthentication):
    """DRF authentication class running the gate on every admin request."""

    www_authenticate_realm = "admin"

    def authenticate(self, request):
        gate = AuthGate.from_settings()
        try:
            resolver, resolution = gate.authenticate(Credentials.from_request(request))
        except exceptions.APIException:
            raise
        except Exception as exc:
            raise CollaboratorError(f"Identity provider unavailable: {exc}") from exc
        if resolver == SessionCookieResolver.name:
            self.enforce_csrf(request)
        identity = resolution.identity
        logger.debug("admin request %s authenticated via %s as %s", request.path, resolver, identity.email)
        grant = AdminGrant(
            identity=identity,
            token=resolution.token,
            resolver=resolver,
            store=ContentStore(actor=identity),
        )
        return identity, grant

    def enforce_csrf(self, request):
        """Unsafe methods on a cookie session must carry the CSRF token."""
        check = CSRFCheck(lambda req: None)
        check.process_request(request)
        reason = check.process_view(request, None, (), {})
        if reason:
            raise exceptions.PermissionDenied(f"CSRF Failed: {reason}")

    def authenticate_header(self, request):
        return f'Bearer realm="{self.www_authenticate_realm}"'
