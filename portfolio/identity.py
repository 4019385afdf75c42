"""
Identity provider adapters.

The Auth Gate only ever asks a provider three things: who does this access
token belong to, exchange an email/password for a session, and sign a token
out. ``SupabaseIdentityProvider`` talks to Supabase Auth; the in-memory
provider backs local development and the test suite.
"""

from __future__ import annotations

import logging
import secrets
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Tuple

from django.conf import settings
from django.utils.module_loading import import_string
from supabase import AuthError

from .supabase_client import create_auth_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str = ""

    # DRF permission classes read these off request.user
    is_authenticated = True
    is_anonymous = False


@dataclass(frozen=True)
class ProviderSession:
    access_token: str
    refresh_token: str
    expires_at: Optional[int]
    identity: Identity


class IdentityProviderError(Exception):
    """The provider refused a credential; ``reason`` is safe to show the operator."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class IdentityProvider(Protocol):
    def get_user(self, access_token: str) -> Identity:
        ...

    def sign_in(self, email: str, password: str) -> ProviderSession:
        ...

    def sign_out(self, access_token: str) -> None:
        ...


def _error_message(exc: Exception, fallback: str) -> str:
    return getattr(exc, "message", None) or str(exc) or fallback


class SupabaseIdentityProvider:
    """Supabase Auth (GoTrue) as the identity provider."""

    def get_user(self, access_token: str) -> Identity:
        try:
            response = create_auth_client().auth.get_user(access_token)
        except AuthError as exc:
            raise IdentityProviderError(_error_message(exc, "Invalid token")) from exc
        user = getattr(response, "user", None)
        if user is None:
            raise IdentityProviderError("Invalid token")
        return Identity(id=str(user.id), email=user.email or "")

    def sign_in(self, email: str, password: str) -> ProviderSession:
        try:
            response = create_auth_client().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise IdentityProviderError(_error_message(exc, "Invalid login credentials")) from exc
        session, user = response.session, response.user
        if session is None or user is None:
            raise IdentityProviderError("Invalid login credentials")
        return ProviderSession(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            identity=Identity(id=str(user.id), email=user.email or ""),
        )

    def sign_out(self, access_token: str) -> None:
        try:
            create_auth_client().auth.admin.sign_out(access_token)
        except AuthError as exc:
            raise IdentityProviderError(_error_message(exc, "Sign out failed")) from exc


@dataclass
class InMemoryIdentityProvider:
    """Test double with the same contract as the Supabase provider."""

    token_ttl: int = 3600
    users: Dict[str, Tuple[str, Identity]] = field(default_factory=dict)
    tokens: Dict[str, Tuple[Identity, int]] = field(default_factory=dict)

    def reset(self) -> None:
        self.users.clear()
        self.tokens.clear()

    def register(self, email: str, password: str) -> Identity:
        identity = Identity(id=str(uuid.uuid4()), email=email)
        self.users[email.lower()] = (password, identity)
        return identity

    def issue_token(self, identity: Identity, ttl: Optional[int] = None) -> ProviderSession:
        token = secrets.token_urlsafe(24)
        expires_at = int(time.time()) + (self.token_ttl if ttl is None else ttl)
        self.tokens[token] = (identity, expires_at)
        return ProviderSession(
            access_token=token,
            refresh_token=secrets.token_urlsafe(24),
            expires_at=expires_at,
            identity=identity,
        )

    def get_user(self, access_token: str) -> Identity:
        entry = self.tokens.get(access_token)
        if entry is None:
            raise IdentityProviderError("Invalid token")
        identity, expires_at = entry
        if expires_at <= time.time():
            raise IdentityProviderError("Token has expired")
        return identity

    def sign_in(self, email: str, password: str) -> ProviderSession:
        entry = self.users.get(email.lower())
        if entry is None or entry[0] != password:
            raise IdentityProviderError("Invalid login credentials")
        return self.issue_token(entry[1])

    def sign_out(self, access_token: str) -> None:
        self.tokens.pop(access_token, None)


_provider: Optional[IdentityProvider] = None


def get_identity_provider() -> IdentityProvider:
    """Return the configured provider, built once per process."""
    global _provider
    if _provider is None:
        path = getattr(
            settings, "PORTFOLIO_IDENTITY_PROVIDER", "portfolio.identity.SupabaseIdentityProvider"
        )
        _provider = import_string(path)()
        logger.debug("identity provider: %s", path)
    return _provider
