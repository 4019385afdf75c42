from django.conf import settings
from supabase import create_client
from supabase.client import ClientOptions

_service_client = None


def project_url() -> str:
    url = getattr(settings, "SUPABASE_PROJECT_URL", "") or getattr(settings, "SUPABASE_URL", "")
    if not url:
        raise RuntimeError("SUPABASE_PROJECT_URL (or SUPABASE_URL) must be set to project API URL")
    return url


def get_service_client():
    """Shared client for storage calls, authenticated with the service key."""
    global _service_client  # noqa: PLW0603
    if _service_client is None:
        key = (
            getattr(settings, "SUPABASE_SERVICE_ROLE_KEY", None)
            or getattr(settings, "SUPABASE_SERVICE_KEY", None)
            or getattr(settings, "SUPABASE_ANON_KEY", "")
        )
        if not key:
            raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY or SUPABASE_ANON_KEY must be set")
        _service_client = create_client(project_url(), key)
    return _service_client


def create_auth_client():
    """Fresh client for one auth exchange.

    Sign-in stores the session on the client it was made with, so auth calls
    never share the storage client and never persist or refresh sessions.
    """
    key = getattr(settings, "SUPABASE_ANON_KEY", "")
    if not key:
        raise RuntimeError("SUPABASE_ANON_KEY must be set")
    options = ClientOptions(persist_session=False, auto_refresh_token=False)
    return create_client(project_url(), key, options=options)
