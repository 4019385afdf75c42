import logging

from django.db import DatabaseError
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class MalformedContent(exceptions.APIException):
    """Stored content that cannot be decoded into its wire shape."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Stored content is malformed."
    default_code = "malformed_content"


class CollaboratorError(exceptions.APIException):
    """A remote service (store, object storage, identity provider) failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Upstream service failed."
    default_code = "collaborator_error"


_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_429_TOO_MANY_REQUESTS: "throttled",
}


def api_exception_handler(exc, context):
    """Render every failure as ``{"error": <code>, "details": <message>}``."""
    original = exc
    if isinstance(exc, DatabaseError):
        exc = CollaboratorError(detail=str(exc))

    response = exception_handler(exc, context)
    if response is None:
        return None

    view = context.get("view")
    if response.status_code >= 500:
        logger.error(
            "%s failed: %s",
            type(view).__name__ if view else "request",
            original,
            exc_info=(type(original), original, original.__traceback__),
        )

    detail = response.data
    if isinstance(detail, dict) and set(detail) == {"detail"}:
        detail = detail["detail"]
    code = _ERROR_CODES.get(response.status_code)
    if code is None:
        code = getattr(exc, "default_code", None) or "server_error"

    response.data = {"error": code, "details": detail}
    return response
