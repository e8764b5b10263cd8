"""API error taxonomy and the handler that enforces the error envelope."""

import logging
from typing import Any

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from authentication.services import BlocklistUnavailable

logger = logging.getLogger(__name__)


class DuplicateSlug(APIException):
    """Another blog already owns the slug derived from the submitted title."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "A blog with similar title already exists."
    default_code = "duplicate_slug"


class InvalidAction(APIException):
    """Unrecognized bulk action tag."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid bulk action."
    default_code = "invalid_action"


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        # Common DRF pattern: {"detail": "..."}
        return [payload["detail"]]
    return [payload]


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap errors in `{ "data": null, "errors": [...] }` shape.

    - Uses DRF's default handler to produce the base response.
    - Field-level validation errors are kept as a single ``{field: [...]}`` entry.
    - Store failures surface as a generic 503 and are logged with traceback.
    """

    # The blocklist is security-critical: fail closed.
    if isinstance(exc, BlocklistUnavailable):
        logger.error("Token blocklist unavailable: %s", exc)
        return Response(
            {"data": None, "errors": ["Authentication service unavailable (blocklist)."]},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception("Store failure in %s", type(view).__name__ if view else "unknown view")
        return Response(
            {"data": None, "errors": ["Service temporarily unavailable."]},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        return response

    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code >= 400:
        base_errors = response.data

        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            if getattr(settings, "DEBUG_AUTH_ERRORS", False):
                errors = _normalize_errors(base_errors)
            else:
                errors = [
                    "Authentication credentials were not provided or are invalid, "
                    "token revoked, or user is inactive."
                ]
        else:
            errors = _normalize_errors(base_errors)

        response.data = {"data": None, "errors": errors}

    return response


__all__ = ["DuplicateSlug", "InvalidAction", "custom_exception_handler"]
