"""Access-control gate: resolve the bearer JWT to an identity."""

import logging
from typing import Optional

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from authentication.models import User
from authentication.services import ACCESS, BlocklistUnavailable, TokenService

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(MiddlewareMixin):
    """Decode the access JWT, check the blocklist, and attach request.user.

    Requests without a bearer header pass through anonymously; the view's
    role permission decides whether that is acceptable.
    """

    def process_request(self, request):  # type: ignore[override]
        token = get_bearer_token(request)
        if token is None:
            request.user = AnonymousUser()
            return None

        try:
            claims = TokenService.decode(token, ACCESS)
            if TokenService.is_revoked(claims["jti"]):
                return _unauthorized()

            user = self._get_user(claims["sub"])
            if not user or not user.is_active:
                return _unauthorized()

            request.user = user
            return None

        except AuthenticationFailed as exc:
            logger.debug("Rejected bearer token: %s", exc)
            return _unauthorized()
        except BlocklistUnavailable:
            logger.error("Token blocklist unavailable while authenticating request")
            return _service_unavailable()

    @staticmethod
    def _get_user(user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        try:
            return User.objects.get(id=user_id)
        except (User.DoesNotExist, DjangoValidationError):
            return None


def get_bearer_token(request) -> str | None:
    """Extract the Bearer token from the Authorization header if present."""
    auth_header = request.META.get("HTTP_AUTHORIZATION", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


def _unauthorized() -> JsonResponse:
    return JsonResponse(
        {
            "data": None,
            "errors": [
                "Authentication credentials were not provided or are invalid, token revoked, or user is inactive."
            ],
        },
        status=status.HTTP_401_UNAUTHORIZED,
    )


def _service_unavailable() -> JsonResponse:
    return JsonResponse(
        {"data": None, "errors": ["Authentication service unavailable (blocklist)."]},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


__all__ = ["JWTAuthMiddleware", "get_bearer_token"]
