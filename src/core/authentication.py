"""Bridge between ``JWTAuthMiddleware`` and DRF authentication.

The bearer token is verified once, in middleware. DRF only needs to see the
identity that the middleware already attached to the Django request.
"""

from typing import Any, Optional, Tuple

from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Expose ``request._request.user`` (set by middleware) to DRF.

    No credential parsing happens here. Anonymous requests are left
    unauthenticated so that role-gated views answer 401 rather than 403.
    """

    www_authenticate_realm = "api"

    def authenticate(self, request) -> Optional[Tuple[Any, None]]:
        django_request = getattr(request, "_request", None)
        if django_request is None:
            return None

        user = getattr(django_request, "user", None)
        if user is None or isinstance(user, AnonymousUser):
            return None

        if not getattr(user, "is_authenticated", False):
            return None

        return user, None

    def authenticate_header(self, request) -> str:
        return f'Bearer realm="{self.www_authenticate_realm}"'


__all__ = ["MiddlewareUserAuthentication"]
