"""Identity endpoints: register, login, refresh, logout, profile, admin management."""

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone
from rest_framework import mixins, status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.response import Response

from access_control.permissions import RolePermission
from access_control.roles import Role
from core.middleware import get_bearer_token
from core.response import BaseAPIView, BaseGenericViewSet, api_response
from .serializers import (
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserAdminUpdateSerializer,
    UserDetailSerializer,
)
from .services import ACCESS, REFRESH, TokenService

User = get_user_model()

logger = logging.getLogger(__name__)


class RegisterView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Register a subscriber and return their profile with a token pair."""
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered identity %s", user.id)
        access, refresh = TokenService.issue_pair(user)
        return api_response(
            {"user": UserDetailSerializer(user).data, "access": access, "refresh": refresh},
            status=status.HTTP_201_CREATED,
            message="User registered successfully",
        )


class LoginView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Authenticate, stamp last_login, and issue access + refresh tokens."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        user.last_login = timezone.now()
        user.save(update_fields=["last_login"])
        access, refresh = TokenService.issue_pair(user)
        return api_response({"user": UserDetailSerializer(user).data, "access": access, "refresh": refresh})


class RefreshView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Exchange a valid refresh token for new access/refresh tokens."""
        refresh_token = request.data.get("refresh")
        if not refresh_token:
            raise AuthenticationFailed("Refresh token required")

        claims = TokenService.decode(refresh_token, REFRESH)
        if TokenService.is_revoked(claims["jti"]):
            raise AuthenticationFailed("Refresh token revoked")
        user = _get_active_user(claims["sub"])
        if not user:
            raise AuthenticationFailed("User not found or inactive")

        TokenService.revoke(claims)
        access, new_refresh = TokenService.issue_pair(user)
        return api_response({"access": access, "refresh": new_refresh})


class LogoutView(BaseAPIView):
    """Invalidate the current access token by blocklisting its jti."""

    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Blocklist the bearer access token and return 204 No Content."""
        token = get_bearer_token(request._request)
        if not token:
            raise AuthenticationFailed("Missing token.")

        TokenService.revoke(TokenService.decode(token, ACCESS))
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Return the current identity's profile."""
        if not request.user.is_authenticated:
            raise AuthenticationFailed("Authentication required")
        return api_response(UserDetailSerializer(request.user).data)

    # noinspection PyMethodMayBeStatic
    def patch(self, request):
        """Update profile fields; a supplied password is re-hashed."""
        if not request.user.is_authenticated:
            raise AuthenticationFailed("Authentication required")
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return api_response(UserDetailSerializer(request.user).data, message="Profile updated successfully")

    # noinspection PyMethodMayBeStatic
    def delete(self, request):
        """Deactivate the current identity and blocklist the current access token."""
        if not request.user.is_authenticated:
            raise AuthenticationFailed("Authentication required")
        token = get_bearer_token(request._request)
        if token:
            TokenService.revoke(TokenService.decode(token, ACCESS))
        request.user.is_active = False
        request.user.save(update_fields=["is_active", "updated_at"])
        logger.info("Deactivated identity %s", request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserAdminViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    BaseGenericViewSet,
):
    """Admin management of identities. Identities are never hard-deleted."""

    queryset = User.objects.all()
    serializer_class = UserDetailSerializer
    permission_classes = [RolePermission]
    minimum_role = Role.ADMIN
    http_method_names = ["get", "patch", "head", "options"]

    def partial_update(self, request, *args, **kwargs):
        user = self.get_object()
        serializer = UserAdminUpdateSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info(
            "Identity %s updated by %s: %s", user.id, request.user.id, dict(serializer.validated_data)
        )
        return api_response(UserDetailSerializer(user).data, message="User updated successfully")


def _get_active_user(user_id) -> User | None:
    """Retrieve an active identity by id, or None if missing/inactive."""
    if not user_id:
        return None
    try:
        user = User.objects.get(id=user_id)
    except (User.DoesNotExist, DjangoValidationError):
        return None
    if not user.is_active:
        return None
    return user
