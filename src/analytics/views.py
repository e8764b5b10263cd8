"""Analytics endpoints: role-gated, read-only snapshot views."""

from access_control.permissions import RolePermission
from access_control.roles import Role
from core.response import BaseAPIView, api_response
from .serializers import PeriodSerializer
from .services import AnalyticsService


def _period_days(request) -> int:
    serializer = PeriodSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data["period"]


class DashboardAnalyticsView(BaseAPIView):
    permission_classes = [RolePermission]
    minimum_role = Role.EDITOR

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Counts, 30-day creation trend, distributions, and top posts."""
        return api_response(AnalyticsService.dashboard())


class ContentAnalyticsView(BaseAPIView):
    permission_classes = [RolePermission]
    minimum_role = Role.EDITOR

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Per-category, per-author, and per-tag performance over ``?period=`` days."""
        return api_response(AnalyticsService.content(_period_days(request)))


class UserAnalyticsView(BaseAPIView):
    permission_classes = [RolePermission]
    minimum_role = Role.ADMIN

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Registration trend, activity per role, and engagement averages."""
        return api_response(AnalyticsService.users(_period_days(request)))


class RealtimeAnalyticsView(BaseAPIView):
    permission_classes = [RolePermission]
    minimum_role = Role.EDITOR

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Today versus yesterday, last-24h activity, and users online in the last hour."""
        return api_response(AnalyticsService.realtime())


__all__ = [
    "DashboardAnalyticsView",
    "ContentAnalyticsView",
    "UserAnalyticsView",
    "RealtimeAnalyticsView",
]
