"""System checks for role-gated views."""

from django.core.checks import Error, register

from access_control.permissions import RolePermission


@register()
def role_gated_views_declare_roles(app_configs, **kwargs):
    """Ensure views using RolePermission declare ``minimum_role`` or ``action_roles``.

    Only the project's known views are inspected; new role-gated views should
    be added to the list below.
    """
    errors: list[Error] = []

    # Imported lazily to avoid circular imports at module load time.
    from analytics.views import (
        ContentAnalyticsView,
        DashboardAnalyticsView,
        RealtimeAnalyticsView,
        UserAnalyticsView,
    )
    from authentication.views import UserAdminViewSet
    from blogs.views import BlogViewSet

    gated_views = [
        BlogViewSet,
        UserAdminViewSet,
        DashboardAnalyticsView,
        ContentAnalyticsView,
        UserAnalyticsView,
        RealtimeAnalyticsView,
    ]

    for view_cls in gated_views:
        permission_classes = getattr(view_cls, "permission_classes", [])
        if RolePermission not in permission_classes:
            continue
        if not hasattr(view_cls, "minimum_role") and not getattr(view_cls, "action_roles", None):
            errors.append(
                Error(
                    f"{view_cls.__name__} uses RolePermission but declares neither "
                    f"minimum_role nor action_roles.",
                    obj=view_cls,
                    id="access_control.E001",
                )
            )

    return errors
