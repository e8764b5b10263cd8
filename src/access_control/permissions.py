"""Role-gate permission: maps each view (or viewset action) to a minimum role."""

from rest_framework import permissions

from .roles import has_role_at_least


class RolePermission(permissions.BasePermission):
    """Allow the request when the caller holds the role the view requires.

    Views declare either ``minimum_role`` or, for viewsets, an
    ``action_roles`` mapping from action name to role. A mapped value of
    ``None`` marks the action as public. Unmapped actions fall back to
    ``minimum_role``; a view declaring neither is closed to everyone.

    Returning False for an anonymous caller makes DRF raise
    ``NotAuthenticated`` (401); an authenticated caller with a lower role
    gets ``PermissionDenied`` (403).
    """

    message = "You do not have permission to perform this action on this resource."

    def has_permission(self, request, view) -> bool:
        declared, required = self.required_role(view)
        if not declared:
            return False
        if required is None:
            return True
        return has_role_at_least(getattr(request, "user", None), required)

    @staticmethod
    def required_role(view) -> tuple[bool, str | None]:
        """Return ``(declared, role)`` for the view's current action."""
        action_roles = getattr(view, "action_roles", None) or {}
        action = getattr(view, "action", None)
        if action in action_roles:
            return True, action_roles[action]
        if hasattr(view, "minimum_role"):
            return True, view.minimum_role
        return False, None


__all__ = ["RolePermission"]
