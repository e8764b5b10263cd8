"""App configuration for the access_control Django application.

Holds the role model of the access-control gate and registers its system
checks when Django starts.
"""

from django.apps import AppConfig


class AccessControlConfig(AppConfig):
    """Application configuration for the access_control app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "access_control"

    def ready(self) -> None:
        """Register system checks when the app is loaded."""
        from . import checks  # noqa: F401
