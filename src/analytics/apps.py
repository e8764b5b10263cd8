"""App configuration for the analytics aggregator."""

from django.apps import AppConfig


class AnalyticsConfig(AppConfig):
    """Read-only aggregate views over blogs and identities; owns no models."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "analytics"
