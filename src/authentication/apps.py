"""App configuration for identity components."""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Holds the Identity model, bcrypt hashing, and JWT token service."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
