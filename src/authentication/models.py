"""Identity record: the blog's user account with role and activity counters.

Django's groups/permissions are not used (no PermissionsMixin); privilege is
expressed solely through the closed ``role`` enum.
"""

import uuid
from typing import ClassVar, Optional

from django.contrib.auth.models import AbstractBaseUser
from django.core.validators import MinLengthValidator
from django.db import models

from access_control.roles import Role

from .managers import UserManager


def default_preferences() -> dict:
    return {"theme": "dark", "notifications": True, "language": "en"}


class User(AbstractBaseUser):
    """Identity addressed by unique username and email, bcrypt-hashed secret."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(max_length=30, unique=True, validators=[MinLengthValidator(3)])
    email = models.EmailField(unique=True)
    password_hash = models.CharField(max_length=128)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.SUBSCRIBER)

    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    bio = models.TextField(blank=True)
    avatar = models.URLField(max_length=500, blank=True)
    social_links = models.JSONField(default=dict, blank=True)
    preferences = models.JSONField(default=default_preferences, blank=True)

    # Signed: deletes never clamp at zero.
    posts_count = models.IntegerField(default=0)
    views_count = models.IntegerField(default=0)
    likes_count = models.IntegerField(default=0)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS: ClassVar[list[str]] = ["username"]

    objects = UserManager()

    class Meta:
        """Newest identities first."""
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.username

    def set_password(self, raw_password: Optional[str]) -> None:  # type: ignore[override]
        """Re-hash only here, so unrelated saves never touch the credential."""

        if raw_password is None:
            self.password_hash = ""
        else:
            self.password_hash = UserManager.hash_password(raw_password)

    def check_password(self, raw_password: Optional[str]) -> bool:  # type: ignore[override]
        """Delegate to bcrypt verification helper."""

        if raw_password is None:
            return False
        return UserManager.verify_password(self, raw_password)


__all__ = ["User", "Role"]
