"""Closed role set with privilege ordering."""

from django.db import models


class Role(models.TextChoices):
    """Roles ordered by privilege: subscriber < author < editor < admin."""

    SUBSCRIBER = "subscriber", "Subscriber"
    AUTHOR = "author", "Author"
    EDITOR = "editor", "Editor"
    ADMIN = "admin", "Admin"


ROLE_RANK: dict[str, int] = {
    Role.SUBSCRIBER: 0,
    Role.AUTHOR: 1,
    Role.EDITOR: 2,
    Role.ADMIN: 3,
}


def has_role_at_least(user, minimum: str) -> bool:
    """Return True if ``user`` is authenticated and holds ``minimum`` or higher."""
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    rank = ROLE_RANK.get(getattr(user, "role", None), -1)
    return rank >= ROLE_RANK[minimum]


def is_admin(user) -> bool:
    return has_role_at_least(user, Role.ADMIN)


__all__ = ["Role", "ROLE_RANK", "has_role_at_least", "is_admin"]
