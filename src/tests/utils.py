"""Shared helpers for tests (identity creation, blog fixtures, fake Redis)."""

from __future__ import annotations

from datetime import datetime
from typing import Dict

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from access_control.roles import Role
from authentication.managers import UserManager
from authentication.services import TokenService
from blogs.models import Blog, Category
from blogs.services import BlogService
from scripts.management.commands.seed_blog import create_seed_users, demo_password

User = get_user_model()

__all__ = [
    "FakeRedis",
    "RedisPatchMixin",
    "create_user",
    "auth_client",
    "blog_payload",
    "make_blog",
    "set_created_at",
    "seed_users",
    "demo_password",
]


class FakeRedis:
    """Minimal Redis stub supporting the commands used by TokenService."""

    def __init__(self):
        self._store: Dict[str, str] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is ignored in tests, value stored in-memory."""
        self._store[key] = value

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        return self._store.get(key)


class RedisPatchMixin:
    """Patch Redis client lookups with a per-class ``FakeRedis``."""

    fake_redis: FakeRedis

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        from unittest import mock

        cls.fake_redis = FakeRedis()
        cls.patchers = [
            mock.patch("core.redis_client.get_redis_client", return_value=cls.fake_redis),
            mock.patch("authentication.services.get_redis_client", return_value=cls.fake_redis),
        ]
        for patcher in cls.patchers:
            patcher.start()

    @classmethod
    def tearDownClass(cls):
        for patcher in cls.patchers:
            patcher.stop()
        super().tearDownClass()


def create_user(username: str, password: str = "Secret123", role: str = Role.SUBSCRIBER, **extra):
    """Create an identity with a bcrypt-hashed password for tests."""

    extra.setdefault("email", f"{username}@test.com")
    return User.objects.create(
        username=username,
        password_hash=UserManager.hash_password(password),
        role=role,
        **extra,
    )


def seed_users() -> dict:
    """One identity per role, created by the seed command helpers."""
    return create_seed_users()


def auth_client(user) -> APIClient:
    """Return an APIClient authenticated with a fresh access token."""
    token = TokenService.issue_pair(user).access
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


def blog_payload(title: str = "Exploring Kyoto Temples", **overrides) -> dict:
    payload = {
        "title": title,
        "content": "Kyoto has more than a thousand temples to wander through.",
        "excerpt": "A slow walk through old Kyoto.",
        "category": Category.CULTURE,
        "tags": ["Japan", "temples"],
    }
    payload.update(overrides)
    return payload


def make_blog(author, title: str = "Exploring Kyoto Temples", **overrides) -> Blog:
    """Create a blog through the lifecycle service so counters stay consistent."""
    return BlogService.create(author, blog_payload(title, **overrides))


def set_created_at(obj, when: datetime) -> None:
    """Backdate ``created_at`` (auto_now_add) with a queryset update."""
    type(obj).objects.filter(pk=obj.pk).update(created_at=when)
    obj.refresh_from_db(fields=["created_at"])
