"""Lifecycle mutator: every state transition on blog posts goes through here.

Keeps the derived fields (slug, reading time, ``published_at``) and the
author's denormalized post counter consistent with the writes it performs.
"""

import logging
import uuid
from typing import Any, Iterable

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count, F
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from access_control.roles import is_admin
from core.exceptions import DuplicateSlug, InvalidAction

from .models import Blog, Status
from .normalization import prepare_for_write
from .slugs import assign_slug, slug_taken

logger = logging.getLogger(__name__)

User = get_user_model()

# Fields a caller may set directly; everything else is derived or server-owned.
WRITABLE_FIELDS = (
    "title",
    "content",
    "excerpt",
    "category",
    "tags",
    "location",
    "featured_image",
    "images",
    "status",
    "featured",
    "scheduled_at",
)

BULK_ACTIONS = ("delete", "publish", "draft", "feature", "unfeature")


def _parse_uuid(value) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class BlogService:
    """Create, read, update, delete, and bulk-mutate blog posts."""

    @classmethod
    def base_queryset(cls):
        return Blog.objects.select_related("author")

    @classmethod
    def create(cls, author, data: dict[str, Any]) -> Blog:
        """Persist a new post owned by ``author`` and bump their post counter."""
        now = timezone.now()
        blog = Blog(author=author, seo=dict(data.get("seo") or {}))
        for field in WRITABLE_FIELDS:
            if field in data:
                setattr(blog, field, data[field])
        blog.slug = assign_slug(blog.title)
        if blog.status == Status.PUBLISHED:
            blog.published_at = now
        prepare_for_write(blog, {"content", "tags"})

        try:
            with transaction.atomic():
                blog.save()
                User.objects.filter(pk=author.pk).update(posts_count=F("posts_count") + 1)
        except IntegrityError as exc:
            # A concurrent writer claimed the slug between the check and the insert.
            if slug_taken(blog.slug):
                raise DuplicateSlug() from exc
            raise

        logger.info("Blog %s created by %s (slug=%s, status=%s)", blog.pk, author.pk, blog.slug, blog.status)
        return cls.base_queryset().get(pk=blog.pk)

    @classmethod
    def get_by_identifier(cls, identifier: str) -> Blog:
        """Resolve a post by id or slug and count the view.

        The counter is bumped with a single ``UPDATE ... SET views = views + 1``
        so concurrent readers never lose increments.
        """
        pk = _parse_uuid(identifier)
        blog = cls.base_queryset().filter(pk=pk).first() if pk is not None else None
        if blog is None:
            # Slugs may themselves parse as UUIDs, so an id miss still tries the slug.
            blog = cls.base_queryset().filter(slug=identifier).first()
        if blog is None:
            raise NotFound("Blog not found")

        Blog.objects.filter(pk=blog.pk).update(views=F("views") + 1)
        blog.refresh_from_db(fields=["views"])
        return blog

    @classmethod
    def get_by_id(cls, blog_id) -> Blog:
        pk = _parse_uuid(blog_id)
        if pk is None:
            raise NotFound("Blog not found")
        try:
            return cls.base_queryset().get(pk=pk)
        except Blog.DoesNotExist:
            raise NotFound("Blog not found")

    @classmethod
    def update(cls, blog_id, actor, data: dict[str, Any]) -> Blog:
        """Apply a partial update; absent keys are left untouched."""
        blog = cls.get_by_id(blog_id)
        cls._ensure_can_modify(blog, actor, "update")

        if "title" in data and data["title"] != blog.title:
            blog.slug = assign_slug(data["title"], exclude_pk=blog.pk)

        changed = set()
        for field in WRITABLE_FIELDS:
            if field in data:
                setattr(blog, field, data[field])
                changed.add(field)

        if "seo" in data:
            blog.seo = {**(blog.seo or {}), **(data["seo"] or {})}

        if data.get("status") == Status.PUBLISHED and blog.published_at is None:
            blog.published_at = timezone.now()

        prepare_for_write(blog, changed)
        try:
            with transaction.atomic():
                blog.save()
        except IntegrityError as exc:
            if slug_taken(blog.slug, exclude_pk=blog.pk):
                raise DuplicateSlug() from exc
            raise

        logger.info("Blog %s updated by %s (fields=%s)", blog.pk, actor.pk, sorted(set(data)))
        return cls.base_queryset().get(pk=blog.pk)

    @classmethod
    def delete(cls, blog_id, actor) -> None:
        """Delete a post and decrement its author's post counter (no floor)."""
        blog = cls.get_by_id(blog_id)
        cls._ensure_can_modify(blog, actor, "delete")

        with transaction.atomic():
            blog.delete()
            User.objects.filter(pk=blog.author_id).update(posts_count=F("posts_count") - 1)
        logger.info("Blog %s deleted by %s", blog_id, actor.pk)

    @classmethod
    def bulk_action(cls, action: str, blog_ids: Iterable) -> int:
        """Apply ``action`` to every matching post; returns the matched count.

        Ownership is not checked per post: callers are admins. The batch is
        not atomic as a whole.
        """
        if action not in BULK_ACTIONS:
            raise InvalidAction()

        now = timezone.now()
        qs = Blog.objects.filter(pk__in=list(blog_ids))

        if action == "delete":
            per_author = list(qs.values("author").annotate(n=Count("id")).order_by())
            _, deleted = qs.delete()
            for row in per_author:
                User.objects.filter(pk=row["author"]).update(posts_count=F("posts_count") - row["n"])
            affected = deleted.get(Blog._meta.label, 0)
        elif action == "publish":
            qs.filter(published_at__isnull=True).update(published_at=now)
            affected = qs.update(status=Status.PUBLISHED, updated_at=now)
        elif action == "draft":
            affected = qs.update(status=Status.DRAFT, updated_at=now)
        else:
            affected = qs.update(featured=action == "feature", updated_at=now)

        logger.info("Bulk %s applied to %d blog(s)", action, affected)
        return affected

    @classmethod
    def overview(cls) -> dict[str, Any]:
        """Summary counts and short rankings for the blog list screen."""
        category_stats = list(
            Blog.objects.values("category").annotate(count=Count("id")).order_by("-count", "category")
        )
        top_blogs = (
            Blog.objects.filter(status=Status.PUBLISHED)
            .order_by("-views", "-created_at")
            .values("id", "title", "slug", "views", "likes", "created_at")[:5]
        )
        recent_blogs = (
            Blog.objects.order_by("-created_at")
            .values("id", "title", "slug", "status", "created_at", author_username=F("author__username"))[:5]
        )
        return {
            "total_blogs": Blog.objects.count(),
            "published_blogs": Blog.objects.filter(status=Status.PUBLISHED).count(),
            "draft_blogs": Blog.objects.filter(status=Status.DRAFT).count(),
            "featured_blogs": Blog.objects.filter(featured=True).count(),
            "category_stats": category_stats,
            "top_blogs": list(top_blogs),
            "recent_blogs": list(recent_blogs),
        }

    @staticmethod
    def _ensure_can_modify(blog: Blog, actor, verb: str) -> None:
        if blog.author_id == getattr(actor, "pk", None) or is_admin(actor):
            return
        logger.warning("Identity %s denied %s on blog %s", getattr(actor, "pk", None), verb, blog.pk)
        raise PermissionDenied(f"Not authorized to {verb} this blog")


__all__ = ["BlogService", "BULK_ACTIONS", "WRITABLE_FIELDS"]
