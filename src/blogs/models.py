"""Content record: a travel blog post with SEO, scheduling, and engagement counters."""

import uuid

from django.conf import settings
from django.db import models


class Category(models.TextChoices):
    ADVENTURE = "Adventure"
    CULTURE = "Culture"
    FOOD = "Food"
    NATURE = "Nature"
    CITY = "City"
    BEACH = "Beach"
    MOUNTAIN = "Mountain"
    HISTORICAL = "Historical"


class Status(models.TextChoices):
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"
    SCHEDULED = "scheduled", "Scheduled"
    ARCHIVED = "archived", "Archived"


class Blog(models.Model):
    """Blog post owned by an identity.

    ``slug``, ``reading_time`` and ``published_at`` are derived values kept
    consistent by ``blogs.services.BlogService``; write through it.
    """

    TITLE_MAX_LENGTH = 200
    EXCERPT_MAX_LENGTH = 300
    SLUG_MAX_LENGTH = 50

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    slug = models.SlugField(max_length=SLUG_MAX_LENGTH, unique=True)
    content = models.TextField()
    excerpt = models.CharField(max_length=EXCERPT_MAX_LENGTH)

    # {url, alt, caption}
    featured_image = models.JSONField(null=True, blank=True)
    images = models.JSONField(default=list, blank=True)

    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="blogs")
    category = models.CharField(max_length=20, choices=Category.choices, db_index=True)
    tags = models.JSONField(default=list, blank=True)
    # {country, city, coordinates: {lat, lng}}
    location = models.JSONField(null=True, blank=True)
    # {meta_title, meta_description, keywords, canonical_url}
    seo = models.JSONField(default=dict, blank=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)
    published_at = models.DateTimeField(null=True, blank=True)
    scheduled_at = models.DateTimeField(null=True, blank=True)

    views = models.PositiveIntegerField(default=0)
    likes = models.PositiveIntegerField(default=0)
    shares = models.PositiveIntegerField(default=0)
    comments = models.PositiveIntegerField(default=0)

    reading_time = models.PositiveIntegerField(default=0)
    featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title

    @property
    def stats(self) -> dict:
        return {"views": self.views, "likes": self.likes, "shares": self.shares, "comments": self.comments}


__all__ = ["Blog", "Category", "Status"]
