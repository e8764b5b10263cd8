"""Slug assignment: derive a URL-safe identifier from a title and enforce uniqueness.

Collisions are rejected, never disambiguated with a suffix.
"""

import logging
import re

from rest_framework.exceptions import ValidationError

from core.exceptions import DuplicateSlug

from .models import Blog

logger = logging.getLogger(__name__)

_DISALLOWED = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def generate_slug(title: str) -> str:
    """Lower-case, keep ``[a-z0-9\\s]``, hyphenate whitespace runs, cut to 50, trim edge hyphens."""
    slug = _DISALLOWED.sub("", title.strip().lower())
    slug = _WHITESPACE.sub("-", slug)
    return slug[: Blog.SLUG_MAX_LENGTH].strip("-")


def slug_taken(slug: str, exclude_pk=None) -> bool:
    qs = Blog.objects.filter(slug=slug)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


def assign_slug(title: str, exclude_pk=None) -> str:
    """Return the slug for ``title`` or raise ``DuplicateSlug`` if another blog owns it."""
    slug = generate_slug(title)
    if not slug:
        raise ValidationError({"title": ["Title must contain at least one letter or digit."]})
    if slug_taken(slug, exclude_pk=exclude_pk):
        logger.warning("Slug collision for %r (slug %s)", title, slug)
        raise DuplicateSlug()
    return slug


__all__ = ["generate_slug", "slug_taken", "assign_slug"]
