"""App configuration for the blog content lifecycle."""

from django.apps import AppConfig


class BlogsConfig(AppConfig):
    """Blog posts, slug assignment, and the lifecycle mutator service."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "blogs"
