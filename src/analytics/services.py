"""Analytics aggregator: read-only views computed fresh from blogs and identities.

Nothing is cached. Each view runs several independent queries, so fields in
one response may reflect slightly different instants under concurrent writes.
"""

from datetime import datetime, timedelta
from typing import Any

from django.contrib.auth import get_user_model
from django.db.models import Avg, Count, F, Q, Sum
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from blogs.models import Blog, Status

User = get_user_model()

DEFAULT_PERIOD_DAYS = 30
TOP_BLOGS_LIMIT = 5
TOP_AUTHORS_LIMIT = 10
TOP_TAGS_LIMIT = 20
RECENT_USERS_LIMIT = 10
RECENT_ACTIVITY_LIMIT = 10


def _daily_counts(queryset, since: datetime) -> list[dict[str, Any]]:
    """Rows created since ``since`` grouped by calendar day, oldest first."""
    rows = (
        queryset.filter(created_at__gte=since)
        .annotate(day=TruncDate("created_at"))
        .values("day")
        .annotate(count=Count("id"))
        .order_by("day")
    )
    return [{"date": row["day"], "count": row["count"]} for row in rows]


def _round(value, digits: int = 2) -> float:
    return round(float(value or 0), digits)


class AnalyticsService:
    """Dashboard, content, user, and real-time snapshot views."""

    @classmethod
    def dashboard(cls, now: datetime | None = None) -> dict[str, Any]:
        now = now or timezone.now()
        thirty_days_ago = now - timedelta(days=30)
        seven_days_ago = now - timedelta(days=7)

        engagement = Blog.objects.aggregate(
            total_views=Coalesce(Sum("views"), 0),
            total_likes=Coalesce(Sum("likes"), 0),
            total_shares=Coalesce(Sum("shares"), 0),
        )

        category_distribution = list(
            Blog.objects.values("category").annotate(count=Count("id")).order_by("-count", "category")
        )
        role_distribution = list(
            User.objects.values("role").annotate(count=Count("id")).order_by("-count", "role")
        )
        top_blogs = list(
            Blog.objects.filter(status=Status.PUBLISHED)
            .order_by("-views", "-created_at")
            .values(
                "id", "title", "slug", "views", "likes", "created_at",
                author_username=F("author__username"),
            )[:TOP_BLOGS_LIMIT]
        )

        return {
            "overview": {
                "total_blogs": Blog.objects.count(),
                "total_users": User.objects.count(),
                "published_blogs": Blog.objects.filter(status=Status.PUBLISHED).count(),
                "draft_blogs": Blog.objects.filter(status=Status.DRAFT).count(),
                "recent_blogs": Blog.objects.filter(created_at__gte=seven_days_ago).count(),
                "recent_users": User.objects.filter(created_at__gte=seven_days_ago).count(),
                **engagement,
            },
            "trends": {
                "monthly_blog_creation": _daily_counts(Blog.objects.all(), thirty_days_ago),
                "category_distribution": category_distribution,
                "user_role_distribution": role_distribution,
            },
            "top_content": {"top_blogs": top_blogs},
        }

    @classmethod
    def content(cls, period_days: int = DEFAULT_PERIOD_DAYS, now: datetime | None = None) -> dict[str, Any]:
        now = now or timezone.now()
        since = now - timedelta(days=period_days)
        window = Blog.objects.filter(created_at__gte=since)
        published = window.filter(status=Status.PUBLISHED)

        metrics = window.aggregate(
            avg_views=Avg("views"),
            avg_likes=Avg("likes"),
            avg_reading_time=Avg("reading_time"),
            total_posts=Count("id"),
        )

        popular_categories = [
            {**row, "avg_views": _round(row["avg_views"])}
            for row in published.values("category")
            .annotate(count=Count("id"), total_views=Sum("views"), avg_views=Avg("views"))
            .order_by("-total_views", "category")
        ]

        author_performance = [
            {**row, "avg_views": _round(row["avg_views"]), "avg_likes": _round(row["avg_likes"])}
            for row in published.values("author_id", author_username=F("author__username"))
            .annotate(
                post_count=Count("id"),
                total_views=Sum("views"),
                total_likes=Sum("likes"),
                avg_views=Avg("views"),
                avg_likes=Avg("likes"),
            )
            .order_by("-total_views", "author_username")[:TOP_AUTHORS_LIMIT]
        ]

        return {
            "period_days": period_days,
            "metrics": {
                "avg_views": _round(metrics["avg_views"]),
                "avg_likes": _round(metrics["avg_likes"]),
                "avg_reading_time": _round(metrics["avg_reading_time"]),
                "total_posts": metrics["total_posts"],
            },
            "popular_categories": popular_categories,
            "author_performance": author_performance,
            "popular_tags": cls._tag_stats(published),
        }

    @staticmethod
    def _tag_stats(queryset) -> list[dict[str, Any]]:
        """Explode each post's tag list and rank tags by post count."""
        stats: dict[str, dict[str, int]] = {}
        for tags, views in queryset.values_list("tags", "views"):
            for tag in tags or []:
                entry = stats.setdefault(tag, {"count": 0, "total_views": 0})
                entry["count"] += 1
                entry["total_views"] += views
        ranked = sorted(stats.items(), key=lambda item: (-item[1]["count"], item[0]))
        return [{"tag": tag, **entry} for tag, entry in ranked[:TOP_TAGS_LIMIT]]

    @classmethod
    def users(cls, period_days: int = DEFAULT_PERIOD_DAYS, now: datetime | None = None) -> dict[str, Any]:
        now = now or timezone.now()
        since = now - timedelta(days=period_days)

        user_activity = list(
            User.objects.values("role")
            .annotate(count=Count("id"), active_users=Count("id", filter=Q(last_login__gte=since)))
            .order_by("role")
        )
        active_users = list(
            User.objects.filter(last_login__gte=since)
            .order_by("-last_login")
            .values(
                "id", "username", "email", "role", "last_login",
                "posts_count", "views_count", "likes_count",
            )[:RECENT_USERS_LIMIT]
        )
        engagement = User.objects.aggregate(
            avg_posts_per_user=Avg("posts_count"),
            avg_views_per_user=Avg("views_count"),
            total_active_users=Count("id", filter=Q(is_active=True)),
        )

        return {
            "period_days": period_days,
            "registration_trend": _daily_counts(User.objects.all(), since),
            "user_activity": user_activity,
            "active_users": active_users,
            "engagement": {
                "avg_posts_per_user": _round(engagement["avg_posts_per_user"]),
                "avg_views_per_user": _round(engagement["avg_views_per_user"]),
                "total_active_users": engagement["total_active_users"],
            },
        }

    @classmethod
    def realtime(cls, now: datetime | None = None) -> dict[str, Any]:
        now = now or timezone.now()
        today_start = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
        yesterday_start = today_start - timedelta(days=1)

        today_blogs = Blog.objects.filter(created_at__gte=today_start).count()
        today_users = User.objects.filter(created_at__gte=today_start).count()
        yesterday_blogs = Blog.objects.filter(created_at__gte=yesterday_start, created_at__lt=today_start).count()
        yesterday_users = User.objects.filter(created_at__gte=yesterday_start, created_at__lt=today_start).count()

        recent_activity = list(
            Blog.objects.filter(updated_at__gte=now - timedelta(hours=24))
            .order_by("-updated_at")
            .values("id", "title", "status", "updated_at", author_username=F("author__username"))[
                :RECENT_ACTIVITY_LIMIT
            ]
        )

        return {
            "today": {
                "blogs": today_blogs,
                "users": today_users,
                "blog_change": today_blogs - yesterday_blogs,
                "user_change": today_users - yesterday_users,
            },
            "recent_activity": recent_activity,
            "online_users": User.objects.filter(last_login__gte=now - timedelta(hours=1)).count(),
            "timestamp": now,
        }


__all__ = ["AnalyticsService", "DEFAULT_PERIOD_DAYS"]
