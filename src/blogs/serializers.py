"""Serializers for blog payloads: input validation and the read representation."""

from rest_framework import serializers

from authentication.serializers import AuthorSummarySerializer

from .models import Blog, Category, Status


class ImageSerializer(serializers.Serializer):
    url = serializers.URLField(max_length=500)
    alt = serializers.CharField(required=False, allow_blank=True, max_length=200)
    caption = serializers.CharField(required=False, allow_blank=True, max_length=300)


class CoordinatesSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)


class LocationSerializer(serializers.Serializer):
    country = serializers.CharField(required=False, allow_blank=True, max_length=100)
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    coordinates = CoordinatesSerializer(required=False)


class SeoSerializer(serializers.Serializer):
    meta_title = serializers.CharField(required=False, allow_blank=True, max_length=200)
    meta_description = serializers.CharField(required=False, allow_blank=True, max_length=300)
    keywords = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    canonical_url = serializers.URLField(required=False, allow_blank=True)


class BlogWriteSerializer(serializers.Serializer):
    """Validates create payloads (``partial=False``) and partial updates.

    Only validates; persistence and derived fields belong to ``BlogService``.
    """

    title = serializers.CharField(max_length=Blog.TITLE_MAX_LENGTH)
    content = serializers.CharField(trim_whitespace=False)
    excerpt = serializers.CharField(max_length=Blog.EXCERPT_MAX_LENGTH)
    category = serializers.ChoiceField(
        choices=Category.choices, error_messages={"invalid_choice": "Invalid category"}
    )
    tags = serializers.ListField(child=serializers.CharField(max_length=50, allow_blank=True), required=False)
    location = LocationSerializer(required=False, allow_null=True)
    seo = SeoSerializer(required=False)
    featured_image = ImageSerializer(required=False, allow_null=True)
    images = ImageSerializer(many=True, required=False)
    status = serializers.ChoiceField(choices=Status.choices, required=False)
    featured = serializers.BooleanField(required=False)
    scheduled_at = serializers.DateTimeField(required=False, allow_null=True)

    def validate_content(self, value):
        if not value.strip():
            raise serializers.ValidationError("Content is required")
        return value


class BlogSerializer(serializers.ModelSerializer):
    """Persisted post with its author's public profile joined in."""

    author = AuthorSummarySerializer(read_only=True)
    stats = serializers.SerializerMethodField()

    class Meta:
        model = Blog
        fields = [
            "id",
            "title",
            "slug",
            "content",
            "excerpt",
            "featured_image",
            "images",
            "author",
            "category",
            "tags",
            "location",
            "seo",
            "status",
            "published_at",
            "scheduled_at",
            "stats",
            "reading_time",
            "featured",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    @staticmethod
    def get_stats(obj) -> dict:
        return obj.stats


class BulkActionSerializer(serializers.Serializer):
    action = serializers.CharField()
    blog_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


__all__ = [
    "BlogWriteSerializer",
    "BlogSerializer",
    "BulkActionSerializer",
]
