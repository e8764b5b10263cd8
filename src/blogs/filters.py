"""Filter builder for the blog listing.

Each optional query parameter maps to one typed predicate; predicates are
ANDed and an absent parameter contributes nothing.
"""

from django_filters import rest_framework as filters
from django.db.models import Q

from .models import Blog, Category, Status

SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "publishedAt": "published_at",
    "title": "title",
    "views": "views",
    "likes": "likes",
    "readingTime": "reading_time",
}


def _ids_with_tag_matching(queryset, term: str) -> list:
    """Ids of posts with at least one tag containing ``term``, compared tag by tag."""
    needle = term.casefold()
    return [
        pk
        for pk, tags in queryset.values_list("pk", "tags")
        if any(needle in str(tag).casefold() for tag in tags or [])
    ]


class BlogFilter(filters.FilterSet):
    search = filters.CharFilter(method="filter_search")
    category = filters.ChoiceFilter(choices=Category.choices)
    status = filters.ChoiceFilter(choices=Status.choices)
    author = filters.UUIDFilter(field_name="author_id")
    featured = filters.BooleanFilter()
    sortBy = filters.ChoiceFilter(
        choices=[(key, key) for key in SORT_FIELDS], method="keep", empty_label=None
    )
    sortOrder = filters.ChoiceFilter(
        choices=[("asc", "asc"), ("desc", "desc")], method="keep", empty_label=None
    )

    class Meta:
        model = Blog
        fields = ["search", "category", "status", "author", "featured"]

    @staticmethod
    def filter_search(queryset, name, value):
        """Case-insensitive substring match on title, content, or any tag."""
        term = value.strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(title__icontains=term) | Q(content__icontains=term) | Q(pk__in=_ids_with_tag_matching(queryset, term))
        )

    @staticmethod
    def keep(queryset, name, value):
        # Sorting is applied once in filter_queryset, after all predicates.
        return queryset

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        field = SORT_FIELDS[self.form.cleaned_data.get("sortBy") or "createdAt"]
        descending = (self.form.cleaned_data.get("sortOrder") or "desc") == "desc"
        prefix = "-" if descending else ""
        return queryset.order_by(f"{prefix}{field}", f"{prefix}id")


__all__ = ["BlogFilter", "SORT_FIELDS"]
