"""Page/limit pagination for the blog listing."""

from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class BlogPagination(PageNumberPagination):
    page_query_param = "page"
    page_size_query_param = "limit"
    page_size = settings.BLOG_PAGE_SIZE
    max_page_size = settings.BLOG_MAX_PAGE_SIZE

    def get_paginated_response(self, data):
        return Response(
            {
                "blogs": data,
                "total": self.page.paginator.count,
                "total_pages": self.page.paginator.num_pages,
                "current_page": self.page.number,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "blogs": schema,
                "total": {"type": "integer"},
                "total_pages": {"type": "integer"},
                "current_page": {"type": "integer"},
            },
        }


__all__ = ["BlogPagination"]
