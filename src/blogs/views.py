"""Blog endpoints. Mutations delegate to ``BlogService``."""

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from access_control.permissions import RolePermission
from access_control.roles import Role
from core.response import BaseViewSet, api_response
from .filters import BlogFilter
from .pagination import BlogPagination
from .serializers import BlogSerializer, BlogWriteSerializer, BulkActionSerializer
from .services import BlogService


class BlogViewSet(BaseViewSet):
    """List/read are public; writes need editor+, and update/delete also ownership or admin."""

    serializer_class = BlogSerializer
    permission_classes = [RolePermission]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BlogFilter
    pagination_class = BlogPagination
    lookup_url_kwarg = "identifier"
    action_roles = {
        "list": None,
        "retrieve": None,
        "create": Role.EDITOR,
        "update": Role.EDITOR,
        "partial_update": Role.EDITOR,
        "destroy": Role.EDITOR,
        "bulk": Role.ADMIN,
        "overview": Role.EDITOR,
    }

    def get_queryset(self):
        return BlogService.base_queryset()

    def get_serializer_class(self):
        if self.action in ("create", "update", "partial_update"):
            return BlogWriteSerializer
        if self.action == "bulk":
            return BulkActionSerializer
        return BlogSerializer

    def retrieve(self, request, *args, **kwargs):
        """Fetch by id or slug; counts a view."""
        blog = BlogService.get_by_identifier(kwargs[self.lookup_url_kwarg])
        return api_response(BlogSerializer(blog).data)

    def create(self, request, *args, **kwargs):
        serializer = BlogWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        blog = BlogService.create(request.user, serializer.validated_data)
        return api_response(
            BlogSerializer(blog).data, status=status.HTTP_201_CREATED, message="Blog created successfully"
        )

    def update(self, request, *args, **kwargs):
        """PUT and PATCH both apply partial-update semantics."""
        serializer = BlogWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        blog = BlogService.update(kwargs[self.lookup_url_kwarg], request.user, serializer.validated_data)
        return api_response(BlogSerializer(blog).data, message="Blog updated successfully")

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        BlogService.delete(kwargs[self.lookup_url_kwarg], request.user)
        return api_response(None, message="Blog deleted successfully")

    @action(detail=False, methods=["post"])
    def bulk(self, request):
        """Admin batch action over a set of blog ids."""
        serializer = BulkActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        action_name = serializer.validated_data["action"]
        affected = BlogService.bulk_action(action_name, serializer.validated_data["blog_ids"])
        return api_response(
            {"modified_count": affected}, message=f"Bulk {action_name} completed successfully"
        )

    @action(detail=False, methods=["get"], url_path="stats/overview")
    def overview(self, request):
        return Response(BlogService.overview())


__all__ = ["BlogViewSet"]
