"""Routing for admin identity management."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import UserAdminViewSet

router = DefaultRouter()
router.register(r"users", UserAdminViewSet, basename="user")

urlpatterns = [
    path("", include(router.urls)),
]
