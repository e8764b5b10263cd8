"""Routing for the blog viewset."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import BlogViewSet

router = DefaultRouter()
router.register(r"blogs", BlogViewSet, basename="blog")

urlpatterns = [
    path("", include(router.urls)),
]
