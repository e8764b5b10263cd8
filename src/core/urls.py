"""Root URL configuration for the travel blog admin API."""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("auth/", include("authentication.urls")),
    path("", include("authentication.user_urls")),
    path("", include("blogs.urls")),
    path("analytics/", include("analytics.urls")),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
]
