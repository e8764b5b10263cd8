"""Routing for analytics endpoints."""

from django.urls import path

from .views import ContentAnalyticsView, DashboardAnalyticsView, RealtimeAnalyticsView, UserAnalyticsView

urlpatterns = [
    path("dashboard/", DashboardAnalyticsView.as_view(), name="analytics-dashboard"),
    path("content/", ContentAnalyticsView.as_view(), name="analytics-content"),
    path("users/", UserAnalyticsView.as_view(), name="analytics-users"),
    path("realtime/", RealtimeAnalyticsView.as_view(), name="analytics-realtime"),
]
