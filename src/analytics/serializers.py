"""Query-parameter validation for analytics endpoints."""

from rest_framework import serializers

from .services import DEFAULT_PERIOD_DAYS


class PeriodSerializer(serializers.Serializer):
    """Trailing window, in days, for windowed analytics."""

    period = serializers.IntegerField(min_value=1, max_value=3650, default=DEFAULT_PERIOD_DAYS)


__all__ = ["PeriodSerializer"]
