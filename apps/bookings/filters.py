"""FilterSet definitions for booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Narrow the booking list by customer, room, activity or overlap with a window."""

    customer = django_filters.NumberFilter(field_name="customer_id", lookup_expr="exact")
    room = django_filters.NumberFilter(field_name="room_id", lookup_expr="exact")
    is_active = django_filters.BooleanFilter(field_name="is_active")
    # closed-interval overlap with [start, end]
    start = django_filters.DateFilter(field_name="end_date", lookup_expr="gte")
    end = django_filters.DateFilter(field_name="start_date", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["customer", "room", "is_active"]
