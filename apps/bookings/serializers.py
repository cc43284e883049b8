"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.customers.models import Customer

from .models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Read representation of a stored booking."""

    class Meta:
        model = Booking
        fields = [
            "id",
            "customer",
            "room",
            "start_date",
            "end_date",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    """Booking request: the room and active flag are chosen by the engine.

    Date ordering and the future-start rule are checked by the engine,
    so a bad window surfaces as InvalidDateRange rather than a field error.
    """

    customer = serializers.PrimaryKeyRelatedField(queryset=Customer.objects.all())
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class BookingUpdateSerializer(serializers.Serializer):
    """Update of a booking. Only the customer and the active flag change;
    dates and room are fixed once the engine has allocated them.
    """

    id = serializers.IntegerField()
    customer = serializers.PrimaryKeyRelatedField(queryset=Customer.objects.all(), required=False)
    is_active = serializers.BooleanField(required=False)


class DateRangeQuerySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()
