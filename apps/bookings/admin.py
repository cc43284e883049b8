"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "customer",
        "room",
        "start_date",
        "end_date",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "start_date", "end_date")
    search_fields = ("customer__name", "customer__email", "room__description")
    readonly_fields = ("created_at", "updated_at")
