"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "hotel",
        "room",
        "user",
        "status",
        "check_in",
        "check_out",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "check_in", "check_out", "hotel")
    search_fields = ("hotel__name", "room__room_number", "user__email")
    # Статус меняется только через API, где работает машина состояний.
    readonly_fields = (
        "status",
        "created_at",
        "updated_at",
        "total_price",
        "total_nights",
    )
