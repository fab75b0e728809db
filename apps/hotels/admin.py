"""Admin registrations for the hotel catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import Hotel, Room


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("room_number", "room_type", "price", "capacity", "is_available")
    readonly_fields = ("is_available",)


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "country", "rating", "is_active", "created_at")
    list_filter = ("is_active", "country", "city")
    search_fields = ("name", "city", "email")
    inlines = [RoomInline]


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("room_number", "hotel", "room_type", "price", "capacity", "is_available")
    list_filter = ("room_type", "bed_type", "is_available")
    search_fields = ("room_number", "hotel__name")
    readonly_fields = ("is_available", "created_at", "updated_at")
