"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.hotels.serializers import HotelShortSerializer, RoomShortSerializer
from apps.users.serializers import UserShortSerializer

from .models import Booking


class GuestsSerializer(serializers.Serializer):
    adults = serializers.IntegerField()
    children = serializers.IntegerField(required=False, default=0)


class BookingCreateSerializer(serializers.Serializer):
    """Создание брони пользователем.

    Проверяется только форма запроса: порядок дат, число гостей, наличие
    номера в отеле и занятость дат решает ``CreateBookingHandler``.
    """

    hotel = serializers.IntegerField()
    room = serializers.IntegerField()
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests = GuestsSerializer()
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")


class BookingSerializer(serializers.ModelSerializer):
    """Детальный сериализатор бронирования."""

    user_id = serializers.ReadOnlyField()
    hotel_id = serializers.ReadOnlyField()
    room_id = serializers.ReadOnlyField()
    user = UserShortSerializer(read_only=True)
    hotel = HotelShortSerializer(read_only=True)
    room = RoomShortSerializer(read_only=True)
    guests = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_id",
            "hotel_id",
            "room_id",
            "user",
            "hotel",
            "room",
            "check_in",
            "check_out",
            "guests",
            "total_nights",
            "total_price",
            "currency",
            "status",
            "cancellation_reason",
            "special_requests",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_guests(self, obj: Booking) -> dict:
        return obj.guests.to_dict()


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField()
    cancellation_reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)
