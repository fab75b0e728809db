"""Serializers for the hotel catalog."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Hotel, Room


class HotelShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = ["id", "name", "street", "city", "country"]


class HotelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = [
            "id",
            "name",
            "description",
            "street",
            "city",
            "state",
            "country",
            "zip_code",
            "phone",
            "email",
            "amenities",
            "rating",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]


class RoomSerializer(serializers.ModelSerializer):
    """Номер отеля. Флаг доступности только для чтения."""

    hotel_detail = HotelShortSerializer(source="hotel", read_only=True)

    class Meta:
        model = Room
        fields = [
            "id",
            "hotel",
            "hotel_detail",
            "room_number",
            "room_type",
            "description",
            "price",
            "capacity",
            "floor",
            "size",
            "bed_type",
            "amenities",
            "is_available",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["is_available", "created_at", "updated_at"]
        # Уникальность номера проверяется в validate() с понятным сообщением.
        validators = []

    def validate(self, attrs):  # type: ignore
        # Бронь хранит отель номера; перенос номера в другой отель запрещён.
        if self.instance is not None and "hotel" in attrs and attrs["hotel"].pk != self.instance.hotel_id:
            raise serializers.ValidationError({"hotel": "Нельзя перенести номер в другой отель."})
        hotel = attrs.get("hotel", getattr(self.instance, "hotel", None))
        room_number = attrs.get("room_number", getattr(self.instance, "room_number", None))
        duplicates = Room.objects.filter(hotel=hotel, room_number=room_number)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError({"room_number": "Номер комнаты уже существует в этом отеле."})
        return attrs


class RoomShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "room_number", "room_type", "price"]


class AvailabilityQuerySerializer(serializers.Serializer):
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["check_in"] >= attrs["check_out"]:
            raise serializers.ValidationError("Дата выезда должна быть позже даты заезда.")
        return attrs


class HotelDetailSerializer(HotelSerializer):
    """Отель вместе со списком номеров."""

    rooms = RoomShortSerializer(many=True, read_only=True)

    class Meta(HotelSerializer.Meta):
        fields = HotelSerializer.Meta.fields + ["rooms"]
