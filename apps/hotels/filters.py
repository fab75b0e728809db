"""FilterSet definitions for hotel and room listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Hotel, Room


class HotelFilterSet(django_filters.FilterSet):
    """Filters used by the hotel list endpoint."""

    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    country = django_filters.CharFilter(field_name="country", lookup_expr="icontains")
    min_rating = django_filters.NumberFilter(field_name="rating", lookup_expr="gte")
    amenities = django_filters.CharFilter(method="filter_amenities")

    class Meta:
        model = Hotel
        fields = ["city", "country"]

    def filter_amenities(self, queryset, name, value):  # type: ignore
        # Через запятую; отель должен иметь все перечисленные удобства.
        for amenity in (item.strip() for item in value.split(",")):
            if amenity:
                queryset = queryset.filter(amenities__icontains=f'"{amenity}"')
        return queryset


class RoomFilterSet(django_filters.FilterSet):
    """Filters used by the room list endpoint."""

    hotel = django_filters.NumberFilter(field_name="hotel_id", lookup_expr="exact")
    type = django_filters.ChoiceFilter(field_name="room_type", choices=Room.RoomType.choices)
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")
    bed_type = django_filters.ChoiceFilter(field_name="bed_type", choices=Room.BedType.choices)
    is_available = django_filters.BooleanFilter(field_name="is_available")

    class Meta:
        model = Room
        fields = ["hotel", "type", "bed_type", "is_available"]
