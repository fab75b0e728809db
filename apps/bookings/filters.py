"""FilterSet definitions for booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Фильтры по статусу и диапазону дат заезда."""

    status = django_filters.ChoiceFilter(field_name="status", choices=Booking.Status.choices)
    start_date = django_filters.DateFilter(field_name="check_in", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="check_in", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status"]
