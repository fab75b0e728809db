"""Hotel catalog API views."""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.infrastructure.repositories import DjangoBookingRepository
from apps.bookings.services import AvailabilityChecker

from .filters import HotelFilterSet, RoomFilterSet
from .models import Hotel, Room
from .permissions import IsAdminOrReadOnly, is_platform_admin
from .serializers import AvailabilityQuerySerializer, HotelDetailSerializer, HotelSerializer, RoomSerializer

logger = logging.getLogger(__name__)


class HotelViewSet(viewsets.ModelViewSet):
    """Отели: чтение для всех, изменение только администраторам."""

    serializer_class = HotelSerializer
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_class = HotelFilterSet

    def get_serializer_class(self):  # type: ignore
        if self.action == "retrieve":
            return HotelDetailSerializer
        return HotelSerializer

    def get_queryset(self):  # type: ignore
        qs = Hotel.objects.all()
        if self.action == "retrieve":
            qs = qs.prefetch_related("rooms")
        # Неактивные отели видны только администраторам.
        if not is_platform_admin(self.request.user):
            qs = qs.filter(is_active=True)
        return qs


class RoomViewSet(viewsets.ModelViewSet):
    """Номера отелей с фильтрами по цене, типу и вместимости."""

    queryset = Room.objects.select_related("hotel").all()
    serializer_class = RoomSerializer
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = RoomFilterSet
    ordering_fields = ["price", "capacity", "floor"]
    ordering = ["price"]

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        """Проверка, свободен ли номер на указанные даты."""
        room = self.get_object()
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        checker = AvailabilityChecker(DjangoBookingRepository())
        overlapping = checker.is_overlapping(
            room.pk,
            query.validated_data["check_in"],
            query.validated_data["check_out"],
        )
        return Response({"room": room.pk, "available": not overlapping})
