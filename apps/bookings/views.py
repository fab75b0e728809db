"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.hotels.permissions import is_platform_admin
from shared.application.message_bus import message_bus

from .application.command_handlers import (
    CreateBookingCommand,
    DeleteBookingCommand,
    TransitionBookingStatusCommand,
)
from .domain.exceptions import BookingForbiddenError, BookingNotFoundError
from .domain.state_machine import Actor, Role
from .filters import BookingFilterSet
from .models import Booking
from .serializers import BookingCreateSerializer, BookingSerializer, StatusUpdateSerializer


def actor_for(user) -> Actor:
    """Identity context for the booking core, built from the request user."""
    role = Role.ADMIN if is_platform_admin(user) else Role.USER
    return Actor(user_id=user.pk, role=role)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset для создания и управления бронированиями."""

    queryset = Booking.objects.select_related("hotel", "room", "user").all()
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilterSet

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "update_status":
            return StatusUpdateSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset().order_by("-check_in", "-created_at")
        # Чужие брони в списке не показываем; на детальном запросе это 403.
        if self.action == "list" and not is_platform_admin(self.request.user):
            qs = qs.filter(user=self.request.user)
        return qs

    def get_object(self):  # type: ignore
        try:
            booking = self.get_queryset().get(pk=self.kwargs["pk"])
        except (Booking.DoesNotExist, ValueError):
            raise BookingNotFoundError(f"Booking {self.kwargs['pk']} not found")
        actor = actor_for(self.request.user)
        if not actor.is_admin and not actor.owns(booking.user_id):
            raise BookingForbiddenError("Not authorized to view this booking")
        return booking

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = message_bus.handle_command(CreateBookingCommand(
            actor=actor_for(request.user),
            hotel_id=data["hotel"],
            room_id=data["room"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            adults=data["guests"]["adults"],
            children=data["guests"].get("children", 0),
            special_requests=data.get("special_requests", ""),
        ))

        read_serializer = BookingSerializer(self._reload(booking), context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = message_bus.handle_command(TransitionBookingStatusCommand(
            actor=actor_for(request.user),
            booking_id=pk,
            new_status=serializer.validated_data["status"],
            cancellation_reason=serializer.validated_data.get("cancellation_reason"),
        ))
        return Response(BookingSerializer(self._reload(booking), context=self.get_serializer_context()).data)

    def destroy(self, request, pk=None):  # type: ignore
        message_bus.handle_command(DeleteBookingCommand(
            actor=actor_for(request.user),
            booking_id=pk,
        ))
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _reload(self, booking: Booking) -> Booking:
        return Booking.objects.select_related("hotel", "room", "user").get(pk=booking.pk)
