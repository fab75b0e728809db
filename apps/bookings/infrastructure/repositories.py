"""
Django ORM repositories for the booking core

These are the only places where the core touches the database. Command
handlers receive them through their constructors, so tests can pass
doubles in their place.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from django.db import IntegrityError, transaction  # type: ignore

from apps.hotels.models import Room
from shared.infrastructure.locks import lock_queryset_if_possible

from ..domain.exceptions import BookingConflictError, BookingNotFoundError
from ..models import OVERLAP_CONSTRAINT_NAME, Booking

logger = logging.getLogger(__name__)


class DjangoRoomRepository:
    """Room lookup."""

    def get_room(self, room_id, hotel_id=None, *, lock: bool = False) -> Room:
        """
        Return the room, optionally scoped to ``hotel_id``.

        With ``lock=True`` inside a transaction the room row is taken with
        SELECT ... FOR UPDATE, which serializes booking commits for that
        room across processes.
        """
        queryset = Room.objects.select_related("hotel")
        if hotel_id is not None:
            queryset = queryset.filter(hotel_id=hotel_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        try:
            return queryset.get(pk=room_id)
        except (Room.DoesNotExist, ValueError, TypeError):
            raise BookingNotFoundError(f"Room {room_id} not found")

    def save_availability_hint(self, room: Room, is_available: bool) -> None:
        if room.is_available == is_available:
            return
        room.is_available = is_available
        room.save(update_fields=["is_available", "updated_at"])


class DjangoBookingRepository:
    """Booking persistence."""

    def find_active_bookings_for_room(self, room_id) -> List[Booking]:
        return list(Booking.objects.for_room(room_id).active())

    def find_booking_by_id(self, booking_id, *, lock: bool = False) -> Booking:
        queryset = Booking.objects.all()
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        try:
            return queryset.get(pk=booking_id)
        except (Booking.DoesNotExist, ValueError, TypeError):
            raise BookingNotFoundError(f"Booking {booking_id} not found")

    def insert_booking(self, booking: Booking) -> Booking:
        """
        Persist a new booking.

        A violation of the database overlap constraint means another
        writer won the race for these dates and is reported as a
        conflict.
        """
        try:
            with transaction.atomic():
                booking.save(force_insert=True)
        except IntegrityError as exc:
            if OVERLAP_CONSTRAINT_NAME in str(exc):
                logger.warning(f"Overlap constraint rejected booking for room {booking.room_id}")
                raise BookingConflictError("Room is not available for the selected dates") from exc
            raise
        return booking

    def update_booking_status(
        self,
        booking_id,
        status: str,
        reason: Optional[str] = None,
    ) -> Booking:
        booking = self.find_booking_by_id(booking_id)
        booking.status = status
        update_fields = ["status", "updated_at"]
        if reason is not None:
            booking.cancellation_reason = reason
            update_fields.append("cancellation_reason")
        booking.save(update_fields=update_fields)
        return booking

    def delete_booking(self, booking_id) -> None:
        deleted, _ = Booking.objects.filter(pk=booking_id).delete()
        if not deleted:
            raise BookingNotFoundError(f"Booking {booking_id} not found")
