"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Create a new booking for a room
- TransitionBookingStatusCommand: Move a booking through the state machine
- DeleteBookingCommand: Remove a booking record (admin only)
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional
import logging

from shared.application.uow import DjangoUnitOfWork
from shared.infrastructure.locks import booking_locks, room_locks
from apps.bookings.domain.events import BookingCreated, BookingDeleted, BookingStatusChanged
from apps.bookings.domain.exceptions import (
    BookingConflictError,
    BookingForbiddenError,
    BookingNotFoundError,
    BookingValidationError,
)
from apps.bookings.domain.state_machine import Actor, BookingStatus, authorize_transition, parse_status
from apps.bookings.domain.value_objects import Guests
from apps.bookings.models import Booking
from apps.bookings.services import (
    AvailabilityChecker,
    booking_settings,
    calculate_total_price,
    refresh_room_availability,
    to_date_range,
)

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    This is the primary entry point for creating bookings.
    """
    actor: Actor
    hotel_id: Any
    room_id: Any
    check_in: date
    check_out: date
    adults: int
    children: int = 0
    special_requests: str = ''


@dataclass
class TransitionBookingStatusCommand:
    """Command to change the status of a booking"""
    actor: Actor
    booking_id: Any
    new_status: Any
    cancellation_reason: Optional[str] = None


@dataclass
class DeleteBookingCommand:
    """Command to delete a booking record"""
    actor: Actor
    booking_id: Any


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    This implements the critical business logic for creating bookings
    with double booking prevention.

    Strategy (Defense in Depth):
    1. Validate dates, guests and room (no writes, no availability check)
    2. Take the in-process lock for the room
    3. Start database transaction (atomic)
    4. Reload the room with SELECT FOR UPDATE (pessimistic lock)
    5. Check availability against active bookings
    6. Compute price and insert the booking
    7. Recompute the room's is_available hint
    8. Commit transaction, then publish BookingCreated
    9. PostgreSQL EXCLUDE constraint as final safety net
    """

    def __init__(self, booking_repo, room_repo):
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.checker = AvailabilityChecker(booking_repo)

    def handle(self, command: CreateBookingCommand) -> Booking:
        """
        Handle booking creation

        Returns: Created Booking model instance

        Raises:
            BookingValidationError: bad dates, bad guests, or unknown room/hotel
            BookingConflictError: the room is taken for some of the dates
        """
        logger.info(
            f"Creating booking for room {command.room_id} in hotel {command.hotel_id}, "
            f"user {command.actor.user_id}, dates {command.check_in} - {command.check_out}"
        )

        dates = to_date_range(command.check_in, command.check_out)
        guests = Guests(adults=command.adults, children=command.children)
        status = parse_status(booking_settings()["INITIAL_STATUS"])

        try:
            room = self.room_repo.get_room(command.room_id, command.hotel_id)
        except BookingNotFoundError:
            raise BookingValidationError("Invalid room or hotel")

        with room_locks.hold(room.pk):
            with DjangoUnitOfWork() as uow:
                room = self.room_repo.get_room(room.pk, command.hotel_id, lock=True)

                if self.checker.is_overlapping(room.pk, dates.start_date, dates.end_date):
                    logger.warning(
                        f"Room {room.pk} is not available for {dates}, "
                        f"rejecting booking for user {command.actor.user_id}"
                    )
                    raise BookingConflictError("Room is not available for the selected dates")

                total_price = calculate_total_price(room.price, dates)

                booking = self.booking_repo.insert_booking(Booking(
                    user_id=command.actor.user_id,
                    hotel_id=room.hotel_id,
                    room_id=room.pk,
                    check_in=dates.start_date,
                    check_out=dates.end_date,
                    adults=guests.adults,
                    children=guests.children,
                    total_nights=dates.nights,
                    total_price=total_price.amount,
                    currency=total_price.currency,
                    status=status.value,
                    special_requests=command.special_requests or '',
                ))

                refresh_room_availability(room, self.checker, self.room_repo)

                uow.add_event(BookingCreated(
                    aggregate_id=booking.pk,
                    booking_id=booking.pk,
                    room_id=room.pk,
                    hotel_id=room.hotel_id,
                    user_id=command.actor.user_id,
                    check_in=dates.start_date,
                    check_out=dates.end_date,
                    total_price=total_price.amount,
                    status=booking.status,
                ))

        logger.info(
            f"Booking created successfully: #{booking.pk} "
            f"({dates.nights} nights, {total_price})"
        )

        return booking


class TransitionBookingStatusHandler:
    """Handler for status changes (confirm, complete, cancel)"""

    def __init__(self, booking_repo, room_repo):
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.checker = AvailabilityChecker(booking_repo)

    def handle(self, command: TransitionBookingStatusCommand) -> Booking:
        target = parse_status(command.new_status)
        logger.info(f"Changing booking {command.booking_id} status to {target.value}")

        with booking_locks.hold(command.booking_id):
            with DjangoUnitOfWork() as uow:
                booking = self.booking_repo.find_booking_by_id(command.booking_id, lock=True)
                old_status = booking.status

                authorize_transition(
                    actor=command.actor,
                    owner_id=booking.user_id,
                    current=old_status,
                    target=target,
                    cancellation_reason=command.cancellation_reason,
                )

                reason = command.cancellation_reason if target is BookingStatus.CANCELLED else None
                booking = self.booking_repo.update_booking_status(booking.pk, target.value, reason)

                room = self.room_repo.get_room(booking.room_id, lock=True)
                refresh_room_availability(room, self.checker, self.room_repo)

                uow.add_event(BookingStatusChanged(
                    aggregate_id=booking.pk,
                    booking_id=booking.pk,
                    room_id=booking.room_id,
                    old_status=old_status,
                    new_status=booking.status,
                    changed_by=command.actor.user_id,
                    cancellation_reason=reason,
                ))

        logger.info(f"Booking #{booking.pk} moved from {old_status} to {booking.status}")

        return booking


class DeleteBookingHandler:
    """
    Handler for removing a booking record

    Admin-only escape hatch around the state machine. The room's dates
    are released and its hint recomputed in the same transaction.
    """

    def __init__(self, booking_repo, room_repo):
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.checker = AvailabilityChecker(booking_repo)

    def handle(self, command: DeleteBookingCommand) -> None:
        logger.info(f"Deleting booking {command.booking_id}")

        with booking_locks.hold(command.booking_id):
            with DjangoUnitOfWork() as uow:
                booking = self.booking_repo.find_booking_by_id(command.booking_id, lock=True)

                if not command.actor.is_admin:
                    raise BookingForbiddenError("Only admin can delete bookings")

                self.booking_repo.delete_booking(booking.pk)

                room = self.room_repo.get_room(booking.room_id, lock=True)
                refresh_room_availability(room, self.checker, self.room_repo)

                uow.add_event(BookingDeleted(
                    aggregate_id=command.booking_id,
                    booking_id=command.booking_id,
                    room_id=booking.room_id,
                    status=booking.status,
                    deleted_by=command.actor.user_id,
                ))

        logger.info(f"Booking {command.booking_id} deleted")
