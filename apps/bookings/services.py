"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.value_objects import DateRange, Money

from .domain.exceptions import BookingValidationError
from .domain.schedule import RoomSchedule

logger = logging.getLogger(__name__)


def booking_settings() -> dict:
    defaults = {
        "INITIAL_STATUS": "pending",
        "CURRENCY": "USD",
    }
    return {**defaults, **getattr(settings, "BOOKINGS", {})}


def to_date_range(check_in, check_out) -> DateRange:
    if check_in is None or check_out is None or not check_in < check_out:
        raise BookingValidationError("Check-out date must be after check-in date")
    return DateRange(check_in, check_out)


class AvailabilityChecker:
    """
    Answers whether a room is taken for a date range.

    This is the one place availability is decided. It reads the active
    bookings of the room through the booking repository and has no side
    effects, so it is safe to call from read-only endpoints. Callers that
    act on the answer must hold the room lock around the call and the
    write that follows.
    """

    def __init__(self, booking_repo):
        self.booking_repo = booking_repo

    def room_schedule(self, room_id) -> RoomSchedule:
        return RoomSchedule.from_bookings(
            room_id, self.booking_repo.find_active_bookings_for_room(room_id)
        )

    def is_overlapping(
        self,
        room_id,
        check_in,
        check_out,
        exclude_booking_id=None,
    ) -> bool:
        dates = to_date_range(check_in, check_out)
        overlapping = self.room_schedule(room_id).overlapping(dates, exclude_booking_id)
        if overlapping:
            booking_ids = [allocation.booking_id for allocation in overlapping]
            logger.debug(f"Room {room_id} overlaps {dates} with bookings {booking_ids}")
        return bool(overlapping)


def calculate_total_price(price_per_night, dates: DateRange, currency: Optional[str] = None) -> Money:
    """nights * nightly price, where a partial day counts as a full night."""
    nightly = Money(Decimal(str(price_per_night)), currency or booking_settings()["CURRENCY"])
    return nightly * dates.nights


def refresh_room_availability(room, checker: AvailabilityChecker, room_repo, today: Optional[date] = None) -> bool:
    """
    Recompute the cached ``Room.is_available`` hint from active bookings.

    The hint says whether the room is free today. It is never read by the
    availability check itself.
    """
    today = today or timezone.localdate()
    is_available = checker.room_schedule(room.pk).is_free_on(today)
    room_repo.save_availability_hint(room, is_available)
    return is_available
