"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A new booking was committed

    The room's dates are now held by this booking.
    """
    booking_id: Any
    room_id: Any
    hotel_id: Any
    user_id: Any
    check_in: date
    check_out: date
    total_price: Decimal
    status: str


@dataclass
class BookingStatusChanged(DomainEvent):
    """
    Event: A booking moved through the status state machine

    When the new status is terminal the room's dates are free again.
    """
    booking_id: Any
    room_id: Any
    old_status: str
    new_status: str
    changed_by: Any
    cancellation_reason: Optional[str] = None


@dataclass
class BookingDeleted(DomainEvent):
    """
    Event: A booking record was removed by an administrator

    This bypasses the state machine.
    """
    booking_id: Any
    room_id: Any
    status: str
    deleted_by: Any
