"""
Room Schedule

The consistency boundary for preventing double bookings. A schedule is
the set of date ranges held by the active bookings of one room; every
availability decision is made against it.

Cancelled and completed bookings never enter a schedule, so they never
block a stay.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, List, Optional

from shared.domain.base import ValueObject
from shared.domain.value_objects import DateRange

from .state_machine import is_active


@dataclass(frozen=True)
class Allocation(ValueObject):
    """A date range held by one booking."""
    booking_id: Any
    dates: DateRange


@dataclass
class RoomSchedule:
    """
    Key invariants:
    - No two allocations of the same room overlap
    - Only active bookings hold allocations

    Usage:
        schedule = RoomSchedule.from_bookings(room_id, active_bookings)
        if not schedule.overlapping(DateRange(check_in, check_out)):
            ...
    """

    room_id: Any
    allocations: List[Allocation] = field(default_factory=list)

    @classmethod
    def from_bookings(cls, room_id: Any, bookings: Iterable[Any]) -> 'RoomSchedule':
        """Build from objects exposing pk, room_id, check_in, check_out and status."""
        allocations = [
            Allocation(booking_id=booking.pk, dates=DateRange(booking.check_in, booking.check_out))
            for booking in bookings
            if str(booking.room_id) == str(room_id) and is_active(booking.status)
        ]
        return cls(room_id=room_id, allocations=allocations)

    def overlapping(self, dates: DateRange, exclude_booking_id: Optional[Any] = None) -> List[Allocation]:
        """Allocations that intersect ``dates``, ignoring ``exclude_booking_id``"""
        return [
            allocation for allocation in self.allocations
            if allocation.dates.overlaps_with(dates)
            and (exclude_booking_id is None or str(allocation.booking_id) != str(exclude_booking_id))
        ]

    def is_free_on(self, day: date) -> bool:
        return not any(allocation.dates.contains(day) for allocation in self.allocations)

    def __repr__(self):
        return f"RoomSchedule(room_id={self.room_id}, allocations={len(self.allocations)})"
