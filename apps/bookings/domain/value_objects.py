"""Booking-specific value objects."""

from dataclasses import dataclass

from shared.domain.base import ValueObject

from .exceptions import BookingValidationError


@dataclass(frozen=True)
class Guests(ValueObject):
    """Guest counts for a stay: at least one adult, no negative children."""
    adults: int
    children: int = 0

    def __post_init__(self):
        if isinstance(self.adults, bool) or not isinstance(self.adults, int) or self.adults < 1:
            raise BookingValidationError("At least one adult guest is required")
        if isinstance(self.children, bool) or not isinstance(self.children, int) or self.children < 0:
            raise BookingValidationError("Children count must be non-negative")

    def to_dict(self) -> dict:
        return {'adults': self.adults, 'children': self.children}
