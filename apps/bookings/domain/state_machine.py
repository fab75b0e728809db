"""
Booking Status State Machine

State transitions (all externally requested, nothing happens on its own):
- PENDING   -> CONFIRMED  (admin)
- PENDING   -> COMPLETED  (admin)
- CONFIRMED -> COMPLETED  (admin)
- PENDING   -> CANCELLED  (owner with a reason, or admin)
- CONFIRMED -> CANCELLED  (owner with a reason, or admin)

CANCELLED and COMPLETED are terminal.

Every permission decision for a status change is made here, against
the single transition table below.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .exceptions import BookingForbiddenError, BookingValidationError


class BookingStatus(str, Enum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


class Role(str, Enum):
    USER = 'user'
    ADMIN = 'admin'


@dataclass(frozen=True)
class Actor:
    """
    Explicit identity context for a core call

    Built by the caller from its authenticated principal. The core never
    authenticates and never reads request or session state.
    """
    user_id: Any
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def owns(self, owner_id: Any) -> bool:
        return str(self.user_id) == str(owner_id)


# Statuses that count toward the overlap invariant
ACTIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})

TERMINAL_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED})


class _Permission(str, Enum):
    ADMIN_ONLY = 'admin_only'
    OWNER_OR_ADMIN = 'owner_or_admin'


_TRANSITIONS = {
    (BookingStatus.PENDING, BookingStatus.CONFIRMED): _Permission.ADMIN_ONLY,
    (BookingStatus.PENDING, BookingStatus.COMPLETED): _Permission.ADMIN_ONLY,
    (BookingStatus.CONFIRMED, BookingStatus.COMPLETED): _Permission.ADMIN_ONLY,
    (BookingStatus.PENDING, BookingStatus.CANCELLED): _Permission.OWNER_OR_ADMIN,
    (BookingStatus.CONFIRMED, BookingStatus.CANCELLED): _Permission.OWNER_OR_ADMIN,
}


def parse_status(value: Any) -> BookingStatus:
    """Convert raw input to a BookingStatus, or fail with a validation error."""
    try:
        return BookingStatus(value)
    except ValueError:
        raise BookingValidationError(f"Invalid status: {value!r}")


def is_active(status: Any) -> bool:
    try:
        return BookingStatus(status) in ACTIVE_STATUSES
    except ValueError:
        return False


def authorize_transition(
    *,
    actor: Actor,
    owner_id: Any,
    current: Any,
    target: BookingStatus,
    cancellation_reason: Optional[str] = None,
) -> None:
    """
    Check that ``actor`` may move a booking owned by ``owner_id`` from
    ``current`` to ``target``.

    Raises:
        BookingForbiddenError: actor is neither the owner nor an admin, or
            the owner asked for an admin-only transition
        BookingValidationError: the booking is terminal, the transition is
            not in the table, or an owner cancels without a reason
    """
    if not actor.is_admin and not actor.owns(owner_id):
        raise BookingForbiddenError("Not authorized to update this booking")

    current = BookingStatus(current)
    if current in TERMINAL_STATUSES:
        raise BookingValidationError(
            f"Booking is already {current.value} and cannot be changed"
        )

    permission = _TRANSITIONS.get((current, target))
    if permission is None:
        raise BookingValidationError(
            f"Cannot change booking status from {current.value} to {target.value}"
        )

    if actor.is_admin:
        return

    if permission is _Permission.ADMIN_ONLY:
        raise BookingForbiddenError("Only admin can update booking status")

    if target is BookingStatus.CANCELLED and not (cancellation_reason or "").strip():
        raise BookingValidationError("Cancellation reason is required")
