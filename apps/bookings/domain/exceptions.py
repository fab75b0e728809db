"""
Booking Domain Errors

All four are expected outcomes that the caller can recover from. None
of them is raised after a write has been made visible: they are raised
before the first write, or inside the unit of work so that the rollback
discards whatever was written.
"""


class BookingError(Exception):
    """Base class for expected booking failures"""

    code = "booking_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class BookingValidationError(BookingError):
    """Malformed or out-of-range booking input"""

    code = "validation_error"


class BookingConflictError(BookingError):
    """Room is not available for the selected dates"""

    code = "conflict"


class BookingNotFoundError(BookingError):
    """Requested object does not exist"""

    code = "not_found"


class BookingForbiddenError(BookingError):
    """Actor is not allowed to perform this action"""

    code = "forbidden"
