"""
Booking Event Handlers

Post-commit reactions to booking events. The only consumer today is the
audit log: each event is written as one structured record.
"""

import structlog

from apps.bookings.domain.events import BookingCreated, BookingDeleted, BookingStatusChanged

logger = structlog.get_logger(__name__)


def log_booking_created(event: BookingCreated):
    logger.info(
        "booking.created",
        booking_id=event.booking_id,
        room_id=event.room_id,
        hotel_id=event.hotel_id,
        user_id=event.user_id,
        check_in=event.check_in.isoformat(),
        check_out=event.check_out.isoformat(),
        total_price=str(event.total_price),
        status=event.status,
    )


def log_booking_status_changed(event: BookingStatusChanged):
    logger.info(
        "booking.status_changed",
        booking_id=event.booking_id,
        room_id=event.room_id,
        old_status=event.old_status,
        new_status=event.new_status,
        changed_by=event.changed_by,
        cancellation_reason=event.cancellation_reason,
    )


def log_booking_deleted(event: BookingDeleted):
    # Удаление в обход машины состояний, пишем как предупреждение.
    logger.warning(
        "booking.deleted",
        booking_id=event.booking_id,
        room_id=event.room_id,
        status=event.status,
        deleted_by=event.deleted_by,
    )


EVENT_HANDLERS = {
    BookingCreated: [log_booking_created],
    BookingStatusChanged: [log_booking_status_changed],
    BookingDeleted: [log_booking_deleted],
}
