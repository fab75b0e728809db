from django.apps import AppConfig


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookings"
    verbose_name = "Бронирования"

    def ready(self):
        from shared.application.message_bus import message_bus

        from .application.command_handlers import (
            CreateBookingCommand,
            CreateBookingHandler,
            DeleteBookingCommand,
            DeleteBookingHandler,
            TransitionBookingStatusCommand,
            TransitionBookingStatusHandler,
        )
        from .application.event_handlers import EVENT_HANDLERS
        from .infrastructure.repositories import DjangoBookingRepository, DjangoRoomRepository

        booking_repo = DjangoBookingRepository()
        room_repo = DjangoRoomRepository()
        command_handlers = {
            CreateBookingCommand: CreateBookingHandler(booking_repo, room_repo),
            TransitionBookingStatusCommand: TransitionBookingStatusHandler(booking_repo, room_repo),
            DeleteBookingCommand: DeleteBookingHandler(booking_repo, room_repo),
        }
        # ready() может вызываться повторно (например, в тестах).
        for command_type, handler in command_handlers.items():
            if not message_bus.has_command_handler(command_type):
                message_bus.register_command_handler(command_type, handler.handle)

        for event_type, handlers in EVENT_HANDLERS.items():
            for handler in handlers:
                message_bus.register_event_handler(event_type, handler)
