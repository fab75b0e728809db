"""
Message Bus

Routes booking commands from the API layer to their handlers and fans
committed domain events out to subscribers such as the audit log.
Handlers are registered once, in ``BookingsConfig.ready()``.
"""

from typing import Any, Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Commands: exactly one handler per command type, result returned to caller
    Events: any number of subscribers, called after the transaction commits
    """

    def __init__(self):
        self._command_handlers: Dict[Type, Callable[[Any], Any]] = {}
        self._subscribers: Dict[Type[DomainEvent], List[Callable[[DomainEvent], None]]] = {}

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    def register_command_handler(self, command_type: Type, handler: Callable[[Any], Any]):
        if self.has_command_handler(command_type):
            raise ValueError(f"{command_type.__name__} already has a handler")
        self._command_handlers[command_type] = handler
        logger.debug(f"{command_type.__name__} -> {getattr(handler, '__qualname__', handler)}")

    def register_event_handler(self, event_type: Type[DomainEvent], handler: Callable[[DomainEvent], None]):
        """Subscribe ``handler`` to ``event_type``; subscribing twice is a no-op."""
        subscribers = self._subscribers.setdefault(event_type, [])
        if handler not in subscribers:
            subscribers.append(handler)
            logger.debug(f"{event_type.__name__} subscriber added: {getattr(handler, '__name__', handler)}")

    def handle_command(self, command: Any) -> Any:
        """
        Run the handler registered for ``type(command)`` and return its result.

        Errors raised by the handler propagate unchanged. Booking errors carry
        a ``code`` and are expected outcomes (conflict, forbidden, ...), so
        they are logged at INFO; anything else is logged with a traceback.
        """
        name = type(command).__name__
        handler = self._command_handlers.get(type(command))
        if handler is None:
            raise ValueError(f"No handler registered for {name}")

        logger.info(f"Handling {name}")
        try:
            return handler(command)
        except Exception as e:
            code = getattr(e, "code", None)
            if code is not None:
                logger.info(f"{name} rejected ({code}): {e}")
            else:
                logger.exception(f"{name} failed unexpectedly")
            raise

    def publish_events(self, events: List[DomainEvent]):
        """
        Deliver committed events to their subscribers.

        The booking is already stored when this runs, so a failing subscriber
        is logged and the remaining subscribers still get the event.
        """
        for event in events:
            name = type(event).__name__
            subscribers = self._subscribers.get(type(event), [])
            logger.info(f"Publishing {name} {event.event_id} to {len(subscribers)} subscriber(s)")

            for subscriber in subscribers:
                try:
                    subscriber(event)
                except Exception:
                    logger.exception(
                        f"Subscriber {getattr(subscriber, '__name__', subscriber)} failed on {name} {event.event_id}"
                    )


# Global message bus instance
message_bus = MessageBus()
