"""
Event bus for engine notifications.

Provides a pub/sub channel between the game engine and whatever renders it.
Dispatch is synchronous: handlers run before `publish` returns.
"""

import logging
from collections import defaultdict
from collections.abc import Callable

from .events import Event, EventType


logger = logging.getLogger(__name__)


class EventBus:
    """
    Simple pub/sub event bus.

    Usage:
        bus = EventBus()
        bus.subscribe(EventType.MOVE_MADE, my_handler)
        bus.publish(Event(type=EventType.MOVE_MADE, data=move))
    """

    def __init__(self, max_log_size: int = 100) -> None:
        self._handlers: dict[EventType, list[Callable[[Event], None]]] = defaultdict(
            list
        )
        self._event_log: list[Event] = []
        self._log_enabled = True
        self._max_log_size = max_log_size

    def subscribe(
        self, event_type: EventType, handler: Callable[[Event], None]
    ) -> None:
        """Register a handler for an event type."""
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)

    def unsubscribe(
        self, event_type: EventType, handler: Callable[[Event], None]
    ) -> None:
        """Remove a handler."""
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def subscribe_all(self, handler: Callable[[Event], None]) -> None:
        """Register a handler for every event type."""
        for event_type in EventType:
            self.subscribe(event_type, handler)

    def publish(self, event: Event) -> None:
        """Publish event to all registered handlers."""
        if self._log_enabled:
            self._log_event(event)
        self._dispatch(event)

    def _dispatch(self, event: Event) -> None:
        """Dispatch event to all registered handlers."""
        handlers = self._handlers[event.type].copy()

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Handler error for %s", event.type.name)

    def _log_event(self, event: Event) -> None:
        """Add event to log."""
        self._event_log.append(event)
        if len(self._event_log) > self._max_log_size:
            self._event_log.pop(0)

    def get_event_log(self, limit: int = 20) -> list[Event]:
        """Get recent events from log."""
        return self._event_log[-limit:]

    def clear_log(self) -> None:
        """Clear event log."""
        self._event_log.clear()
