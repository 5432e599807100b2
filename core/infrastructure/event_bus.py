"""
Event Bus Implementation (Infrastructure Layer).

Notifies in-process subscribers about order lifecycle events.
"""
import asyncio
import logging
from typing import Dict, List, Optional

from core.domain.event_bus import EventBus, EventHandler
from core.domain.events.base import DomainEvent


logger = logging.getLogger(__name__)

ALL_EVENTS = "*"


class InMemoryEventBus(EventBus):
    """
    In-Memory Event Bus Implementation.

    Features:
    - Handlers keyed by event type, plus "*" for every event
    - Sync and async handlers
    - A failing handler is logged and does not stop the others

    Events are delivered in publication order. Nothing is persisted:
    the order tables are the source of truth.
    """

    def __init__(self):
        """Initialize event bus with no subscribers."""
        self._handlers: Dict[str, List[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Event class name or "*"
            handler: Callback receiving the event
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.info(f"Registered event subscriber {_handler_name(handler)} for {event_type}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.info(f"Unregistered event subscriber {_handler_name(handler)} for {event_type}")

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event to its subscribers.

        Args:
            event: Domain event to publish
        """
        handlers = self._handlers.get(event.event_type, []) + self._handlers.get(ALL_EVENTS, [])
        if not handlers:
            return

        logger.debug(
            f"Publishing event: {event.event_type} (aggregate: {event.aggregate_id}, "
            f"handlers: {len(handlers)})"
        )

        for handler in handlers:
            try:
                result = handler(event)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error(
                    f"Subscriber {_handler_name(handler)} failed on {event.event_type}: {e}",
                    exc_info=True,
                )

    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        for event in events:
            await self.publish(event)


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", repr(handler))


def log_order_event(event: DomainEvent) -> None:
    """Audit subscriber: one log line per order lifecycle event."""
    data = event._get_event_data()
    order_number = data.pop("order_number", event.aggregate_id)
    details = ", ".join(f"{key}={value}" for key, value in data.items())
    logger.info(f"[{event.execution_id}] {event.event_type} {order_number}: {details}")


# Global event bus instance
_event_bus_instance: Optional[InMemoryEventBus] = None


def get_event_bus() -> InMemoryEventBus:
    """
    Get or create global event bus instance.

    Returns:
        Global InMemoryEventBus
    """
    global _event_bus_instance

    if _event_bus_instance is None:
        _event_bus_instance = InMemoryEventBus()

    return _event_bus_instance
