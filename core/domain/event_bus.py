"""
Event Bus Interface (Domain Layer).

Pure interface definition - no implementation details.
"""
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List, Union

from .events.base import DomainEvent

EventHandler = Callable[[DomainEvent], Union[None, Awaitable[None]]]


class EventBus(ABC):
    """
    Event Bus Interface.

    The workflow service publishes the events an aggregate collected
    once the surrounding transaction has committed; subscribers never
    run for work that was rolled back.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        pass

    @abstractmethod
    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        pass

    @abstractmethod
    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Subscribe a handler to an event type ("*" for every event).

        Args:
            event_type: Event class name, e.g. "OrderPlacedEvent"
            handler: Sync or async callable receiving the event
        """
        pass
