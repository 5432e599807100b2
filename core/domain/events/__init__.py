"""Domain events for the event bus."""
from .base import DomainEvent
from .order_events import (
    OrderPlacedEvent,
    OrderStatusChangedEvent,
    PaymentStatusChangedEvent,
    StockReleasedEvent,
)

__all__ = [
    "DomainEvent",
    "OrderPlacedEvent",
    "OrderStatusChangedEvent",
    "PaymentStatusChangedEvent",
    "StockReleasedEvent",
]
