"""Tests for InMemoryEventBus."""

from decimal import Decimal

import pytest

from core.domain.events import OrderPlacedEvent, OrderStatusChangedEvent
from core.infrastructure.event_bus import ALL_EVENTS, InMemoryEventBus, log_order_event


def _placed() -> OrderPlacedEvent:
    return OrderPlacedEvent(
        order_number="ORD-20261017-9F3A61C2",
        total=Decimal("20.00"),
        line_count=1,
        business_ids=[1],
        execution_id="exec-test-123",
    )


@pytest.mark.asyncio
async def test_event_bus_subscribe_and_publish():
    """Handlers receive only the event types they subscribed to."""
    bus = InMemoryEventBus()
    placed: list = []
    changed: list = []

    async def on_placed(event):
        placed.append(event)

    bus.subscribe("OrderPlacedEvent", on_placed)
    bus.subscribe("OrderStatusChangedEvent", changed.append)

    await bus.publish(_placed())

    assert len(placed) == 1
    assert placed[0].aggregate_id == "ORD-20261017-9F3A61C2"
    assert changed == []


@pytest.mark.asyncio
async def test_wildcard_handler_sees_every_event_in_order():
    bus = InMemoryEventBus()
    received: list = []
    bus.subscribe(ALL_EVENTS, received.append)

    status_changed = OrderStatusChangedEvent(
        order_number="ORD-20261017-9F3A61C2", previous_status="pending", new_status="processing"
    )
    await bus.publish_all([_placed(), status_changed])

    assert [e.event_type for e in received] == ["OrderPlacedEvent", "OrderStatusChangedEvent"]


@pytest.mark.asyncio
async def test_event_bus_handler_error_isolation():
    """A failing handler does not prevent the others from running."""
    bus = InMemoryEventBus()
    received: list = []

    async def failing(event):
        raise RuntimeError("handler failed")

    bus.subscribe("OrderPlacedEvent", failing)
    bus.subscribe("OrderPlacedEvent", received.append)

    await bus.publish(_placed())

    assert len(received) == 1


@pytest.mark.asyncio
async def test_unsubscribe():
    bus = InMemoryEventBus()
    received: list = []
    bus.subscribe("OrderPlacedEvent", received.append)
    bus.unsubscribe("OrderPlacedEvent", received.append)

    await bus.publish(_placed())

    assert received == []


def test_log_order_event(caplog):
    with caplog.at_level("INFO", logger="core.infrastructure.event_bus"):
        log_order_event(_placed())

    assert "OrderPlacedEvent ORD-20261017-9F3A61C2" in caplog.text
    assert "total=20.00" in caplog.text
