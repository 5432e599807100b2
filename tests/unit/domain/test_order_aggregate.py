"""Tests for the Order aggregate: totals and the status state machine."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.domain.entities import Order, OrderDetail, SparePart
from core.domain.enums import OrderStatus, PaymentStatus, SparePartStatus
from core.domain.events import (
    OrderPlacedEvent,
    OrderStatusChangedEvent,
    PaymentStatusChangedEvent,
)
from core.domain.exceptions import (
    InsufficientStockError,
    InvalidStateError,
    UnavailableError,
    ValidationError,
)
from core.domain.value_objects import Money


def _part(part_id=1, business_id=1, price="10.00", stock=5, discount="0", status=SparePartStatus.ACTIVE):
    return SparePart(
        id=part_id,
        business_id=business_id,
        name=f"Part {part_id}",
        price=Money(Decimal(price)),
        stock=stock,
        status=status,
        discount_percentage=Decimal(discount),
    )


def _order(*lines, shipping="0.00"):
    details = [OrderDetail.for_spare_part(part, qty) for part, qty in lines]
    return Order.place(
        user_id=100,
        details=details,
        payment_method_id=1,
        shipping_address="Av. Bolivar 12",
        shipping_cost=Money(Decimal(shipping)),
    )


# =============================================================================
# CREATION
# =============================================================================

def test_line_item_snapshots_price_and_discount():
    detail = OrderDetail.for_spare_part(_part(price="15.50", discount="10"), 3)

    assert detail.unit_price == Money(Decimal("15.50"))
    assert detail.discount == Money(Decimal("4.65"))
    assert detail.total == Money(Decimal("41.85"))
    assert detail.business_id == 1


def test_line_item_rejects_non_positive_quantity():
    with pytest.raises(ValidationError):
        OrderDetail.for_spare_part(_part(), 0)


def test_place_computes_totals_and_pending_payment():
    order = _order(
        (_part(1, price="10.00"), 2),
        (_part(2, business_id=2, price="15.50", discount="10"), 3),
        shipping="5.00",
    )

    assert order.subtotal == Money(Decimal("61.85"))
    assert order.total == Money(Decimal("66.85"))
    assert order.status == OrderStatus.PENDING
    assert order.payment.status == PaymentStatus.PENDING
    assert order.payment.amount == order.total
    assert order.business_ids == frozenset({1, 2})

    events = order.get_domain_events()
    assert len(events) == 1
    assert isinstance(events[0], OrderPlacedEvent)
    assert events[0].business_ids == [1, 2]


def test_place_rejects_empty_cart():
    with pytest.raises(ValidationError, match="at least one item"):
        Order.place(user_id=100, details=[], payment_method_id=1)


def test_ensure_sellable():
    with pytest.raises(UnavailableError):
        _part(status=SparePartStatus.INACTIVE).ensure_sellable(1)
    with pytest.raises(InsufficientStockError):
        _part(stock=1).ensure_sellable(2)
    _part(stock=2).ensure_sellable(2)


# =============================================================================
# TRANSITIONS
# =============================================================================

def test_submit_payment_proof_moves_into_review():
    order = _order((_part(), 2))
    submitted_at = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)

    order.submit_payment_proof("/uploads/payments/proof.png", submitted_at)

    assert order.status == OrderStatus.PAYMENT_REVIEW
    assert order.payment.status == PaymentStatus.IN_REVIEW
    assert order.payment.payment_date == submitted_at
    assert order.payment.proof_image == "/uploads/payments/proof.png"


def test_completed_payment_moves_order_to_processing():
    order = _order((_part(), 2))

    released = order.apply_payment_status(PaymentStatus.COMPLETED)

    assert released == []
    assert order.status == OrderStatus.PROCESSING
    assert order.payment.status == PaymentStatus.COMPLETED


def test_rejected_payment_cancels_and_returns_every_line():
    order = _order((_part(1), 2), (_part(2), 1))

    released = order.apply_payment_status(PaymentStatus.REJECTED)

    assert [d.spare_part_id for d in released] == [1, 2]
    assert order.status == OrderStatus.CANCELLED
    assert order.payment.status == PaymentStatus.REJECTED


def test_refund_requires_completed_payment():
    order = _order((_part(), 1))
    with pytest.raises(InvalidStateError):
        order.apply_payment_status(PaymentStatus.REFUNDED)

    order.apply_payment_status(PaymentStatus.COMPLETED)
    released = order.apply_payment_status(PaymentStatus.REFUNDED)

    assert released == []
    assert order.payment.status == PaymentStatus.REFUNDED
    assert order.status == OrderStatus.PROCESSING


@pytest.mark.parametrize("target", [PaymentStatus.PENDING, PaymentStatus.IN_REVIEW, PaymentStatus.CANCELLED])
def test_payment_status_rejects_non_decisions(target):
    with pytest.raises(ValidationError):
        _order((_part(), 1)).apply_payment_status(target)


def test_cannot_review_payment_of_cancelled_order():
    order = _order((_part(), 1))
    order.cancel()
    with pytest.raises(InvalidStateError):
        order.apply_payment_status(PaymentStatus.COMPLETED)


def test_cancel_only_while_pending():
    order = _order((_part(), 2))
    released = order.cancel()
    assert order.status == OrderStatus.CANCELLED
    assert order.payment.status == PaymentStatus.CANCELLED
    assert len(released) == 1

    processing = _order((_part(), 2))
    processing.apply_payment_status(PaymentStatus.COMPLETED)
    with pytest.raises(InvalidStateError):
        processing.cancel()
    assert processing.status == OrderStatus.PROCESSING


def test_direct_status_update():
    order = _order((_part(), 1))
    order.update_status(OrderStatus.SHIPPED)
    assert order.status == OrderStatus.SHIPPED

    with pytest.raises(ValidationError):
        order.update_status(OrderStatus.CANCELLED)

    cancelled = _order((_part(), 1))
    cancelled.cancel()
    with pytest.raises(InvalidStateError):
        cancelled.update_status(OrderStatus.DELIVERED)


def test_direct_status_update_cannot_reopen_order():
    order = _order((_part(), 1))
    order.apply_payment_status(PaymentStatus.COMPLETED)

    for target in (OrderStatus.PENDING, OrderStatus.PAYMENT_REVIEW):
        with pytest.raises(ValidationError):
            order.update_status(target)

    assert order.status == OrderStatus.PROCESSING
    assert order.payment.status == PaymentStatus.COMPLETED


def test_transitions_record_events():
    order = _order((_part(), 1))
    order.clear_domain_events()

    order.apply_payment_status(PaymentStatus.COMPLETED)

    events = order.get_domain_events()
    assert [type(e) for e in events] == [PaymentStatusChangedEvent, OrderStatusChangedEvent]
    assert events[1].previous_status == "pending"
    assert events[1].new_status == "processing"
    assert events[1].to_dict()["aggregate_type"] == "Order"
