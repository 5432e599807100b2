"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, List, Optional

from ..enums import OrderStatus, PaymentStatus
from ..events.base import DomainEvent
from ..events.order_events import (
    OrderPlacedEvent,
    OrderStatusChangedEvent,
    PaymentStatusChangedEvent,
    StockReleasedEvent,
)
from ..exceptions import InvalidStateError, ValidationError
from ..value_objects import ExecutionID, Money, OrderNumber
from .catalog import SparePart


# Payment states from which a reviewer may still confirm or reject
_REVIEWABLE_PAYMENT = (PaymentStatus.PENDING, PaymentStatus.IN_REVIEW)
_PROOF_ACCEPTING_ORDER = (OrderStatus.PENDING, OrderStatus.PAYMENT_REVIEW)
# Entered only through creation and proof submission
_NON_DIRECT_TARGETS = (OrderStatus.PENDING, OrderStatus.PAYMENT_REVIEW)


@dataclass
class OrderDetail:
    """Immutable line item: one spare part, one quantity, one price snapshot."""
    spare_part_id: int
    quantity: int
    unit_price: Money
    discount: Money
    total: Money
    id: Optional[int] = None

    # Read-time projection of the part's current owner; never persisted
    business_id: Optional[int] = None
    spare_part_name: Optional[str] = None

    @classmethod
    def for_spare_part(cls, spare_part: SparePart, quantity: int) -> "OrderDetail":
        """Snapshot price and discount of `spare_part` for `quantity` units."""
        if quantity <= 0:
            raise ValidationError(
                f"Quantity for spare part {spare_part.id} must be greater than zero"
            )
        gross = spare_part.price * quantity
        discount = gross.percentage(spare_part.discount_percentage)
        return cls(
            spare_part_id=spare_part.id,
            quantity=quantity,
            unit_price=spare_part.price,
            discount=discount,
            total=gross - discount,
            business_id=spare_part.business_id,
            spare_part_name=spare_part.name,
        )

    def calculate_total(self) -> Money:
        """Recalculate total based on quantity, unit price and discount."""
        calculated = self.unit_price * self.quantity - self.discount
        if calculated != self.total:
            raise ValidationError(f"Line total mismatch: {calculated} vs {self.total}")
        return calculated


@dataclass
class Payment:
    """Payment record, created together with its order."""
    payment_method_id: int
    amount: Money
    status: PaymentStatus = PaymentStatus.PENDING
    user_id: Optional[int] = None
    id: Optional[int] = None
    payment_date: Optional[datetime] = None
    proof_image: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class Order:
    """
    Order aggregate root.

    Owns its line items and its payment record. Every status change goes
    through one of the transition methods below, which enforce the state
    machine and collect domain events for publication after commit.

    State machine:
    pending → payment_review → processing → shipped → delivered
       ↘ cancelled (owner/admin cancel, or payment rejection; releases stock)
    """
    user_id: int
    order_number: OrderNumber
    details: List[OrderDetail] = field(default_factory=list)
    payment: Optional[Payment] = None
    status: OrderStatus = OrderStatus.PENDING

    shipping_address: Optional[str] = None
    shipping_phone: Optional[str] = None
    shipping_notes: Optional[str] = None

    subtotal: Money = field(default_factory=Money.zero)
    shipping_cost: Money = field(default_factory=Money.zero)
    discount: Money = field(default_factory=Money.zero)
    total: Money = field(default_factory=Money.zero)

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    execution_id: Optional[ExecutionID] = None

    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    # =========================================================================
    # CREATION
    # =========================================================================

    @classmethod
    def place(
        cls,
        user_id: int,
        details: List[OrderDetail],
        payment_method_id: int,
        shipping_address: Optional[str] = None,
        shipping_phone: Optional[str] = None,
        shipping_notes: Optional[str] = None,
        shipping_cost: Optional[Money] = None,
        discount: Optional[Money] = None,
        order_number: Optional[OrderNumber] = None,
        execution_id: Optional[ExecutionID] = None,
    ) -> "Order":
        """Build a new pending order with its pending payment.

        Raises:
            ValidationError: If the cart is empty or totals are inconsistent
        """
        if not details:
            raise ValidationError("Please add at least one item to the order")

        order = cls(
            user_id=user_id,
            order_number=order_number or OrderNumber.generate(),
            details=list(details),
            shipping_address=shipping_address,
            shipping_phone=shipping_phone,
            shipping_notes=shipping_notes,
            shipping_cost=shipping_cost or Money.zero(),
            discount=discount or Money.zero(),
            execution_id=execution_id,
        )
        order._recalculate_totals()
        order.verify_totals()
        order.payment = Payment(
            payment_method_id=payment_method_id,
            amount=order.total,
            user_id=user_id,
        )
        order._record_event(
            OrderPlacedEvent(
                order_number=order.order_number.value,
                total=order.total.amount,
                line_count=len(order.details),
                business_ids=sorted(order.business_ids),
                user_id=str(user_id),
                execution_id=order._execution_id_str(),
            )
        )
        return order

    def _recalculate_totals(self) -> None:
        """Internal: subtotal is the sum of line totals."""
        subtotal = Money.zero()
        for detail in self.details:
            subtotal = subtotal + detail.total
        self.subtotal = subtotal
        self.total = self.subtotal - self.discount + self.shipping_cost

    def verify_totals(self) -> None:
        """Check `total = subtotal - discount + shipping_cost` and line totals.

        Raises:
            ValidationError: On any mismatch or a negative total
        """
        line_sum = Money.zero()
        for detail in self.details:
            line_sum = line_sum + detail.calculate_total()
        if line_sum != self.subtotal:
            raise ValidationError(f"Subtotal mismatch: {line_sum} vs {self.subtotal}")

        expected = self.subtotal - self.discount + self.shipping_cost
        if expected != self.total:
            raise ValidationError(f"Total mismatch: {expected} vs {self.total}")
        if self.total.is_negative():
            raise ValidationError("Order total cannot be negative")

    # =========================================================================
    # DERIVED RELATIONSHIPS
    # =========================================================================

    @property
    def business_ids(self) -> FrozenSet[int]:
        """Businesses owning at least one line item (computed, never stored)."""
        return frozenset(d.business_id for d in self.details if d.business_id is not None)

    def involves_business(self, business_id: int) -> bool:
        return business_id in self.business_ids

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def submit_payment_proof(self, proof_image: str, submitted_at: datetime) -> None:
        """Attach proof and move payment and order into review."""
        payment = self._require_payment()
        if payment.status not in _REVIEWABLE_PAYMENT or self.status not in _PROOF_ACCEPTING_ORDER:
            raise InvalidStateError(
                f"Cannot submit payment proof while order is {self.status.value} "
                f"and payment is {payment.status.value}"
            )
        payment.proof_image = proof_image
        payment.payment_date = submitted_at
        self._set_payment_status(PaymentStatus.IN_REVIEW)
        self._set_status(OrderStatus.PAYMENT_REVIEW, "Payment proof submitted")

    def apply_payment_status(self, target: PaymentStatus) -> List[OrderDetail]:
        """Reviewer decision on the payment.

        Returns:
            Line items whose stock must be released (empty unless rejected)

        Raises:
            ValidationError: If target is not a reviewer decision
            InvalidStateError: If the current state does not allow it
        """
        if target == PaymentStatus.COMPLETED:
            self._complete_payment()
            return []
        if target == PaymentStatus.REJECTED:
            return self._reject_payment()
        if target == PaymentStatus.REFUNDED:
            self._refund_payment()
            return []
        raise ValidationError(
            f"Payment status must be one of completed, rejected, refunded; got {target.value}"
        )

    def _complete_payment(self) -> None:
        payment = self._require_payment()
        self._ensure_payment_reviewable(payment, "complete")
        self._set_payment_status(PaymentStatus.COMPLETED)
        self._set_status(OrderStatus.PROCESSING, "Payment completed")

    def _reject_payment(self) -> List[OrderDetail]:
        payment = self._require_payment()
        self._ensure_payment_reviewable(payment, "reject")
        self._set_payment_status(PaymentStatus.REJECTED)
        self._set_status(OrderStatus.CANCELLED, "Payment rejected")
        return list(self.details)

    def _refund_payment(self) -> None:
        payment = self._require_payment()
        if payment.status != PaymentStatus.COMPLETED:
            raise InvalidStateError(
                f"Only completed payments can be refunded (payment is {payment.status.value})"
            )
        self._set_payment_status(PaymentStatus.REFUNDED)

    def cancel(self) -> List[OrderDetail]:
        """Cancel a pending order.

        Returns:
            Line items whose stock must be released
        """
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Only pending orders can be cancelled (order is {self.status.value})"
            )
        self._set_status(OrderStatus.CANCELLED, "Cancelled by customer or admin")
        if self.payment is not None:
            self._set_payment_status(PaymentStatus.CANCELLED)
        return list(self.details)

    def update_status(self, target: OrderStatus) -> None:
        """Direct status change by admin or owning business; no stock effect."""
        if self.status == OrderStatus.CANCELLED:
            raise InvalidStateError("Cancelled orders cannot change status")
        if target == OrderStatus.CANCELLED:
            raise ValidationError(
                "Use order cancellation or payment rejection to cancel an order"
            )
        if target in _NON_DIRECT_TARGETS:
            raise ValidationError(
                f"Order status cannot be set back to {target.value} directly"
            )
        self._set_status(target, "Status updated directly")

    def record_stock_released(self, detail: OrderDetail) -> None:
        self._record_event(
            StockReleasedEvent(
                order_number=self.order_number.value,
                spare_part_id=detail.spare_part_id,
                quantity=detail.quantity,
                execution_id=self._execution_id_str(),
            )
        )

    def _ensure_payment_reviewable(self, payment: Payment, action: str) -> None:
        if self.status == OrderStatus.CANCELLED:
            raise InvalidStateError(f"Cannot {action} payment of a cancelled order")
        if payment.status not in _REVIEWABLE_PAYMENT:
            raise InvalidStateError(
                f"Cannot {action} payment in status {payment.status.value}"
            )

    def _require_payment(self) -> Payment:
        if self.payment is None:
            raise InvalidStateError(f"Order {self.order_number} has no payment record")
        return self.payment

    def _set_status(self, new_status: OrderStatus, reason: Optional[str] = None) -> None:
        previous = self.status
        if previous == new_status:
            return
        self.status = new_status
        self._record_event(
            OrderStatusChangedEvent(
                order_number=self.order_number.value,
                previous_status=previous.value,
                new_status=new_status.value,
                reason=reason,
                execution_id=self._execution_id_str(),
            )
        )

    def _set_payment_status(self, new_status: PaymentStatus) -> None:
        payment = self._require_payment()
        previous = payment.status
        if previous == new_status:
            return
        payment.status = new_status
        self._record_event(
            PaymentStatusChangedEvent(
                order_number=self.order_number.value,
                previous_status=previous.value,
                new_status=new_status.value,
                execution_id=self._execution_id_str(),
            )
        )

    # =========================================================================
    # EVENT COLLECTION
    # =========================================================================

    def get_domain_events(self) -> List[DomainEvent]:
        """Events collected since the last clear (published after commit)."""
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def _record_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    def _execution_id_str(self) -> Optional[str]:
        return str(self.execution_id.value) if self.execution_id else None
