"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from core.domain.entities import Order, OrderDetail, Payment
from core.domain.enums import OrderStatus, PaymentStatus


# =============================================================================
# REQUESTS
# =============================================================================

class OrderItemRequest(BaseModel):
    """One cart entry."""

    spare_part_id: int = Field(..., description="Spare part ID")
    quantity: int = Field(..., gt=0, description="Quantity ordered")

    model_config = {"frozen": True}


class CreateOrderRequest(BaseModel):
    """Request DTO for creating an order."""

    items: List[OrderItemRequest] = Field(default_factory=list, description="Cart items")
    shipping_address: str = Field(..., min_length=1, description="Shipping address")
    shipping_phone: Optional[str] = Field(None, max_length=20, description="Contact phone")
    shipping_notes: Optional[str] = Field(None, description="Delivery notes")
    payment_method: int = Field(..., description="Business payment method ID")

    model_config = {"frozen": True}


class UpdateOrderStatusRequest(BaseModel):
    """Request DTO for a direct order status change."""

    status: OrderStatus


class UpdatePaymentStatusRequest(BaseModel):
    """Request DTO for a reviewer decision on the payment."""

    status: PaymentStatus


# =============================================================================
# RESPONSES
# =============================================================================

class OrderDetailDTO(BaseModel):
    """Response DTO for a line item."""

    id: Optional[int] = None
    spare_part_id: int
    spare_part_name: Optional[str] = None
    business_id: Optional[int] = None
    quantity: int
    unit_price: Decimal
    discount: Decimal
    total: Decimal

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, detail: OrderDetail) -> "OrderDetailDTO":
        return cls(
            id=detail.id,
            spare_part_id=detail.spare_part_id,
            spare_part_name=detail.spare_part_name,
            business_id=detail.business_id,
            quantity=detail.quantity,
            unit_price=detail.unit_price.amount,
            discount=detail.discount.amount,
            total=detail.total.amount,
        )


class PaymentDTO(BaseModel):
    """Response DTO for the payment record."""

    id: Optional[int] = None
    payment_method_id: int
    amount: Decimal
    payment_status: PaymentStatus
    payment_date: Optional[datetime] = None
    proof_image: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentDTO":
        return cls(
            id=payment.id,
            payment_method_id=payment.payment_method_id,
            amount=payment.amount.amount,
            payment_status=payment.status,
            payment_date=payment.payment_date,
            proof_image=payment.proof_image,
            reference_number=payment.reference_number,
            notes=payment.notes,
        )


class OrderDTO(BaseModel):
    """Response DTO for an order with its line items and payment."""

    id: int
    order_number: str
    user_id: int
    status: OrderStatus
    shipping_address: Optional[str] = None
    shipping_phone: Optional[str] = None
    shipping_notes: Optional[str] = None
    subtotal: Decimal
    shipping_cost: Decimal
    discount: Decimal
    total: Decimal
    details: List[OrderDetailDTO] = Field(default_factory=list)
    payment: Optional[PaymentDTO] = None
    business_ids: List[int] = Field(default_factory=list, description="Businesses owning line items")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    execution_id: Optional[str] = Field(None, description="Execution ID for tracing")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, order: Order, execution_id: Optional[str] = None) -> "OrderDTO":
        """Transform Order aggregate to OrderDTO."""
        return cls(
            id=order.id,
            order_number=order.order_number.value,
            user_id=order.user_id,
            status=order.status,
            shipping_address=order.shipping_address,
            shipping_phone=order.shipping_phone,
            shipping_notes=order.shipping_notes,
            subtotal=order.subtotal.amount,
            shipping_cost=order.shipping_cost.amount,
            discount=order.discount.amount,
            total=order.total.amount,
            details=[OrderDetailDTO.from_domain(d) for d in order.details],
            payment=PaymentDTO.from_domain(order.payment) if order.payment else None,
            business_ids=sorted(order.business_ids),
            created_at=order.created_at,
            updated_at=order.updated_at,
            execution_id=execution_id,
        )


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    count: int = Field(..., ge=0, description="Number of orders returned")

    model_config = {"frozen": True}
