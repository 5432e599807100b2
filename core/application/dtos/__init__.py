"""Application DTOs."""

from .order_dto import (
    CreateOrderRequest,
    OrderDetailDTO,
    OrderDTO,
    OrderItemRequest,
    OrderListDTO,
    PaymentDTO,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
)

__all__ = [
    "CreateOrderRequest",
    "OrderDetailDTO",
    "OrderDTO",
    "OrderItemRequest",
    "OrderListDTO",
    "PaymentDTO",
    "UpdateOrderStatusRequest",
    "UpdatePaymentStatusRequest",
]
