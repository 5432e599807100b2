"""
Order and Payment Status Enums.

Status values for the order lifecycle state machine.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order status values."""

    PENDING = "pending"
    PAYMENT_REVIEW = "payment_review"
    PAID = "paid"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Payment status values."""

    PENDING = "pending"
    IN_REVIEW = "in_review"
    COMPLETED = "completed"
    REJECTED = "rejected"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"
