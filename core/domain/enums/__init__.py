"""Domain enumerations."""

from .order_status import OrderStatus, PaymentStatus
from .catalog import PaymentType, SparePartStatus, UserRole

__all__ = [
    "OrderStatus",
    "PaymentStatus",
    "PaymentType",
    "SparePartStatus",
    "UserRole",
]
