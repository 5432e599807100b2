"""Domain layer - pure domain models and interfaces."""

from .entities import Order, OrderDetail, Payment, SparePart
from .enums import OrderStatus, PaymentStatus, UserRole
from .repositories import OrderRepository, StockLedger
from .value_objects import Caller, ExecutionID, Money, OrderNumber

__all__ = [
    "Caller",
    "ExecutionID",
    "Money",
    "Order",
    "OrderDetail",
    "OrderNumber",
    "OrderRepository",
    "OrderStatus",
    "Payment",
    "PaymentStatus",
    "SparePart",
    "StockLedger",
    "UserRole",
]
