"""Domain entities."""

from .catalog import Business, BusinessPaymentMethod, SparePart
from .order import Order, OrderDetail, Payment

__all__ = [
    "Business",
    "BusinessPaymentMethod",
    "Order",
    "OrderDetail",
    "Payment",
    "SparePart",
]
