"""Database models."""

from .base import Base
from .catalog_model import BusinessModel, BusinessPaymentMethodModel, SparePartModel
from .order_model import OrderDetailModel, OrderModel, PaymentModel

__all__ = [
    "Base",
    "BusinessModel",
    "BusinessPaymentMethodModel",
    "OrderDetailModel",
    "OrderModel",
    "PaymentModel",
    "SparePartModel",
]
