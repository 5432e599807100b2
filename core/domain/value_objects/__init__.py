"""Domain value objects."""

from .value_objects import ExecutionID, Money
from .order_number import OrderNumber
from .caller import Caller

__all__ = [
    "Caller",
    "ExecutionID",
    "Money",
    "OrderNumber",
]
