"""
Order Domain Events.

Events that occur during the order lifecycle: placement, status
transitions, payment review and compensating stock releases.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from .base import DomainEvent


@dataclass
class _OrderEvent(DomainEvent):
    order_number: str = ""

    def __post_init__(self):
        """Set aggregate_id to order_number."""
        if not self.aggregate_id and self.order_number:
            object.__setattr__(self, 'aggregate_id', self.order_number)
        super().__post_init__()


@dataclass
class OrderPlacedEvent(_OrderEvent):
    """
    Order was created and stock reserved for every line item.

    Consumers: seller notifications, audit log
    """

    total: Decimal = Decimal("0")
    line_count: int = 0
    business_ids: List[int] = field(default_factory=list)


@dataclass
class OrderStatusChangedEvent(_OrderEvent):
    """Order status changed."""

    previous_status: str = ""
    new_status: str = ""
    reason: Optional[str] = None


@dataclass
class PaymentStatusChangedEvent(_OrderEvent):
    """Payment status changed (proof submitted, confirmed, rejected...)."""

    previous_status: str = ""
    new_status: str = ""


@dataclass
class StockReleasedEvent(_OrderEvent):
    """Reserved stock was returned to the ledger by a compensating action."""

    spare_part_id: int = 0
    quantity: int = 0
