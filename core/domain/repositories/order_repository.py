"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import Order
from ..enums import OrderStatus, PaymentStatus


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Insert a new order with its line items and payment.

        Args:
            order: Freshly placed Order aggregate

        Returns:
            The same aggregate with database identifiers assigned
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        """Retrieve order with line items and payment.

        Args:
            order_id: Order primary key
            for_update: Lock the order row for the rest of the transaction

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        pass

    @abstractmethod
    async def find_by_user(self, user_id: int, limit: int = 100, offset: int = 0) -> List[Order]:
        pass

    @abstractmethod
    async def find_by_business(self, business_id: int, limit: int = 100, offset: int = 0) -> List[Order]:
        """Orders with at least one line item owned by `business_id`."""
        pass

    @abstractmethod
    async def save_transition(
        self,
        order: Order,
        expected_status: OrderStatus,
        expected_payment_status: Optional[PaymentStatus],
    ) -> None:
        """Persist order/payment state if nobody changed it concurrently.

        Args:
            order: Aggregate after an in-memory transition
            expected_status: Order status observed before the transition
            expected_payment_status: Payment status observed before the transition

        Raises:
            InvalidStateError: If the stored status no longer matches
        """
        pass
