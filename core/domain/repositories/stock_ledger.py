"""Stock ledger interface: the only writer of spare-part stock."""

from abc import ABC, abstractmethod


class StockLedger(ABC):
    """Per-spare-part stock counter with atomic reserve/release."""

    @abstractmethod
    async def reserve(self, spare_part_id: int, quantity: int) -> int:
        """Atomically decrement stock by `quantity`.

        Returns:
            The new stock value

        Raises:
            NotFoundError: If the spare part does not exist
            InsufficientStockError: If quantity exceeds current stock
        """
        pass

    @abstractmethod
    async def release(self, spare_part_id: int, quantity: int) -> int:
        """Atomically increment stock by `quantity`.

        Callers are responsible for releasing each reservation once.

        Returns:
            The new stock value
        """
        pass

    @abstractmethod
    async def get_stock(self, spare_part_id: int) -> int:
        pass
