"""SQLAlchemy implementation of the stock ledger."""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.exceptions import InsufficientStockError, NotFoundError, ValidationError
from core.domain.repositories.stock_ledger import StockLedger

from ..models.catalog_model import SparePartModel

logger = logging.getLogger(__name__)


def _check_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError(f"Quantity must be a positive integer, got {quantity!r}")


class SqlAlchemyStockLedger(StockLedger):
    """
    Stock ledger backed by `spare_parts.stock`.

    Every mutation is a single UPDATE statement, so the check and the
    write cannot interleave with another transaction's check. The
    CHECK constraint on the column is the last line against negatives.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def reserve(self, spare_part_id: int, quantity: int) -> int:
        _check_quantity(quantity)

        # Conditional decrement: matches no row when stock is insufficient
        result = await self._session.execute(
            update(SparePartModel)
            .where(SparePartModel.id == spare_part_id, SparePartModel.stock >= quantity)
            .values(stock=SparePartModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            current = await self._current_stock(spare_part_id)
            if current is None:
                raise NotFoundError("Spare part", spare_part_id)
            logger.info(
                f"Reservation refused for spare part {spare_part_id}: "
                f"requested {quantity}, available {current}"
            )
            raise InsufficientStockError(spare_part_id, quantity, current)

        new_stock = await self._current_stock(spare_part_id)
        logger.info(f"Reserved {quantity} of spare part {spare_part_id} (stock now {new_stock})")
        return new_stock

    async def release(self, spare_part_id: int, quantity: int) -> int:
        _check_quantity(quantity)

        result = await self._session.execute(
            update(SparePartModel)
            .where(SparePartModel.id == spare_part_id)
            .values(stock=SparePartModel.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("Spare part", spare_part_id)

        new_stock = await self._current_stock(spare_part_id)
        logger.info(f"Released {quantity} of spare part {spare_part_id} (stock now {new_stock})")
        return new_stock

    async def get_stock(self, spare_part_id: int) -> int:
        current = await self._current_stock(spare_part_id)
        if current is None:
            raise NotFoundError("Spare part", spare_part_id)
        return current

    async def _current_stock(self, spare_part_id: int) -> Optional[int]:
        result = await self._session.execute(
            select(SparePartModel.stock).where(SparePartModel.id == spare_part_id)
        )
        return result.scalar_one_or_none()
