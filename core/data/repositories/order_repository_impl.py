"""SQLAlchemy implementation of OrderRepository."""

import logging
from typing import List, Optional

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus, PaymentStatus
from core.domain.exceptions import InvalidStateError
from core.domain.repositories.order_repository import OrderRepository

from ..mappers import OrderMapper
from ..models.base import utcnow
from ..models.catalog_model import SparePartModel
from ..models.order_model import OrderDetailModel, OrderModel, PaymentModel

logger = logging.getLogger(__name__)


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    @staticmethod
    def _aggregate_query() -> Select:
        # Details are loaded with their spare part so the owning business
        # set can be derived without further queries.
        return select(OrderModel).options(
            selectinload(OrderModel.details).selectinload(OrderDetailModel.spare_part),
            selectinload(OrderModel.payment),
        )

    async def add(self, order: Order) -> Order:
        """Insert order, line items and payment in the current transaction.

        Args:
            order: Order domain aggregate

        Returns:
            The aggregate with identifiers assigned
        """
        model = OrderMapper.to_persistence(order)
        self._session.add(model)
        await self._session.flush()  # Propagate to DB without committing

        order.id = model.id
        order.created_at = model.created_at
        order.updated_at = model.updated_at
        for detail, detail_model in zip(order.details, model.details):
            detail.id = detail_model.id
        if order.payment is not None and model.payment is not None:
            order.payment.id = model.payment.id

        logger.info(f"Inserted order {order.order_number} (id={order.id}, lines={len(order.details)})")
        return order

    async def find_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        """Retrieve order by primary key.

        Args:
            order_id: Order primary key
            for_update: Take a row lock on the order (ignored by SQLite)

        Returns:
            Order if found, None otherwise
        """
        stmt = (
            self._aggregate_query()
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update(of=OrderModel)

        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        """List orders, newest first.

        Args:
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            List of Order aggregates
        """
        return await self._find(None, limit, offset)

    async def find_by_user(self, user_id: int, limit: int = 100, offset: int = 0) -> List[Order]:
        return await self._find(OrderModel.user_id == user_id, limit, offset)

    async def find_by_business(self, business_id: int, limit: int = 100, offset: int = 0) -> List[Order]:
        condition = OrderModel.details.any(
            OrderDetailModel.spare_part.has(SparePartModel.business_id == business_id)
        )
        return await self._find(condition, limit, offset)

    async def _find(self, condition, limit: int, offset: int) -> List[Order]:
        stmt = self._aggregate_query()
        if condition is not None:
            stmt = stmt.where(condition)
        stmt = (
            stmt.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def save_transition(
        self,
        order: Order,
        expected_status: OrderStatus,
        expected_payment_status: Optional[PaymentStatus],
    ) -> None:
        """Compare-and-set the order (and optionally payment) state.

        Args:
            order: Aggregate after an in-memory transition
            expected_status: Order status observed when the order was read
            expected_payment_status: Payment status observed, or None to leave the payment alone

        Raises:
            InvalidStateError: If a concurrent writer changed the state first
        """
        now = utcnow()
        result = await self._session.execute(
            update(OrderModel)
            .where(OrderModel.id == order.id, OrderModel.status == expected_status.value)
            .values(status=order.status.value, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            logger.warning(
                f"Order {order.order_number} changed concurrently "
                f"(expected status {expected_status.value})"
            )
            raise InvalidStateError(
                f"Order {order.order_number} was modified by another request; reload and retry"
            )

        if expected_payment_status is None or order.payment is None:
            return

        payment = order.payment
        result = await self._session.execute(
            update(PaymentModel)
            .where(
                PaymentModel.order_id == order.id,
                PaymentModel.payment_status == expected_payment_status.value,
            )
            .values(
                payment_status=payment.status.value,
                payment_date=payment.payment_date,
                proof_image=payment.proof_image,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            logger.warning(
                f"Payment of order {order.order_number} changed concurrently "
                f"(expected status {expected_payment_status.value})"
            )
            raise InvalidStateError(
                f"Payment of order {order.order_number} was modified by another request; reload and retry"
            )
