"""Application service for the order lifecycle."""

import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Union

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.order_dto import CreateOrderRequest, OrderDTO, OrderListDTO
from core.application.interfaces import ICatalogLookup, IProofStorage
from core.data.models.base import utcnow
from core.data.uow import UnitOfWork, create_uow
from core.domain.entities import Order, OrderDetail
from core.domain.enums import OrderStatus, PaymentStatus
from core.domain.event_bus import EventBus
from core.domain.events.base import DomainEvent
from core.domain.exceptions import NotFoundError, ValidationError
from core.domain.value_objects import Caller, Money, OrderNumber
from core.settings.sections import OrderSettings

from . import order_access

logger = logging.getLogger(__name__)

AccessCheck = Callable[[ICatalogLookup, Caller, Order], Awaitable[None]]
Transition = Callable[[Order], Union[List[OrderDetail], Awaitable[List[OrderDetail]]]]


class OrderWorkflowService:
    """
    Application service orchestrating the order lifecycle.

    Responsibilities:
    - Reserve stock and create order, line items and payment atomically
    - Authorize every read and transition
    - Drive order/payment transitions with compare-and-set writes
    - Release stock as the compensating action of rejection and cancellation
    - Publish the aggregate's domain events after commit

    Each public method runs in its own UnitOfWork; any failure before
    commit rolls back every write of that call, stock included.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        event_bus: Optional[EventBus] = None,
        proof_storage: Optional[IProofStorage] = None,
        settings: Optional[OrderSettings] = None,
    ) -> None:
        """Initialize order workflow service.

        Args:
            session_factory: SQLAlchemy async session factory
            event_bus: Receives domain events after commit (optional)
            proof_storage: File-upload collaborator for payment proofs
            settings: Order settings (shipping cost, number prefix, paging)
        """
        self._session_factory = session_factory
        self._event_bus = event_bus
        self._proof_storage = proof_storage
        self._settings = settings or OrderSettings()

    # =========================================================================
    # CREATION
    # =========================================================================

    async def create_order(self, caller: Caller, request: CreateOrderRequest) -> OrderDTO:
        """Validate the cart, reserve stock and create the order.

        Reservation is all-or-nothing: the first failing item aborts the
        unit of work and every earlier reservation is rolled back.

        Args:
            caller: Authenticated user placing the order
            request: Cart, shipping data and payment method

        Returns:
            OrderDTO of the created order

        Raises:
            ValidationError: Empty cart or unusable payment method
            NotFoundError: Unknown spare part
            UnavailableError: Spare part inactive or out of stock
            InsufficientStockError: Quantity exceeds stock
        """
        if not request.items:
            raise ValidationError("Please add at least one item to the order")

        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            logger.info(
                f"[{execution_id}] Creating order for user {caller.id} "
                f"({len(request.items)} items)"
            )

            # 1. Resolve every item against the catalog
            resolved: List[tuple] = []
            for item in request.items:
                spare_part = await uow.catalog.get_spare_part(item.spare_part_id)
                if spare_part is None:
                    raise NotFoundError("Spare part", item.spare_part_id)
                spare_part.ensure_sellable(item.quantity)
                resolved.append((spare_part, item.quantity))

            # 2. Payment method must belong to a business in the cart
            await self._check_payment_method(
                uow, request.payment_method, {part.business_id for part, _ in resolved}
            )

            # 3. Reserve stock (conditional update per item) and snapshot prices
            details = []
            for spare_part, quantity in resolved:
                await uow.stock.reserve(spare_part.id, quantity)
                details.append(OrderDetail.for_spare_part(spare_part, quantity))

            # 4. Build aggregate and persist
            order = Order.place(
                user_id=caller.id,
                details=details,
                payment_method_id=request.payment_method,
                shipping_address=request.shipping_address,
                shipping_phone=request.shipping_phone,
                shipping_notes=request.shipping_notes,
                shipping_cost=Money(self._settings.default_shipping_cost),
                order_number=OrderNumber.generate(prefix=self._settings.number_prefix),
                execution_id=execution_id,
            )
            await uow.orders.add(order)

            # 5. Atomic commit
            events = order.get_domain_events()
            await uow.commit()

        logger.info(f"[{execution_id}] ✅ Order {order.order_number} created (total {order.total})")
        await self._publish(events)
        order.clear_domain_events()
        return OrderDTO.from_domain(order, execution_id=str(execution_id))

    async def _check_payment_method(
        self, uow: UnitOfWork, payment_method_id: int, business_ids: set
    ) -> None:
        payment_method = await uow.catalog.get_payment_method(payment_method_id)
        if payment_method is None or not payment_method.is_active:
            raise ValidationError(f"Payment method {payment_method_id} is not available")
        if payment_method.business_id not in business_ids:
            raise ValidationError(
                f"Payment method {payment_method_id} does not belong to a seller in this order"
            )

    # =========================================================================
    # READS
    # =========================================================================

    async def get_order(self, caller: Caller, order_id: int) -> OrderDTO:
        """Get order by ID (owner, admin or owning business).

        Raises:
            NotFoundError: If order does not exist
            UnauthorizedError: If caller may not read it
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load(uow, order_id)
            await order_access.ensure_can_view(uow.catalog, caller, order)
            return OrderDTO.from_domain(order)

    async def list_orders(self, caller: Caller, limit: int = 100, offset: int = 0) -> OrderListDTO:
        """List every order (admin only)."""
        order_access.ensure_admin(caller)
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_all(limit=self._clamp(limit), offset=offset)
            return self._to_list(orders)

    async def list_my_orders(self, caller: Caller, limit: int = 100, offset: int = 0) -> OrderListDTO:
        """List orders placed by the caller."""
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_by_user(caller.id, limit=self._clamp(limit), offset=offset)
            return self._to_list(orders)

    async def list_business_orders(
        self, caller: Caller, limit: int = 100, offset: int = 0
    ) -> OrderListDTO:
        """List orders containing at least one of the caller's spare parts.

        Raises:
            UnauthorizedError: If caller is not a business account
            NotFoundError: If caller has no business record
        """
        uow = create_uow(self._session_factory)
        async with uow:
            business = await order_access.resolve_business(uow.catalog, caller)
            orders = await uow.orders.find_by_business(
                business.id, limit=self._clamp(limit), offset=offset
            )
            return self._to_list(orders)

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    @property
    def max_proof_bytes(self) -> Optional[int]:
        """Upload limit of the proof storage; None when none is configured."""
        return self._proof_storage.max_bytes if self._proof_storage is not None else None

    async def submit_payment_proof(
        self,
        caller: Caller,
        order_id: int,
        filename: str,
        content_type: Optional[str],
        content: bytes,
    ) -> OrderDTO:
        """Attach payment proof; payment goes to review (owner only).

        The stored file is removed again if the transition fails.
        """
        if self._proof_storage is None:
            raise RuntimeError("Proof storage is not configured")

        stored: List[str] = []

        async def attach_proof(order: Order) -> List[OrderDetail]:
            reference = await self._proof_storage.save(filename, content_type, content)
            stored.append(reference)
            order.submit_payment_proof(reference, utcnow())
            return []

        try:
            return await self._apply_transition(
                caller, order_id, order_access.ensure_owner, attach_proof, "submit payment proof"
            )
        except Exception:
            for reference in stored:
                await self._proof_storage.delete(reference)
            raise

    async def set_payment_status(
        self, caller: Caller, order_id: int, status: PaymentStatus
    ) -> OrderDTO:
        """Reviewer decision on the payment (admin or owning business).

        completed moves the order to processing; rejected cancels it and
        releases the stock of every line item; refunded only marks the
        payment.
        """
        return await self._apply_transition(
            caller,
            order_id,
            order_access.ensure_can_manage,
            lambda order: order.apply_payment_status(status),
            f"set payment status to {status.value}",
        )

    async def update_order_status(
        self, caller: Caller, order_id: int, status: OrderStatus
    ) -> OrderDTO:
        """Direct fulfilment status change (admin or owning business)."""

        def set_status(order: Order) -> List[OrderDetail]:
            order.update_status(status)
            return []

        return await self._apply_transition(
            caller,
            order_id,
            order_access.ensure_can_manage,
            set_status,
            f"update status to {status.value}",
        )

    async def cancel_order(self, caller: Caller, order_id: int) -> OrderDTO:
        """Cancel a pending order and release its stock (owner or admin)."""
        return await self._apply_transition(
            caller,
            order_id,
            order_access.ensure_owner_or_admin,
            lambda order: order.cancel(),
            "cancel",
        )

    async def _apply_transition(
        self,
        caller: Caller,
        order_id: int,
        authorize: AccessCheck,
        transition: Transition,
        action: str,
    ) -> OrderDTO:
        """Load, authorize, transition, compensate, commit, publish.

        Order and payment statuses are written with compare-and-set
        against the values observed at load time, so of two concurrent
        transitions only one commits; the other raises InvalidStateError
        and rolls back, including any stock it released.
        """
        uow = create_uow(self._session_factory)
        async with uow:
            execution_id = uow.execution_id
            order = await self._load(uow, order_id, for_update=True)
            order.execution_id = execution_id
            await authorize(uow.catalog, caller, order)

            logger.info(f"[{execution_id}] User {caller.id} ({caller.role.value}): {action} on {order.order_number}")

            previous_status = order.status
            payment_before = self._payment_state(order)

            to_release = transition(order)
            if inspect.isawaitable(to_release):
                to_release = await to_release

            payment_touched = self._payment_state(order) != payment_before
            await uow.orders.save_transition(
                order,
                expected_status=previous_status,
                expected_payment_status=payment_before[0] if payment_touched else None,
            )

            # Compensating action: return reserved stock, once per line item
            for detail in to_release:
                await uow.stock.release(detail.spare_part_id, detail.quantity)
                order.record_stock_released(detail)

            events = order.get_domain_events()
            await uow.commit()

            logger.info(
                f"[{execution_id}] ✅ {order.order_number}: order {previous_status.value} → "
                f"{order.status.value}, released {len(to_release)} line items"
            )
            order = await self._load(uow, order_id)

        await self._publish(events)
        return OrderDTO.from_domain(order, execution_id=str(execution_id))

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    async def _load(uow: UnitOfWork, order_id: int, for_update: bool = False) -> Order:
        order = await uow.orders.find_by_id(order_id, for_update=for_update)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    @staticmethod
    def _payment_state(order: Order) -> tuple:
        payment = order.payment
        if payment is None:
            return (None, None)
        return (payment.status, payment.proof_image)

    def _clamp(self, limit: int) -> int:
        return max(1, min(limit, self._settings.page_size_limit))

    @staticmethod
    def _to_list(orders: List[Order]) -> OrderListDTO:
        return OrderListDTO(orders=[OrderDTO.from_domain(o) for o in orders], count=len(orders))

    async def _publish(self, events: List[DomainEvent]) -> None:
        if self._event_bus is not None and events:
            await self._event_bus.publish_all(events)
