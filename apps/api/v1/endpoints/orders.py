"""Order endpoints for REST API."""

import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile

from core.application.dtos.order_dto import (
    CreateOrderRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
)
from core.application.services.order_service import OrderWorkflowService
from core.domain.exceptions import ValidationError
from core.domain.value_objects import Caller

from apps.api.deps import get_current_caller, get_order_service
from apps.api.responses import success

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("")
async def list_orders(
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders"),
    offset: int = Query(default=0, ge=0),
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    """List all orders (admin only).

    Returns:
        Envelope with count and orders, newest first
    """
    result = await service.list_orders(caller, limit=limit, offset=offset)
    return success(result.orders, count=result.count)


@router.post("", status_code=201)
async def create_order(
    request: CreateOrderRequest,
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    """Create a new order from a cart.

    Args:
        request: Cart items, shipping data and payment method
        caller: Authenticated user
        service: OrderWorkflowService instance

    Returns:
        Envelope with the created order
    """
    order = await service.create_order(caller, request)
    return success(order)


# Fixed paths are declared before /{order_id}
@router.get("/my-orders")
async def list_my_orders(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    result = await service.list_my_orders(caller, limit=limit, offset=offset)
    return success(result.orders, count=result.count)


@router.get("/business-orders")
async def list_business_orders(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    """List orders containing the calling business's spare parts."""
    result = await service.list_business_orders(caller, limit=limit, offset=offset)
    return success(result.orders, count=result.count)


@router.get("/{order_id}")
async def get_order(
    order_id: int,
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    """Get order by ID (owner, admin or owning business)."""
    order = await service.get_order(caller, order_id)
    return success(order)


@router.put("/{order_id}/status")
async def update_order_status(
    order_id: int,
    request: UpdateOrderStatusRequest,
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    order = await service.update_order_status(caller, order_id, request.status)
    return success(order)


@router.put("/{order_id}/payment")
async def upload_payment_proof(
    order_id: int,
    payment_proof: UploadFile = File(...),
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    """Upload payment proof (order owner only); payment moves to review.

    Never buffers more than one byte past the storage limit; the storage
    refuses anything larger.
    """
    limit = service.max_proof_bytes
    if limit is not None and payment_proof.size is not None and payment_proof.size > limit:
        raise ValidationError(f"Payment proof exceeds the {limit / 1_000_000:g} MB limit")
    content = await payment_proof.read(limit + 1 if limit is not None else -1)
    order = await service.submit_payment_proof(
        caller,
        order_id,
        filename=payment_proof.filename or "",
        content_type=payment_proof.content_type,
        content=content,
    )
    return success(order)


@router.put("/{order_id}/payment/status")
async def update_payment_status(
    order_id: int,
    request: UpdatePaymentStatusRequest,
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    """Confirm, reject or refund the payment (admin or owning business)."""
    order = await service.set_payment_status(caller, order_id, request.status)
    return success(order)


@router.delete("/{order_id}")
async def cancel_order(
    order_id: int,
    caller: Caller = Depends(get_current_caller),
    service: OrderWorkflowService = Depends(get_order_service),
) -> dict:
    """Cancel a pending order and restore its stock (owner or admin)."""
    await service.cancel_order(caller, order_id)
    return success({})
