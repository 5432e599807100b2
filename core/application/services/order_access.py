"""Authorization rules for acting on an order.

Admins pass every check. Business standing is derived from the
order's line items at read time: a business may act on an order iff
at least one line item references one of its spare parts.
"""

from core.application.interfaces import ICatalogLookup
from core.domain.entities import Business, Order
from core.domain.exceptions import NotFoundError, UnauthorizedError
from core.domain.value_objects import Caller


async def resolve_business(catalog: ICatalogLookup, caller: Caller) -> Business:
    """Business record of a business-role caller.

    Raises:
        UnauthorizedError: If the caller does not have the business role
        NotFoundError: If the caller has no business record
    """
    if not caller.is_business:
        raise UnauthorizedError("Only business accounts can access business orders")
    business = await catalog.get_business_for_user(caller.id)
    if business is None:
        raise NotFoundError("Business for user", caller.id)
    return business


async def ensure_can_view(catalog: ICatalogLookup, caller: Caller, order: Order) -> None:
    """Owner, admin or an owning business may read the order."""
    if caller.is_admin or order.is_owned_by(caller.id):
        return
    if caller.is_business:
        business = await resolve_business(catalog, caller)
        if order.involves_business(business.id):
            return
    raise UnauthorizedError("Not authorized to access this order")


async def ensure_can_manage(catalog: ICatalogLookup, caller: Caller, order: Order) -> None:
    """Admin or an owning business may change order or payment status."""
    if caller.is_admin:
        return
    if caller.is_business:
        business = await resolve_business(catalog, caller)
        if order.involves_business(business.id):
            return
    raise UnauthorizedError("Not authorized to update this order")


async def ensure_owner(catalog: ICatalogLookup, caller: Caller, order: Order) -> None:
    if not order.is_owned_by(caller.id):
        raise UnauthorizedError("Not authorized to update this order")


async def ensure_owner_or_admin(catalog: ICatalogLookup, caller: Caller, order: Order) -> None:
    if not (caller.is_admin or order.is_owned_by(caller.id)):
        raise UnauthorizedError("Not authorized to cancel this order")


def ensure_admin(caller: Caller) -> None:
    if not caller.is_admin:
        raise UnauthorizedError("Only administrators can list all orders")
