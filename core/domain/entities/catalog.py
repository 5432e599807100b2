"""
Catalog entities seen by the order workflow.

The catalog collaborator owns these records; the workflow only reads
them, except for the stock count, which the stock ledger mutates.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..enums import PaymentType, SparePartStatus
from ..exceptions import InsufficientStockError, UnavailableError
from ..value_objects import Money


@dataclass(frozen=True)
class SparePart:
    """Point-in-time view of a spare-part listing."""

    id: int
    business_id: int
    name: str
    price: Money
    stock: int
    status: SparePartStatus = SparePartStatus.ACTIVE
    discount_percentage: Decimal = Decimal("0")

    def ensure_sellable(self, quantity: int) -> None:
        """Advisory pre-check before reservation.

        The stock ledger's conditional update remains the authoritative
        check; this only produces an early, descriptive failure.

        Raises:
            UnavailableError: If the listing is inactive or out of stock
            InsufficientStockError: If quantity exceeds current stock
        """
        if self.status != SparePartStatus.ACTIVE:
            raise UnavailableError(self.id, self.status.value)
        if self.stock < quantity:
            raise InsufficientStockError(self.id, quantity, self.stock, name=self.name)


@dataclass(frozen=True)
class Business:
    id: int
    user_id: int
    business_name: str


@dataclass(frozen=True)
class BusinessPaymentMethod:
    id: int
    business_id: int
    payment_type: PaymentType
    is_active: bool = True
    account_details: Optional[dict] = None
