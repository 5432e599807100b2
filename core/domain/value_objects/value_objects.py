"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Union
from uuid import UUID, uuid4

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value, always quantized to cents.

    CRITICAL: Always use Decimal, never float!
    """
    amount: Decimal

    def __post_init__(self):
        # Convert to Decimal if needed
        amount = self.amount
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        object.__setattr__(self, 'amount', amount.quantize(CENTS, rounding=ROUND_HALF_UP))

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal("0"))

    def __str__(self) -> str:
        return f"{self.amount}"

    def __add__(self, other: 'Money') -> 'Money':
        return Money(amount=self.amount + other.amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(amount=self.amount - other.amount)

    def __mul__(self, factor: Union[int, Decimal]) -> 'Money':
        """Multiply by a quantity or rate; result is re-quantized."""
        if isinstance(factor, float):
            raise TypeError("Money cannot be multiplied by float")
        return Money(amount=self.amount * factor)

    __rmul__ = __mul__

    def percentage(self, percent: Decimal) -> 'Money':
        """Return `percent`% of this amount."""
        return Money(amount=self.amount * Decimal(str(percent)) / Decimal("100"))

    def is_negative(self) -> bool:
        """Check if amount is negative."""
        return self.amount < 0


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for workflow execution tracing."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)


# OrderNumber lives in order_number.py
from .order_number import OrderNumber
