"""Order number value object."""
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

_PATTERN = re.compile(r"^[A-Z]{2,10}-\d{8}-[0-9A-F]{8}$")


@dataclass(frozen=True)
class OrderNumber:
    """
    Human-facing unique order identifier.

    Format: PREFIX-YYYYMMDD-XXXXXXXX (8 upper-case hex digits)
    Examples:
    - ORD-20261017-9F3A61C2
    - ORD-20250102-00AB14EE
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Order number cannot be empty")

        if not _PATTERN.match(self.value):
            raise ValueError(
                f"Invalid order number format (expected PREFIX-YYYYMMDD-XXXXXXXX): {self.value}"
            )

    @classmethod
    def generate(cls, prefix: str = "ORD", now: Optional[datetime] = None) -> "OrderNumber":
        """Generate a new order number for the given day."""
        now = now or datetime.now(timezone.utc)
        suffix = uuid4().hex[:8].upper()
        return cls(value=f"{prefix.upper()}-{now:%Y%m%d}-{suffix}")

    def __str__(self) -> str:
        return self.value
