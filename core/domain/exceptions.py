"""
Domain exceptions.

Raised by the domain and application layers; the API layer maps each
type onto an HTTP status code and the response envelope.
"""
from typing import Optional


class DomainError(Exception):
    """Base class for all expected, client-facing failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Order, spare part, business or payment method is absent."""

    def __init__(self, entity: str, identifier: Optional[object] = None):
        if identifier is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {identifier} not found"
        super().__init__(message)
        self.entity = entity
        self.identifier = identifier


class UnauthorizedError(DomainError):
    """Caller lacks ownership or role standing for the action."""


class InvalidStateError(DomainError):
    """Operation is not valid for the current order or payment status."""


class InsufficientStockError(DomainError):
    """Reservation would exceed the available quantity."""

    def __init__(self, spare_part_id: int, requested: int, available: int, name: Optional[str] = None):
        label = name or f"spare part {spare_part_id}"
        super().__init__(
            f"Insufficient stock for {label}: requested {requested}, available {available}"
        )
        self.spare_part_id = spare_part_id
        self.requested = requested
        self.available = available


class ValidationError(DomainError):
    """Missing or malformed cart or fields."""


class UnavailableError(ValidationError):
    """Spare part exists but is not currently sellable."""

    def __init__(self, spare_part_id: int, status: str):
        super().__init__(f"Spare part {spare_part_id} is not available ({status})")
        self.spare_part_id = spare_part_id
        self.status = status
