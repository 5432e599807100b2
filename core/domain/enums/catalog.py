"""Catalog and caller enums shared with the external collaborators."""
from enum import Enum


class SparePartStatus(str, Enum):
    """Listing lifecycle of a spare part."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    OUT_OF_STOCK = "out_of_stock"


class UserRole(str, Enum):
    """Roles issued by the auth collaborator."""

    ADMIN = "admin"
    BUSINESS = "business"
    CUSTOMER = "customer"


class PaymentType(str, Enum):
    """Payment channels a business can accept."""

    ZELLE = "zelle"
    PAGOMOVIL = "pagomovil"
    TRANSFERENCIA = "transferencia"
    EFECTIVO = "efectivo"
    OTRO = "otro"
