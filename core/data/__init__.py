"""Data layer - infrastructure persistence and mapping."""

from .mappers import CatalogMapper, OrderDetailMapper, OrderMapper, PaymentMapper
from .models import Base, OrderDetailModel, OrderModel, PaymentModel, SparePartModel
from .repositories import SqlAlchemyCatalogLookup, SqlAlchemyOrderRepository, SqlAlchemyStockLedger
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "CatalogMapper",
    "create_uow",
    "OrderDetailMapper",
    "OrderDetailModel",
    "OrderMapper",
    "OrderModel",
    "PaymentMapper",
    "PaymentModel",
    "SparePartModel",
    "SqlAlchemyCatalogLookup",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyStockLedger",
    "UnitOfWork",
]
