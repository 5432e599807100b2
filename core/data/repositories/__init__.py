"""SQLAlchemy repository implementations."""

from .catalog_lookup_impl import SqlAlchemyCatalogLookup
from .order_repository_impl import SqlAlchemyOrderRepository
from .stock_ledger_impl import SqlAlchemyStockLedger

__all__ = ["SqlAlchemyCatalogLookup", "SqlAlchemyOrderRepository", "SqlAlchemyStockLedger"]
