"""Repository interfaces."""

from .order_repository import OrderRepository
from .stock_ledger import StockLedger

__all__ = ["OrderRepository", "StockLedger"]
