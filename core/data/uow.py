"""Unit of Work pattern for atomic transactions."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.value_objects import ExecutionID

from .repositories.catalog_lookup_impl import SqlAlchemyCatalogLookup
from .repositories.order_repository_impl import SqlAlchemyOrderRepository
from .repositories.stock_ledger_impl import SqlAlchemyStockLedger

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories

    Anything not committed explicitly is rolled back on exit, so a
    failure anywhere in an order workflow leaves no partial writes
    (stock reservations included).
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = None
        self._committed = False

        # Lazy-loaded repositories
        self._order_repository: Optional[SqlAlchemyOrderRepository] = None
        self._stock_ledger: Optional[SqlAlchemyStockLedger] = None
        self._catalog: Optional[SqlAlchemyCatalogLookup] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback whatever was not committed, then close."""
        try:
            if exc_type is not None:
                logger.warning(f"[{self._execution_id}] Transaction failed: {exc_val}")
                await self._session.rollback()
            elif not self._committed:
                await self._session.rollback()
        finally:
            await self._session.close()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository."""
        session = self._require_session()
        if self._order_repository is None:
            self._order_repository = SqlAlchemyOrderRepository(session)
        return self._order_repository

    @property
    def stock(self) -> SqlAlchemyStockLedger:
        """Lazy-load stock ledger."""
        session = self._require_session()
        if self._stock_ledger is None:
            self._stock_ledger = SqlAlchemyStockLedger(session)
        return self._stock_ledger

    @property
    def catalog(self) -> SqlAlchemyCatalogLookup:
        """Lazy-load catalog lookup."""
        session = self._require_session()
        if self._catalog is None:
            self._catalog = SqlAlchemyCatalogLookup(session)
        return self._catalog

    async def commit(self) -> None:
        """Commit all pending changes."""
        session = self._require_session()
        try:
            await session.commit()
        except Exception as e:
            logger.error(f"[{self._execution_id}] ❌ Commit failed: {e}")
            await session.rollback()
            raise
        self._committed = True
        logger.info(f"[{self._execution_id}] ✅ Transaction committed")


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
