"""Shared fixtures: in-memory database, seeded catalog, wired service."""

from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from core.application.services.order_service import OrderWorkflowService
from core.data.models import (
    Base,
    BusinessModel,
    BusinessPaymentMethodModel,
    SparePartModel,
)
from core.domain.enums import UserRole
from core.domain.value_objects import Caller
from core.infrastructure.database import create_session_factory
from core.infrastructure.event_bus import InMemoryEventBus
from core.infrastructure.storage import LocalProofStorage
from core.settings.sections import OrderSettings, StorageSettings

from tests.seed import (
    ADMIN_USER,
    BRAKE_PAD,
    BUSINESS_USER_WITHOUT_RECORD,
    CUSTOMER_USER,
    INACTIVE_PART,
    OIL_FILTER,
    OTHER_CUSTOMER_USER,
    SELLER_A_BUSINESS,
    SELLER_A_INACTIVE_METHOD,
    SELLER_A_USER,
    SELLER_A_ZELLE,
    SELLER_B_BUSINESS,
    SELLER_B_TRANSFER,
    SELLER_B_USER,
    SPARK_PLUG,
    TIMING_BELT,
)

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine with all tables.

    StaticPool hands every session the same connection, so concurrent
    units of work on this engine share one transaction. Tests that race
    transactions use `file_session_factory` instead.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    """Session factory over a freshly seeded catalog."""
    factory = create_session_factory(test_engine)
    await seed_catalog(factory)
    yield factory


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """Seeded catalog in a file-backed database; one connection per session."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = create_session_factory(engine)
    await seed_catalog(factory)
    yield factory

    await engine.dispose()


async def seed_catalog(factory) -> None:
    async with factory() as session:
        session.add_all([
            BusinessModel(id=SELLER_A_BUSINESS, user_id=SELLER_A_USER, business_name="Repuestos Caracas"),
            BusinessModel(id=SELLER_B_BUSINESS, user_id=SELLER_B_USER, business_name="AutoPartes Valencia"),
        ])
        await session.flush()
        session.add_all([
            BusinessPaymentMethodModel(
                id=SELLER_A_ZELLE, business_id=SELLER_A_BUSINESS, payment_type="zelle",
                account_details={"email": "pagos@repuestos.example"}, is_active=True,
            ),
            BusinessPaymentMethodModel(
                id=SELLER_B_TRANSFER, business_id=SELLER_B_BUSINESS, payment_type="transferencia",
                account_details={"bank": "Banesco"}, is_active=True,
            ),
            BusinessPaymentMethodModel(
                id=SELLER_A_INACTIVE_METHOD, business_id=SELLER_A_BUSINESS, payment_type="efectivo",
                account_details={}, is_active=False,
            ),
            SparePartModel(
                id=BRAKE_PAD, business_id=SELLER_A_BUSINESS, name="Brake pad",
                price=Decimal("10.00"), stock=5,
            ),
            SparePartModel(
                id=OIL_FILTER, business_id=SELLER_A_BUSINESS, name="Oil filter",
                price=Decimal("15.50"), stock=3, discount_percentage=Decimal("10"),
            ),
            SparePartModel(
                id=SPARK_PLUG, business_id=SELLER_B_BUSINESS, name="Spark plug",
                price=Decimal("8.00"), stock=10,
            ),
            SparePartModel(
                id=INACTIVE_PART, business_id=SELLER_A_BUSINESS, name="Discontinued radiator",
                price=Decimal("120.00"), stock=5, status="inactive",
            ),
            SparePartModel(
                id=TIMING_BELT, business_id=SELLER_A_BUSINESS, name="Timing belt",
                price=Decimal("40.00"), stock=1,
            ),
        ])
        await session.commit()


@pytest.fixture
def stock_of(session_factory):
    """Read the current stock of a spare part in a fresh session."""

    async def _stock_of(spare_part_id: int) -> int:
        async with session_factory() as session:
            result = await session.execute(
                select(SparePartModel.stock).where(SparePartModel.id == spare_part_id)
            )
            return result.scalar_one()

    return _stock_of


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def proof_storage(tmp_path) -> LocalProofStorage:
    return LocalProofStorage(StorageSettings(dir=str(tmp_path / "uploads")))


@pytest.fixture
def order_service(session_factory, event_bus, proof_storage) -> OrderWorkflowService:
    return OrderWorkflowService(
        session_factory=session_factory,
        event_bus=event_bus,
        proof_storage=proof_storage,
        settings=OrderSettings(default_shipping_cost=Decimal("0.00"), number_prefix="ORD"),
    )


# =============================================================================
# CALLERS
# =============================================================================

@pytest.fixture
def customer() -> Caller:
    return Caller(id=CUSTOMER_USER, role=UserRole.CUSTOMER)


@pytest.fixture
def other_customer() -> Caller:
    return Caller(id=OTHER_CUSTOMER_USER, role=UserRole.CUSTOMER)


@pytest.fixture
def admin() -> Caller:
    return Caller(id=ADMIN_USER, role=UserRole.ADMIN)


@pytest.fixture
def seller_a() -> Caller:
    return Caller(id=SELLER_A_USER, role=UserRole.BUSINESS)


@pytest.fixture
def seller_b() -> Caller:
    return Caller(id=SELLER_B_USER, role=UserRole.BUSINESS)


@pytest.fixture
def business_without_record() -> Caller:
    return Caller(id=BUSINESS_USER_WITHOUT_RECORD, role=UserRole.BUSINESS)
