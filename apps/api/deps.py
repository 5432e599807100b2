"""FastAPI dependencies for dependency injection."""

from typing import Optional

from dotenv import load_dotenv
from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.application.services.order_service import OrderWorkflowService
from core.domain.enums import UserRole
from core.domain.exceptions import UnauthorizedError
from core.domain.value_objects import Caller
from core.infrastructure.database import get_session_factory as _get_session_factory
from core.infrastructure.event_bus import get_event_bus
from core.infrastructure.storage import LocalProofStorage
from core.settings import get_app_settings

# Load .env before any settings section is read
load_dotenv()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker instance
    """
    return _get_session_factory()


def get_order_service() -> OrderWorkflowService:
    """Get OrderWorkflowService instance.

    Returns:
        OrderWorkflowService wired to the global engine, event bus and upload dir
    """
    settings = get_app_settings()
    return OrderWorkflowService(
        session_factory=get_session_factory(),
        event_bus=get_event_bus(),
        proof_storage=LocalProofStorage(settings.storage),
        settings=settings.orders,
    )


def get_current_caller(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Caller:
    """Authenticated caller as forwarded by the gateway.

    Raises:
        UnauthorizedError: If either header is missing or malformed
    """
    if not x_user_id or not x_user_role:
        raise UnauthorizedError("Not authenticated")
    try:
        return Caller(id=int(x_user_id), role=UserRole(x_user_role.strip().lower()))
    except ValueError:
        raise UnauthorizedError("Invalid authentication headers")
