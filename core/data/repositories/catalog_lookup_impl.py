"""Database-backed adapter for the catalog collaborator."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.application.interfaces import ICatalogLookup
from core.domain.entities import Business, BusinessPaymentMethod, SparePart

from ..mappers import CatalogMapper
from ..models.catalog_model import BusinessModel, BusinessPaymentMethodModel, SparePartModel


class SqlAlchemyCatalogLookup(ICatalogLookup):
    """Reads catalog tables within the caller's unit of work."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_spare_part(self, spare_part_id: int) -> Optional[SparePart]:
        # populate_existing: stock may have moved through a Core UPDATE
        result = await self._session.execute(
            select(SparePartModel)
            .where(SparePartModel.id == spare_part_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return CatalogMapper.spare_part_to_domain(model) if model else None

    async def get_business_for_user(self, user_id: int) -> Optional[Business]:
        result = await self._session.execute(
            select(BusinessModel).where(BusinessModel.user_id == user_id)
        )
        model = result.scalar_one_or_none()
        return CatalogMapper.business_to_domain(model) if model else None

    async def get_payment_method(self, payment_method_id: int) -> Optional[BusinessPaymentMethod]:
        result = await self._session.execute(
            select(BusinessPaymentMethodModel).where(
                BusinessPaymentMethodModel.id == payment_method_id
            )
        )
        model = result.scalar_one_or_none()
        return CatalogMapper.payment_method_to_domain(model) if model else None
