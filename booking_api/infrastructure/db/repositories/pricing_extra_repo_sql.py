from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.application.interfaces.pricing_extra_repo import PricingExtraRepo
from booking_api.domain.entities.pricing_extra import PricingExtra
from booking_api.infrastructure.db.tables import pricing_extras


class PricingExtraRepoSQL(PricingExtraRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_active(self) -> Sequence[PricingExtra]:
        stmt = (
            select(pricing_extras)
            .where(pricing_extras.c.is_active.is_(True))
            .order_by(pricing_extras.c.extra_name)
        )
        result = await self._session.execute(stmt)
        return [
            PricingExtra(
                id=data["id"],
                extra_name=data["extra_name"],
                price=data["price"],
                description=data["description"],
                is_active=bool(data["is_active"]),
            )
            for data in (row._mapping for row in result)
        ]
