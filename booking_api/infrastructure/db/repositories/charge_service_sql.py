import logging
from datetime import datetime, timezone

from sqlalchemy import exists, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.application.interfaces.charge_service import ChargeService
from booking_api.infrastructure.db.tables import rental_charges, rentals

logger = logging.getLogger(__name__)


class ChargeServiceSQL(ChargeService):
    """Genera el cargo del primer mes de la renta; los meses siguientes se facturan aparte."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def generate_first_charge(self, rental_id: str) -> None:
        already = await self._session.execute(
            select(exists().where(rental_charges.c.rental_id == rental_id))
        )
        if already.scalar():
            return

        row = (await self._session.execute(select(rentals).where(rentals.c.id == rental_id))).first()
        if not row:
            raise LookupError(f"Rental not found: {rental_id}")
        rental = row._mapping

        await self._session.execute(
            insert(rental_charges).values(
                rental_id=rental_id,
                customer_id=rental["customer_id"],
                vehicle_id=rental["vehicle_id"],
                due_date=rental["start_date"],
                amount=rental["monthly_amount"],
                category="Rental",
                created_at=datetime.now(timezone.utc).replace(tzinfo=None),
            )
        )
        logger.info("First rental charge generated", extra={"rental_id": rental_id})
