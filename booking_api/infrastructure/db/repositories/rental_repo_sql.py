from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import delete, exists, insert, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.application.interfaces.rental_repo import RentalRepo
from booking_api.domain.entities.rental import Rental, RentalStatus
from booking_api.infrastructure.db.tables import rentals

_INSERT_COLUMNS = (
    "id",
    "customer_id",
    "vehicle_id",
    "start_date",
    "end_date",
    "monthly_amount",
    "status",
    "created_at",
)


def _row_to_rental(data) -> Rental:
    return Rental(
        id=data["id"],
        customer_id=data["customer_id"],
        vehicle_id=data["vehicle_id"],
        start_date=data["start_date"],
        end_date=data["end_date"],
        amount=data["monthly_amount"],
        status=RentalStatus(data["status"]),
        created_at=data["created_at"],
    )


class RentalRepoSQL(RentalRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, rental_id: str) -> Rental | None:
        row = (await self._session.execute(select(rentals).where(rentals.c.id == rental_id))).first()
        return _row_to_rental(row._mapping) if row else None

    async def has_active_for_customer(self, customer_id: str) -> bool:
        stmt = select(
            exists().where(
                rentals.c.customer_id == customer_id,
                rentals.c.status == RentalStatus.ACTIVE.value,
            )
        )
        return bool((await self._session.execute(stmt)).scalar())

    async def has_active_for_vehicle(self, vehicle_id: str) -> bool:
        stmt = select(
            exists().where(
                rentals.c.vehicle_id == vehicle_id,
                rentals.c.status == RentalStatus.ACTIVE.value,
            )
        )
        return bool((await self._session.execute(stmt)).scalar())

    async def create(self, rental: Rental, exclusive_active: bool = False) -> Rental | None:
        stored = replace(
            rental,
            id=rental.id or str(uuid4()),
            created_at=rental.created_at or datetime.now(timezone.utc).replace(tzinfo=None),
        )
        values = {
            "id": stored.id,
            "customer_id": stored.customer_id,
            "vehicle_id": stored.vehicle_id,
            "start_date": stored.start_date,
            "end_date": stored.end_date,
            "monthly_amount": stored.amount,
            "status": stored.status.value,
            "created_at": stored.created_at,
        }

        if not exclusive_active:
            await self._session.execute(insert(rentals).values(**values))
            return stored

        # INSERT ... SELECT ... WHERE NOT EXISTS (active rental for this customer)
        source = select(
            *(literal(values[name], rentals.c[name].type).label(name) for name in _INSERT_COLUMNS)
        ).where(
            ~exists().where(
                rentals.c.customer_id == stored.customer_id,
                rentals.c.status == RentalStatus.ACTIVE.value,
            )
        )
        stmt = insert(rentals).from_select(list(_INSERT_COLUMNS), source)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return stored

    async def update_status(self, rental_id: str, status: RentalStatus) -> None:
        stmt = update(rentals).where(rentals.c.id == rental_id).values(status=status.value)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise LookupError(f"Rental not found: {rental_id}")

    async def delete(self, rental_id: str) -> None:
        await self._session.execute(delete(rentals).where(rentals.c.id == rental_id))
