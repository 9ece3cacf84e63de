from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.domain.entities.vehicle import Vehicle, VehicleStatus
from booking_api.infrastructure.db.tables import vehicles


def _row_to_vehicle(data) -> Vehicle:
    return Vehicle(
        id=data["id"],
        reg=data["reg"],
        make=data["make"],
        model=data["model"],
        colour=data["colour"],
        daily_rate=data["daily_rate"],
        weekly_rate=data["weekly_rate"],
        monthly_rate=data["monthly_rate"],
        status=VehicleStatus(data["status"]),
        photo_url=data["photo_url"],
    )


class VehicleRepoSQL(VehicleRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, vehicle_id: str) -> Vehicle | None:
        result = await self._session.execute(select(vehicles).where(vehicles.c.id == vehicle_id))
        row = result.first()
        return _row_to_vehicle(row._mapping) if row else None

    async def list_available(self) -> Sequence[Vehicle]:
        stmt = (
            select(vehicles)
            .where(vehicles.c.status == VehicleStatus.AVAILABLE.value)
            .order_by(vehicles.c.monthly_rate.asc().nulls_last(), vehicles.c.reg)
        )
        result = await self._session.execute(stmt)
        return [_row_to_vehicle(row._mapping) for row in result]

    async def update_status(self, vehicle_id: str, status: VehicleStatus) -> None:
        stmt = update(vehicles).where(vehicles.c.id == vehicle_id).values(status=status.value)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise LookupError(f"Vehicle not found: {vehicle_id}")
