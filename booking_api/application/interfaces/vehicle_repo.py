from typing import Sequence

from booking_api.domain.entities.vehicle import Vehicle, VehicleStatus


class VehicleRepo:
    async def get_by_id(self, vehicle_id: str) -> Vehicle | None:
        raise NotImplementedError

    async def list_available(self) -> Sequence[Vehicle]:
        """Vehículos disponibles, primero la tarifa mensual más baja."""
        raise NotImplementedError

    async def update_status(self, vehicle_id: str, status: VehicleStatus) -> None:
        raise NotImplementedError
