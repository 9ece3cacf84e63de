from decimal import Decimal
from typing import Iterable, Sequence

from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.domain.entities.vehicle import Vehicle, VehicleStatus


def _monthly_sort_key(vehicle: Vehicle) -> tuple[bool, Decimal]:
    # Vehicles without a monthly rate go last.
    return (vehicle.monthly_rate is None, vehicle.monthly_rate or Decimal("0"))


class InMemoryVehicleRepo(VehicleRepo):
    def __init__(self, vehicles: Iterable[Vehicle] = ()) -> None:
        self._vehicles: dict[str, Vehicle] = {vehicle.id: vehicle for vehicle in vehicles}

    def add(self, vehicle: Vehicle) -> Vehicle:
        self._vehicles[vehicle.id] = vehicle
        return vehicle

    async def get_by_id(self, vehicle_id: str) -> Vehicle | None:
        return self._vehicles.get(vehicle_id)

    async def list_available(self) -> Sequence[Vehicle]:
        available = [v for v in self._vehicles.values() if v.status == VehicleStatus.AVAILABLE]
        return sorted(available, key=_monthly_sort_key)

    async def update_status(self, vehicle_id: str, status: VehicleStatus) -> None:
        vehicle = self._vehicles.get(vehicle_id)
        if not vehicle:
            raise LookupError(f"Vehicle not found: {vehicle_id}")
        vehicle.status = status
