"""
Flujo compensatorio de pago cancelado.

Borrar la renta, cancelar sus eventos pendientes y liberar el vehículo son
pasos independientes.
"""

from datetime import date
from decimal import Decimal

from booking_api.application.use_cases.cancel_rental import CancelRentalUseCase
from booking_api.domain.constants import EVENT_GENERATE_FIRST_CHARGE, EVENT_SYNC_VEHICLE_STATUS
from booking_api.domain.entities import Rental, Vehicle, VehicleStatus
from booking_api.infrastructure.in_memory import (
    InMemoryOutboxRepo,
    InMemoryRentalRepo,
    InMemoryVehicleRepo,
    NoopTransactionManager,
)


class BrokenDeleteRentalRepo(InMemoryRentalRepo):
    async def delete(self, rental_id: str) -> None:
        raise ConnectionError("delete failed")


class BrokenLookupRentalRepo(InMemoryRentalRepo):
    async def get_by_id(self, rental_id: str):
        raise ConnectionError("lookup failed")


class BrokenOutboxRepo(InMemoryOutboxRepo):
    async def cancel_pending(self, aggregate_code: str, reason: str) -> int:
        raise ConnectionError("outbox unavailable")


class BrokenVehicleRepo(InMemoryVehicleRepo):
    async def update_status(self, vehicle_id: str, status: VehicleStatus) -> None:
        raise ConnectionError("update failed")


async def _setup(rental_repo=None, vehicle_repo=None, outbox_repo=None):
    rentals = rental_repo or InMemoryRentalRepo()
    vehicles = vehicle_repo or InMemoryVehicleRepo()
    outbox = outbox_repo or InMemoryOutboxRepo()
    vehicles.add(Vehicle(id="veh-rolls", reg="RR23 GHO", status=VehicleStatus.RENTED))
    rental = await rentals.create(
        Rental(
            customer_id="cust-1",
            vehicle_id="veh-rolls",
            start_date=date(2025, 3, 1),
            end_date=date(2025, 4, 5),
            amount=Decimal("2000"),
        )
    )
    use_case = CancelRentalUseCase(rentals, vehicles, outbox, NoopTransactionManager())
    return use_case, rentals, vehicles, rental


async def test_deletes_rental_and_releases_vehicle():
    use_case, rentals, vehicles, rental = await _setup()

    result = await use_case.execute(rental.id)

    assert result.rental_deleted is True
    assert result.vehicle_released is True
    assert result.vehicle_id == "veh-rolls"
    assert await rentals.get_by_id(rental.id) is None
    assert (await vehicles.get_by_id("veh-rolls")).status == VehicleStatus.AVAILABLE


async def test_vehicle_released_when_delete_fails():
    use_case, rentals, vehicles, rental = await _setup(rental_repo=BrokenDeleteRentalRepo())

    result = await use_case.execute(rental.id)

    assert result.rental_deleted is False
    assert result.vehicle_released is True
    assert (await vehicles.get_by_id("veh-rolls")).status == VehicleStatus.AVAILABLE


async def test_rental_deleted_when_vehicle_update_fails():
    use_case, rentals, vehicles, rental = await _setup(vehicle_repo=BrokenVehicleRepo())

    result = await use_case.execute(rental.id)

    assert result.rental_deleted is True
    assert result.vehicle_released is False
    assert await rentals.get_by_id(rental.id) is None


async def test_unknown_rental_is_a_no_op():
    use_case, rentals, vehicles, rental = await _setup()

    result = await use_case.execute("missing-rental")

    assert result.rental_deleted is False
    assert result.vehicle_released is False
    assert len(rentals.all()) == 1
    assert (await vehicles.get_by_id("veh-rolls")).status == VehicleStatus.RENTED


async def test_lookup_failure_is_swallowed():
    use_case, rentals, vehicles, rental = await _setup(rental_repo=BrokenLookupRentalRepo())

    result = await use_case.execute(rental.id)

    assert result.rental_deleted is False
    assert result.vehicle_released is False


async def test_pending_follow_ups_are_cancelled():
    outbox = InMemoryOutboxRepo()
    use_case, rentals, vehicles, rental = await _setup(outbox_repo=outbox)
    sync = await outbox.enqueue(
        EVENT_SYNC_VEHICLE_STATUS, "RENTAL", rental.id, {"vehicle_id": "veh-rolls", "status": "Rented"}
    )
    charge = await outbox.enqueue(
        EVENT_GENERATE_FIRST_CHARGE, "RENTAL", rental.id, {"rental_id": rental.id}
    )
    charge.status = "DONE"
    other = await outbox.enqueue(
        EVENT_GENERATE_FIRST_CHARGE, "RENTAL", "other-rental", {"rental_id": "other-rental"}
    )

    await use_case.execute(rental.id)

    assert sync.status == "CANCELLED"
    assert charge.status == "DONE"
    assert other.status == "NEW"


async def test_vehicle_released_when_outbox_fails():
    use_case, rentals, vehicles, rental = await _setup(outbox_repo=BrokenOutboxRepo())

    result = await use_case.execute(rental.id)

    assert result.rental_deleted is True
    assert result.vehicle_released is True
    assert (await vehicles.get_by_id("veh-rolls")).status == VehicleStatus.AVAILABLE
