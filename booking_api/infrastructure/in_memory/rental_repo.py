from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from booking_api.application.interfaces.rental_repo import RentalRepo
from booking_api.domain.entities.rental import Rental, RentalStatus


class InMemoryRentalRepo(RentalRepo):
    def __init__(self) -> None:
        self._rentals: dict[str, Rental] = {}

    async def get_by_id(self, rental_id: str) -> Rental | None:
        rental = self._rentals.get(rental_id)
        return replace(rental) if rental else None

    async def has_active_for_customer(self, customer_id: str) -> bool:
        return any(
            rental.customer_id == customer_id and rental.status == RentalStatus.ACTIVE
            for rental in self._rentals.values()
        )

    async def has_active_for_vehicle(self, vehicle_id: str) -> bool:
        return any(
            rental.vehicle_id == vehicle_id and rental.status == RentalStatus.ACTIVE
            for rental in self._rentals.values()
        )

    async def create(self, rental: Rental, exclusive_active: bool = False) -> Rental | None:
        # No await between the check and the insert, so this is atomic on the loop.
        if exclusive_active and any(
            existing.customer_id == rental.customer_id and existing.status == RentalStatus.ACTIVE
            for existing in self._rentals.values()
        ):
            return None
        stored = replace(
            rental,
            id=rental.id or str(uuid4()),
            created_at=rental.created_at or datetime.now(timezone.utc),
        )
        self._rentals[stored.id] = stored
        return replace(stored)

    async def update_status(self, rental_id: str, status: RentalStatus) -> None:
        rental = self._rentals.get(rental_id)
        if not rental:
            raise LookupError(f"Rental not found: {rental_id}")
        rental.status = status

    async def delete(self, rental_id: str) -> None:
        self._rentals.pop(rental_id, None)

    def all(self) -> list[Rental]:
        return list(self._rentals.values())
