import logging

from booking_api.application.dtos.booking_dto import CancellationResultDTO
from booking_api.application.interfaces.outbox_repo import OutboxRepo
from booking_api.application.interfaces.rental_repo import RentalRepo
from booking_api.application.interfaces.transaction_manager import TransactionManager
from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.domain.entities.vehicle import VehicleStatus


class CancelRentalUseCase:
    """
    Flujo compensatorio cuando el pago se cancela o se abandona.

    Borrar la renta, cancelar sus eventos pendientes del outbox y liberar el
    vehículo son pasos independientes: si uno falla, los demás se intentan
    igual. Los eventos se cancelan antes de liberar el vehículo para que el
    worker no lo vuelva a marcar como Rented. Los fallos se registran, no se reintentan.
    """

    def __init__(
        self,
        rental_repo: RentalRepo,
        vehicle_repo: VehicleRepo,
        outbox_repo: OutboxRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._rental_repo = rental_repo
        self._vehicle_repo = vehicle_repo
        self._outbox_repo = outbox_repo
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, rental_id: str) -> CancellationResultDTO:
        result = CancellationResultDTO(rental_id=rental_id)

        try:
            rental = await self._rental_repo.get_by_id(rental_id)
        except Exception:
            self._logger.exception("Error fetching rental", extra={"rental_id": rental_id})
            return result

        if rental is None:
            self._logger.warning("Rental not found for cancellation", extra={"rental_id": rental_id})
            return result
        result.vehicle_id = rental.vehicle_id

        try:
            async with self._transaction_manager.start():
                await self._rental_repo.delete(rental_id)
            result.rental_deleted = True
            self._logger.info("Rental deleted", extra={"rental_id": rental_id})
        except Exception:
            self._logger.exception("Error deleting rental", extra={"rental_id": rental_id})

        try:
            async with self._transaction_manager.start():
                cancelled = await self._outbox_repo.cancel_pending(
                    rental_id, reason="Rental cancelled before payment"
                )
            self._logger.info(
                "Pending follow-ups cancelled",
                extra={"rental_id": rental_id, "cancelled_events": cancelled},
            )
        except Exception:
            self._logger.exception(
                "Error cancelling pending follow-ups", extra={"rental_id": rental_id}
            )

        try:
            async with self._transaction_manager.start():
                await self._vehicle_repo.update_status(rental.vehicle_id, VehicleStatus.AVAILABLE)
            result.vehicle_released = True
            self._logger.info(
                "Vehicle status updated to Available",
                extra={"rental_id": rental_id, "vehicle_id": rental.vehicle_id},
            )
        except Exception:
            self._logger.exception(
                "Error updating vehicle status",
                extra={"rental_id": rental_id, "vehicle_id": rental.vehicle_id},
            )

        return result
