import logging

from booking_api.application.dtos.booking_dto import BookingConfirmationDTO
from booking_api.application.interfaces.customer_repo import CustomerRepo
from booking_api.application.interfaces.payment_gateway import PaymentGateway
from booking_api.application.interfaces.rental_repo import RentalRepo
from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.domain.constants import BOOKING_ENTRY_PATH
from booking_api.domain.entities.rental import RentalStatus
from booking_api.domain.errors import (
    MissingUpstreamStateError,
    PaymentSessionError,
    RentalNotFoundError,
)


class ConfirmBookingUseCase:
    """
    Marca la renta como Active al volver del pago y retorna el resumen.

    La sesión debe estar pagada y pertenecer a la renta indicada.
    """

    def __init__(
        self,
        rental_repo: RentalRepo,
        customer_repo: CustomerRepo,
        vehicle_repo: VehicleRepo,
        payment_gateway: PaymentGateway,
        currency: str = "GBP",
    ) -> None:
        self._rental_repo = rental_repo
        self._customer_repo = customer_repo
        self._vehicle_repo = vehicle_repo
        self._payment_gateway = payment_gateway
        self._currency = currency.upper()
        self._logger = logging.getLogger(__name__)

    async def execute(self, session_id: str | None, rental_id: str | None) -> BookingConfirmationDTO:
        if not session_id or not rental_id:
            raise MissingUpstreamStateError(
                notice="No payment session to confirm.",
                missing=[
                    name
                    for name, value in (("session_id", session_id), ("rental_id", rental_id))
                    if not value
                ],
                redirect_to=BOOKING_ENTRY_PATH,
            )

        session = await self._payment_gateway.get_session_status(session_id)
        if not session.paid:
            raise PaymentSessionError(
                "Payment has not been completed. Please contact support.",
                status_code=409,
                code="PAYMENT_NOT_COMPLETED",
            )
        if session.rental_id != rental_id:
            self._logger.warning(
                "Payment session belongs to another rental",
                extra={
                    "rental_id": rental_id,
                    "session_id": session_id,
                    "session_rental_id": session.rental_id,
                },
            )
            raise PaymentSessionError(
                "Payment session does not match this booking.",
                status_code=409,
                code="PAYMENT_SESSION_MISMATCH",
            )

        rental = await self._rental_repo.get_by_id(rental_id)
        if not rental:
            self._logger.error(
                "Paid session for unknown rental",
                extra={"rental_id": rental_id, "session_id": session_id},
            )
            raise RentalNotFoundError(rental_id)

        await self._rental_repo.update_status(rental_id, RentalStatus.ACTIVE)
        rental.activate()

        customer = await self._customer_repo.get_by_id(rental.customer_id)
        vehicle = await self._vehicle_repo.get_by_id(rental.vehicle_id)
        self._logger.info(
            "Rental confirmed",
            extra={"rental_id": rental_id, "session_id": session_id},
        )
        return BookingConfirmationDTO(
            rental_id=rental.id,
            customer_id=rental.customer_id,
            customer_name=customer.name if customer else "",
            customer_email=customer.email if customer else "",
            vehicle_id=rental.vehicle_id,
            vehicle_name=vehicle.display_name if vehicle else "",
            start_date=rental.start_date,
            end_date=rental.end_date,
            amount=rental.amount,
            status=rental.status.value,
            currency=self._currency,
        )
