import logging

from booking_api.application.interfaces.customer_repo import CustomerRepo
from booking_api.application.interfaces.payment_gateway import (
    CheckoutSessionResult,
    PaymentGateway,
)
from booking_api.application.interfaces.rental_repo import RentalRepo
from booking_api.domain.errors import RentalNotFoundError

SUCCESS_PATH = "/booking-success"
CANCEL_PATH = "/booking-cancelled"


def build_return_urls(origin: str, rental_id: str) -> tuple[str, str]:
    """URLs de vuelta del checkout alojado: (success_url, cancel_url)."""
    origin = origin.rstrip("/")
    success_url = f"{origin}{SUCCESS_PATH}?session_id={{CHECKOUT_SESSION_ID}}&rental_id={rental_id}"
    cancel_url = f"{origin}{CANCEL_PATH}?rental_id={rental_id}"
    return success_url, cancel_url


class CreatePaymentSessionUseCase:
    def __init__(
        self,
        rental_repo: RentalRepo,
        customer_repo: CustomerRepo,
        payment_gateway: PaymentGateway,
        currency: str = "gbp",
    ) -> None:
        self._rental_repo = rental_repo
        self._customer_repo = customer_repo
        self._payment_gateway = payment_gateway
        self._currency = currency
        self._logger = logging.getLogger(__name__)

    async def execute(self, rental_id: str, origin: str) -> CheckoutSessionResult:
        rental = await self._rental_repo.get_by_id(rental_id)
        if not rental:
            raise RentalNotFoundError(rental_id)
        customer = await self._customer_repo.get_by_id(rental.customer_id)

        success_url, cancel_url = build_return_urls(origin, rental_id)
        session = await self._payment_gateway.create_checkout_session(
            rental_id=rental_id,
            amount=rental.amount,
            currency=self._currency,
            customer_email=customer.email if customer else "",
            customer_name=customer.name if customer else "",
            success_url=success_url,
            cancel_url=cancel_url,
        )
        self._logger.info(
            "Payment session created",
            extra={"rental_id": rental_id, "session_id": session.session_id},
        )
        return session
