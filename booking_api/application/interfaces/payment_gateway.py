from dataclasses import dataclass
from decimal import Decimal


@dataclass
class CheckoutSessionResult:
    session_id: str
    url: str


@dataclass
class CheckoutSessionStatus:
    session_id: str
    paid: bool
    rental_id: str | None = None


class PaymentGateway:
    async def create_checkout_session(
        self,
        rental_id: str,
        amount: Decimal,
        currency: str,
        customer_email: str,
        customer_name: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSessionResult:
        raise NotImplementedError

    async def get_session_status(self, session_id: str) -> CheckoutSessionStatus:
        raise NotImplementedError
