from decimal import Decimal
from uuid import uuid4

from booking_api.application.interfaces.payment_gateway import (
    CheckoutSessionResult,
    CheckoutSessionStatus,
    PaymentGateway,
)


class StubPaymentGateway(PaymentGateway):
    def __init__(self) -> None:
        self.sessions: dict[str, dict] = {}

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
        session_id = f"cs_test_{uuid4().hex[:24]}"
        self.sessions[session_id] = {
            "rental_id": rental_id,
            "amount": amount,
            "currency": currency,
            "success_url": success_url.replace("{CHECKOUT_SESSION_ID}", session_id),
            "cancel_url": cancel_url,
        }
        return CheckoutSessionResult(
            session_id=session_id,
            url=f"https://checkout.stripe.test/c/pay/{session_id}",
        )

    async def get_session_status(self, session_id: str) -> CheckoutSessionStatus:
        # Simulated hosted checkout: every session it created is paid.
        session = self.sessions.get(session_id)
        if session is None:
            return CheckoutSessionStatus(session_id=session_id, paid=False)
        return CheckoutSessionStatus(
            session_id=session_id, paid=True, rental_id=session["rental_id"]
        )
