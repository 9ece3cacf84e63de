import asyncio
import logging
from decimal import Decimal

import stripe

from booking_api.application.interfaces.payment_gateway import (
    CheckoutSessionResult,
    CheckoutSessionStatus,
    PaymentGateway,
)
from booking_api.domain.errors import PaymentSessionError
from booking_api.domain.value_objects.money import Money
from booking_api.infrastructure.circuit_breaker import CircuitBreakerError, stripe_breaker

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Unable to create payment session. Please try again."


def map_stripe_error(error: Exception) -> PaymentSessionError:
    """Convierte un fallo del proveedor en un error de pago para el usuario."""
    if isinstance(error, CircuitBreakerError):
        return PaymentSessionError(
            "Payment service temporarily unavailable. Please try again in a few moments.",
            status_code=503,
            code="payment_unavailable",
        )
    if isinstance(error, stripe.CardError):
        return PaymentSessionError(
            "There was an issue with your card. Please check your card details.",
            code=error.code or "card_error",
        )
    if isinstance(error, stripe.RateLimitError):
        return PaymentSessionError(
            "Too many requests. Please wait a moment and try again.",
            status_code=429,
            code="rate_limited",
        )
    if isinstance(error, stripe.InvalidRequestError):
        return PaymentSessionError(
            "Invalid payment request. Please check your booking details.",
            code=error.code or "invalid_request",
        )
    if isinstance(error, (stripe.APIConnectionError, stripe.APIError)):
        return PaymentSessionError(
            "Payment service temporarily unavailable. Please try again in a few moments.",
            status_code=503,
            code="payment_unavailable",
        )
    if isinstance(error, stripe.AuthenticationError):
        return PaymentSessionError(
            "Payment configuration error. Please contact support.",
            status_code=500,
            code="payment_configuration",
        )
    if isinstance(error, stripe.StripeError):
        return PaymentSessionError(
            error.user_message or DEFAULT_ERROR_MESSAGE,
            code=error.code or "payment_error",
        )
    return PaymentSessionError(DEFAULT_ERROR_MESSAGE)


class StripePaymentGateway(PaymentGateway):
    def __init__(
        self,
        api_key: str | None,
        product_name: str = "Luxury Vehicle Rental",
        timeout_seconds: float = 10.0,
    ) -> None:
        stripe.api_key = api_key
        stripe.max_network_retries = 2
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout_seconds)
        self._product_name = product_name

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
        unit_amount = Money(amount=Decimal(amount), currency_code=currency).to_minor_units()
        try:
            # stripe has no async client; keep the blocking call off the loop.
            session = await asyncio.to_thread(
                stripe_breaker.call,
                stripe.checkout.Session.create,
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": currency.lower(),
                            "product_data": {"name": self._product_name},
                            "unit_amount": unit_amount,
                        },
                        "quantity": 1,
                    }
                ],
                mode="payment",
                customer_email=customer_email or None,
                client_reference_id=rental_id,
                success_url=success_url,
                cancel_url=cancel_url,
                metadata={"rental_id": rental_id, "customer_name": customer_name},
            )
        except (CircuitBreakerError, stripe.StripeError) as e:
            logger.error(
                "Stripe checkout session failed",
                exc_info=e,
                extra={"rental_id": rental_id},
            )
            raise map_stripe_error(e) from e

        return CheckoutSessionResult(session_id=session.id, url=session.url)

    async def get_session_status(self, session_id: str) -> CheckoutSessionStatus:
        try:
            session = await asyncio.to_thread(
                stripe_breaker.call, stripe.checkout.Session.retrieve, session_id
            )
        except (CircuitBreakerError, stripe.StripeError) as e:
            logger.error(
                "Stripe session lookup failed",
                exc_info=e,
                extra={"session_id": session_id},
            )
            raise map_stripe_error(e) from e
        metadata = session.metadata or {}
        return CheckoutSessionStatus(
            session_id=session_id,
            paid=session.payment_status == "paid",
            rental_id=session.client_reference_id or metadata.get("rental_id"),
        )
