"""Interfaces (Puertos) de la capa de aplicación."""

from booking_api.application.interfaces.charge_service import ChargeService
from booking_api.application.interfaces.clock import Clock, FakeClock, SystemClock
from booking_api.application.interfaces.customer_repo import CustomerRepo
from booking_api.application.interfaces.draft_storage import DraftStorage
from booking_api.application.interfaces.outbox_repo import OutboxEvent, OutboxRepo
from booking_api.application.interfaces.payment_gateway import (
    CheckoutSessionResult,
    PaymentGateway,
)
from booking_api.application.interfaces.pricing_extra_repo import PricingExtraRepo
from booking_api.application.interfaces.rental_repo import RentalRepo
from booking_api.application.interfaces.transaction_manager import TransactionManager
from booking_api.application.interfaces.vehicle_repo import VehicleRepo

__all__ = [
    # Repositories
    "VehicleRepo",
    "PricingExtraRepo",
    "CustomerRepo",
    "RentalRepo",
    "OutboxRepo",
    "OutboxEvent",
    # Storage
    "DraftStorage",
    # Gateways
    "PaymentGateway",
    "CheckoutSessionResult",
    "ChargeService",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
