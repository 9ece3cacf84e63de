"""
Capa de Dominio - Reservas de vehículos de lujo.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Entidades del dominio (BookingDraft, Vehicle, Rental, etc.)
- value_objects/: Objetos de valor inmutables (Money, RentalPeriod)
- pricing.py: Tabla de tarifas y selector de extras
- errors.py: Excepciones específicas del dominio
- constants.py: Constantes del dominio
"""

from booking_api.domain.entities import (
    BookingDraft,
    Customer,
    CustomerType,
    DriverAgeBracket,
    PricingExtra,
    Rental,
    RentalDetails,
    RentalStatus,
    Vehicle,
    VehicleStatus,
    WizardStep,
)
from booking_api.domain.errors import (
    ActiveRentalExistsError,
    DomainError,
    DraftNotFoundError,
    DraftValidationError,
    ExtraNotFoundError,
    InvalidRangeError,
    MissingRateError,
    MissingUpstreamStateError,
    PaymentSessionError,
    RentalNotFoundError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from booking_api.domain.pricing import (
    ExtrasSelection,
    RateQuote,
    RateTier,
    authoritative_amount,
    base_price,
    rental_day_count,
    vehicle_display_price,
)
from booking_api.domain.value_objects import Money, RentalPeriod

__all__ = [
    # Entities
    "BookingDraft",
    "RentalDetails",
    "DriverAgeBracket",
    "WizardStep",
    "Customer",
    "CustomerType",
    "Vehicle",
    "VehicleStatus",
    "PricingExtra",
    "Rental",
    "RentalStatus",
    # Pricing
    "ExtrasSelection",
    "RateQuote",
    "RateTier",
    "authoritative_amount",
    "base_price",
    "rental_day_count",
    "vehicle_display_price",
    # Value Objects
    "Money",
    "RentalPeriod",
    # Errors
    "DomainError",
    "DraftValidationError",
    "InvalidRangeError",
    "MissingRateError",
    "MissingUpstreamStateError",
    "DraftNotFoundError",
    "ActiveRentalExistsError",
    "VehicleNotFoundError",
    "VehicleUnavailableError",
    "RentalNotFoundError",
    "ExtraNotFoundError",
    "PaymentSessionError",
]
