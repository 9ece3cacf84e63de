"""Entidades del dominio de reservas."""

from booking_api.domain.entities.booking_draft import (
    BookingDraft,
    DriverAgeBracket,
    RentalDetails,
    WizardStep,
)
from booking_api.domain.entities.customer import Customer, CustomerType
from booking_api.domain.entities.pricing_extra import PricingExtra
from booking_api.domain.entities.rental import Rental, RentalStatus
from booking_api.domain.entities.vehicle import Vehicle, VehicleStatus

__all__ = [
    # Draft
    "BookingDraft",
    "RentalDetails",
    "DriverAgeBracket",
    "WizardStep",
    # Customer
    "Customer",
    "CustomerType",
    # Fleet
    "Vehicle",
    "VehicleStatus",
    "PricingExtra",
    # Rental
    "Rental",
    "RentalStatus",
]
