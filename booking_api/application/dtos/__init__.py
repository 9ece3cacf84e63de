"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from booking_api.application.dtos.booking_dto import (
    BookingConfirmationDTO,
    CancellationResultDTO,
    CheckoutQuoteDTO,
    DetailsSubmittedDTO,
    VehicleListingDTO,
    VehicleOptionDTO,
)

__all__ = [
    "DetailsSubmittedDTO",
    "VehicleOptionDTO",
    "VehicleListingDTO",
    "CheckoutQuoteDTO",
    "BookingConfirmationDTO",
    "CancellationResultDTO",
]
