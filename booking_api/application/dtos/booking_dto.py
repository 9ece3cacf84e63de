"""DTOs del asistente de reserva."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from booking_api.domain.entities.booking_draft import BookingDraft
from booking_api.domain.entities.pricing_extra import PricingExtra
from booking_api.domain.entities.vehicle import Vehicle
from booking_api.domain.pricing import RateTier


@dataclass
class DetailsSubmittedDTO:
    """Resultado del paso 1: borrador guardado y parámetros para el paso 2."""

    draft: BookingDraft
    query_params: dict[str, str]


@dataclass
class VehicleOptionDTO:
    """Vehículo disponible con el precio a mostrar."""

    vehicle: Vehicle
    price: Decimal | None
    tier: RateTier | None = None


@dataclass
class VehicleListingDTO:
    """Listado del paso 2. Una lista vacía es un estado válido."""

    rental_days: int
    vehicles: list[VehicleOptionDTO] = field(default_factory=list)
    notice: str | None = None


@dataclass
class CheckoutQuoteDTO:
    """Resumen de precios del checkout."""

    vehicle: Vehicle
    rental_days: int
    vehicle_price: Decimal
    extras: list[PricingExtra]
    selected_extra_ids: list[str]
    extras_total: Decimal
    total: Decimal
    currency: str = "GBP"


@dataclass
class BookingConfirmationDTO:
    """Confirmación mostrada tras crear o confirmar la renta."""

    rental_id: str
    customer_id: str
    customer_name: str
    customer_email: str
    vehicle_id: str
    vehicle_name: str
    start_date: date
    end_date: date
    amount: Decimal
    status: str
    currency: str = "GBP"
    extras: list[str] = field(default_factory=list)


@dataclass
class CancellationResultDTO:
    """Resultado del flujo compensatorio; cada paso es independiente."""

    rental_id: str
    vehicle_id: str | None = None
    rental_deleted: bool = False
    vehicle_released: bool = False
