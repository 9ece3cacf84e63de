"""Entidad BookingDraft - estado del asistente de reserva, propiedad del cliente."""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum

from booking_api.domain.constants import DRAFT_SCHEMA_VERSION
from booking_api.domain.entities.customer import CustomerType
from booking_api.domain.pricing import ExtrasSelection
from booking_api.domain.value_objects.rental_period import RentalPeriod


class WizardStep(str, Enum):
    """Pasos del asistente, en orden."""

    DETAILS = "details"
    VEHICLE_SELECTION = "vehicle_selection"
    CHECKOUT = "checkout"


class DriverAgeBracket(str, Enum):
    UNDER_25 = "under_25"
    BETWEEN_25_AND_70 = "25_70"
    OVER_70 = "over_70"


@dataclass(frozen=True)
class RentalDetails:
    """
    Datos del paso 1, ya validados.

    Mientras `same_as_pickup` esté activo, la devolución siempre es igual
    al pickup, aunque se haya editado a mano.
    """

    pickup_location: str
    return_location: str
    pickup_date: date
    pickup_time: str
    return_date: date
    return_time: str
    driver_age: DriverAgeBracket
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_type: CustomerType
    same_as_pickup: bool = True
    promo_code: str | None = None

    def __post_init__(self) -> None:
        if self.same_as_pickup:
            object.__setattr__(self, "return_location", self.pickup_location)

    @property
    def period(self) -> RentalPeriod:
        return RentalPeriod.from_parts(
            self.pickup_date, self.pickup_time, self.return_date, self.return_time
        )

    def with_locations(
        self, pickup_location: str | None = None, return_location: str | None = None
    ) -> "RentalDetails":
        """Aplica ubicaciones externas (p.ej. de la URL)."""
        return replace(
            self,
            pickup_location=pickup_location or self.pickup_location,
            return_location=return_location or self.return_location,
        )


@dataclass(frozen=True)
class BookingDraft:
    """
    Borrador de reserva que viaja entre los pasos del asistente.

    El paso alcanzado se deriva de qué bloques opcionales están presentes:
    sin vehículo el borrador solo habilita la selección; con vehículo,
    habilita el checkout.
    """

    details: RentalDetails
    selected_vehicle_id: str | None = None
    selected_extra_ids: frozenset[str] = field(default_factory=frozenset)
    schema_version: int = DRAFT_SCHEMA_VERSION

    @property
    def next_step(self) -> WizardStep:
        if self.selected_vehicle_id is None:
            return WizardStep.VEHICLE_SELECTION
        return WizardStep.CHECKOUT

    @property
    def extras(self) -> ExtrasSelection:
        return ExtrasSelection(self.selected_extra_ids)

    def with_details(self, details: RentalDetails) -> "BookingDraft":
        return replace(self, details=details)

    def with_vehicle(self, vehicle_id: str) -> "BookingDraft":
        return replace(self, selected_vehicle_id=vehicle_id)

    def with_extras(self, extras: ExtrasSelection) -> "BookingDraft":
        return replace(self, selected_extra_ids=extras.ids)
