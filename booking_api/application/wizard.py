"""
Controlador de pasos del asistente: Details -> VehicleSelection -> Checkout.

Cada paso posterior exige en la URL los parámetros mínimos del paso anterior.
Si faltan, se redirige a Details con un aviso visible.
"""

from dataclasses import dataclass
from datetime import date
from typing import Mapping

from booking_api.domain.constants import BOOKING_ENTRY_PATH
from booking_api.domain.entities.booking_draft import WizardStep
from booking_api.domain.errors import MissingUpstreamStateError
from booking_api.domain.value_objects.rental_period import RentalPeriod

REQUIRED_PARAMS: dict[WizardStep, tuple[str, ...]] = {
    WizardStep.VEHICLE_SELECTION: ("pickup", "return"),
    WizardStep.CHECKOUT: ("vehicle", "pickup", "return"),
}

ENTRY_NOTICES: dict[WizardStep, str] = {
    WizardStep.VEHICLE_SELECTION: "Missing rental details. Redirecting...",
    WizardStep.CHECKOUT: "Missing booking details. Redirecting...",
}


@dataclass(frozen=True)
class StepContext:
    """Parámetros de URL ya verificados para un paso."""

    pickup_date: date
    return_date: date
    pickup_time: str | None = None
    return_time: str | None = None
    pickup_location: str = ""
    return_location: str = ""
    driver_age: str = ""
    promo_code: str = ""
    vehicle_id: str | None = None

    @property
    def period(self) -> RentalPeriod:
        """Periodo por fecha, de medianoche a medianoche."""
        return RentalPeriod.from_dates(self.pickup_date, self.return_date)

    @property
    def rental_days(self) -> int:
        return self.period.rental_days


def _parse_query_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def missing_params(step: WizardStep, query: Mapping[str, str]) -> list[str]:
    missing = []
    for name in REQUIRED_PARAMS.get(step, ()):
        value = query.get(name)
        if name in ("pickup", "return"):
            if _parse_query_date(value) is None:
                missing.append(name)
        elif not value:
            missing.append(name)
    return missing


def require_step(step: WizardStep, query: Mapping[str, str]) -> StepContext:
    """
    Guardia de entrada de un paso.

    Raises:
        MissingUpstreamStateError: si faltan parámetros del paso anterior.
    """
    if step == WizardStep.DETAILS:
        raise ValueError("Details is the entry step and has no guard")

    missing = missing_params(step, query)
    if missing:
        raise MissingUpstreamStateError(
            notice=ENTRY_NOTICES[step],
            missing=missing,
            redirect_to=BOOKING_ENTRY_PATH,
        )

    return StepContext(
        pickup_date=_parse_query_date(query["pickup"]),
        return_date=_parse_query_date(query["return"]),
        pickup_time=query.get("pickupTime") or None,
        return_time=query.get("returnTime") or None,
        pickup_location=query.get("pl", ""),
        return_location=query.get("rl", ""),
        driver_age=query.get("age", ""),
        promo_code=query.get("promo", ""),
        vehicle_id=query.get("vehicle") or None,
    )


def with_vehicle(query: Mapping[str, str], vehicle_id: str) -> dict[str, str]:
    """Parámetros existentes más `vehicle`, para entrar al checkout."""
    params = dict(query)
    params["vehicle"] = vehicle_id
    return params
