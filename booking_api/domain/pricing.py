"""
Reglas de precio de la renta.

Tabla de tarifas (por número de días `d`):
- d >= 28: tarifa mensual completa, sin prorrateo.
- 7 <= d < 28: semanas completas * tarifa semanal. Los días sobrantes no
  se cobran (política heredada, ver DESIGN.md).
- d < 7: d * tarifa diaria.

Los extras son líneas de precio fijo, presentes o ausentes.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from booking_api.domain.constants import (
    DAYS_PER_WEEK,
    MONTHLY_TIER_MIN_DAYS,
    WEEKLY_TIER_MIN_DAYS,
)
from booking_api.domain.entities.pricing_extra import PricingExtra
from booking_api.domain.entities.vehicle import Vehicle
from booking_api.domain.errors import InvalidRangeError, MissingRateError
from booking_api.domain.value_objects.rental_period import RentalPeriod


class RateTier(str, Enum):
    """Tramo de tarifa aplicado."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class RateQuote:
    """Resultado de la tabla de tarifas para un vehículo y un número de días."""

    tier: RateTier
    days: int
    amount: Decimal


def rental_day_count(pickup: datetime, return_at: datetime) -> int:
    """Días de renta: cualquier fracción de día cuenta como día completo."""
    return RentalPeriod(start=pickup, end=return_at).rental_days


def select_tier(days: int) -> RateTier:
    if days >= MONTHLY_TIER_MIN_DAYS:
        return RateTier.MONTHLY
    if days >= WEEKLY_TIER_MIN_DAYS:
        return RateTier.WEEKLY
    return RateTier.DAILY


def base_price(vehicle: Vehicle, days: int) -> RateQuote:
    """
    Calcula el precio base del vehículo para `days` días.

    Raises:
        InvalidRangeError: si days <= 0.
        MissingRateError: si el vehículo no tiene la tarifa del tramo.
    """
    if days <= 0:
        raise InvalidRangeError(days)

    tier = select_tier(days)
    if tier == RateTier.MONTHLY:
        rate = vehicle.monthly_rate
        multiplier = 1
    elif tier == RateTier.WEEKLY:
        rate = vehicle.weekly_rate
        multiplier = days // DAYS_PER_WEEK
    else:
        rate = vehicle.daily_rate
        multiplier = days

    if rate is None:
        raise MissingRateError(vehicle.id, tier.value)
    return RateQuote(tier=tier, days=days, amount=Decimal(rate) * multiplier)


def authoritative_amount(vehicle: Vehicle, days: int) -> Decimal:
    """
    Monto de la renta que se persiste y se muestra en el listado.

    La tarifa mensual manda cuando existe; si no, se usa el precio por tramo.
    """
    if days <= 0:
        raise InvalidRangeError(days)
    if vehicle.monthly_rate is not None:
        return Decimal(vehicle.monthly_rate)
    return base_price(vehicle, days).amount


@dataclass(frozen=True)
class ExtrasSelection:
    """Conjunto inmutable de extras elegidos (sin cantidades)."""

    ids: frozenset[str] = frozenset()

    def toggle(self, extra_id: str) -> "ExtrasSelection":
        if extra_id in self.ids:
            return self.remove(extra_id)
        return self.add(extra_id)

    def add(self, extra_id: str) -> "ExtrasSelection":
        return ExtrasSelection(self.ids | {extra_id})

    def remove(self, extra_id: str) -> "ExtrasSelection":
        return ExtrasSelection(self.ids - {extra_id})

    def total(self, extras: Iterable[PricingExtra]) -> Decimal:
        """Suma el precio de los extras elegidos que estén cargados."""
        return sum(
            (Decimal(extra.price) for extra in extras if extra.id in self.ids),
            Decimal("0"),
        )

    def __contains__(self, extra_id: object) -> bool:
        return extra_id in self.ids

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.ids))

    def __len__(self) -> int:
        return len(self.ids)

    @classmethod
    def of(cls, extra_ids: Iterable[str]) -> "ExtrasSelection":
        return cls(frozenset(extra_ids))


def vehicle_display_price(vehicle: Vehicle, days: int) -> RateQuote | None:
    """
    Precio que se muestra en el listado de vehículos.

    Igual que `authoritative_amount`, pero retorna None en vez de fallar
    cuando al vehículo le falta la tarifa del tramo.
    """
    if days <= 0:
        raise InvalidRangeError(days)
    if vehicle.monthly_rate is not None:
        return RateQuote(tier=RateTier.MONTHLY, days=days, amount=Decimal(vehicle.monthly_rate))
    try:
        return base_price(vehicle, days)
    except MissingRateError:
        return None
