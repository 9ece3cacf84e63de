"""Entidad Vehicle - referencia de flota (solo lectura para el asistente)."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class VehicleStatus(str, Enum):
    """Estados de disponibilidad de un vehículo."""

    AVAILABLE = "Available"
    RENTED = "Rented"
    MAINTENANCE = "Maintenance"


@dataclass
class Vehicle:
    """
    Vehículo de la flota con sus tres tarifas.

    Solo los vehículos en estado Available pueden seleccionarse.
    """

    id: str
    reg: str = ""
    make: str | None = None
    model: str | None = None
    colour: str | None = None
    daily_rate: Decimal | None = None
    weekly_rate: Decimal | None = None
    monthly_rate: Decimal | None = None
    status: VehicleStatus = VehicleStatus.AVAILABLE
    photo_url: str | None = None

    @property
    def display_name(self) -> str:
        """Nombre para mostrar: marca + modelo, o la matrícula."""
        name = " ".join(part for part in (self.make, self.model) if part)
        return name or self.reg or "Vehicle"

    @property
    def is_available(self) -> bool:
        return self.status == VehicleStatus.AVAILABLE
