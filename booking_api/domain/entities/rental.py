"""Entidad Rental - registro durable creado al finalizar el checkout."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class RentalStatus(str, Enum):
    """Estados posibles de una renta."""

    PENDING = "Pending"
    ACTIVE = "Active"
    CLOSED = "Closed"


@dataclass
class Rental:
    """Renta de un vehículo por un cliente."""

    id: str | None = None
    customer_id: str = ""
    vehicle_id: str = ""
    start_date: date | None = None
    end_date: date | None = None
    amount: Decimal = Decimal("0")
    status: RentalStatus = RentalStatus.ACTIVE
    created_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == RentalStatus.ACTIVE

    def activate(self) -> None:
        """Marca la renta como activa (pago confirmado)."""
        self.status = RentalStatus.ACTIVE
