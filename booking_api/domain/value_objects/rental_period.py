"""Value Object RentalPeriod - rango pickup/return de una renta."""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class RentalPeriod:
    """
    Value Object inmutable que representa el periodo de una renta.

    No valida el orden de las fechas: quien consume el periodo decide
    cómo tratar un rango vacío o invertido.

    Attributes:
        start: Fecha/hora de pickup.
        end: Fecha/hora de devolución.
    """

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        """Retorna la duración del rango."""
        return self.end - self.start

    @property
    def rental_days(self) -> int:
        """
        Días facturables.

        Regla de negocio: cualquier fracción de día cuenta como día completo.
        Ejemplo: 30 días y 1 minuto = 31 días.
        """
        return math.ceil(self.duration / ONE_DAY)

    @property
    def whole_days(self) -> int:
        """Días completos transcurridos, truncando hacia cero."""
        return int(self.duration / ONE_DAY)

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"

    @classmethod
    def from_parts(
        cls,
        pickup_date: date,
        pickup_time: str,
        return_date: date,
        return_time: str,
    ) -> "RentalPeriod":
        """Combina fecha + hora (HH:MM) de pickup y devolución."""
        return cls(
            start=datetime.combine(pickup_date, time.fromisoformat(pickup_time)),
            end=datetime.combine(return_date, time.fromisoformat(return_time)),
        )

    @classmethod
    def from_dates(cls, pickup_date: date, return_date: date) -> "RentalPeriod":
        """Periodo de medianoche a medianoche, como llegan en la URL."""
        return cls(
            start=datetime.combine(pickup_date, time.min),
            end=datetime.combine(return_date, time.min),
        )
