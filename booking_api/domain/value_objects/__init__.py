"""Value Objects del dominio de reservas."""

from booking_api.domain.value_objects.money import Money
from booking_api.domain.value_objects.rental_period import RentalPeriod

__all__ = [
    "Money",
    "RentalPeriod",
]
