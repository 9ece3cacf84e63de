"""Entidad Customer - cliente que contrata la renta."""

from dataclasses import dataclass
from enum import Enum

from booking_api.domain.constants import CUSTOMER_STATUS_ACTIVE


class CustomerType(str, Enum):
    """Tipos de cliente."""

    INDIVIDUAL = "Individual"
    COMPANY = "Company"


@dataclass
class Customer:
    """
    Cliente identificado por email.

    Un cliente Individual no puede tener más de una renta Active.
    """

    id: str | None = None
    name: str = ""
    email: str = ""
    phone: str | None = None
    customer_type: CustomerType = CustomerType.INDIVIDUAL
    status: str = CUSTOMER_STATUS_ACTIVE

    @property
    def is_individual(self) -> bool:
        return self.customer_type == CustomerType.INDIVIDUAL
