"""Entidad PricingExtra - complemento opcional de precio fijo."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class PricingExtra:
    """Línea opcional (silla de bebé, chofer, etc.) con tarifa plana."""

    id: str
    extra_name: str
    price: Decimal
    description: str | None = None
    is_active: bool = True
