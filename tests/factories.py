"""Test data shared by unit and endpoint tests."""

from datetime import date
from decimal import Decimal

from booking_api.domain.entities import (
    CustomerType,
    DriverAgeBracket,
    PricingExtra,
    RentalDetails,
    Vehicle,
    VehicleStatus,
)

PICKUP = "2025-03-01"
RETURN = "2025-04-05"  # 35 days


def make_fleet() -> list[Vehicle]:
    return [
        Vehicle(
            id="veh-rolls",
            reg="RR23 GHO",
            make="Rolls-Royce",
            model="Ghost",
            colour="Black",
            daily_rate=Decimal("150.00"),
            weekly_rate=Decimal("900.00"),
            monthly_rate=Decimal("2000.00"),
        ),
        Vehicle(
            id="veh-bentley",
            reg="BE22 CON",
            make="Bentley",
            model="Continental GT",
            daily_rate=Decimal("120.00"),
            weekly_rate=Decimal("700.00"),
            monthly_rate=Decimal("1800.00"),
        ),
        Vehicle(
            id="veh-range",
            reg="RA21 VER",
            make="Range Rover",
            model="Autobiography",
            daily_rate=Decimal("100.00"),
            weekly_rate=Decimal("600.00"),
        ),
        Vehicle(
            id="veh-shop",
            reg="MA20 INT",
            make="Mercedes",
            model="S-Class",
            monthly_rate=Decimal("1500.00"),
            status=VehicleStatus.MAINTENANCE,
        ),
    ]


def make_extras() -> list[PricingExtra]:
    return [
        PricingExtra(id="extra-seat", extra_name="Child Seat", price=Decimal("50.00")),
        PricingExtra(id="extra-chauffeur", extra_name="Chauffeur", price=Decimal("400.00")),
        PricingExtra(
            id="extra-retired",
            extra_name="Roof Box",
            price=Decimal("30.00"),
            is_active=False,
        ),
    ]


def details_payload(**overrides) -> dict:
    payload = {
        "pickup_location": "London Heathrow Terminal 5",
        "same_as_pickup": True,
        "pickup_date": PICKUP,
        "pickup_time": "10:00",
        "return_date": RETURN,
        "return_time": "10:00",
        "driver_age": "25_70",
        "promo_code": "",
        "customer_name": "Ada Lovelace",
        "customer_email": "ada@example.com",
        "customer_phone": "+44 7700 900123",
        "customer_type": "Individual",
    }
    payload.update(overrides)
    return payload


def checkout_form(**overrides) -> dict:
    form = {
        "customer_name": "Ada Lovelace",
        "customer_email": "ada@example.com",
        "customer_phone": "+44 7700 900123",
        "license_number": "LOVEL815106AA9",
        "agree_terms": True,
    }
    form.update(overrides)
    return form


def make_details(**overrides) -> RentalDetails:
    fields = {
        "pickup_location": "London Heathrow Terminal 5",
        "return_location": "London Heathrow Terminal 5",
        "pickup_date": date(2025, 3, 1),
        "pickup_time": "10:00",
        "return_date": date(2025, 4, 5),
        "return_time": "10:00",
        "driver_age": DriverAgeBracket.BETWEEN_25_AND_70,
        "customer_name": "Ada Lovelace",
        "customer_email": "ada@example.com",
        "customer_phone": "+44 7700 900123",
        "customer_type": CustomerType.INDIVIDUAL,
    }
    fields.update(overrides)
    return RentalDetails(**fields)


