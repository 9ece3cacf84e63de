"""
Formularios del asistente de reserva.

Paso 1 (detalles de la renta) y paso 3 (checkout) usan esquemas separados.
Los errores se devuelven todos juntos como `{campo: mensaje}`.
"""

from datetime import date, time
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from booking_api.domain.constants import (
    LOCATION_MIN_LENGTH,
    MAX_RENTAL_DAYS,
    MIN_RENTAL_DAYS,
    PROMO_CODE_MAX_LENGTH,
)
from booking_api.domain.entities.booking_draft import DriverAgeBracket, RentalDetails
from booking_api.domain.entities.customer import CustomerType
from booking_api.domain.errors import DraftValidationError
from booking_api.domain.value_objects.rental_period import RentalPeriod

PHONE_PATTERN = r"^[\d\s\-+()]{10,}$"
TIME_PATTERN = r"^\d{2}:\d{2}$"

DETAILS_FIELD_MESSAGES = {
    "pickup_location": "Please enter a valid pickup location",
    "return_location": "Please enter a valid return location",
    "pickup_date": "Pickup date is required",
    "pickup_time": "Invalid time format",
    "return_date": "Return date is required",
    "return_time": "Invalid time format",
    "driver_age": "Please select driver age range",
    "promo_code": f"Promo code must be at most {PROMO_CODE_MAX_LENGTH} characters",
    "customer_name": "Name must be at least 2 characters",
    "customer_email": "Please enter a valid email address",
    "customer_phone": "Please enter a valid phone number (min 10 digits)",
    "customer_type": "Please select customer type",
}

CHECKOUT_FIELD_MESSAGES = {
    "customer_name": "Name must be at least 2 characters",
    "customer_email": "Invalid email address",
    "customer_phone": "Phone number must be at least 10 digits",
    "license_number": "License number is required",
    "agree_terms": "You must agree to terms",
}

MIN_SPAN_MESSAGE = f"Minimum rental period is {MIN_RENTAL_DAYS} days (1 month)"
MAX_SPAN_MESSAGE = f"Maximum rental period is {MAX_RENTAL_DAYS} days"


def _check_email(value: str) -> str:
    # Stored as typed; customer lookup is an exact match.
    validate_email(value)
    return value


class RentalDetailsForm(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    pickup_location: str = Field(min_length=LOCATION_MIN_LENGTH)
    return_location: str = Field(default="", min_length=LOCATION_MIN_LENGTH)
    same_as_pickup: bool = True
    pickup_date: date
    pickup_time: str = Field(pattern=TIME_PATTERN)
    return_date: date
    return_time: str = Field(pattern=TIME_PATTERN)
    driver_age: DriverAgeBracket
    promo_code: str | None = Field(default=None, max_length=PROMO_CODE_MAX_LENGTH)
    customer_name: str = Field(min_length=2)
    customer_email: str
    customer_phone: str = Field(pattern=PHONE_PATTERN)
    customer_type: CustomerType

    @model_validator(mode="before")
    @classmethod
    def copy_pickup_location(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and data.get("same_as_pickup", True):
            data = dict(data)
            data["return_location"] = data.get("pickup_location", "")
        return data

    @field_validator("pickup_time", "return_time")
    @classmethod
    def validate_clock_time(cls, value: str) -> str:
        try:
            time.fromisoformat(value)
        except ValueError as exc:
            raise PydanticCustomError("time_format", "Invalid time format") from exc
        return value

    @field_validator("promo_code", mode="before")
    @classmethod
    def normalize_promo_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().upper()
            return value or None
        return value

    @field_validator("customer_email")
    @classmethod
    def validate_customer_email(cls, value: str) -> str:
        return _check_email(value)

    def span_errors(self) -> dict[str, str]:
        """Dos validaciones independientes sobre los días completos entre pickup y return."""
        period = RentalPeriod.from_parts(
            self.pickup_date, self.pickup_time, self.return_date, self.return_time
        )
        days = period.whole_days
        errors: dict[str, str] = {}
        if days < MIN_RENTAL_DAYS:
            errors["return_date"] = MIN_SPAN_MESSAGE
        if days > MAX_RENTAL_DAYS:
            errors["return_date"] = MAX_SPAN_MESSAGE
        return errors

    def to_details(self) -> RentalDetails:
        return RentalDetails(
            pickup_location=self.pickup_location,
            return_location=self.return_location,
            pickup_date=self.pickup_date,
            pickup_time=self.pickup_time,
            return_date=self.return_date,
            return_time=self.return_time,
            driver_age=self.driver_age,
            customer_name=self.customer_name,
            customer_email=self.customer_email,
            customer_phone=self.customer_phone,
            customer_type=self.customer_type,
            same_as_pickup=self.same_as_pickup,
            promo_code=self.promo_code,
        )


class CheckoutForm(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    customer_name: str = Field(min_length=2)
    customer_email: str
    customer_phone: str = Field(min_length=10)
    license_number: str = Field(min_length=5)
    agree_terms: bool = False

    @field_validator("customer_email")
    @classmethod
    def validate_customer_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("agree_terms")
    @classmethod
    def validate_agree_terms(cls, value: bool) -> bool:
        if value is not True:
            raise PydanticCustomError("agree_terms", "You must agree to terms")
        return value


def _collect_errors(exc: ValidationError, messages: Mapping[str, str]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        errors.setdefault(field, messages.get(field, error["msg"]))
    return errors


def validate_rental_details(payload: Mapping[str, Any]) -> RentalDetails:
    """
    Valida el formulario del paso 1.

    Las reglas de duración solo se evalúan si todos los campos son válidos.

    Raises:
        DraftValidationError: con todos los errores por campo.
    """
    try:
        form = RentalDetailsForm.model_validate(payload)
    except ValidationError as exc:
        raise DraftValidationError(_collect_errors(exc, DETAILS_FIELD_MESSAGES)) from exc

    errors = form.span_errors()
    if errors:
        raise DraftValidationError(errors)
    return form.to_details()


def validate_checkout(payload: Mapping[str, Any]) -> CheckoutForm:
    """Valida el formulario de checkout (independiente del paso 1)."""
    try:
        return CheckoutForm.model_validate(payload)
    except ValidationError as exc:
        raise DraftValidationError(_collect_errors(exc, CHECKOUT_FIELD_MESSAGES)) from exc
