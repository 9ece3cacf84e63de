from datetime import date
from decimal import Decimal
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from booking_api.application.dtos.booking_dto import (
    BookingConfirmationDTO,
    CancellationResultDTO,
    CheckoutQuoteDTO,
    VehicleListingDTO,
)
from booking_api.domain.entities.booking_draft import BookingDraft
from booking_api.domain.entities.vehicle import Vehicle

VEHICLES_PATH = "/booking/vehicles"
CHECKOUT_PATH = "/booking/checkout"


def step_url(path: str, params: dict[str, str]) -> str:
    return f"{path}?{urlencode(params)}"


class BookingDraftResponse(BaseModel):
    schema_version: int
    pickup_location: str
    return_location: str
    same_as_pickup: bool
    pickup_date: date
    pickup_time: str
    return_date: date
    return_time: str
    driver_age: str
    promo_code: str | None = None
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_type: str
    selected_vehicle_id: str | None = None
    selected_extra_ids: list[str] = Field(default_factory=list)
    next_step: str

    @classmethod
    def from_draft(cls, draft: BookingDraft) -> "BookingDraftResponse":
        details = draft.details
        return cls(
            schema_version=draft.schema_version,
            pickup_location=details.pickup_location,
            return_location=details.return_location,
            same_as_pickup=details.same_as_pickup,
            pickup_date=details.pickup_date,
            pickup_time=details.pickup_time,
            return_date=details.return_date,
            return_time=details.return_time,
            driver_age=details.driver_age.value,
            promo_code=details.promo_code,
            customer_name=details.customer_name,
            customer_email=details.customer_email,
            customer_phone=details.customer_phone,
            customer_type=details.customer_type.value,
            selected_vehicle_id=draft.selected_vehicle_id,
            selected_extra_ids=sorted(draft.selected_extra_ids),
            next_step=draft.next_step.value,
        )


class RestoreDraftResponse(BaseModel):
    draft: BookingDraftResponse | None = None


class DetailsSubmittedResponse(BaseModel):
    draft: BookingDraftResponse
    query_params: dict[str, str]
    next_url: str


class VehicleSummary(BaseModel):
    id: str
    reg: str
    make: str | None = None
    model: str | None = None
    colour: str | None = None
    name: str
    daily_rate: Decimal | None = None
    weekly_rate: Decimal | None = None
    monthly_rate: Decimal | None = None
    status: str
    photo_url: str | None = None

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle) -> "VehicleSummary":
        return cls(
            id=vehicle.id,
            reg=vehicle.reg,
            make=vehicle.make,
            model=vehicle.model,
            colour=vehicle.colour,
            name=vehicle.display_name,
            daily_rate=vehicle.daily_rate,
            weekly_rate=vehicle.weekly_rate,
            monthly_rate=vehicle.monthly_rate,
            status=vehicle.status.value,
            photo_url=vehicle.photo_url,
        )


class VehicleOption(VehicleSummary):
    price: Decimal | None = None
    tier: str | None = None


class VehicleListingResponse(BaseModel):
    rental_days: int
    vehicles: list[VehicleOption]
    notice: str | None = None

    @classmethod
    def from_dto(cls, dto: VehicleListingDTO) -> "VehicleListingResponse":
        return cls(
            rental_days=dto.rental_days,
            vehicles=[
                VehicleOption(
                    **VehicleSummary.from_vehicle(option.vehicle).model_dump(),
                    price=option.price,
                    tier=option.tier.value if option.tier else None,
                )
                for option in dto.vehicles
            ],
            notice=dto.notice,
        )


class SelectVehicleResponse(BaseModel):
    query_params: dict[str, str]
    next_url: str


class ExtraLine(BaseModel):
    id: str
    extra_name: str
    price: Decimal
    description: str | None = None
    selected: bool = False


class ExtrasSelectionResponse(BaseModel):
    selected_extra_ids: list[str]


class CheckoutQuoteResponse(BaseModel):
    vehicle: VehicleSummary
    rental_days: int
    vehicle_price: Decimal
    extras: list[ExtraLine]
    selected_extra_ids: list[str]
    extras_total: Decimal
    total: Decimal
    currency: str

    @classmethod
    def from_dto(cls, dto: CheckoutQuoteDTO) -> "CheckoutQuoteResponse":
        selected = set(dto.selected_extra_ids)
        return cls(
            vehicle=VehicleSummary.from_vehicle(dto.vehicle),
            rental_days=dto.rental_days,
            vehicle_price=dto.vehicle_price,
            extras=[
                ExtraLine(
                    id=extra.id,
                    extra_name=extra.extra_name,
                    price=extra.price,
                    description=extra.description,
                    selected=extra.id in selected,
                )
                for extra in dto.extras
            ],
            selected_extra_ids=dto.selected_extra_ids,
            extras_total=dto.extras_total,
            total=dto.total,
            currency=dto.currency,
        )


class BookingConfirmationResponse(BaseModel):
    rental_id: str
    booking_ref: str
    customer_id: str
    customer_name: str
    customer_email: str
    vehicle_id: str
    vehicle_name: str
    start_date: date
    end_date: date
    amount: Decimal
    currency: str
    status: str
    extras: list[str] = Field(default_factory=list)

    @classmethod
    def from_dto(cls, dto: BookingConfirmationDTO) -> "BookingConfirmationResponse":
        return cls(
            rental_id=dto.rental_id,
            booking_ref=dto.rental_id[:8].upper(),
            customer_id=dto.customer_id,
            customer_name=dto.customer_name,
            customer_email=dto.customer_email,
            vehicle_id=dto.vehicle_id,
            vehicle_name=dto.vehicle_name,
            start_date=dto.start_date,
            end_date=dto.end_date,
            amount=dto.amount,
            currency=dto.currency,
            status=dto.status,
            extras=dto.extras,
        )


class PaymentSessionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rental_id: str = Field(min_length=1)


class PaymentSessionResponse(BaseModel):
    session_id: str
    url: str


class CancellationResponse(BaseModel):
    rental_id: str
    vehicle_id: str | None = None
    rental_deleted: bool
    vehicle_released: bool

    @classmethod
    def from_dto(cls, dto: CancellationResultDTO) -> "CancellationResponse":
        return cls(
            rental_id=dto.rental_id,
            vehicle_id=dto.vehicle_id,
            rental_deleted=dto.rental_deleted,
            vehicle_released=dto.vehicle_released,
        )


class FollowUpSummaryResponse(BaseModel):
    processed: int
    done: int
    retry: int
    failed: int
