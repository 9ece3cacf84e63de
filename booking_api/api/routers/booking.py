from typing import Any

from fastapi import APIRouter, Body, Depends, Header, Query, Request, status

from booking_api.api.dependencies import get_use_cases
from booking_api.api.schemas.booking import (
    CHECKOUT_PATH,
    VEHICLES_PATH,
    BookingConfirmationResponse,
    BookingDraftResponse,
    CancellationResponse,
    CheckoutQuoteResponse,
    DetailsSubmittedResponse,
    ExtrasSelectionResponse,
    PaymentSessionRequest,
    PaymentSessionResponse,
    RestoreDraftResponse,
    SelectVehicleResponse,
    VehicleListingResponse,
    step_url,
)
from booking_api.config import Settings, get_settings

router = APIRouter(prefix="/booking")


def _query(request: Request) -> dict[str, str]:
    return dict(request.query_params)


@router.post("/details", response_model=DetailsSubmittedResponse)
async def submit_details(
    payload: dict[str, Any] = Body(...),
    use_cases=Depends(get_use_cases),
) -> DetailsSubmittedResponse:
    result = await use_cases["submit_details"].execute(payload)
    return DetailsSubmittedResponse(
        draft=BookingDraftResponse.from_draft(result.draft),
        query_params=result.query_params,
        next_url=step_url(VEHICLES_PATH, result.query_params),
    )


@router.get("/details", response_model=RestoreDraftResponse)
async def restore_details(
    request: Request,
    use_cases=Depends(get_use_cases),
) -> RestoreDraftResponse:
    draft = await use_cases["restore_draft"].execute(_query(request))
    return RestoreDraftResponse(draft=BookingDraftResponse.from_draft(draft) if draft else None)


@router.get("/vehicles", response_model=VehicleListingResponse)
async def list_vehicles(
    request: Request,
    use_cases=Depends(get_use_cases),
) -> VehicleListingResponse:
    listing = await use_cases["list_vehicles"].execute(_query(request))
    return VehicleListingResponse.from_dto(listing)


@router.post("/vehicles/{vehicle_id}/select", response_model=SelectVehicleResponse)
async def select_vehicle(
    vehicle_id: str,
    request: Request,
    use_cases=Depends(get_use_cases),
) -> SelectVehicleResponse:
    params = await use_cases["select_vehicle"].execute(vehicle_id, _query(request))
    return SelectVehicleResponse(query_params=params, next_url=step_url(CHECKOUT_PATH, params))


@router.post("/extras/{extra_id}/toggle", response_model=ExtrasSelectionResponse)
async def toggle_extra(
    extra_id: str,
    use_cases=Depends(get_use_cases),
) -> ExtrasSelectionResponse:
    selection = await use_cases["toggle_extra"].execute(extra_id)
    return ExtrasSelectionResponse(selected_extra_ids=list(selection))


@router.get("/checkout", response_model=CheckoutQuoteResponse)
async def quote_checkout(
    request: Request,
    extras: list[str] | None = Query(default=None),
    use_cases=Depends(get_use_cases),
) -> CheckoutQuoteResponse:
    query = _query(request)
    query.pop("extras", None)
    quote = await use_cases["quote_checkout"].execute(query, extra_ids=extras)
    return CheckoutQuoteResponse.from_dto(quote)


@router.post(
    "/checkout",
    response_model=BookingConfirmationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def finalize_checkout(
    request: Request,
    payload: dict[str, Any] = Body(...),
    use_cases=Depends(get_use_cases),
) -> BookingConfirmationResponse:
    form = dict(payload)
    extra_ids = form.pop("extra_ids", None)
    confirmation = await use_cases["finalize_checkout"].execute(
        query=_query(request),
        form=form,
        extra_ids=extra_ids,
    )
    return BookingConfirmationResponse.from_dto(confirmation)


@router.post("/payment-session", response_model=PaymentSessionResponse)
async def create_payment_session(
    payload: PaymentSessionRequest,
    origin: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
) -> PaymentSessionResponse:
    session = await use_cases["create_payment_session"].execute(
        rental_id=payload.rental_id,
        origin=origin or settings.public_origin,
    )
    return PaymentSessionResponse(session_id=session.session_id, url=session.url)


@router.post("/success", response_model=BookingConfirmationResponse)
async def confirm_booking(
    session_id: str | None = Query(default=None),
    rental_id: str | None = Query(default=None),
    use_cases=Depends(get_use_cases),
) -> BookingConfirmationResponse:
    confirmation = await use_cases["confirm_booking"].execute(
        session_id=session_id, rental_id=rental_id
    )
    return BookingConfirmationResponse.from_dto(confirmation)


@router.post("/cancelled", response_model=CancellationResponse)
async def cancel_booking(
    rental_id: str = Query(..., min_length=1),
    use_cases=Depends(get_use_cases),
) -> CancellationResponse:
    result = await use_cases["cancel_rental"].execute(rental_id)
    return CancellationResponse.from_dto(result)
