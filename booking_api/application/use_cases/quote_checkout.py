from collections.abc import Iterable
from typing import Mapping

from booking_api.application.draft_store import DraftStore
from booking_api.application.dtos.booking_dto import CheckoutQuoteDTO
from booking_api.application.interfaces.pricing_extra_repo import PricingExtraRepo
from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.application.wizard import require_step
from booking_api.domain.entities.booking_draft import WizardStep
from booking_api.domain.errors import VehicleNotFoundError
from booking_api.domain.pricing import ExtrasSelection, authoritative_amount


class QuoteCheckoutUseCase:
    def __init__(
        self,
        vehicle_repo: VehicleRepo,
        extra_repo: PricingExtraRepo,
        draft_store: DraftStore,
        currency: str = "GBP",
    ) -> None:
        self._vehicle_repo = vehicle_repo
        self._extra_repo = extra_repo
        self._draft_store = draft_store
        self._currency = currency.upper()

    async def execute(
        self,
        query: Mapping[str, str],
        extra_ids: Iterable[str] | None = None,
    ) -> CheckoutQuoteDTO:
        """
        Resumen del checkout: precio del vehículo + extras elegidos.

        Sin `extra_ids` explícitos se usan los extras guardados en el borrador.
        """
        context = require_step(WizardStep.CHECKOUT, query)
        vehicle_id = context.vehicle_id or ""

        vehicle = await self._vehicle_repo.get_by_id(vehicle_id)
        if not vehicle:
            raise VehicleNotFoundError(vehicle_id)
        extras = list(await self._extra_repo.list_active())

        if extra_ids is not None:
            selection = ExtrasSelection.of(extra_ids)
        else:
            draft = await self._draft_store.load()
            selection = draft.extras if draft else ExtrasSelection()

        days = context.rental_days
        vehicle_price = authoritative_amount(vehicle, days)
        extras_total = selection.total(extras)
        return CheckoutQuoteDTO(
            vehicle=vehicle,
            rental_days=days,
            vehicle_price=vehicle_price,
            extras=extras,
            selected_extra_ids=list(selection),
            extras_total=extras_total,
            total=vehicle_price + extras_total,
            currency=self._currency,
        )
