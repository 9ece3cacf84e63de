import logging
from typing import Any, Mapping

from booking_api.application.draft_store import DraftStore, to_query_params
from booking_api.application.dtos.booking_dto import DetailsSubmittedDTO
from booking_api.application.schemas import validate_rental_details
from booking_api.domain.entities.booking_draft import BookingDraft


class SubmitDetailsUseCase:
    def __init__(self, draft_store: DraftStore) -> None:
        self._draft_store = draft_store
        self._logger = logging.getLogger(__name__)

    async def execute(self, payload: Mapping[str, Any]) -> DetailsSubmittedDTO:
        """
        Valida el paso 1, guarda el borrador y arma la URL del paso 2.

        Un borrador previo conserva su vehículo y extras elegidos.
        """
        details = validate_rental_details(payload)

        existing = await self._draft_store.load()
        draft = existing.with_details(details) if existing else BookingDraft(details=details)
        await self._draft_store.save(draft)

        self._logger.info(
            "Booking details submitted",
            extra={
                "pickup_location": details.pickup_location,
                "return_location": details.return_location,
                "driver_age": details.driver_age.value,
                "has_promo": bool(details.promo_code),
            },
        )
        return DetailsSubmittedDTO(
            draft=draft,
            query_params=to_query_params(BookingDraft(details=details)),
        )
