import logging
from typing import Mapping

from booking_api.application.dtos.booking_dto import VehicleListingDTO, VehicleOptionDTO
from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.application.wizard import require_step
from booking_api.domain.entities.booking_draft import WizardStep
from booking_api.domain.pricing import vehicle_display_price

EMPTY_FLEET_NOTICE = "No vehicles available at the moment"


class ListAvailableVehiclesUseCase:
    def __init__(self, vehicle_repo: VehicleRepo) -> None:
        self._vehicle_repo = vehicle_repo
        self._logger = logging.getLogger(__name__)

    async def execute(self, query: Mapping[str, str]) -> VehicleListingDTO:
        context = require_step(WizardStep.VEHICLE_SELECTION, query)
        days = context.rental_days

        vehicles = await self._vehicle_repo.list_available()
        options = []
        for vehicle in vehicles:
            quote = vehicle_display_price(vehicle, days)
            options.append(
                VehicleOptionDTO(
                    vehicle=vehicle,
                    price=quote.amount if quote else None,
                    tier=quote.tier if quote else None,
                )
            )

        if not options:
            self._logger.info("No available vehicles", extra={"rental_days": days})
        return VehicleListingDTO(
            rental_days=days,
            vehicles=options,
            notice=None if options else EMPTY_FLEET_NOTICE,
        )
