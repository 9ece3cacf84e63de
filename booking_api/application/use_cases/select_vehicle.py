import logging
from typing import Mapping

from booking_api.application.draft_store import DraftStore
from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.application.wizard import require_step, with_vehicle
from booking_api.domain.entities.booking_draft import WizardStep
from booking_api.domain.errors import VehicleNotFoundError, VehicleUnavailableError


class SelectVehicleUseCase:
    def __init__(self, vehicle_repo: VehicleRepo, draft_store: DraftStore) -> None:
        self._vehicle_repo = vehicle_repo
        self._draft_store = draft_store
        self._logger = logging.getLogger(__name__)

    async def execute(self, vehicle_id: str, query: Mapping[str, str]) -> dict[str, str]:
        """
        Registra el vehículo en el borrador.

        Returns:
            Parámetros de URL para entrar al checkout (los actuales + `vehicle`).
        """
        require_step(WizardStep.VEHICLE_SELECTION, query)

        vehicle = await self._vehicle_repo.get_by_id(vehicle_id)
        if not vehicle:
            raise VehicleNotFoundError(vehicle_id)
        if not vehicle.is_available:
            raise VehicleUnavailableError(vehicle_id, vehicle.status.value)

        draft = await self._draft_store.load()
        if draft is not None:
            await self._draft_store.save(draft.with_vehicle(vehicle_id))
        else:
            self._logger.warning(
                "Vehicle selected without a stored draft",
                extra={"vehicle_id": vehicle_id},
            )

        return with_vehicle(query, vehicle_id)
