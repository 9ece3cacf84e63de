import logging
from collections.abc import Iterable
from typing import Any, Mapping

from booking_api.application.draft_store import DraftStore
from booking_api.application.dtos.booking_dto import BookingConfirmationDTO
from booking_api.application.interfaces.customer_repo import CustomerRepo
from booking_api.application.interfaces.outbox_repo import OutboxRepo
from booking_api.application.interfaces.pricing_extra_repo import PricingExtraRepo
from booking_api.application.interfaces.rental_repo import RentalRepo
from booking_api.application.interfaces.transaction_manager import TransactionManager
from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.application.locks import KeyedLocks
from booking_api.application.schemas import validate_checkout
from booking_api.application.use_cases.process_follow_ups import ProcessFollowUpsUseCase
from booking_api.application.wizard import require_step
from booking_api.domain.constants import (
    BOOKING_ENTRY_PATH,
    EVENT_GENERATE_FIRST_CHARGE,
    EVENT_SYNC_VEHICLE_STATUS,
)
from booking_api.domain.entities.booking_draft import WizardStep
from booking_api.domain.entities.customer import Customer
from booking_api.domain.entities.rental import Rental, RentalStatus
from booking_api.domain.entities.vehicle import VehicleStatus
from booking_api.domain.errors import (
    ActiveRentalExistsError,
    DraftNotFoundError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from booking_api.domain.pricing import ExtrasSelection, authoritative_amount

_customer_locks = KeyedLocks()
_vehicle_locks = KeyedLocks()


class FinalizeCheckoutUseCase:
    """
    Convierte el borrador en registros durables (Customer + Rental).

    La regla "un Individual, una renta Active" se aplica bajo un lock por
    cliente y con una inserción condicional en el repositorio. Un lock por
    vehículo evita que dos clientes distintos reserven el mismo vehículo:
    su estado y sus rentas Active se releen dentro de la transacción. Los efectos
    posteriores (vehículo -> Rented, primer cargo) se encolan en el outbox
    dentro de la misma transacción y se despachan después del commit.
    """

    def __init__(
        self,
        customer_repo: CustomerRepo,
        rental_repo: RentalRepo,
        vehicle_repo: VehicleRepo,
        extra_repo: PricingExtraRepo,
        outbox_repo: OutboxRepo,
        transaction_manager: TransactionManager,
        draft_store: DraftStore,
        follow_ups: ProcessFollowUpsUseCase | None = None,
        customer_locks: KeyedLocks | None = None,
        vehicle_locks: KeyedLocks | None = None,
        currency: str = "GBP",
    ) -> None:
        self._customer_repo = customer_repo
        self._rental_repo = rental_repo
        self._vehicle_repo = vehicle_repo
        self._extra_repo = extra_repo
        self._outbox_repo = outbox_repo
        self._transaction_manager = transaction_manager
        self._draft_store = draft_store
        self._follow_ups = follow_ups
        self._customer_locks = customer_locks or _customer_locks
        self._vehicle_locks = vehicle_locks or _vehicle_locks
        self._currency = currency.upper()
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        query: Mapping[str, str],
        form: Mapping[str, Any],
        extra_ids: Iterable[str] | None = None,
    ) -> BookingConfirmationDTO:
        context = require_step(WizardStep.CHECKOUT, query)
        validate_checkout(form)

        draft = await self._draft_store.load()
        if draft is None:
            raise DraftNotFoundError(redirect_to=BOOKING_ENTRY_PATH)
        details = draft.details

        vehicle_id = context.vehicle_id or ""
        vehicle = await self._vehicle_repo.get_by_id(vehicle_id)
        if not vehicle:
            raise VehicleNotFoundError(vehicle_id)

        extras = await self._extra_repo.list_active()
        selection = ExtrasSelection.of(extra_ids) if extra_ids is not None else draft.extras
        amount = authoritative_amount(vehicle, context.rental_days) + selection.total(extras)

        async with self._vehicle_locks.hold(vehicle.id), self._customer_locks.hold(
            details.customer_email
        ):
            async with self._transaction_manager.start():
                current = await self._vehicle_repo.get_by_id(vehicle.id)
                if current is None:
                    raise VehicleNotFoundError(vehicle.id)
                if not current.is_available or await self._rental_repo.has_active_for_vehicle(
                    vehicle.id
                ):
                    raise VehicleUnavailableError(vehicle.id, current.status.value)

                customer = await self._customer_repo.get_by_email(details.customer_email)
                if customer is None:
                    customer = await self._customer_repo.create(
                        Customer(
                            name=details.customer_name,
                            email=details.customer_email,
                            phone=details.customer_phone,
                            customer_type=details.customer_type,
                        )
                    )
                    self._logger.info(
                        "Customer created",
                        extra={"customer_id": customer.id, "customer_type": customer.customer_type.value},
                    )

                if customer.is_individual and await self._rental_repo.has_active_for_customer(
                    customer.id
                ):
                    raise ActiveRentalExistsError(customer.id)

                rental = await self._rental_repo.create(
                    Rental(
                        customer_id=customer.id,
                        vehicle_id=vehicle.id,
                        start_date=context.pickup_date,
                        end_date=context.return_date,
                        amount=amount,
                        status=RentalStatus.ACTIVE,
                    ),
                    exclusive_active=customer.is_individual,
                )
                if rental is None:
                    raise ActiveRentalExistsError(customer.id)

                await self._outbox_repo.enqueue(
                    event_type=EVENT_SYNC_VEHICLE_STATUS,
                    aggregate_type="RENTAL",
                    aggregate_code=rental.id,
                    payload={"vehicle_id": vehicle.id, "status": VehicleStatus.RENTED.value},
                )
                await self._outbox_repo.enqueue(
                    event_type=EVENT_GENERATE_FIRST_CHARGE,
                    aggregate_type="RENTAL",
                    aggregate_code=rental.id,
                    payload={"rental_id": rental.id},
                )

        self._logger.info(
            "Rental created",
            extra={
                "rental_id": rental.id,
                "customer_id": customer.id,
                "vehicle_id": vehicle.id,
                "amount": str(amount),
                "rental_days": context.rental_days,
            },
        )

        await self._run_follow_ups(rental.id)

        return BookingConfirmationDTO(
            rental_id=rental.id,
            customer_id=customer.id,
            customer_name=customer.name,
            customer_email=customer.email,
            vehicle_id=vehicle.id,
            vehicle_name=vehicle.display_name,
            start_date=context.pickup_date,
            end_date=context.return_date,
            amount=amount,
            status=rental.status.value,
            currency=self._currency,
            extras=[extra.extra_name for extra in extras if extra.id in selection],
        )

    async def _run_follow_ups(self, rental_id: str) -> None:
        if self._follow_ups is None:
            return
        try:
            summary = await self._follow_ups.execute(aggregate_code=rental_id)
        except Exception:
            self._logger.exception(
                "Follow-up dispatch failed; events stay pending",
                extra={"rental_id": rental_id},
            )
            return
        if summary["retry"] or summary["failed"]:
            self._logger.warning(
                "Some follow-ups did not complete",
                extra={"rental_id": rental_id, **summary},
            )
