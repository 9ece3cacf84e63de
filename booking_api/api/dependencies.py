from functools import lru_cache
from typing import AsyncIterator

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.api.deps import get_sessionmaker
from booking_api.application.draft_store import DraftStore
from booking_api.application.interfaces.clock import SystemClock
from booking_api.application.use_cases.cancel_rental import CancelRentalUseCase
from booking_api.application.use_cases.confirm_booking import ConfirmBookingUseCase
from booking_api.application.use_cases.create_payment_session import CreatePaymentSessionUseCase
from booking_api.application.use_cases.finalize_checkout import FinalizeCheckoutUseCase
from booking_api.application.use_cases.list_available_vehicles import ListAvailableVehiclesUseCase
from booking_api.application.use_cases.process_follow_ups import ProcessFollowUpsUseCase
from booking_api.application.use_cases.quote_checkout import QuoteCheckoutUseCase
from booking_api.application.use_cases.restore_draft import RestoreDraftUseCase
from booking_api.application.use_cases.select_vehicle import SelectVehicleUseCase
from booking_api.application.use_cases.submit_details import SubmitDetailsUseCase
from booking_api.application.use_cases.toggle_extra import ToggleExtraUseCase
from booking_api.config import Settings, get_settings
from booking_api.infrastructure.db.repositories import (
    ChargeServiceSQL,
    CustomerRepoSQL,
    DraftStorageSQL,
    OutboxRepoSQL,
    PricingExtraRepoSQL,
    RentalRepoSQL,
    VehicleRepoSQL,
)
from booking_api.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from booking_api.infrastructure.gateways.stripe_gateway import StripePaymentGateway
from booking_api.infrastructure.in_memory import (
    InMemoryChargeService,
    InMemoryCustomerRepo,
    InMemoryDraftStorage,
    InMemoryOutboxRepo,
    InMemoryPricingExtraRepo,
    InMemoryRentalRepo,
    InMemoryVehicleRepo,
    NoopTransactionManager,
    StubPaymentGateway,
)


DEFAULT_BOOKING_SESSION = "default"


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncIterator[AsyncSession | None]:
    if settings.use_in_memory:
        yield None
        return
    async with get_sessionmaker()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@lru_cache(maxsize=1)
def _in_memory_bundle():
    return {
        "vehicle_repo": InMemoryVehicleRepo(),
        "extra_repo": InMemoryPricingExtraRepo(),
        "customer_repo": InMemoryCustomerRepo(),
        "rental_repo": InMemoryRentalRepo(),
        "outbox_repo": InMemoryOutboxRepo(),
        "draft_storage": InMemoryDraftStorage(),
        "charge_service": InMemoryChargeService(),
        "payment_gateway": StubPaymentGateway(),
        "tx_manager": NoopTransactionManager(),
    }


def _sql_bundle(session: AsyncSession, settings: Settings, namespace: str):
    return {
        "vehicle_repo": VehicleRepoSQL(session),
        "extra_repo": PricingExtraRepoSQL(session),
        "customer_repo": CustomerRepoSQL(session),
        "rental_repo": RentalRepoSQL(session),
        "outbox_repo": OutboxRepoSQL(session),
        "draft_storage": DraftStorageSQL(session, namespace),
        "charge_service": ChargeServiceSQL(session),
        "payment_gateway": StripePaymentGateway(
            api_key=settings.stripe_api_key,
            product_name=settings.payment_product_name,
            timeout_seconds=settings.stripe_timeout_seconds,
        ),
        "tx_manager": SQLAlchemyTransactionManager(session),
    }


def _build_use_cases(bundle: dict, draft_store: DraftStore, settings: Settings) -> dict:
    follow_ups = ProcessFollowUpsUseCase(
        outbox_repo=bundle["outbox_repo"],
        vehicle_repo=bundle["vehicle_repo"],
        charge_service=bundle["charge_service"],
        transaction_manager=bundle["tx_manager"],
        clock=SystemClock(),
        max_attempts=settings.outbox_max_attempts,
        base_backoff_seconds=settings.outbox_base_backoff_seconds,
    )
    return {
        "submit_details": SubmitDetailsUseCase(draft_store=draft_store),
        "restore_draft": RestoreDraftUseCase(draft_store=draft_store),
        "list_vehicles": ListAvailableVehiclesUseCase(vehicle_repo=bundle["vehicle_repo"]),
        "select_vehicle": SelectVehicleUseCase(
            vehicle_repo=bundle["vehicle_repo"],
            draft_store=draft_store,
        ),
        "toggle_extra": ToggleExtraUseCase(
            extra_repo=bundle["extra_repo"],
            draft_store=draft_store,
        ),
        "quote_checkout": QuoteCheckoutUseCase(
            vehicle_repo=bundle["vehicle_repo"],
            extra_repo=bundle["extra_repo"],
            draft_store=draft_store,
            currency=settings.payment_currency,
        ),
        "finalize_checkout": FinalizeCheckoutUseCase(
            customer_repo=bundle["customer_repo"],
            rental_repo=bundle["rental_repo"],
            vehicle_repo=bundle["vehicle_repo"],
            extra_repo=bundle["extra_repo"],
            outbox_repo=bundle["outbox_repo"],
            transaction_manager=bundle["tx_manager"],
            draft_store=draft_store,
            follow_ups=follow_ups,
            currency=settings.payment_currency,
        ),
        "process_follow_ups": follow_ups,
        "cancel_rental": CancelRentalUseCase(
            rental_repo=bundle["rental_repo"],
            vehicle_repo=bundle["vehicle_repo"],
            outbox_repo=bundle["outbox_repo"],
            transaction_manager=bundle["tx_manager"],
        ),
        "create_payment_session": CreatePaymentSessionUseCase(
            rental_repo=bundle["rental_repo"],
            customer_repo=bundle["customer_repo"],
            payment_gateway=bundle["payment_gateway"],
            currency=settings.payment_currency,
        ),
        "confirm_booking": ConfirmBookingUseCase(
            rental_repo=bundle["rental_repo"],
            customer_repo=bundle["customer_repo"],
            vehicle_repo=bundle["vehicle_repo"],
            payment_gateway=bundle["payment_gateway"],
            currency=settings.payment_currency,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
    booking_session: str = Header(default=DEFAULT_BOOKING_SESSION, alias="X-Booking-Session"),
) -> dict:
    namespace = booking_session or DEFAULT_BOOKING_SESSION
    if settings.use_in_memory:
        bundle = _in_memory_bundle()
        storage = bundle["draft_storage"].for_namespace(namespace)
        return _build_use_cases(bundle, DraftStore(storage), settings)

    if not session:
        raise RuntimeError("DB session not available")
    bundle = _sql_bundle(session, settings, namespace)
    return _build_use_cases(bundle, DraftStore(bundle["draft_storage"]), settings)
