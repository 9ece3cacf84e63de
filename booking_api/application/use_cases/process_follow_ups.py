import logging
from datetime import timedelta

from booking_api.application.interfaces.charge_service import ChargeService
from booking_api.application.interfaces.clock import Clock, SystemClock
from booking_api.application.interfaces.outbox_repo import OutboxEvent, OutboxRepo
from booking_api.application.interfaces.transaction_manager import TransactionManager
from booking_api.application.interfaces.vehicle_repo import VehicleRepo
from booking_api.domain.constants import (
    EVENT_GENERATE_FIRST_CHARGE,
    EVENT_SYNC_VEHICLE_STATUS,
)
from booking_api.domain.entities.vehicle import VehicleStatus

MAX_ATTEMPTS = 5
BASE_BACKOFF_SECONDS = 15
MAX_BACKOFF_SECONDS = 300


class UnknownFollowUpError(Exception):
    pass


class ProcessFollowUpsUseCase:
    """
    Ejecuta los efectos secundarios posteriores a crear una renta.

    Un fallo nunca se propaga: se registra y el evento queda en RETRY con
    backoff exponencial, o en FAILED tras agotar los intentos.
    """

    def __init__(
        self,
        outbox_repo: OutboxRepo,
        vehicle_repo: VehicleRepo,
        charge_service: ChargeService,
        transaction_manager: TransactionManager,
        clock: Clock | None = None,
        max_attempts: int = MAX_ATTEMPTS,
        base_backoff_seconds: int = BASE_BACKOFF_SECONDS,
    ) -> None:
        self._outbox_repo = outbox_repo
        self._vehicle_repo = vehicle_repo
        self._charge_service = charge_service
        self._transaction_manager = transaction_manager
        self._clock = clock or SystemClock()
        self._max_attempts = max_attempts
        self._base_backoff_seconds = base_backoff_seconds
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        aggregate_code: str | None = None,
        worker_id: str = "worker-1",
        limit: int = 10,
    ) -> dict[str, int]:
        now = self._clock.now()
        async with self._transaction_manager.start():
            events = await self._outbox_repo.claim_ready(
                locked_by=worker_id,
                now=now,
                limit=limit,
                aggregate_code=aggregate_code,
            )
        summary = {"processed": 0, "done": 0, "retry": 0, "failed": 0}

        for event in events:
            summary["processed"] += 1
            try:
                async with self._transaction_manager.start():
                    await self._dispatch(event)
                    await self._outbox_repo.mark_done(event.id)
            except UnknownFollowUpError as exc:
                async with self._transaction_manager.start():
                    await self._outbox_repo.mark_failed(
                        event_id=event.id,
                        attempts=event.attempts + 1,
                        error_code="UNKNOWN_EVENT_TYPE",
                        error_message=str(exc),
                    )
                summary["failed"] += 1
                self._logger.error(
                    "Unknown follow-up event type",
                    extra={"outbox_event_id": event.id, "event_type": event.event_type},
                )
            except Exception as exc:
                outcome = await self._schedule_retry(event, exc)
                summary[outcome] += 1
            else:
                summary["done"] += 1
                self._logger.info(
                    "Follow-up done",
                    extra={
                        "outbox_event_id": event.id,
                        "event_type": event.event_type,
                        "rental_id": event.aggregate_code,
                    },
                )
        return summary

    async def _dispatch(self, event: OutboxEvent) -> None:
        if event.event_type == EVENT_SYNC_VEHICLE_STATUS:
            await self._vehicle_repo.update_status(
                event.payload["vehicle_id"],
                VehicleStatus(event.payload["status"]),
            )
        elif event.event_type == EVENT_GENERATE_FIRST_CHARGE:
            await self._charge_service.generate_first_charge(event.payload["rental_id"])
        else:
            raise UnknownFollowUpError(event.event_type)

    async def _schedule_retry(self, event: OutboxEvent, exc: Exception) -> str:
        attempts = event.attempts + 1
        error_code = type(exc).__name__
        if attempts >= self._max_attempts:
            async with self._transaction_manager.start():
                await self._outbox_repo.mark_failed(
                    event_id=event.id,
                    attempts=attempts,
                    error_code=error_code,
                    error_message=str(exc),
                )
            self._logger.error(
                "Follow-up failed permanently",
                exc_info=exc,
                extra={
                    "outbox_event_id": event.id,
                    "event_type": event.event_type,
                    "rental_id": event.aggregate_code,
                    "attempt": attempts,
                },
            )
            return "failed"

        backoff_seconds = min(
            self._base_backoff_seconds * (2 ** (attempts - 1)), MAX_BACKOFF_SECONDS
        )
        next_attempt_at = self._clock.now() + timedelta(seconds=backoff_seconds)
        async with self._transaction_manager.start():
            await self._outbox_repo.mark_retry(
                event_id=event.id,
                attempts=attempts,
                next_attempt_at=next_attempt_at,
                error_code=error_code,
                error_message=str(exc),
            )
        self._logger.warning(
            "Follow-up retry scheduled",
            exc_info=exc,
            extra={
                "outbox_event_id": event.id,
                "event_type": event.event_type,
                "rental_id": event.aggregate_code,
                "attempt": attempts,
                "next_attempt_at": next_attempt_at.isoformat(),
            },
        )
        return "retry"
