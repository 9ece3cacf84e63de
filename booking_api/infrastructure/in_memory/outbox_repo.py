from datetime import datetime, timedelta
from typing import Any, Sequence

from booking_api.application.interfaces.outbox_repo import OutboxEvent, OutboxRepo


class InMemoryOutboxRepo(OutboxRepo):
    def __init__(self) -> None:
        self._events: dict[int, OutboxEvent] = {}
        self._next_id = 1

    async def enqueue(
        self,
        event_type: str,
        aggregate_type: str,
        aggregate_code: str,
        payload: dict[str, Any],
    ) -> OutboxEvent:
        event = OutboxEvent(
            id=self._next_id,
            event_type=event_type,
            aggregate_type=aggregate_type,
            aggregate_code=aggregate_code,
            payload=payload,
            status="NEW",
            attempts=0,
            next_attempt_at=None,
        )
        self._events[self._next_id] = event
        self._next_id += 1
        return event

    async def claim_ready(
        self,
        locked_by: str,
        now: datetime,
        limit: int = 10,
        aggregate_code: str | None = None,
        lock_ttl_seconds: int = 30,
    ) -> Sequence[OutboxEvent]:
        claimed = []
        for event in self._events.values():
            if len(claimed) >= limit:
                break
            if aggregate_code is not None and event.aggregate_code != aggregate_code:
                continue
            if event.status not in {"NEW", "RETRY"}:
                continue
            if event.next_attempt_at and event.next_attempt_at > now:
                continue
            if event.lock_expires_at and event.lock_expires_at > now:
                continue
            event.locked_by = locked_by
            event.lock_expires_at = now + timedelta(seconds=lock_ttl_seconds)
            event.status = "IN_PROGRESS"
            claimed.append(event)
        return claimed

    async def mark_done(self, event_id: int) -> None:
        event = self._events.get(event_id)
        if not event:
            return
        event.status = "DONE"
        event.locked_by = None
        event.lock_expires_at = None

    async def mark_failed(
        self,
        event_id: int,
        attempts: int,
        error_code: str | None,
        error_message: str | None,
    ) -> None:
        event = self._events.get(event_id)
        if not event:
            return
        event.status = "FAILED"
        event.attempts = attempts
        event.error_code = error_code
        event.error_message = error_message
        event.locked_by = None
        event.lock_expires_at = None

    async def mark_retry(
        self,
        event_id: int,
        attempts: int,
        next_attempt_at: datetime,
        error_code: str | None,
        error_message: str | None,
    ) -> None:
        event = self._events.get(event_id)
        if not event:
            return
        event.status = "RETRY"
        event.attempts = attempts
        event.next_attempt_at = next_attempt_at
        event.error_code = error_code
        event.error_message = error_message
        event.locked_by = None
        event.lock_expires_at = None

    async def cancel_pending(self, aggregate_code: str, reason: str) -> int:
        cancelled = 0
        for event in self._events.values():
            if event.aggregate_code == aggregate_code and event.status in {"NEW", "RETRY"}:
                event.status = "CANCELLED"
                event.error_message = reason
                event.locked_by = None
                event.lock_expires_at = None
                cancelled += 1
        return cancelled

    def all(self) -> list[OutboxEvent]:
        return list(self._events.values())

    def for_aggregate(self, aggregate_code: str) -> list[OutboxEvent]:
        return [e for e in self._events.values() if e.aggregate_code == aggregate_code]
