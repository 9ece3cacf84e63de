from datetime import datetime, timedelta, timezone
from typing import Any, Sequence

from sqlalchemy import insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.application.interfaces.outbox_repo import OutboxEvent, OutboxRepo
from booking_api.infrastructure.db.tables import outbox_events


def _utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _row_to_event(data) -> OutboxEvent:
    return OutboxEvent(
        id=data["id"],
        event_type=data["event_type"],
        aggregate_type=data["aggregate_type"],
        aggregate_code=data["aggregate_code"],
        payload=data["payload"],
        status=data["status"],
        attempts=data["attempts"] or 0,
        next_attempt_at=data["next_attempt_at"],
        locked_by=data["locked_by"],
        lock_expires_at=data["lock_expires_at"],
        error_code=data["error_code"],
        error_message=data["error_message"],
    )


class OutboxRepoSQL(OutboxRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def enqueue(
        self,
        event_type: str,
        aggregate_type: str,
        aggregate_code: str,
        payload: dict[str, Any],
    ) -> OutboxEvent:
        now = _utcnow()
        stmt = insert(outbox_events).values(
            event_type=event_type,
            aggregate_type=aggregate_type,
            aggregate_code=aggregate_code,
            payload=payload,
            status="NEW",
            attempts=0,
            next_attempt_at=None,
            created_at=now,
        )
        result = await self._session.execute(stmt)
        return OutboxEvent(
            id=result.inserted_primary_key[0],
            event_type=event_type,
            aggregate_type=aggregate_type,
            aggregate_code=aggregate_code,
            payload=payload,
            status="NEW",
            attempts=0,
        )

    async def claim_ready(
        self,
        locked_by: str,
        now: datetime,
        limit: int = 10,
        aggregate_code: str | None = None,
        lock_ttl_seconds: int = 30,
    ) -> Sequence[OutboxEvent]:
        now = _utc_naive(now)
        ready = (
            outbox_events.c.status.in_(("NEW", "RETRY")),
            or_(
                outbox_events.c.next_attempt_at.is_(None),
                outbox_events.c.next_attempt_at <= now,
            ),
            or_(
                outbox_events.c.lock_expires_at.is_(None),
                outbox_events.c.lock_expires_at <= now,
            ),
        )
        candidates = select(outbox_events.c.id).where(*ready).order_by(outbox_events.c.id).limit(limit)
        if aggregate_code is not None:
            candidates = candidates.where(outbox_events.c.aggregate_code == aggregate_code)
        ids = list((await self._session.execute(candidates)).scalars())
        if not ids:
            return []

        stmt = (
            update(outbox_events)
            .where(outbox_events.c.id.in_(ids), *ready)
            .values(
                locked_by=locked_by,
                locked_at=now,
                lock_expires_at=now + timedelta(seconds=lock_ttl_seconds),
                updated_at=now,
                status="IN_PROGRESS",
            )
            .returning(outbox_events)
        )
        result = await self._session.execute(stmt)
        return sorted((_row_to_event(row._mapping) for row in result), key=lambda e: e.id)

    async def mark_done(self, event_id: int) -> None:
        stmt = (
            update(outbox_events)
            .where(outbox_events.c.id == event_id)
            .values(status="DONE", locked_by=None, lock_expires_at=None, updated_at=_utcnow())
        )
        await self._session.execute(stmt)

    async def mark_failed(
        self,
        event_id: int,
        attempts: int,
        error_code: str | None,
        error_message: str | None,
    ) -> None:
        stmt = (
            update(outbox_events)
            .where(outbox_events.c.id == event_id)
            .values(
                status="FAILED",
                attempts=attempts,
                error_code=error_code,
                error_message=error_message,
                locked_by=None,
                lock_expires_at=None,
                updated_at=_utcnow(),
            )
        )
        await self._session.execute(stmt)

    async def mark_retry(
        self,
        event_id: int,
        attempts: int,
        next_attempt_at: datetime,
        error_code: str | None,
        error_message: str | None,
    ) -> None:
        stmt = (
            update(outbox_events)
            .where(outbox_events.c.id == event_id)
            .values(
                status="RETRY",
                attempts=attempts,
                next_attempt_at=_utc_naive(next_attempt_at),
                error_code=error_code,
                error_message=error_message,
                locked_by=None,
                lock_expires_at=None,
                updated_at=_utcnow(),
            )
        )
        await self._session.execute(stmt)

    async def cancel_pending(self, aggregate_code: str, reason: str) -> int:
        stmt = (
            update(outbox_events)
            .where(
                outbox_events.c.aggregate_code == aggregate_code,
                outbox_events.c.status.in_(("NEW", "RETRY")),
            )
            .values(
                status="CANCELLED",
                error_message=reason,
                locked_by=None,
                lock_expires_at=None,
                updated_at=_utcnow(),
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0
