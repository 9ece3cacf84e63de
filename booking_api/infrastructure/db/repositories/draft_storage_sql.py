from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from booking_api.application.interfaces.draft_storage import DraftStorage
from booking_api.infrastructure.db.tables import booking_drafts


class DraftStorageSQL(DraftStorage):
    def __init__(self, session: AsyncSession, namespace: str) -> None:
        self._session = session
        self._namespace = namespace

    async def get(self, key: str) -> bytes | None:
        stmt = select(booking_drafts.c.value).where(
            booking_drafts.c.namespace == self._namespace,
            booking_drafts.c.storage_key == key,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def set(self, key: str, value: bytes) -> None:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        stmt = (
            update(booking_drafts)
            .where(
                booking_drafts.c.namespace == self._namespace,
                booking_drafts.c.storage_key == key,
            )
            .values(value=value, updated_at=now)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            await self._session.execute(
                booking_drafts.insert().values(
                    namespace=self._namespace,
                    storage_key=key,
                    value=value,
                    updated_at=now,
                )
            )
