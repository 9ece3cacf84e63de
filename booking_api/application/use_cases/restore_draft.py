from typing import Mapping

from booking_api.application.draft_store import DraftStore
from booking_api.domain.entities.booking_draft import BookingDraft


class RestoreDraftUseCase:
    def __init__(self, draft_store: DraftStore) -> None:
        self._draft_store = draft_store

    async def execute(self, query: Mapping[str, str]) -> BookingDraft | None:
        return await self._draft_store.restore(query)
