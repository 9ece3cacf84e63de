from booking_api.application.draft_store import DraftStore
from booking_api.application.interfaces.pricing_extra_repo import PricingExtraRepo
from booking_api.domain.constants import BOOKING_ENTRY_PATH
from booking_api.domain.errors import DraftNotFoundError, ExtraNotFoundError
from booking_api.domain.pricing import ExtrasSelection


class ToggleExtraUseCase:
    def __init__(self, extra_repo: PricingExtraRepo, draft_store: DraftStore) -> None:
        self._extra_repo = extra_repo
        self._draft_store = draft_store

    async def execute(self, extra_id: str) -> ExtrasSelection:
        extras = await self._extra_repo.list_active()
        if extra_id not in {extra.id for extra in extras}:
            raise ExtraNotFoundError(extra_id)

        draft = await self._draft_store.load()
        if draft is None:
            raise DraftNotFoundError(redirect_to=BOOKING_ENTRY_PATH)

        selection = draft.extras.toggle(extra_id)
        await self._draft_store.save(draft.with_extras(selection))
        return selection
