from typing import Iterable, Sequence

from booking_api.application.interfaces.pricing_extra_repo import PricingExtraRepo
from booking_api.domain.entities.pricing_extra import PricingExtra


class InMemoryPricingExtraRepo(PricingExtraRepo):
    def __init__(self, extras: Iterable[PricingExtra] = ()) -> None:
        self._extras: dict[str, PricingExtra] = {extra.id: extra for extra in extras}

    def add(self, extra: PricingExtra) -> PricingExtra:
        self._extras[extra.id] = extra
        return extra

    async def list_active(self) -> Sequence[PricingExtra]:
        return [extra for extra in self._extras.values() if extra.is_active]
