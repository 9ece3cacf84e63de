from typing import Sequence

from booking_api.domain.entities.pricing_extra import PricingExtra


class PricingExtraRepo:
    async def list_active(self) -> Sequence[PricingExtra]:
        raise NotImplementedError
